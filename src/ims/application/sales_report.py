"""Application service: Sales reports (query).

Daily and monthly reports group sales by the UTC calendar day / month of
``sale_date`` and list the newest period first. The date-range report
returns the individual sales inside an inclusive range of days.
"""

from __future__ import annotations

from datetime import date
from typing import Callable

from ims.application.dto import (
    DateRangeReportDTO,
    ReportRowDTO,
    SaleDTO,
    format_amount,
)
from ims.application.validation import day_bounds
from ims.domain.model.sale import Sale
from ims.domain.model.value_objects import Money
from ims.domain.repository.unit_of_work import UnitOfWorkFactory


class SalesReportHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def daily(self) -> list[ReportRowDTO]:
        return self._grouped(lambda s: s.sale_date.strftime("%Y-%m-%d"))

    def monthly(self) -> list[ReportRowDTO]:
        return self._grouped(lambda s: s.sale_date.strftime("%Y-%m"))

    def by_date_range(self, start: date, end: date) -> DateRangeReportDTO:
        lower, upper = day_bounds(start, end)
        with self._uow_factory() as uow:
            sales = uow.sales.list_between(lower, upper)

        total = Money.zero()
        for sale in sales:
            total = total + sale.total

        return DateRangeReportDTO(
            start=start.isoformat(),
            end=end.isoformat(),
            sales=[SaleDTO.from_domain(s) for s in sales],
            total=format_amount(total),
        )

    # --- Internal helpers -----------------------------------------------------

    def _grouped(self, period_of: Callable[[Sale], str]) -> list[ReportRowDTO]:
        with self._uow_factory() as uow:
            sales = uow.sales.list_all()

        buckets: dict[str, tuple[int, Money]] = {}
        for sale in sales:
            key = period_of(sale)
            count, total = buckets.get(key, (0, Money.zero()))
            buckets[key] = (count + 1, total + sale.total)

        return [
            ReportRowDTO(period=key, count=count, total=format_amount(total))
            for key, (count, total) in sorted(buckets.items(), reverse=True)
        ]
