"""Application service: Record Sale use case.

Validates the raw request, then hands typed values to the sale ledger.
A ``TransactionAbortedError`` is resubmitted according to the retry
policy; business-rule errors propagate unchanged.
"""

from __future__ import annotations

from typing import Any, Mapping

from ims.application.dto import SaleDTO, SaleRequest
from ims.application.retry import NO_RETRY, RetryPolicy
from ims.application.validation import parse_sale_request
from ims.domain.repository.unit_of_work import UnitOfWorkFactory
from ims.domain.service.sale_ledger_service import SaleLedgerService


class RecordSaleHandler:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        retry_policy: RetryPolicy = NO_RETRY,
        require_active: bool = True,
    ) -> None:
        self._ledger = SaleLedgerService(uow_factory, require_active=require_active)
        self._retry_policy = retry_policy

    def handle(self, form: Mapping[str, Any]) -> SaleDTO:
        """Record a sale from form-decoded ``product``/``quantity``/``price``."""
        return self.handle_request(parse_sale_request(form))

    def handle_request(self, request: SaleRequest) -> SaleDTO:
        sale = self._retry_policy.run(
            lambda: self._ledger.record_sale(
                request.product_id, request.quantity, request.unit_price
            )
        )
        return SaleDTO.from_domain(sale)
