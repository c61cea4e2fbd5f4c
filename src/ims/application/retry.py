"""Caller-side retry policy for aborted atomic units.

The domain services never retry on their own. Transports wrap a whole
use-case call in ``RetryPolicy.run`` so that a ``TransactionAbortedError``
(nothing was written) is resubmitted from scratch, while business-rule
errors propagate on the first attempt.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, TypeVar

from ims.domain.exceptions import TransactionAbortedError, ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    attempts: int = 3
    backoff: float = 0.05  # seconds, multiplied by the attempt number

    def __post_init__(self) -> None:
        if self.attempts < 1:
            raise ValidationError("Retry attempts must be at least 1")
        if self.backoff < 0:
            raise ValidationError("Retry backoff cannot be negative")

    def run(
        self,
        operation: Callable[[], T],
        sleep: Callable[[float], None] = time.sleep,
    ) -> T:
        for attempt in range(1, self.attempts + 1):
            try:
                return operation()
            except TransactionAbortedError:
                if attempt == self.attempts:
                    logger.warning("transaction_aborted giving_up attempts=%s", attempt)
                    raise
                logger.info("transaction_aborted retrying attempt=%s", attempt)
                sleep(self.backoff * attempt)
        raise AssertionError("unreachable")


NO_RETRY = RetryPolicy(attempts=1, backoff=0.0)
