"""Cooperative cancellation helpers."""

import threading
from typing import Optional

from churchregister.domain.errors import OperationCancelledError


def raise_if_cancelled(cancel_event: Optional[threading.Event], operation: str) -> None:
    """Raise OperationCancelledError if the cancellation event is set.

    Args:
        cancel_event: Optional event set by the caller to request cancellation
        operation: Name of the running operation, used in the error message
    """
    if cancel_event is not None and cancel_event.is_set():
        raise OperationCancelledError(f"{operation} was cancelled")
