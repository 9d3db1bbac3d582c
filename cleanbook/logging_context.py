"""Order ID logging context for tracing a submission across modules.

While a booking is being submitted its order id sits in a ContextVar.
``OrderIdFilter`` copies it onto every log record, and the root handler
installed by ``load_config`` prints it, so the booking write, webhook
call, and ledger lines for one submission read together. Outside a
submission records carry ``-``.

Usage:
    from cleanbook.logging_context import order_context

    with order_context("LUX12345"):
        logger.info("Booking stored")  # record.order_id == "LUX12345"
"""

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

NO_ORDER_ID = "-"

_order_id: ContextVar[str] = ContextVar("order_id", default=NO_ORDER_ID)


def get_order_id() -> str:
    return _order_id.get()


@contextmanager
def order_context(order_id: str) -> Iterator[None]:
    """Tag log records with ``order_id`` for the duration of the block."""
    token = _order_id.set(order_id)
    try:
        yield
    finally:
        _order_id.reset(token)


class OrderIdFilter(logging.Filter):
    """Injects order_id into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.order_id = _order_id.get()  # type: ignore[attr-defined]
        return True


def install_order_id_filter(logger: logging.Logger) -> None:
    """Attach one OrderIdFilter to each of the logger's handlers."""
    for handler in logger.handlers:
        if not any(isinstance(f, OrderIdFilter) for f in handler.filters):
            handler.addFilter(OrderIdFilter())
