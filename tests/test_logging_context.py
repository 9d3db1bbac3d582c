"""Tests for the order id logging context."""

import logging

from cleanbook.logging_context import (
    NO_ORDER_ID,
    OrderIdFilter,
    get_order_id,
    install_order_id_filter,
    order_context,
)


class RecordingHandler(logging.Handler):
    """Keeps every record it handles."""

    def __init__(self) -> None:
        super().__init__()
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


def _make_record() -> logging.LogRecord:
    return logging.LogRecord("cleanbook.test", logging.INFO, __file__, 1, "msg", None, None)


class TestOrderContext:
    def test_default_outside_submission(self):
        assert get_order_id() == NO_ORDER_ID

    def test_set_and_reset(self):
        with order_context("LUX11111"):
            assert get_order_id() == "LUX11111"
        assert get_order_id() == NO_ORDER_ID

    def test_reset_on_error(self):
        try:
            with order_context("LUX11111"):
                raise RuntimeError("boom")
        except RuntimeError:
            pass
        assert get_order_id() == NO_ORDER_ID

    def test_nested_restores_outer(self):
        with order_context("LUX11111"):
            with order_context("LUX22222"):
                assert get_order_id() == "LUX22222"
            assert get_order_id() == "LUX11111"


class TestOrderIdFilter:
    def test_filter_tags_record(self):
        record = _make_record()
        with order_context("LUX11111"):
            OrderIdFilter().filter(record)
        assert record.order_id == "LUX11111"

    def test_install_once_per_handler(self):
        logger = logging.getLogger("cleanbook.test.install")
        handler = RecordingHandler()
        logger.addHandler(handler)
        try:
            install_order_id_filter(logger)
            install_order_id_filter(logger)
            assert sum(isinstance(f, OrderIdFilter) for f in handler.filters) == 1
        finally:
            logger.removeHandler(handler)

    def test_formatter_renders_order_id(self):
        handler = RecordingHandler()
        handler.addFilter(OrderIdFilter())
        handler.setFormatter(logging.Formatter("[%(order_id)s] %(message)s"))
        record = _make_record()
        handler.handle(record)
        assert handler.format(record) == f"[{NO_ORDER_ID}] msg"
