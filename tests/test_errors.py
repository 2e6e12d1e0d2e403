import logging

from budget_tracker.core import errors


class _Collect(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


def test_server_error_handler_logs_traceback():
    collector = _Collect()
    logger = logging.getLogger("budget_tracker.errors")
    logger.addHandler(collector)
    try:
        try:
            raise RuntimeError("boom")
        except RuntimeError as exc:
            caught = exc
        resp = errors.server_error_handler(None, caught)
    finally:
        logger.removeHandler(collector)

    assert resp.status_code == 500
    [record] = collector.records
    assert record.exc_info is not None
    assert record.exc_info[1] is caught
    assert "boom" in logging.Formatter().formatException(record.exc_info)
