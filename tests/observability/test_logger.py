import logging

from caritas.observability.logger import configure_logging


def test_configure_logging_installs_single_handler():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        configure_logging("DEBUG")
        configure_logging("WARNING")

        assert root.level == logging.WARNING
        ours = [h for h in root.handlers if any(type(f).__name__ == "CorrelationIdFilter" for f in h.filters)]
        assert len(ours) == 1
        assert logging.getLogger("httpx").level == logging.WARNING
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
