"""Тесты для logging_config: иерархия loggers и консольный handler."""

import io
import logging

import pytest

from topos.core.algebra import Set
from topos.core.logging_config import ROOT_LOGGER_NAME, configure_logging, get_logger


@pytest.fixture
def restore_root_logger():
    """Снять консольные handlers topos после теста."""
    root = logging.getLogger(ROOT_LOGGER_NAME)
    level = root.level
    yield root
    for handler in list(root.handlers):
        if getattr(handler, "_topos_console", False):
            root.removeHandler(handler)
    root.setLevel(level)


class TestGetLogger:
    """Тесты get_logger."""

    def test_package_names_unchanged(self):
        assert get_logger("topos.core.algebra.sets").name == "topos.core.algebra.sets"
        assert get_logger("topos").name == "topos"

    def test_foreign_names_moved_under_root(self):
        assert get_logger("__main__").name == "topos.__main__"
        assert get_logger("toposx").name == "topos.toposx"


class TestConfigureLogging:
    """Тесты configure_logging."""

    def test_writes_debug_messages(self, restore_root_logger):
        """DEBUG-сообщения алгоритмов попадают в поток."""
        stream = io.StringIO()
        configure_logging(logging.DEBUG, stream=stream)

        Set(1, 2).power_set()

        assert "power set of cardinality 2" in stream.getvalue()

    def test_repeated_call_replaces_handler(self, restore_root_logger):
        configure_logging(logging.INFO, stream=io.StringIO())
        configure_logging(logging.DEBUG, stream=io.StringIO())

        console = [h for h in restore_root_logger.handlers if getattr(h, "_topos_console", False)]
        assert len(console) == 1
        assert restore_root_logger.level == logging.DEBUG
