"""
Logging — централизованная настройка логирования topos

Библиотека только создаёт loggers; handlers настраивает приложение.

Использование:
    from topos.core.logging_config import get_logger

    logger = get_logger(__name__)
    logger.debug("transitive closure converged after %d iterations", n)

Для скриптов и отладки:
    from topos.core.logging_config import configure_logging
    configure_logging(logging.DEBUG)
"""

import logging
import sys
from typing import Final, Optional

ROOT_LOGGER_NAME: Final[str] = "topos"

DEFAULT_LOG_FORMAT: Final[str] = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEFAULT_DATE_FORMAT: Final[str] = "%H:%M:%S"


def get_logger(name: str) -> logging.Logger:
    """
    Logger для модуля внутри иерархии topos.

    Имена вне пакета (например, "__main__") переносятся под корневой
    logger topos, чтобы configure_logging влиял и на них.
    """
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_logging(
    level: int = logging.INFO,
    fmt: str = DEFAULT_LOG_FORMAT,
    stream: Optional[object] = None,
) -> logging.Logger:
    """
    Подключить консольный handler к корневому logger topos.

    Повторный вызов заменяет ранее установленный handler, а не дублирует его.

    Args:
        level: уровень логирования (logging.DEBUG, logging.INFO, ...)
        fmt: формат сообщений
        stream: поток вывода (default: sys.stderr)

    Returns:
        Корневой logger topos
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        if getattr(handler, "_topos_console", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(fmt, datefmt=DEFAULT_DATE_FORMAT))
    handler._topos_console = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(level)
    return root
