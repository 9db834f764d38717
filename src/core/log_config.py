"""
Logging — настройка loguru для кодировщика

Кодировщик пишет трассировку каждого значения на уровне TRACE: при
стандартном sink loguru (DEBUG) она не выводится. configure_logging
заменяет sink один раз на процесс.
"""

import sys
from typing import Any

from loguru import logger
from pydantic import BaseModel, Field

_LOGGER_CONFIGURED = False


class LogConfig(BaseModel):
    level: str = "INFO"
    format: str = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {name} | {message}"
    sink: Any = Field(default_factory=lambda: sys.stderr)
    enqueue: bool = False


def configure_logging(config: LogConfig | None = None, force: bool = False) -> None:
    """
    Установка единственного sink для глобального logger.

    Повторный вызов без force ничего не делает.

    Args:
        config: Настройки (default: LogConfig())
        force: Переустановить sink, даже если уже настроен
    """
    global _LOGGER_CONFIGURED

    if _LOGGER_CONFIGURED and not force:
        return

    config = config or LogConfig()

    logger.remove()
    logger.add(
        sink=config.sink,
        level=config.level,
        format=config.format,
        enqueue=config.enqueue,
        backtrace=True,
        diagnose=False,
    )
    _LOGGER_CONFIGURED = True
    logger.debug("Logger configured: level={}", config.level)
