"""
Structured Logging Configuration

JSON-логирование для exactnum.

Библиотечные модули получают логгер через get_logger("exactnum.<module>")
и никогда не настраивают handlers сами: это делает хост через setup_logging
или setup_logging_from_config(ArithmeticConfig.from_env()).
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Final, Optional

from src.exactnum.config import ArithmeticConfig

ROOT_LOGGER_NAME: Final[str] = "exactnum"


class JSONFormatter(logging.Formatter):
    """JSON formatter: одна запись лога = один JSON-объект"""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "operation": getattr(record, "operation", None),
            "extra": getattr(record, "extra", None),
        }

        # None-поля не пишем
        log_entry = {k: v for k, v in log_entry.items() if v is not None}

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def setup_logging(
    level: str = "WARNING",
    logger_name: str = ROOT_LOGGER_NAME,
) -> logging.Logger:
    """
    Настройка JSON-логирования.

    Повторный вызов заменяет handlers, а не дублирует их.

    Args:
        level: Уровень логирования (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        logger_name: Имя корневого логгера библиотеки

    Returns:
        Настроенный логгер

    Raises:
        ValueError: Если level не является стандартным уровнем logging
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")

    logger = logging.getLogger(logger_name)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())

    logger.addHandler(handler)
    logger.setLevel(numeric_level)
    logger.propagate = False

    return logger


def setup_logging_from_config(
    config: ArithmeticConfig,
    logger_name: str = ROOT_LOGGER_NAME,
) -> logging.Logger:
    """setup_logging с уровнем из конфигурации (config.log_level)"""
    return setup_logging(config.log_level, logger_name)


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """Логгер библиотеки (дочерний для ROOT_LOGGER_NAME)"""
    return logging.getLogger(name)


def log_operation(
    logger: logging.Logger,
    level: int,
    message: str,
    operation: Optional[str] = None,
    extra: Optional[dict[str, Any]] = None,
) -> None:
    """
    Запись лога со структурными полями operation/extra.

    Args:
        logger: Логгер
        level: Числовой уровень (logging.DEBUG, ...)
        message: Сообщение
        operation: Имя арифметической операции (например, "bigint.sub")
        extra: Дополнительные структурные данные
    """
    if not logger.isEnabledFor(level):
        return

    fields: dict[str, Any] = {}
    if operation:
        fields["operation"] = operation
    if extra:
        fields["extra"] = extra

    logger.log(level, message, extra=fields)
