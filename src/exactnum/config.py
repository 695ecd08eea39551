"""
Arithmetic Configuration

Конфигурация движка передаётся явно (frozen dataclass), глобального
изменяемого состояния нет.

Стратегия деления влияет только на производительность: обе стратегии
возвращают побитово идентичные quotient/remainder.
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Final, Mapping, Optional

ENV_DIVISION_STRATEGY: Final[str] = "EXACTNUM_DIVISION_STRATEGY"
ENV_LOG_LEVEL: Final[str] = "EXACTNUM_LOG_LEVEL"

_LOG_LEVELS: Final[frozenset[str]] = frozenset(
    {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
)


class DivisionStrategy(str, Enum):
    """Алгоритм общего случая BigInt-деления"""

    # Двоичное деление сдвигом и вычитанием (для single-limb делителя один проход)
    LONG = "long"
    # Эталонный алгоритм: вычитать делитель, пока остаток >= делителя. O(quotient)
    REPEATED_SUBTRACTION = "repeated_subtraction"


@dataclass(frozen=True)
class ArithmeticConfig:
    """
    Конфигурация арифметического движка.

    Attributes:
        division_strategy: Алгоритм деления (default: LONG)
        log_level: Уровень логирования для setup_logging_from_config (default: WARNING)
    """

    division_strategy: DivisionStrategy = DivisionStrategy.LONG
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if not isinstance(self.division_strategy, DivisionStrategy):
            raise ValueError(
                f"division_strategy must be a DivisionStrategy, got {self.division_strategy!r}"
            )
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {self.log_level}")

    @property
    def log_level_value(self) -> int:
        """Числовой уровень logging для log_level"""
        return logging.getLevelName(self.log_level.upper())

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ArithmeticConfig":
        """
        Загрузка конфигурации из переменных окружения.

        EXACTNUM_DIVISION_STRATEGY: long | repeated_subtraction
        EXACTNUM_LOG_LEVEL: DEBUG | INFO | WARNING | ERROR | CRITICAL

        Отсутствующие переменные → значения по умолчанию.

        Args:
            environ: Источник переменных (default: os.environ)

        Raises:
            ValueError: Неизвестная стратегия или уровень логирования
        """
        env = os.environ if environ is None else environ

        raw_strategy = env.get(ENV_DIVISION_STRATEGY)
        if raw_strategy:
            try:
                strategy = DivisionStrategy(raw_strategy.strip().lower())
            except ValueError:
                allowed = ", ".join(s.value for s in DivisionStrategy)
                raise ValueError(
                    f"{ENV_DIVISION_STRATEGY}={raw_strategy!r} is not one of: {allowed}"
                ) from None
        else:
            strategy = DivisionStrategy.LONG

        log_level = env.get(ENV_LOG_LEVEL, "WARNING").strip().upper() or "WARNING"

        return cls(division_strategy=strategy, log_level=log_level)


# Не читает окружение: хост передаёт ArithmeticConfig.from_env() явно
DEFAULT_CONFIG: Final[ArithmeticConfig] = ArithmeticConfig()
