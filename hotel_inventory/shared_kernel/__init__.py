"""
Общее ядро (Shared Kernel) системы учета номеров отеля.

Содержит общие типы данных, исключения и утилиты.
"""

from .domain import (
    CATEGORY_PRICES,
    BookingNotFoundError,
    # Исключения
    DomainException,
    DuplicateRoomError,
    MalformedRecordError,
    # Основные классы
    Money,
    # Перечисления
    RoomCategory,
    RoomUnavailableError,
    StorageError,
    # Утилиты
    today,
)

__all__ = [
    # Основные классы
    "Money",
    # Перечисления
    "RoomCategory",
    "CATEGORY_PRICES",
    # Исключения
    "DomainException",
    "DuplicateRoomError",
    "RoomUnavailableError",
    "BookingNotFoundError",
    "StorageError",
    "MalformedRecordError",
    # Утилиты
    "today",
]
