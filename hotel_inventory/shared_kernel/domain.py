"""
Основные доменные типы и утилиты общего ядра.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class Money(BaseModel):
    """Денежная сумма с валютой."""

    model_config = ConfigDict(frozen=True)

    amount: Decimal = Field(..., ge=0, description="Сумма денег")
    currency: str = Field(
        default="INR", max_length=3, description="Код валюты (ISO 4217)"
    )

    def __add__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            raise TypeError("Можно складывать только объекты Money")
        if self.currency != other.currency:
            raise ValueError("Нельзя складывать разные валюты")
        return Money(amount=self.amount + other.amount, currency=self.currency)

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency}"


# Общие исключения
class DomainException(Exception):
    """Базовое исключение для доменных ошибок."""

    pass


class DuplicateRoomError(DomainException):
    """Номер с таким номером комнаты уже существует."""

    def __init__(self, number: int):
        self.number = number
        super().__init__(f"Номер {number} уже существует")


class RoomUnavailableError(DomainException):
    """Номер не найден или уже забронирован."""

    def __init__(self, number: int):
        self.number = number
        super().__init__(f"Номер {number} не найден или уже забронирован")


class BookingNotFoundError(DomainException):
    """Бронирование с указанным идентификатором отсутствует."""

    def __init__(self, booking_id: int):
        self.booking_id = booking_id
        super().__init__(f"Бронирование {booking_id} не найдено")


class StorageError(DomainException):
    """Ошибка чтения или записи хранилища."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Ошибка хранилища {path}: {reason}")


class MalformedRecordError(StorageError):
    """Строка хранилища не разбирается в запись."""

    def __init__(self, path: str, line_number: Optional[int], reason: str):
        self.line_number = line_number
        where = f"строка {line_number}: " if line_number is not None else ""
        super().__init__(path, f"{where}{reason}")


# Общие перечисления
class RoomCategory(str, Enum):
    """Категории номеров в отеле."""

    DELUXE = "Deluxe"
    SUITE = "Suite"

    @property
    def price(self) -> Money:
        """Цена номера данной категории."""
        return CATEGORY_PRICES[self]

    @classmethod
    def from_text(cls, text: str, strict: bool = False) -> "RoomCategory":
        """
        Восстанавливает категорию из текстового представления.

        Без строгого режима все, что не является точным "Deluxe",
        считается люксом (Suite), как в исторических файлах.
        """
        if text == cls.DELUXE.value:
            return cls.DELUXE
        if strict and text != cls.SUITE.value:
            raise MalformedRecordError(
                "<category>", None, f"неизвестная категория номера {text!r}"
            )
        return cls.SUITE

    @classmethod
    def from_menu_choice(cls, choice: int) -> "RoomCategory":
        """Выбор в меню персонала: 1 - Deluxe, иначе Suite."""
        return cls.DELUXE if choice == 1 else cls.SUITE


CATEGORY_PRICES: Dict[RoomCategory, Money] = {
    RoomCategory.DELUXE: Money(amount=Decimal("1500.00")),
    RoomCategory.SUITE: Money(amount=Decimal("2500.00")),
}


# Общие утилиты
def today() -> date:
    """Возвращает текущую дату."""
    return date.today()
