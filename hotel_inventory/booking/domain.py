"""
Доменная модель контекста бронирования.

Содержит сущности (номер, бронирование), объект-значение клиента
и две коллекции: каталог номеров и журнал бронирований.
"""

from datetime import date
from typing import Callable, Dict, Iterator, Optional

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator

from ..shared_kernel import (
    BookingNotFoundError,
    DuplicateRoomError,
    Money,
    RoomCategory,
    RoomUnavailableError,
    today,
)

# Символы, которые нельзя хранить в плоском CSV без экранирования
FORBIDDEN_CHARS = (",", "\n", "\r")

# Контекст валидации для записей, прочитанных из файла
FROM_STORAGE = {"from_storage": True}


class Customer(BaseModel):
    """Клиент, оформляющий бронирование (снимок данных на момент брони)."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str
    phone: str
    city: str
    state: str

    @field_validator("name", "phone", "city", "state")
    @classmethod
    def storable(cls, v: str, info: ValidationInfo) -> str:
        if any(ch in v for ch in FORBIDDEN_CHARS):
            raise ValueError("Поле не может содержать запятую или перевод строки")
        # Старые файлы могут содержать пустые поля, при вводе они запрещены
        if not v and not (info.context or {}).get("from_storage"):
            raise ValueError("Поле не может быть пустым")
        return v


class Room(BaseModel):
    """Номер в отеле."""

    number: int
    category: RoomCategory
    booked: bool = False

    @property
    def price(self) -> Money:
        return self.category.price


class Booking(BaseModel):
    """Бронирование номера."""

    model_config = ConfigDict(frozen=True)

    id: int
    room_number: int
    room_category: RoomCategory  # Снимок категории номера на момент брони
    customer: Customer
    booking_date: date

    def room_snapshot(self) -> Room:
        """Восстанавливает номер из встроенных полей брони (занятым)."""
        return Room(number=self.room_number, category=self.room_category, booked=True)


class RoomCatalog:
    """Каталог всех известных номеров в порядке добавления."""

    def __init__(self) -> None:
        self._rooms: Dict[int, Room] = {}

    def __contains__(self, number: object) -> bool:
        return number in self._rooms

    def __len__(self) -> int:
        return len(self._rooms)

    def add(self, room: Room) -> None:
        if room.number in self._rooms:
            raise DuplicateRoomError(room.number)
        self._rooms[room.number] = room

    def get(self, number: int) -> Optional[Room]:
        return self._rooms.get(number)

    def find_bookable(self, number: int) -> Room:
        """Возвращает свободный номер или выбрасывает RoomUnavailableError."""
        room = self._rooms.get(number)
        if room is None or room.booked:
            raise RoomUnavailableError(number)
        return room

    def set_booked(self, number: int, value: bool) -> None:
        # KeyError, если номера нет: вызывающий обязан проверить наличие
        self._rooms[number].booked = value

    def all(self) -> Iterator[Room]:
        yield from list(self._rooms.values())

    def available(self) -> Iterator[Room]:
        return (room for room in self.all() if not room.booked)

    def clear(self) -> None:
        self._rooms.clear()


class BookingIdAllocator:
    """Выдает идентификаторы бронирований: всегда max(виденных) + 1."""

    def __init__(self, start: int = 1) -> None:
        self._next = start

    @property
    def next_id(self) -> int:
        return self._next

    def observe(self, booking_id: int) -> None:
        self._next = max(self._next, booking_id + 1)

    def allocate(self) -> int:
        booking_id = self._next
        self._next += 1
        return booking_id


class BookingLedger:
    """Журнал активных бронирований в порядке добавления."""

    def __init__(self, clock: Callable[[], date] = today, start_id: int = 1) -> None:
        self._bookings: Dict[int, Booking] = {}
        self._allocator = BookingIdAllocator(start_id)
        self._clock = clock

    def __len__(self) -> int:
        return len(self._bookings)

    @property
    def next_id(self) -> int:
        return self._allocator.next_id

    def create(
        self, room: Room, customer: Customer, on: Optional[date] = None
    ) -> Booking:
        """Создает бронирование с новым идентификатором и добавляет его в журнал."""
        booking = Booking(
            id=self._allocator.allocate(),
            room_number=room.number,
            room_category=room.category,
            customer=customer,
            booking_date=on or self._clock(),
        )
        self._bookings[booking.id] = booking
        return booking

    def restore(self, booking: Booking) -> None:
        """Добавляет бронирование, прочитанное из хранилища."""
        if booking.id in self._bookings:
            raise ValueError(f"Бронирование {booking.id} уже есть в журнале")
        self._allocator.observe(booking.id)
        self._bookings[booking.id] = booking

    def get(self, booking_id: int) -> Optional[Booking]:
        return self._bookings.get(booking_id)

    def cancel(self, booking_id: int) -> Booking:
        """
        Удаляет бронирование из журнала и возвращает его.

        Номер в каталоге не освобождается: это делает сервис приложения.
        """
        try:
            return self._bookings.pop(booking_id)
        except KeyError:
            raise BookingNotFoundError(booking_id) from None

    def all(self) -> Iterator[Booking]:
        yield from list(self._bookings.values())

    def clear(self) -> None:
        """Очищает журнал; счетчик идентификаторов не сбрасывается."""
        self._bookings.clear()
