"""
Прикладной слой контекста бронирования.

Сервис отеля объединяет каталог номеров, журнал бронирований и
хранилища: выполняет операции меню и синхронизирует состояние с файлами.
Ошибки проверки не выбрасываются наружу, а возвращаются как OperationResult.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Iterable, List, Optional, Set, Union

from pydantic import BaseModel

from ..shared_kernel import (
    BookingNotFoundError,
    DomainException,
    DuplicateRoomError,
    RoomCategory,
    RoomUnavailableError,
    StorageError,
    today,
)
from . import interfaces as ports
from .domain import Booking, BookingLedger, Customer, Room, RoomCatalog
from .infrastructure import ConsoleLogger

AnyStore = Union[ports.IRoomStore, ports.IBookingStore]

# DTO для исходящих данных


class RoomDTO(BaseModel):
    """DTO для представления номера."""

    number: int
    category: RoomCategory
    price: Decimal
    booked: bool

    @classmethod
    def from_domain(cls, room: Room) -> "RoomDTO":
        """Создает DTO из доменной модели."""
        return cls(
            number=room.number,
            category=room.category,
            price=room.price.amount,
            booked=room.booked,
        )


class BookingDTO(BaseModel):
    """DTO для представления бронирования."""

    id: int
    room_number: int
    room_category: RoomCategory
    customer_name: str
    customer_phone: str
    city: str
    state: str
    booking_date: date

    @classmethod
    def from_domain(cls, booking: Booking) -> "BookingDTO":
        """Создает DTO из доменной модели."""
        return cls(
            id=booking.id,
            room_number=booking.room_number,
            room_category=booking.room_category,
            customer_name=booking.customer.name,
            customer_phone=booking.customer.phone,
            city=booking.customer.city,
            state=booking.customer.state,
            booking_date=booking.booking_date,
        )


class ErrorKind(str, Enum):
    """Виды ошибок, о которых сообщается вызывающей стороне."""

    DUPLICATE_ROOM = "duplicate_room"
    ROOM_UNAVAILABLE = "room_unavailable"
    BOOKING_NOT_FOUND = "booking_not_found"
    STORAGE = "storage"
    INVALID_INPUT = "invalid_input"


ERROR_KINDS = {
    DuplicateRoomError: ErrorKind.DUPLICATE_ROOM,
    RoomUnavailableError: ErrorKind.ROOM_UNAVAILABLE,
    BookingNotFoundError: ErrorKind.BOOKING_NOT_FOUND,
    StorageError: ErrorKind.STORAGE,
}


class OperationResult(BaseModel):
    """Результат операции сервиса."""

    ok: bool
    message: str
    error: Optional[ErrorKind] = None
    # Ошибка сохранения после успешного изменения в памяти
    storage_error: Optional[str] = None
    room: Optional[RoomDTO] = None
    booking: Optional[BookingDTO] = None

    @classmethod
    def failure(cls, exc: Exception) -> "OperationResult":
        kind = next(
            (kind for exc_type, kind in ERROR_KINDS.items() if isinstance(exc, exc_type)),
            ErrorKind.INVALID_INPUT,
        )
        return cls(ok=False, message=str(exc), error=kind)


class HotelService:
    """Сервис приложения (репозиторий отеля) для работы с номерами и бронированиями."""

    def __init__(
        self,
        room_store: ports.IRoomStore,
        booking_store: ports.IBookingStore,
        logger: Optional[ports.ILogger] = None,
        clock: Callable[[], date] = today,
    ):
        """Инициализирует сервис."""
        self._room_store = room_store
        self._booking_store = booking_store
        self._logger = logger or ConsoleLogger()
        self._clock = clock
        self._rooms = RoomCatalog()
        self._bookings = BookingLedger(clock=clock)
        # Хранилища, файлы которых не удалось отложить после ошибки загрузки
        self._blocked: Set[AnyStore] = set()

    @property
    def rooms(self) -> RoomCatalog:
        return self._rooms

    @property
    def bookings(self) -> BookingLedger:
        return self._bookings

    # Загрузка и сохранение

    def startup(self) -> OperationResult:
        """
        Загружает номера, затем бронирования.

        Загрузка идет в новые каталог и журнал, которые заменяют текущие
        только при успехе. Бронирования дополняют каталог: номер, которого
        нет в файле номеров, восстанавливается из полей брони. При ошибке
        загрузки состояние становится пустым, испорченный файл
        переименовывается в *.corrupt, а второй файл откладывается в *.bak,
        чтобы сохранение пустого состояния не затерло ни один из них.
        """
        rooms = RoomCatalog()
        bookings = BookingLedger(clock=self._clock, start_id=self._bookings.next_id)
        failed, intact = self._room_store, self._booking_store
        try:
            for room in self._room_store.load():
                rooms.add(room)
            failed, intact = self._booking_store, self._room_store
            for booking in self._booking_store.load():
                bookings.restore(booking)
                self._reconcile_room(rooms, booking)
        except (StorageError, DuplicateRoomError, ValueError) as e:
            self._rooms = RoomCatalog()
            self._bookings = BookingLedger(clock=self._clock, start_id=bookings.next_id)
            moved_to = self._set_aside(failed, ".corrupt")
            self._set_aside(intact, ".bak")
            self._logger.error(
                "Ошибка загрузки, работа начата с пустым состоянием",
                file=str(failed.path),
                error=str(e),
                moved_to=str(moved_to) if moved_to else None,
            )
            return OperationResult(
                ok=False, message=f"Ошибка загрузки: {e}", error=ErrorKind.STORAGE
            )

        self._rooms, self._bookings = rooms, bookings
        self._blocked.clear()
        self._logger.info(
            "Состояние загружено",
            rooms=len(self._rooms),
            bookings=len(self._bookings),
            next_booking_id=self._bookings.next_id,
        )
        return OperationResult(
            ok=True,
            message=f"Загружено номеров: {len(self._rooms)}, "
            f"бронирований: {len(self._bookings)}",
        )

    def _set_aside(self, store: AnyStore, suffix: str) -> Optional[Path]:
        """Откладывает файл хранилища; если не удалось, хранилище больше не перезаписывается."""
        try:
            return store.quarantine(suffix)
        except StorageError as e:
            self._blocked.add(store)
            self._logger.error(
                "Не удалось отложить файл, сохранение в него отключено",
                file=str(store.path),
                error=str(e),
            )
            return None

    def _reconcile_room(self, rooms: RoomCatalog, booking: Booking) -> None:
        room = rooms.get(booking.room_number)
        if room is None:
            rooms.add(booking.room_snapshot())
            self._logger.debug(
                "Номер восстановлен из бронирования",
                room=booking.room_number,
                booking=booking.id,
            )
        elif not room.booked:
            room.booked = True
            self._logger.warning(
                "Номер с активной бронью был отмечен свободным",
                room=booking.room_number,
                booking=booking.id,
            )

    def shutdown(self) -> OperationResult:
        """Сохраняет бронирования, затем номера."""
        error = self._save_all()
        if error:
            return OperationResult(
                ok=False, message=error, error=ErrorKind.STORAGE, storage_error=error
            )
        return OperationResult(ok=True, message="Данные сохранены")

    def _save(self, store: AnyStore, items: Iterable[Any]) -> Optional[str]:
        """Сохраняет хранилище; ошибка логируется и возвращается, изменения не откатываются."""
        if store in self._blocked:
            message = f"Файл {store.path} не сохранен: не удалось отложить его при загрузке"
            self._logger.warning(message)
            return message
        try:
            store.save(items)
        except StorageError as e:
            self._logger.error("Ошибка сохранения", file=str(store.path), error=str(e))
            return str(e)
        return None

    def _save_all(self) -> Optional[str]:
        errors = [
            error
            for error in (
                self._save(self._booking_store, self._bookings.all()),
                self._save(self._room_store, self._rooms.all()),
            )
            if error
        ]
        return "; ".join(errors) or None

    # Операции с номерами

    def add_room(self, number: int, category: RoomCategory) -> OperationResult:
        """Добавляет номер в каталог и сохраняет каталог."""
        if number <= 0:
            return OperationResult(
                ok=False,
                message="Номер комнаты должен быть положительным целым числом",
                error=ErrorKind.INVALID_INPUT,
            )
        try:
            room = Room(number=number, category=category)
            self._rooms.add(room)
        except DomainException as e:
            self._logger.info("Номер не добавлен", room=number, reason=str(e))
            return OperationResult.failure(e)

        storage_error = self._save(self._room_store, self._rooms.all())
        self._logger.info("Номер добавлен", room=number, category=room.category.value)
        return OperationResult(
            ok=True,
            message=f"Номер {number} добавлен",
            storage_error=storage_error,
            room=RoomDTO.from_domain(room),
        )

    def list_available_rooms(self) -> List[RoomDTO]:
        """Возвращает список свободных номеров."""
        return [RoomDTO.from_domain(room) for room in self._rooms.available()]

    def list_all_rooms(self) -> List[RoomDTO]:
        return [RoomDTO.from_domain(room) for room in self._rooms.all()]

    # Операции с бронированиями

    def book_room(self, number: int, customer: Customer) -> OperationResult:
        """Бронирует свободный номер и сохраняет оба файла."""
        try:
            room = self._rooms.find_bookable(number)
        except RoomUnavailableError as e:
            self._logger.info("Номер недоступен", room=number)
            return OperationResult.failure(e)

        booking = self._bookings.create(room, customer)
        self._rooms.set_booked(room.number, True)
        storage_error = self._save_all()

        self._logger.info("Номер забронирован", room=number, booking=booking.id)
        return OperationResult(
            ok=True,
            message=f"Номер {number} забронирован, id брони: {booking.id}",
            storage_error=storage_error,
            booking=BookingDTO.from_domain(booking),
        )

    def cancel_booking(self, booking_id: int) -> OperationResult:
        """Отменяет бронирование, освобождает номер и сохраняет оба файла."""
        try:
            booking = self._bookings.cancel(booking_id)
        except BookingNotFoundError as e:
            self._logger.info("Бронирование не найдено", booking=booking_id)
            return OperationResult.failure(e)

        self._rooms.set_booked(booking.room_number, False)
        storage_error = self._save_all()

        self._logger.info("Бронирование отменено", booking=booking_id)
        return OperationResult(
            ok=True,
            message=f"Бронирование {booking_id} отменено",
            storage_error=storage_error,
            booking=BookingDTO.from_domain(booking),
        )

    def list_all_bookings(self) -> List[BookingDTO]:
        """Возвращает бронирования в порядке добавления в журнал."""
        return [BookingDTO.from_domain(booking) for booking in self._bookings.all()]
