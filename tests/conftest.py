"""
Общие фикстуры для тестов: файловые хранилища во временном каталоге,
сервис отеля с фиксированной датой и тестовый клиент.
"""
from datetime import date

import pytest

from hotel_inventory.booking.application import HotelService
from hotel_inventory.booking.domain import Customer
from hotel_inventory.booking.infrastructure import BookingCsvStore, RoomCsvStore


@pytest.fixture
def booking_day() -> date:
    return date(2024, 1, 15)


@pytest.fixture
def rooms_path(tmp_path):
    return tmp_path / "rooms.csv"


@pytest.fixture
def bookings_path(tmp_path):
    return tmp_path / "bookings.csv"


@pytest.fixture
def room_store(rooms_path) -> RoomCsvStore:
    return RoomCsvStore(str(rooms_path))


@pytest.fixture
def booking_store(bookings_path) -> BookingCsvStore:
    return BookingCsvStore(str(bookings_path))


@pytest.fixture
def make_service(room_store, booking_store, booking_day):
    """Фабрика сервисов, работающих с одними и теми же файлами."""

    def _make() -> HotelService:
        return HotelService(room_store, booking_store, clock=lambda: booking_day)

    return _make


@pytest.fixture
def service(make_service) -> HotelService:
    """Сервис после запуска на пустых хранилищах."""
    hotel = make_service()
    assert hotel.startup().ok
    return hotel


@pytest.fixture
def customer() -> Customer:
    return Customer(name="Ann", phone="555", city="NYC", state="NY")
