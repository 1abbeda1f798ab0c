import logging
from typing import Optional

from .booking.application import HotelService
from .booking.infrastructure import BookingCsvStore, ConsoleLogger, RoomCsvStore
from .config import HotelSettings


def configure_logging(level: str) -> None:
    """Настраивает вывод логов в stderr."""
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def bootstrap_app(settings: Optional[HotelSettings] = None) -> HotelService:
    """Создает и настраивает все компоненты приложения."""
    settings = settings or HotelSettings.from_env()
    configure_logging(settings.log_level)
    logger = ConsoleLogger()

    # 1. Хранилища, по одному на вид записей
    room_store = RoomCsvStore(
        str(settings.rooms_path),
        logger=logger,
        strict_categories=settings.strict_categories,
    )
    booking_store = BookingCsvStore(
        str(settings.bookings_path),
        logger=logger,
        strict_categories=settings.strict_categories,
    )

    # 2. Сервис отеля поверх хранилищ
    return HotelService(room_store, booking_store, logger=logger)
