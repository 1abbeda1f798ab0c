"""
Настройки приложения.

Значения берутся из переменных окружения (и файла .env, если он есть);
по умолчанию файлы rooms.csv и bookings.csv лежат в текущем каталоге.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class HotelSettings(BaseModel):
    """Настройки хранилищ и логирования."""

    data_dir: Path = Field(default=Path("."), description="Каталог с файлами данных")
    rooms_file: str = "rooms.csv"
    bookings_file: str = "bookings.csv"
    strict_categories: bool = Field(
        default=False, description="Отвергать неизвестные категории номеров при загрузке"
    )
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in LOG_LEVELS:
            raise ValueError(f"Неизвестный уровень логирования: {v}")
        return v

    @property
    def rooms_path(self) -> Path:
        return self.data_dir / self.rooms_file

    @property
    def bookings_path(self) -> Path:
        return self.data_dir / self.bookings_file

    @classmethod
    def from_env(cls) -> "HotelSettings":
        """Создает настройки из переменных окружения HOTEL_*."""
        load_dotenv()
        return cls(
            data_dir=Path(os.getenv("HOTEL_DATA_DIR", ".")),
            rooms_file=os.getenv("HOTEL_ROOMS_FILE", "rooms.csv"),
            bookings_file=os.getenv("HOTEL_BOOKINGS_FILE", "bookings.csv"),
            strict_categories=os.getenv("HOTEL_STRICT_CATEGORIES", "false").lower()
            in ("1", "true", "yes"),
            log_level=os.getenv("HOTEL_LOG_LEVEL", "WARNING"),
        )
