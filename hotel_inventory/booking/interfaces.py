"""
Интерфейсы (порты) для контекста бронирования.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, List, Protocol

from .domain import Booking, Room


class ILogger(Protocol):
    """Интерфейс для логгера."""

    def info(self, message: str, **kwargs: Any) -> None: ...
    def error(self, message: str, **kwargs: Any) -> None: ...
    def warning(self, message: str, **kwargs: Any) -> None: ...
    def debug(self, message: str, **kwargs: Any) -> None: ...


class IRoomStore(Protocol):
    """Хранилище каталога номеров."""

    @property
    def path(self) -> Path: ...
    def load(self) -> List[Room]: ...
    def save(self, rooms: Iterable[Room]) -> None: ...
    def quarantine(self, suffix: str = ".corrupt") -> Path | None: ...


class IBookingStore(Protocol):
    """Хранилище журнала бронирований."""

    @property
    def path(self) -> Path: ...
    def load(self) -> List[Booking]: ...
    def save(self, bookings: Iterable[Booking]) -> None: ...
    def quarantine(self, suffix: str = ".corrupt") -> Path | None: ...
