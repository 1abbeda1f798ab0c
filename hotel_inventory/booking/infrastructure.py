"""
Инфраструктурный слой контекста бронирования.

Содержит файловые хранилища номеров и бронирований (плоский CSV
без кавычек и экранирования) и логгер.
"""
import json
import logging
import os
import tempfile
from datetime import date, datetime
from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence, Set, Tuple

from pydantic import ValidationError

from ..shared_kernel import MalformedRecordError, RoomCategory, StorageError
from . import interfaces as ports
from .domain import FROM_STORAGE, Booking, Customer, Room

DELIMITER = ","


class ConsoleLogger(ports.ILogger):
    """Логгер поверх стандартного logging; контекст дописывается как JSON."""

    def __init__(self, name: str = "hotel_inventory"):
        self._logger = logging.getLogger(name)

    def _log(self, level: int, message: str, context: dict) -> None:
        if context:
            message = f"{message} | {json.dumps(context, default=str, ensure_ascii=False)}"
        self._logger.log(level, message)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, kwargs)


class CsvFileStore:
    """Базовый класс для хранилищ, работающих с плоскими CSV-файлами."""

    field_count: int = 0

    def __init__(
        self,
        file_path: str,
        logger: Optional[ports.ILogger] = None,
        strict_categories: bool = False,
    ):
        """
        Инициализирует хранилище.

        Args:
            file_path: Путь к CSV-файлу с данными
            logger: Логгер для предупреждений при разборе
            strict_categories: Отвергать неизвестные категории номеров
        """
        self._file_path = Path(file_path)
        self._logger = logger or ConsoleLogger()
        self._strict_categories = strict_categories

    @property
    def path(self) -> Path:
        return self._file_path

    def _read_records(self) -> List[Tuple[int, List[str]]]:
        """Читает файл и возвращает пары (номер строки, поля)."""
        if not self._file_path.exists():
            return []

        try:
            with open(self._file_path, "r", encoding="utf-8") as f:
                lines = f.read().splitlines()
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(str(self._file_path), str(e)) from e

        records = []
        for line_number, line in enumerate(lines, start=1):
            # Пустые строки (например, завершающий перевод строки) пропускаем
            if not line.strip():
                continue
            fields = line.split(DELIMITER)
            if len(fields) != self.field_count:
                raise self._malformed(
                    line_number,
                    f"ожидалось полей: {self.field_count}, получено: {len(fields)}",
                )
            records.append((line_number, fields))
        return records

    def _write_records(self, records: Iterable[Sequence[Any]]) -> None:
        """Перезаписывает файл целиком через временный файл и rename."""
        lines = [DELIMITER.join(str(field) for field in record) for record in records]
        tmp_name = None
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self._file_path.parent,
                prefix=f".{self._file_path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_name = f.name
                for line in lines:
                    f.write(line + "\n")
            os.replace(tmp_name, self._file_path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(str(self._file_path), str(e)) from e

    def quarantine(self, suffix: str = ".corrupt") -> Optional[Path]:
        """Откладывает файл в сторону, чтобы следующее сохранение его не затерло."""
        if not self._file_path.exists():
            return None
        target = self._file_path.with_name(self._file_path.name + suffix)
        if target.exists():
            stamp = datetime.now().strftime("%Y%m%d%H%M%S")
            target = self._file_path.with_name(f"{self._file_path.name}.{stamp}{suffix}")
        try:
            self._file_path.rename(target)
        except OSError as e:
            raise StorageError(str(self._file_path), str(e)) from e
        return target

    # Разбор отдельных полей

    def _malformed(self, line_number: int, reason: str) -> MalformedRecordError:
        return MalformedRecordError(str(self._file_path), line_number, reason)

    def _parse_int(self, text: str, line_number: int, what: str) -> int:
        try:
            return int(text.strip())
        except ValueError:
            raise self._malformed(line_number, f"{what}: не целое число {text!r}") from None

    def _parse_bool(self, text: str, line_number: int) -> bool:
        value = text.strip().lower()
        if value == "true":
            return True
        if value == "false":
            return False
        raise self._malformed(line_number, f"ожидалось true/false, получено {text!r}")

    def _parse_date(self, text: str, line_number: int) -> date:
        try:
            return date.fromisoformat(text.strip())
        except ValueError:
            raise self._malformed(line_number, f"некорректная дата {text!r}") from None

    def _parse_category(self, text: str, line_number: int) -> RoomCategory:
        try:
            category = RoomCategory.from_text(text, strict=self._strict_categories)
        except MalformedRecordError as e:
            raise self._malformed(line_number, e.reason) from None
        if text != category.value:
            self._logger.warning(
                "Неизвестная категория номера, принята как Suite",
                file=str(self._file_path),
                line=line_number,
                category=text,
            )
        return category


class RoomCsvStore(CsvFileStore):
    """Хранилище номеров: number,category,booked."""

    field_count = 3

    def load(self) -> List[Room]:
        rooms = []
        for line_number, (number, category, booked) in self._read_records():
            rooms.append(
                Room(
                    number=self._parse_int(number, line_number, "номер комнаты"),
                    category=self._parse_category(category, line_number),
                    booked=self._parse_bool(booked, line_number),
                )
            )
        self._logger.debug("Номера загружены", file=str(self._file_path), count=len(rooms))
        return rooms

    def save(self, rooms: Iterable[Room]) -> None:
        self._write_records(
            (room.number, room.category.value, str(room.booked).lower())
            for room in rooms
        )


class BookingCsvStore(CsvFileStore):
    """
    Хранилище бронирований:
    id,roomNumber,roomCategory,customerName,customerPhone,city,state,date.
    """

    field_count = 8

    def load(self) -> List[Booking]:
        bookings = []
        seen_ids: Set[int] = set()
        for line_number, fields in self._read_records():
            booking_id, room_number, category, name, phone, city, state, on = fields
            parsed_id = self._parse_int(booking_id, line_number, "id бронирования")
            if parsed_id in seen_ids:
                raise self._malformed(line_number, f"повторный id бронирования {parsed_id}")
            seen_ids.add(parsed_id)
            try:
                customer = Customer.model_validate(
                    {"name": name, "phone": phone, "city": city, "state": state},
                    context=FROM_STORAGE,
                )
            except ValidationError as e:
                raise self._malformed(line_number, f"данные клиента: {e}") from None
            bookings.append(
                Booking(
                    id=parsed_id,
                    room_number=self._parse_int(room_number, line_number, "номер комнаты"),
                    room_category=self._parse_category(category, line_number),
                    customer=customer,
                    booking_date=self._parse_date(on, line_number),
                )
            )
        self._logger.debug(
            "Бронирования загружены", file=str(self._file_path), count=len(bookings)
        )
        return bookings

    def save(self, bookings: Iterable[Booking]) -> None:
        self._write_records(
            (
                booking.id,
                booking.room_number,
                booking.room_category.value,
                booking.customer.name,
                booking.customer.phone,
                booking.customer.city,
                booking.customer.state,
                booking.booking_date.isoformat(),
            )
            for booking in bookings
        )
