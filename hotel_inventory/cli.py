"""
Текстовое меню системы бронирования.

Роли: гость (просмотр свободных номеров, бронирование, отмена) и
персонал (добавление номера, просмотр всех номеров и бронирований).
Меню только читает ввод и печатает результаты сервиса.
"""

from typing import Callable, List, Optional

from pydantic import ValidationError

from .booking.application import BookingDTO, HotelService, OperationResult, RoomDTO
from .booking.domain import Customer
from .bootstrap import bootstrap_app
from .shared_kernel import RoomCategory

ROLE_MENU = """
Добро пожаловать в систему бронирования отеля
Выберите роль:
1. Гость
2. Персонал отеля
3. Выход"""

GUEST_MENU = """
Меню гостя:
1. Свободные номера
2. Забронировать номер
3. Отменить бронирование
4. Назад"""

STAFF_MENU = """
Меню персонала:
1. Добавить номер
2. Все номера
3. Все бронирования
4. Назад"""


class EndOfInput(Exception):
    """Ввод закончился (EOF)."""


class HotelMenu:
    """Интерактивное меню поверх HotelService."""

    def __init__(
        self,
        service: HotelService,
        input_func: Callable[[str], str] = input,
        output_func: Callable[[str], None] = print,
    ):
        self._service = service
        self._input = input_func
        self._output = output_func

    def run(self) -> None:
        """Главный цикл: выбор роли до выхода."""
        try:
            while True:
                self._output(ROLE_MENU)
                choice = self._read_int("> ")
                if choice == 1:
                    self._guest_menu()
                elif choice == 2:
                    self._staff_menu()
                elif choice == 3:
                    break
                else:
                    self._output("Неверный выбор.")
        except EndOfInput:
            pass
        self._report(self._service.shutdown())
        self._output("Выход из системы. До свидания!")

    # Ввод

    def _ask(self, prompt: str) -> str:
        try:
            return self._input(prompt).strip()
        except EOFError:
            raise EndOfInput() from None

    def _read_int(self, prompt: str) -> Optional[int]:
        text = self._ask(prompt)
        try:
            return int(text)
        except ValueError:
            return None

    # Подменю

    def _guest_menu(self) -> None:
        while True:
            self._output(GUEST_MENU)
            choice = self._read_int("> ")
            if choice == 1:
                self._show_rooms(self._service.list_available_rooms(), "Нет свободных номеров.")
            elif choice == 2:
                self._book_room()
            elif choice == 3:
                self._cancel_booking()
            elif choice == 4:
                return
            else:
                self._output("Неверный выбор.")

    def _staff_menu(self) -> None:
        while True:
            self._output(STAFF_MENU)
            choice = self._read_int("> ")
            if choice == 1:
                self._add_room()
            elif choice == 2:
                self._show_rooms(self._service.list_all_rooms(), "Номеров нет.")
            elif choice == 3:
                self._show_bookings(self._service.list_all_bookings())
            elif choice == 4:
                return
            else:
                self._output("Неверный выбор.")

    # Действия

    def _book_room(self) -> None:
        number = self._read_int("Номер комнаты для бронирования: ")
        if number is None:
            self._output("Некорректный номер комнаты.")
            return
        fields = {
            "name": self._ask("Имя: "),
            "phone": self._ask("Телефон: "),
            "city": self._ask("Город: "),
            "state": self._ask("Штат/регион: "),
        }
        try:
            customer = Customer(**fields)
        except ValidationError as e:
            self._output("Некорректные данные клиента:")
            for error in e.errors():
                self._output(f"  {error['loc'][0]}: {error['msg']}")
            return
        self._report(self._service.book_room(number, customer))

    def _cancel_booking(self) -> None:
        booking_id = self._read_int("ID бронирования для отмены: ")
        if booking_id is None:
            self._output("Некорректный ID бронирования.")
            return
        self._report(self._service.cancel_booking(booking_id))

    def _add_room(self) -> None:
        number = self._read_int("Номер комнаты: ")
        if number is None:
            self._output("Некорректный номер комнаты.")
            return
        choice = self._read_int("Категория: 1. Deluxe 2. Suite: ")
        category = RoomCategory.from_menu_choice(choice)
        self._report(self._service.add_room(number, category))

    # Вывод

    def _report(self, result: OperationResult) -> None:
        self._output(result.message)
        if result.ok and result.storage_error:
            self._output(f"Внимание: изменения не сохранены на диск ({result.storage_error})")

    def _show_rooms(self, rooms: List[RoomDTO], empty_message: str) -> None:
        if not rooms:
            self._output(empty_message)
            return
        for room in rooms:
            self._output(
                f"Номер: {room.number}, Категория: {room.category.value}, "
                f"Цена: {room.price}, Занят: {'да' if room.booked else 'нет'}"
            )

    def _show_bookings(self, bookings: List[BookingDTO]) -> None:
        if not bookings:
            self._output("Бронирований нет.")
            return
        for booking in bookings:
            self._output(
                f"ID брони: {booking.id}, Номер: {booking.room_number}, "
                f"Клиент: {booking.customer_name}, Дата: {booking.booking_date.isoformat()}"
            )


def main() -> None:
    """Точка входа: загрузка состояния и запуск меню."""
    service = bootstrap_app()
    result = service.startup()
    if not result.ok:
        print(result.message)
    HotelMenu(service).run()


if __name__ == "__main__":
    main()
