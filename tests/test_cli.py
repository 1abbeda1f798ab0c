"""
Тесты текстового меню со сценарием ввода.
"""
import pytest

from hotel_inventory.cli import HotelMenu
from hotel_inventory.shared_kernel import RoomCategory


class ScriptedConsole:
    """Подставляет заранее заданный ввод и собирает вывод."""

    def __init__(self, *answers: str):
        self._answers = list(answers)
        self.lines = []

    def input(self, prompt: str) -> str:
        if not self._answers:
            raise EOFError
        return self._answers.pop(0)

    def print(self, text: str) -> None:
        self.lines.append(text)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


def run_menu(service, *answers: str) -> ScriptedConsole:
    console = ScriptedConsole(*answers)
    HotelMenu(service, input_func=console.input, output_func=console.print).run()
    return console


def test_staff_adds_room_and_guest_books_it(service, rooms_path, bookings_path):
    console = run_menu(
        service,
        "2", "1", "101", "1", "4",  # персонал: добавить Deluxe 101
        "1", "2", "101", "Ann", "555", "NYC", "NY", "4",  # гость: бронь
        "3",
    )

    assert "Номер 101 добавлен" in console.text
    assert "id брони: 1" in console.text
    assert console.lines[-1] == "Выход из системы. До свидания!"
    assert rooms_path.read_text(encoding="utf-8") == "101,Deluxe,true\n"
    assert bookings_path.read_text(encoding="utf-8") == (
        "1,101,Deluxe,Ann,555,NYC,NY,2024-01-15\n"
    )


def test_empty_listings_are_reported(service):
    console = run_menu(service, "1", "1", "4", "2", "2", "3", "4", "3")

    assert "Нет свободных номеров." in console.text
    assert "Номеров нет." in console.text
    assert "Бронирований нет." in console.text


def test_listings_show_rooms_and_bookings(service, customer):
    service.add_room(101, RoomCategory.DELUXE)
    service.book_room(101, customer)

    console = run_menu(service, "2", "2", "3", "4", "3")

    assert "Номер: 101, Категория: Deluxe, Цена: 1500.00, Занят: да" in console.text
    assert "ID брони: 1, Номер: 101, Клиент: Ann, Дата: 2024-01-15" in console.text


@pytest.mark.parametrize("answers", [("x", "3"), ("9", "3"), ("1", "abc", "4", "3")])
def test_invalid_choices_do_not_crash(service, answers):
    console = run_menu(service, *answers)
    assert "Неверный выбор." in console.text


def test_failures_are_reported(service):
    console = run_menu(
        service,
        "1", "2", "555", "Ann", "555", "NYC", "NY",  # номера нет
        "3", "77",  # брони нет
        "3", "x",  # некорректный id
        "4", "3",
    )

    assert "Номер 555 не найден или уже забронирован" in console.text
    assert "Бронирование 77 не найдено" in console.text
    assert "Некорректный ID бронирования." in console.text


def test_duplicate_room_is_reported(service):
    console = run_menu(service, "2", "1", "101", "2", "1", "101", "1", "4", "3")

    assert "Номер 101 уже существует" in console.text
    assert [r.category.value for r in service.list_all_rooms()] == ["Suite"]


def test_invalid_customer_is_rejected(service, bookings_path):
    service.add_room(101, RoomCategory.SUITE)

    console = run_menu(service, "1", "2", "101", "Doe, Ann", "555", "NYC", "NY", "4", "3")

    assert "Некорректные данные клиента:" in console.text
    assert len(service.bookings) == 0


def test_end_of_input_saves_and_exits(service, rooms_path):
    service.add_room(101, RoomCategory.DELUXE)
    rooms_path.unlink()

    console = run_menu(service, "2")

    assert console.lines[-1] == "Выход из системы. До свидания!"
    assert rooms_path.read_text(encoding="utf-8") == "101,Deluxe,false\n"
