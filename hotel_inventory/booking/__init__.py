"""
Модуль контекста бронирования (Booking Context).

Отвечает за учет номеров и бронирований отеля, включая:
- Каталог номеров и их занятость
- Журнал бронирований и выдачу идентификаторов
- Сохранение и загрузку состояния из файлов
"""

from . import application, domain, infrastructure, interfaces

__all__ = [
    'domain',
    'application',
    'infrastructure',
    'interfaces',
]
