"""
Учет номеров и бронирований отеля.

Состояние хранится в двух плоских файлах (rooms.csv и bookings.csv),
работа ведется через текстовое меню.
"""

__version__ = "1.0.0"
