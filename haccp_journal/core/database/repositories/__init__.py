"""
Repository layer.

Data access objects wrapping the queries shared by several API routes.
"""

from .base import AsyncBaseRepository, QueryBuilder
from .diary import DiaryDeviceRepository, TemperatureReadingRepository
from .establishments import EstablishmentRepository, PersonnelRepository
from .food import FoodDiaryRepository, FoodItemRepository
from .temperature_logs import TemperatureLogRepository
from .users import UserRepository

__all__ = [
    "AsyncBaseRepository",
    "DiaryDeviceRepository",
    "EstablishmentRepository",
    "FoodDiaryRepository",
    "FoodItemRepository",
    "PersonnelRepository",
    "QueryBuilder",
    "TemperatureLogRepository",
    "TemperatureReadingRepository",
    "UserRepository",
]
