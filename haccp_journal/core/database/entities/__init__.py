"""
Database entity models.

This package contains all database entity models organized by business domain.
Importing it registers every table on the shared SQLModel metadata.

Modules:
- users: Accounts and roles
- businesses: Business profiles and their daily temperature logs
- establishments: Establishments and their personnel
- diary: Diary devices and their temperature readings
- incoming_controls: Incoming goods inspections
- cleaning: Cleaning templates and cleaning logs
- food: Food items and the food diary
"""

from .businesses import Business, TemperatureLog
from .cleaning import CleaningLog, CleaningTemplate
from .diary import DiaryDevice, TemperatureReading
from .establishments import Establishment, Personnel
from .food import FoodDiary, FoodItem
from .incoming_controls import IncomingControl
from .users import User

__all__ = [
    "Business",
    "CleaningLog",
    "CleaningTemplate",
    "DiaryDevice",
    "Establishment",
    "FoodDiary",
    "FoodItem",
    "IncomingControl",
    "Personnel",
    "TemperatureLog",
    "TemperatureReading",
    "User",
]
