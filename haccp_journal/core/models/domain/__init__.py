"""Domain enums shared by entities, schemas and the reading generator."""

from .enums import DeviceType, EquipmentType, EstablishmentType, UserRole, Weekday

__all__ = ["DeviceType", "EquipmentType", "EstablishmentType", "UserRole", "Weekday"]
