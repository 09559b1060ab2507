"""Domain enums for HACCP Journal models."""

from __future__ import annotations

from enum import Enum


class UserRole(str, Enum):
    """Role of an account. Only ``admin`` may use the administration API."""

    admin = "admin"
    moderator = "moderator"
    user = "user"


class EquipmentType(str, Enum):
    """
    Equipment kinds counted on a business profile.

    Each business declares how many items of every kind it operates; the
    daily temperature log holds one row per item and date.
    """

    refrigerator = "refrigerator"
    freezer = "freezer"
    hot_display = "hot_display"
    cold_display = "cold_display"


class DeviceType(str, Enum):
    """Diary device kinds, named the way inspection forms name them."""

    freezer = "Фризери"
    refrigerator = "Хладилници"
    hot_display = "Топли витрини"
    fryer = "Фритюрници"


class EstablishmentType(str, Enum):
    """Registered establishment categories."""

    restaurant = "Ресторант"
    beer_hall = "Бирария"
    tavern = "Механа"
    cafe_aperitif = "Кафе-аператив"
    snack_shop = "Закусвалня"
    fast_food = "Фаст-Фууд"
    pavilion_th = "Павилион ТХ"
    pavilion = "Павилион"
    bakery = "Пекарна"
    banitsa_shop = "Баничарница"
    canteen = "Стол"
    buffet = "Бюфет"
    bar = "Бар"
    beach_bar = "Бийч-бар"
    pool_bar = "Пуул-бар"
    coffee_house = "Кафене"
    pizzeria = "Пицария"
    shop = "Магазин"
    butcher = "Магазин за месо"
    fishmonger = "Магазин за риба"
    packaged_goods_shop = "Магазин за пак. стоки"
    delicatessen = "Кулинарен магазин"
    supermarket = "Супермаркет"
    disco = "Дискотека"
    night_bar = "Нощен-бар"
    production_plant = "Цех за производство"
    snack_bar = "Снек-бар"
    central_kitchen = "Кухня-майка"
    inn = "Гостилница"
    cocktail_bar = "Коктейл-бар"
    food_warehouse = "Склад за хр. продукти"
    caravan = "Каравана"
    wine_bar = "Винарна"
    pub = "Пивница"
    cafeteria = "Кафетерия"
    cafe_patisserie = "Кафе-сладкарница"
    patisserie = "Сладкарница"
    ice_cream_parlour = "Сладоледен салон"
    tea_house = "Чайна"
    piano_bar = "Пиано-бар"
    greengrocer = "Магазин за зеленчуци"
    casino = "Казино"
    bottling_plant = "Разливочна"
    baby_milk_kitchen = "Детска млечна кухня"
    other = "Друг вид обект"


class Weekday(str, Enum):
    """Days a cleaning template recurs on."""

    monday = "monday"
    tuesday = "tuesday"
    wednesday = "wednesday"
    thursday = "thursday"
    friday = "friday"
    saturday = "saturday"
    sunday = "sunday"
