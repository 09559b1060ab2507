"""Unit tests for the repository layer."""

from datetime import date, timedelta

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from haccp_journal.core.database.entities import (
    CleaningLog,
    CleaningTemplate,
    DiaryDevice,
    FoodDiary,
    Personnel,
    TemperatureLog,
    TemperatureReading,
)
from haccp_journal.core.database.repositories import (
    DiaryDeviceRepository,
    EstablishmentRepository,
    FoodDiaryRepository,
    PersonnelRepository,
    TemperatureLogRepository,
    TemperatureReadingRepository,
    UserRepository,
)
from test.unit_test.factories import (
    make_business,
    make_device,
    make_establishment,
    make_food_item,
    make_personnel,
    make_user,
)

DAY = date(2024, 5, 20)


class TestUserRepository:
    async def test_get_by_email_is_case_insensitive(self, session: AsyncSession):
        user = await make_user(session, email="owner@example.com")
        found = await UserRepository(session).get_by_email("  OWNER@example.com ")
        assert found is not None and found.id == user.id

    async def test_list_and_count_filters(self, session: AsyncSession):
        await make_user(session, email="a@example.com", is_active=False)
        await make_user(session, email="b@example.com")
        await make_user(session, email="admin@example.com", role="admin")
        repo = UserRepository(session)

        inactive = await repo.list(filters={"is_active": False})
        assert [u.email for u in inactive] == ["a@example.com"]
        assert await repo.count_matching({"role": "admin"}) == 1
        assert await repo.count_matching({"search": "example"}) == 3
        assert len(await repo.list(limit=2)) == 2

    async def test_update_and_delete(self, session: AsyncSession):
        user = await make_user(session)
        repo = UserRepository(session)
        await repo.update(user, {"manager_name": "New Name"})
        assert (await repo.get_by_id(user.id)).manager_name == "New Name"
        assert await repo.delete(user.id) is True
        assert await repo.delete(user.id) is False


class TestEstablishmentRepository:
    async def test_count_for_user(self, session: AsyncSession):
        user = await make_user(session)
        await make_establishment(session, user)
        await make_establishment(session, user, company_name="Second EOOD")
        assert await EstablishmentRepository(session).count_for_user(user.id) == 2

    async def test_company_name_search(self, session: AsyncSession):
        user = await make_user(session)
        await make_establishment(session, user, company_name="Sea Breeze OOD")
        await make_establishment(session, user, company_name="Mountain Hut EOOD")
        found = await EstablishmentRepository(session).list(filters={"company_name": "breeze"})
        assert [e.company_name for e in found] == ["Sea Breeze OOD"]

    async def test_delete_with_personnel_clears_references(self, session: AsyncSession):
        user = await make_user(session)
        establishment = await make_establishment(session, user)
        person = await make_personnel(session, establishment)
        device = await make_device(session, user, establishment)
        template = CleaningTemplate(
            user_id=user.id,
            establishment_id=establishment.id,
            name="Kitchen",
            days_of_week=["monday"],
            cleaning_hours=["09:00"],
            duration=30,
            products=["Soap"],
            cleaning_areas=["Floor"],
            employee_id=person.id,
        )
        session.add(template)
        await session.commit()

        await EstablishmentRepository(session).delete_with_personnel(establishment)

        assert (await session.execute(select(Personnel))).scalars().all() == []
        await session.refresh(device)
        await session.refresh(template)
        assert device.establishment_id is None
        assert template.establishment_id is None
        assert template.employee_id is None


class TestPersonnelRepository:
    async def test_list_by_owner(self, session: AsyncSession):
        owner = await make_user(session)
        other = await make_user(session, email="other@example.com")
        await make_personnel(session, await make_establishment(session, owner), full_name="Boris")
        await make_personnel(session, await make_establishment(session, other), full_name="Anna")

        people = await PersonnelRepository(session).list(filters={"user_id": owner.id})
        assert [p.full_name for p in people] == ["Boris"]

    async def test_expiring_between(self, session: AsyncSession):
        user = await make_user(session)
        establishment = await make_establishment(session, user)
        await make_personnel(session, establishment, full_name="Expired", health_book_validity=DAY - timedelta(days=1))
        await make_personnel(session, establishment, full_name="Today", health_book_validity=DAY)
        await make_personnel(session, establishment, full_name="Edge", health_book_validity=DAY + timedelta(days=10))
        await make_personnel(session, establishment, full_name="Later", health_book_validity=DAY + timedelta(days=11))

        pairs = await PersonnelRepository(session).expiring_between(DAY, 10)
        assert [person.full_name for person, _ in pairs] == ["Today", "Edge"]
        assert all(est.id == establishment.id for _, est in pairs)

    async def test_delete_person_clears_cleaning_assignments(self, session: AsyncSession):
        user = await make_user(session)
        person = await make_personnel(session, await make_establishment(session, user))
        log = CleaningLog(
            user_id=user.id,
            log_date=DAY,
            start_time="09:00",
            end_time="10:00",
            cleaning_areas=["Floor"],
            products=["Soap"],
            employee_id=person.id,
            employee_name=person.full_name,
        )
        session.add(log)
        await session.commit()

        await PersonnelRepository(session).delete_person(person)

        await session.refresh(log)
        assert log.employee_id is None
        assert log.employee_name == "Maria Ivanova"


class TestReadingRepositories:
    async def test_existing_slots_and_add_many(self, session: AsyncSession):
        user = await make_user(session)
        device = await make_device(session, user, await make_establishment(session, user))
        repo = TemperatureReadingRepository(session)

        staged = repo.add_many(
            [
                TemperatureReading(device_id=device.id, reading_date=DAY, hour=10, temperature=2.5),
                TemperatureReading(device_id=device.id, reading_date=DAY - timedelta(days=1), hour=17, temperature=3.1),
            ]
        )
        await session.commit()

        assert staged == 2
        assert await repo.existing_slots(device.id, [DAY]) == {(DAY, 10)}
        assert await repo.existing_slots(device.id, []) == set()

    async def test_list_orders_by_day_then_hour(self, session: AsyncSession):
        user = await make_user(session)
        device = await make_device(session, user, await make_establishment(session, user))
        repo = TemperatureReadingRepository(session)
        repo.add_many(
            TemperatureReading(device_id=device.id, reading_date=day, hour=hour, temperature=1.0)
            for day in (DAY - timedelta(days=1), DAY)
            for hour in (17, 10)
        )
        await session.commit()

        readings = await repo.list(filters={"device_id": device.id, "start_date": DAY})
        assert [(r.reading_date, r.hour) for r in readings] == [(DAY, 10), (DAY, 17)]

    async def test_delete_with_readings(self, session: AsyncSession):
        user = await make_user(session)
        device = await make_device(session, user, await make_establishment(session, user))
        session.add(TemperatureReading(device_id=device.id, reading_date=DAY, hour=10, temperature=1.0))
        await session.commit()

        await DiaryDeviceRepository(session).delete_with_readings(device)

        assert (await session.execute(select(TemperatureReading))).scalars().all() == []
        assert (await session.execute(select(DiaryDevice))).scalars().all() == []


class TestTemperatureLogRepository:
    async def test_filters_count_and_delete(self, session: AsyncSession):
        user = await make_user(session)
        business = await make_business(session, user)
        repo = TemperatureLogRepository(session)
        repo.add_many(
            TemperatureLog(
                business_id=business.id,
                equipment_type=kind,
                equipment_number=1,
                temperature=temperature,
                log_date=day,
            )
            for kind, temperature, day in [
                ("refrigerator", 2.0, DAY),
                ("freezer", -20.0, DAY),
                ("refrigerator", 3.0, DAY - timedelta(days=1)),
            ]
        )
        await session.commit()

        assert await repo.count_matching({"business_id": business.id}) == 3
        assert await repo.count_matching({"business_id": business.id, "equipment_type": "freezer"}) == 1
        assert await repo.count_matching({"business_id": business.id, "start_date": DAY}) == 2
        assert await repo.logged_items(business.id, DAY) == {("refrigerator", 1, DAY), ("freezer", 1, DAY)}

        logs = await repo.list(filters={"business_id": business.id})
        assert [(log.log_date, log.equipment_type) for log in logs] == [
            (DAY, "freezer"),
            (DAY, "refrigerator"),
            (DAY - timedelta(days=1), "refrigerator"),
        ]

        assert await repo.delete_for_business(business.id) == 3
        await session.commit()
        assert await repo.count_matching({"business_id": business.id}) == 0


class TestFoodDiaryRepository:
    async def test_slots_and_listing(self, session: AsyncSession):
        user = await make_user(session)
        item = await make_food_item(session, user)
        repo = FoodDiaryRepository(session)
        repo.add_many(
            FoodDiary(user_id=user.id, food_item_id=item.id, date=day, time=slot, shelf_life_hours=24)
            for day in (DAY - timedelta(days=1), DAY)
            for slot in ("17:00", "08:00")
        )
        await session.commit()

        assert await repo.existing_slots(item.id, DAY, DAY) == {(DAY, "08:00"), (DAY, "17:00")}
        entries = await repo.list(filters={"user_id": user.id}, limit=3)
        assert [(e.date, e.time) for e in entries] == [
            (DAY, "08:00"),
            (DAY, "17:00"),
            (DAY - timedelta(days=1), "08:00"),
        ]
        assert await repo.count_matching({"user_id": user.id, "end_date": DAY - timedelta(days=1)}) == 2
