"""Tests for the database seed scripts against a scratch SQLite file."""
from datetime import datetime, timezone

import pytest
from sqlalchemy import func, select

from fyla.seeding.appointments_chat import AppointmentChatSeeder, CHAT_SCRIPT, SeedDataMissing
from fyla.seeding.fixtures import PROVIDER_ENHANCEMENTS
from fyla.seeding.providers import ProviderEnhancer, tag_id
from fyla.seeding.schema import (
    Appointment,
    AppointmentService,
    Conversation,
    Message,
    Service,
    User,
    UserServiceProviderTag,
    create_session_factory,
)

FIXED_NOW = datetime(2025, 3, 10, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def session_factory(tmp_path):
    return create_session_factory(f"sqlite:///{tmp_path / 'fyla.db'}", create_tables=True)


@pytest.fixture
def seeded_users(session_factory):
    with session_factory() as db, db.begin():
        db.add_all([
            User(Id=1, Email="emma@example.com", FullName="Emma Johnson", Role="Client"),
            User(Id=2, Email="james@example.com", FullName="James Wilson", Role="Client"),
            User(Id=3, Email="olivia@example.com", FullName="Olivia Brown", Role="Client"),
            User(Id=10, Email="sophia@example.com", FullName="Sophia Grace", Role="ServiceProvider"),
            User(Id=11, Email="marcus@example.com", FullName="Marcus Williams", Role="ServiceProvider"),
            User(Id=12, Email="isabella@example.com", FullName="Isabella Romano", Role="Provider"),
        ])
    return session_factory


def count(session_factory, model, *criteria):
    with session_factory() as db:
        return db.scalar(select(func.count()).select_from(model).where(*criteria))


class TestAppointmentChatSeeder:

    def test_creates_appointments_and_conversations(self, seeded_users):
        result = AppointmentChatSeeder(seeded_users, clock=lambda: FIXED_NOW).run()

        assert (result.appointments, result.confirmed, result.pending) == (4, 3, 1)
        assert result.conversations == 3
        assert result.messages == 3 * len(CHAT_SCRIPT)
        assert count(seeded_users, Appointment, Appointment.Status == "pending") == 1
        assert count(seeded_users, AppointmentService) == 4
        assert count(seeded_users, Message, Message.IsRead.is_(False)) == 0

    def test_sample_services_created_when_none_exist(self, seeded_users):
        result = AppointmentChatSeeder(seeded_users, clock=lambda: FIXED_NOW).run()

        # one fallback service per provider
        assert result.services_created == 3
        assert count(seeded_users, Service) == 3

    def test_appointments_scheduled_in_the_afternoon(self, seeded_users):
        AppointmentChatSeeder(seeded_users, clock=lambda: FIXED_NOW).run()

        with seeded_users() as db:
            appointments = db.scalars(select(Appointment).order_by(Appointment.ScheduledStartTime)).all()
            assert [a.ScheduledStartTime.day for a in appointments] == [12, 13, 15, 17]
            assert all(a.ScheduledStartTime.hour == 14 for a in appointments)
            for appointment in appointments:
                service = db.scalars(
                    select(Service)
                    .join(AppointmentService, AppointmentService.ServiceId == Service.Id)
                    .where(AppointmentService.AppointmentId == appointment.Id)
                ).one()
                minutes = (appointment.ScheduledEndTime - appointment.ScheduledStartTime).total_seconds() / 60
                assert minutes == service.EstimatedDurationMinutes
                assert appointment.TotalPrice == service.Price

    def test_rerun_leaves_same_data(self, seeded_users):
        seeder = AppointmentChatSeeder(seeded_users, clock=lambda: FIXED_NOW)

        seeder.run()
        second = seeder.run()

        assert second.services_created == 0
        assert count(seeded_users, Appointment) == 4
        assert count(seeded_users, Conversation) == 3
        assert count(seeded_users, Message) == 3 * len(CHAT_SCRIPT)

    def test_missing_providers(self, session_factory):
        with session_factory() as db, db.begin():
            db.add(User(Id=1, Email="emma@example.com", FullName="Emma Johnson", Role="Client"))

        with pytest.raises(SeedDataMissing):
            AppointmentChatSeeder(session_factory).run()

        assert count(session_factory, Appointment) == 0


class TestProviderEnhancer:

    def test_unknown_tag_falls_back(self):
        assert tag_id("Tutor") == 10
        assert tag_id("Underwater Basket Weaving") == 1

    def test_enhance_replaces_tags_and_services(self, seeded_users):
        with seeded_users() as db, db.begin():
            db.add(UserServiceProviderTag(UserId=10, ServiceProviderTagId=5))
            db.add(Service(ProviderId=10, Name="Basic Facial", Price=75, EstimatedDurationMinutes=60, IsActive=True))

        enhanced = ProviderEnhancer(seeded_users).run(PROVIDER_ENHANCEMENTS[:1])

        assert enhanced == ["Sophia Grace"]
        with seeded_users() as db:
            provider = db.get(User, 10)
            assert provider.Bio.startswith("Experienced academic tutor")
            assert (provider.LocationLat, provider.LocationLng) == (37.4419, -122.143)
            tags = db.scalars(select(UserServiceProviderTag.ServiceProviderTagId)
                              .where(UserServiceProviderTag.UserId == 10)).all()
            assert tags == [10]
            active = db.scalars(select(Service.Name).where(Service.ProviderId == 10, Service.IsActive.is_(True))).all()
            assert sorted(active) == ["Math Tutoring", "SAT/ACT Prep", "Science Tutoring"]
        assert count(seeded_users, Service, Service.Name == "Basic Facial", Service.IsActive.is_(False)) == 1

    def test_missing_provider_skipped(self, seeded_users):
        enhanced = ProviderEnhancer(seeded_users).run(PROVIDER_ENHANCEMENTS)

        assert enhanced == ["Sophia Grace", "Marcus Williams", "Isabella Romano"]

    def test_clients_never_matched(self, seeded_users):
        client_named_like_provider = dict(PROVIDER_ENHANCEMENTS[0], full_name="Emma Johnson")

        assert ProviderEnhancer(seeded_users).enhance(client_named_like_provider) is False
        assert count(seeded_users, UserServiceProviderTag) == 0
