"""Seed appointments and chat conversations straight into the SQLite database.

Usage:
    fyla-seed-appointments-chat

Requires users created by fyla-seed-users. Existing appointments,
conversations and messages are cleared first, so every run leaves the same
data behind. All writes happen in a single transaction.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session as DBSession, sessionmaker

from fyla.config import ClientConfig
from fyla.logging_config import get_logger, setup_structured_logging
from fyla.seeding.fixtures import FALLBACK_SERVICES
from fyla.seeding.schema import (
    CLIENT_ROLES,
    PROVIDER_ROLES,
    Appointment,
    AppointmentService,
    Conversation,
    Message,
    Service,
    User,
    create_session_factory,
)

logger = get_logger(__name__)

USER_LIMIT = 20
SERVICE_LIMIT = 10
APPOINTMENT_HOUR = 14

# (client index, service index, days from now, status)
APPOINTMENT_PLAN = [
    (0, 0, 2, "confirmed"),
    (1, 1, 3, "confirmed"),
    (2, 2, 5, "confirmed"),
    (0, 1, 7, "pending"),
]

# (sender is the client, minutes before now, text)
CHAT_SCRIPT = [
    (True, 120, "Hi! I'm looking forward to my {service} appointment. Is there anything I should prepare beforehand?"),
    (False, 90, "Hello! Thank you for booking with me. Please arrive with clean skin (no makeup if it's a facial) "
                "and comfortable clothing. Looking forward to seeing you!"),
    (True, 60, "Perfect! I'll make sure to follow those instructions. What's the best place to park when I arrive?"),
    (False, 30, "There's free parking right in front of the building, or there's a parking garage next door "
                "if the street is full. See you soon!"),
]


class SeedDataMissing(Exception):
    """Raised when the database lacks the users the seeder builds on."""
    pass


@dataclass
class ChatSeedResult:
    appointments: int = 0
    confirmed: int = 0
    pending: int = 0
    conversations: int = 0
    messages: int = 0
    services_created: int = 0


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AppointmentChatSeeder:
    """Rebuilds the appointment and chat demo data."""

    def __init__(self, session_factory: sessionmaker, clock: Callable[[], datetime] = _utc_now):
        self.session_factory = session_factory
        self.clock = clock

    def _load_users(self, db: DBSession):
        users = db.scalars(
            select(User)
            .where(User.Role.in_(CLIENT_ROLES + PROVIDER_ROLES))
            .order_by(User.Role, User.Id)
            .limit(USER_LIMIT)
        ).all()
        clients = [u for u in users if u.Role in CLIENT_ROLES]
        providers = [u for u in users if u.Role in PROVIDER_ROLES]
        logger.info("users_loaded", clients=len(clients), providers=len(providers))
        if not clients or not providers:
            raise SeedDataMissing("Need both clients and providers; run fyla-seed-users first")
        return clients, providers

    def _active_services(self, db: DBSession) -> List[Service]:
        return db.scalars(
            select(Service)
            .join(User, Service.ProviderId == User.Id)
            .where(Service.IsActive.is_(True))
            .order_by(Service.Id)
            .limit(SERVICE_LIMIT)
        ).all()

    def _ensure_services(self, db: DBSession, providers: List[User], result: ChatSeedResult) -> List[Service]:
        services = self._active_services(db)
        if services:
            return services

        for provider, (name, price, duration) in zip(providers, FALLBACK_SERVICES):
            db.add(Service(
                ProviderId=provider.Id,
                Name=name,
                Description=f"Professional {name.lower()} service",
                Price=price,
                EstimatedDurationMinutes=duration,
                IsActive=True,
                CreatedAt=self.clock(),
            ))
            result.services_created += 1
        db.flush()
        logger.info("sample_services_created", count=result.services_created)
        return self._active_services(db)

    def _clear(self, db: DBSession) -> None:
        for table in (Message, Conversation, AppointmentService, Appointment):
            db.execute(delete(table))
        logger.info("appointment_chat_data_cleared")

    def _add_conversation(self, db: DBSession, client: User, service: Service, result: ChatSeedResult) -> None:
        now = self.clock()
        conversation = Conversation(User1Id=client.Id, User2Id=service.ProviderId, CreatedAt=now, UpdatedAt=now)
        db.add(conversation)
        db.flush()

        sent_at = now
        for from_client, minutes_ago, text in CHAT_SCRIPT:
            sender, receiver = (client.Id, service.ProviderId) if from_client else (service.ProviderId, client.Id)
            sent_at = now - timedelta(minutes=minutes_ago)
            db.add(Message(
                ConversationId=conversation.Id,
                SenderId=sender,
                ReceiverId=receiver,
                Content=text.format(service=service.Name),
                IsRead=True,
                CreatedAt=sent_at,
            ))
            result.messages += 1
        conversation.UpdatedAt = sent_at
        result.conversations += 1

    def run(self) -> ChatSeedResult:
        """
        Clear and re-insert appointments, conversations and messages.

        Returns:
            Counts of what was inserted

        Raises:
            SeedDataMissing: If there are no clients or no providers
        """
        result = ChatSeedResult()
        with self.session_factory() as db, db.begin():
            clients, providers = self._load_users(db)
            services = self._ensure_services(db, providers, result)
            self._clear(db)

            now = self.clock()
            for client_index, service_index, days, status in APPOINTMENT_PLAN:
                if client_index >= len(clients) or service_index >= len(services):
                    continue
                client = clients[client_index]
                service = services[service_index]
                start = (now + timedelta(days=days)).replace(hour=APPOINTMENT_HOUR, minute=0, second=0, microsecond=0)

                appointment = Appointment(
                    ClientId=client.Id,
                    ProviderId=service.ProviderId,
                    ScheduledStartTime=start,
                    ScheduledEndTime=start + timedelta(minutes=service.EstimatedDurationMinutes),
                    Status=status,
                    TotalPrice=service.Price,
                    CreatedAt=now,
                    UpdatedAt=now,
                )
                db.add(appointment)
                db.flush()
                db.add(AppointmentService(
                    AppointmentId=appointment.Id, ServiceId=service.Id, PriceAtBooking=service.Price,
                ))
                result.appointments += 1
                logger.info("appointment_created", status=status, client=client.FullName, service=service.Name)

                if status == "confirmed":
                    result.confirmed += 1
                    self._add_conversation(db, client, service, result)
                else:
                    result.pending += 1

        logger.info(
            "appointment_chat_seeding_complete",
            appointments=result.appointments,
            conversations=result.conversations,
            messages=result.messages,
        )
        return result


def main(database_url: Optional[str] = None):
    config = ClientConfig.from_env()
    setup_structured_logging(config.log_level, json_logs=False)
    seeder = AppointmentChatSeeder(create_session_factory(database_url or config.seed.database_url))
    result = seeder.run()
    print(f"\nCreated {result.appointments} appointments "
          f"({result.confirmed} confirmed, {result.pending} pending)")
    print(f"Created {result.conversations} conversations with {result.messages} messages")


if __name__ == "__main__":
    main()
