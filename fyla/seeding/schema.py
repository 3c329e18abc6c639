"""SQLAlchemy mappings for the backend's SQLite tables used by the seeders.

Table and column names follow the backend's EF Core conventions (PascalCase).
Only the columns the seeders read or write are mapped.
"""
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Text, create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()

CLIENT_ROLES = ("Client", "client")
PROVIDER_ROLES = ("Provider", "ServiceProvider", "provider")


def utc_now():
    """Get current UTC timestamp."""
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "Users"

    Id = Column(Integer, primary_key=True)
    Email = Column(String(255), nullable=False, unique=True)
    FullName = Column(String(200), nullable=False)
    Role = Column(String(50), nullable=False, index=True)
    Bio = Column(Text, nullable=True)
    LocationLat = Column(Float, nullable=True)
    LocationLng = Column(Float, nullable=True)
    CreatedAt = Column(DateTime, default=utc_now, nullable=False)

    def __repr__(self):
        return f"<User(id={self.Id}, name={self.FullName}, role={self.Role})>"


class Service(Base):
    __tablename__ = "Services"

    Id = Column(Integer, primary_key=True)
    ProviderId = Column(Integer, ForeignKey("Users.Id"), nullable=False, index=True)
    Name = Column(String(200), nullable=False)
    Description = Column(Text, nullable=True)
    Price = Column(Float, nullable=False)
    EstimatedDurationMinutes = Column(Integer, nullable=False, default=60)
    IsActive = Column(Boolean, nullable=False, default=True)
    CreatedAt = Column(DateTime, default=utc_now, nullable=False)

    def __repr__(self):
        return f"<Service(id={self.Id}, provider={self.ProviderId}, name={self.Name})>"


class Appointment(Base):
    __tablename__ = "Appointments"

    Id = Column(Integer, primary_key=True)
    ClientId = Column(Integer, ForeignKey("Users.Id"), nullable=False)
    ProviderId = Column(Integer, ForeignKey("Users.Id"), nullable=False)
    ScheduledStartTime = Column(DateTime, nullable=False)
    ScheduledEndTime = Column(DateTime, nullable=False)
    Status = Column(String(50), nullable=False)
    TotalPrice = Column(Float, nullable=False)
    Notes = Column(Text, nullable=True)
    CreatedAt = Column(DateTime, default=utc_now, nullable=False)
    UpdatedAt = Column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)


class AppointmentService(Base):
    __tablename__ = "AppointmentServices"

    Id = Column(Integer, primary_key=True)
    AppointmentId = Column(Integer, ForeignKey("Appointments.Id"), nullable=False)
    ServiceId = Column(Integer, ForeignKey("Services.Id"), nullable=False)
    PriceAtBooking = Column(Float, nullable=False)


class Conversation(Base):
    __tablename__ = "Conversations"

    Id = Column(Integer, primary_key=True)
    User1Id = Column(Integer, ForeignKey("Users.Id"), nullable=False)
    User2Id = Column(Integer, ForeignKey("Users.Id"), nullable=False)
    CreatedAt = Column(DateTime, default=utc_now, nullable=False)
    UpdatedAt = Column(DateTime, default=utc_now, nullable=False)


class Message(Base):
    __tablename__ = "Messages"

    Id = Column(Integer, primary_key=True)
    ConversationId = Column(Integer, ForeignKey("Conversations.Id"), nullable=False, index=True)
    SenderId = Column(Integer, ForeignKey("Users.Id"), nullable=False)
    ReceiverId = Column(Integer, ForeignKey("Users.Id"), nullable=False)
    Content = Column(Text, nullable=False)
    IsRead = Column(Boolean, nullable=False, default=False)
    CreatedAt = Column(DateTime, default=utc_now, nullable=False)


class UserServiceProviderTag(Base):
    __tablename__ = "UserServiceProviderTags"

    UserId = Column(Integer, ForeignKey("Users.Id"), primary_key=True)
    ServiceProviderTagId = Column(Integer, primary_key=True)


def create_session_factory(database_url: str, create_tables: bool = False) -> sessionmaker:
    """
    Build a sessionmaker bound to the seed database.

    Args:
        database_url: SQLAlchemy connection string (e.g. sqlite:///fyla.db)
        create_tables: Create missing tables first (used for scratch databases)

    Returns:
        sessionmaker producing ORM sessions
    """
    engine = create_engine(database_url, pool_pre_ping=True)
    if create_tables:
        Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
