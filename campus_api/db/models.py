"""SQLAlchemy models for users, activities and registrations."""
from __future__ import annotations

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import relationship

from campus_api.domain.registrations import INITIAL_STATUS
from campus_api.domain.roles import DEFAULT_ROLE

from .session import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(64), unique=True, nullable=False)
    password_hash = Column(Text, nullable=False)
    full_name = Column(String(128), nullable=False, default="")
    college = Column(String(128), nullable=False, default="")
    role = Column(String(32), nullable=False, default=DEFAULT_ROLE.value)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    registrations = relationship("Registration", back_populates="user", passive_deletes=True)


class Activity(Base):
    __tablename__ = "activities"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    category = Column(String(64), nullable=False, default="", index=True)
    organizer = Column(String(128), nullable=False, default="")
    location = Column(String(255), nullable=False, default="")
    start_time = Column(DateTime(timezone=True), nullable=False, index=True)
    end_time = Column(DateTime(timezone=True), nullable=False)
    capacity = Column(Integer, nullable=False, default=0)
    created_by_id = Column(Integer, ForeignKey("users.id"), nullable=False)

    registrations = relationship("Registration", back_populates="activity", passive_deletes=True)


class Registration(Base):
    __tablename__ = "registrations"
    __table_args__ = (UniqueConstraint("user_id", "activity_id", name="uq_registrations_user_activity"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    activity_id = Column(Integer, ForeignKey("activities.id", ondelete="CASCADE"), nullable=False, index=True)
    registration_time = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    status = Column(String(16), nullable=False, default=INITIAL_STATUS.value)

    user = relationship("User", back_populates="registrations")
    activity = relationship("Activity", back_populates="registrations")
