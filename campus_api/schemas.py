"""JSON request/response contracts (camelCase on the wire)."""
from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from campus_api.core.utils import as_utc
from campus_api.domain.registrations import RegistrationStatus

# Stored values come back naive on SQLite; the wire format is always UTC-aware.
UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# -------------------------- accounts --------------------------
class SignupRequest(CamelModel):
    username: str
    password: str
    full_name: str = ""
    college: str = ""


class LoginRequest(CamelModel):
    username: str
    password: str


class UserOut(CamelModel):
    id: int
    username: str
    full_name: str
    college: str
    role: str


class SignupResponse(CamelModel):
    message: str
    user: UserOut


class LoginResponse(CamelModel):
    message: str
    token: str
    user: UserOut


# -------------------------- activities --------------------------
class ActivityCreate(CamelModel):
    title: str
    description: str = ""
    category: str = ""
    organizer: str = ""
    location: str = ""
    start_time: UtcDatetime
    end_time: UtcDatetime
    capacity: int = 0


class ActivityOut(CamelModel):
    id: int
    title: str
    description: str
    category: str
    organizer: str
    location: str
    start_time: UtcDatetime
    end_time: UtcDatetime
    capacity: int
    created_by_id: int


class ActivityDetailOut(ActivityOut):
    registered_count: int


# -------------------------- registrations --------------------------
class RegistrationOut(CamelModel):
    id: int
    user_id: int
    activity_id: int
    registration_time: UtcDatetime
    status: RegistrationStatus


class StatusUpdate(CamelModel):
    status: str = Field(min_length=1)


class UserRegistrationOut(CamelModel):
    registration_id: int
    activity_id: int
    title: str
    location: str
    start_time: UtcDatetime
    status: RegistrationStatus


class RegistrantOut(CamelModel):
    registration_id: int
    user_id: int
    username: str
    full_name: str
    college: str
    registration_time: UtcDatetime
    status: RegistrationStatus


class RegistrationDetailOut(CamelModel):
    registration_id: int
    activity_id: int
    activity_title: str
    user_id: int
    user_full_name: str
    user_college: str
    registration_time: UtcDatetime
    status: RegistrationStatus


# -------------------------- stats --------------------------
class HotActivityOut(CamelModel):
    title: str
    organizer: str
    registration_count: int


class OrganizerCountOut(CamelModel):
    organizer: str
    activity_count: int


class MessageOut(CamelModel):
    message: str
