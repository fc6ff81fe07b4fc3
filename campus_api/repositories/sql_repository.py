"""High-level data access helpers backed by SQLAlchemy."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select, update, delete, func
from sqlalchemy.exc import IntegrityError

from campus_api.db.models import Activity, Registration, User
from campus_api.db.session import Database
from campus_api.domain.registrations import INITIAL_STATUS


class DuplicateEntryError(Exception):
    """A uniqueness constraint rejected the write."""


class MissingReferenceError(Exception):
    """A foreign key pointed at a row that does not exist."""


class SQLRepository:
    """CRUD helpers wrapping the SQLAlchemy session of one Database."""

    def __init__(self, database: Database) -> None:
        self.database = database

    # -------------------------- users --------------------------
    def get_user(self, user_id: int) -> Optional[User]:
        with self.database.session() as session:
            return session.get(User, user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self.database.session() as session:
            stmt = select(User).where(User.username == username)
            return session.execute(stmt).scalar_one_or_none()

    def create_user(self, username: str, password_hash: str, full_name: str, college: str, role: str) -> User:
        entity = User(
            username=username,
            password_hash=password_hash,
            full_name=full_name,
            college=college,
            role=role,
            created_at=datetime.now(timezone.utc),
        )
        with self.database.session() as session:
            session.add(entity)
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                raise DuplicateEntryError(f"username {username!r} already exists") from exc
            session.refresh(entity)
            return entity

    def update_user_password(self, user_id: int, password_hash: str) -> None:
        with self.database.session() as session:
            session.execute(update(User).where(User.id == user_id).values(password_hash=password_hash))
            session.commit()

    # -------------------------- activities --------------------------
    def create_activity(
        self,
        *,
        title: str,
        description: str,
        category: str,
        organizer: str,
        location: str,
        start_time: datetime,
        end_time: datetime,
        capacity: int,
        created_by_id: int,
    ) -> Activity:
        entity = Activity(
            title=title,
            description=description,
            category=category,
            organizer=organizer,
            location=location,
            start_time=start_time,
            end_time=end_time,
            capacity=capacity,
            created_by_id=created_by_id,
        )
        with self.database.session() as session:
            session.add(entity)
            session.commit()
            session.refresh(entity)
            return entity

    def get_activity(self, activity_id: int) -> Optional[Activity]:
        with self.database.session() as session:
            return session.get(Activity, activity_id)

    def list_activities(self, category: str | None = None, search: str | None = None) -> list[Activity]:
        stmt = select(Activity)
        if category:
            stmt = stmt.where(Activity.category == category)
        if search:
            stmt = stmt.where(Activity.title.icontains(search, autoescape=True))
        stmt = stmt.order_by(Activity.start_time.desc(), Activity.id.desc())
        with self.database.session() as session:
            return list(session.execute(stmt).scalars().all())

    def delete_activity(self, activity_id: int) -> bool:
        with self.database.session() as session:
            result = session.execute(delete(Activity).where(Activity.id == activity_id))
            session.commit()
            return result.rowcount > 0

    def count_registrations(self, activity_id: int) -> int:
        stmt = select(func.count(Registration.id)).where(Registration.activity_id == activity_id)
        with self.database.session() as session:
            return int(session.execute(stmt).scalar_one())

    # -------------------------- registrations --------------------------
    def create_registration(self, user_id: int, activity_id: int) -> Registration:
        entity = Registration(
            user_id=user_id,
            activity_id=activity_id,
            registration_time=datetime.now(timezone.utc),
            status=INITIAL_STATUS.value,
        )
        with self.database.session() as session:
            session.add(entity)
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                existing = session.execute(
                    select(Registration.id).where(
                        Registration.user_id == user_id, Registration.activity_id == activity_id
                    )
                ).first()
                if existing is not None:
                    raise DuplicateEntryError(
                        f"user {user_id} already registered for activity {activity_id}"
                    ) from exc
                raise MissingReferenceError(f"user {user_id} or activity {activity_id} does not exist") from exc
            session.refresh(entity)
            return entity

    def get_registration(self, registration_id: int) -> Optional[Registration]:
        with self.database.session() as session:
            return session.get(Registration, registration_id)

    def update_registration_status(self, registration_id: int, status: str) -> bool:
        with self.database.session() as session:
            stmt = update(Registration).where(Registration.id == registration_id).values(status=status)
            result = session.execute(stmt)
            session.commit()
            return result.rowcount > 0

    def delete_registration_for_user(self, registration_id: int, user_id: int) -> bool:
        """Delete the registration only when it belongs to ``user_id``, in one statement."""
        with self.database.session() as session:
            stmt = delete(Registration).where(
                Registration.id == registration_id, Registration.user_id == user_id
            )
            result = session.execute(stmt)
            session.commit()
            return result.rowcount > 0

    def delete_registration(self, registration_id: int) -> bool:
        with self.database.session() as session:
            result = session.execute(delete(Registration).where(Registration.id == registration_id))
            session.commit()
            return result.rowcount > 0

    def list_user_registrations(self, user_id: int) -> list[dict]:
        stmt = (
            select(
                Registration.id.label("registration_id"),
                Activity.id.label("activity_id"),
                Activity.title,
                Activity.location,
                Activity.start_time,
                Registration.status,
            )
            .join(Activity, Registration.activity_id == Activity.id)
            .where(Registration.user_id == user_id)
            .order_by(Activity.start_time.desc(), Registration.id.desc())
        )
        with self.database.session() as session:
            return [dict(row) for row in session.execute(stmt).mappings().all()]

    def list_activity_registrations(self, activity_id: int) -> list[dict]:
        stmt = (
            select(
                Registration.id.label("registration_id"),
                User.id.label("user_id"),
                User.username,
                User.full_name,
                User.college,
                Registration.registration_time,
                Registration.status,
            )
            .join(User, Registration.user_id == User.id)
            .where(Registration.activity_id == activity_id)
            .order_by(Registration.registration_time.asc(), Registration.id.asc())
        )
        with self.database.session() as session:
            return [dict(row) for row in session.execute(stmt).mappings().all()]

    def list_all_registrations(self) -> list[dict]:
        stmt = (
            select(
                Registration.id.label("registration_id"),
                Activity.id.label("activity_id"),
                Activity.title.label("activity_title"),
                User.id.label("user_id"),
                User.full_name.label("user_full_name"),
                User.college.label("user_college"),
                Registration.registration_time,
                Registration.status,
            )
            .join(User, Registration.user_id == User.id)
            .join(Activity, Registration.activity_id == Activity.id)
            .order_by(Registration.registration_time.desc(), Registration.id.desc())
        )
        with self.database.session() as session:
            return [dict(row) for row in session.execute(stmt).mappings().all()]

    # -------------------------- stats --------------------------
    def hot_activities(self, limit: int) -> list[dict]:
        registration_count = func.count(Registration.id).label("registration_count")
        stmt = (
            select(Activity.title, Activity.organizer, registration_count)
            .select_from(Activity)
            .outerjoin(Registration, Registration.activity_id == Activity.id)
            .group_by(Activity.id, Activity.title, Activity.organizer)
            .order_by(registration_count.desc(), Activity.id.asc())
            .limit(limit)
        )
        with self.database.session() as session:
            return [dict(row) for row in session.execute(stmt).mappings().all()]

    def organizer_counts(self) -> list[dict]:
        activity_count = func.count(Activity.id).label("activity_count")
        stmt = (
            select(Activity.organizer, activity_count)
            .group_by(Activity.organizer)
            .order_by(activity_count.desc(), Activity.organizer.asc())
        )
        with self.database.session() as session:
            return [dict(row) for row in session.execute(stmt).mappings().all()]
