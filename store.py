# store.py
"""
In-memory domain store: the single owner of users, locations, reports and
the session.

Every operation simulates a network round-trip before touching state and
keeps the busy flag raised for its whole duration. Each operation's
read-modify-write of a collection runs without an await in between, so
operations never interleave on the same collection.
"""
import asyncio
import logging
from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager
from datetime import datetime, timedelta
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from config import settings
from core.exceptions import AuthError, BusinessRuleViolation, NotFoundError, StoreError, UnexpectedError
from core.notifications import Notification, Notifier
from core.security import hash_credentials, verify_password
from core.session_storage import SESSION_KEY, SessionStorage, build_storage
from mock_data import SeedData, build_seed
from records.base import RecordModel, generate_id, utcnow
from records.location import Location, LocationCreate, LocationUpdate
from records.report import (
    PLACEHOLDER_IMAGE,
    Report,
    ReportCreate,
    ReportStatus,
    ReportSubmission,
    ReportUpdate,
)
from records.user import User, UserCreate, UserUpdate

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=RecordModel)
P = TypeVar("P", bound=BaseModel)

GENERIC_ERROR = "An unexpected error occurred"

STATUS_MESSAGES = {
    ReportStatus.PENDING: "marked as pending",
    ReportStatus.COMPLETED: "marked as completed",
    ReportStatus.REJECTED: "rejected",
}


def _coerce(model: type[P], data: P | dict[str, Any]) -> P:
    if isinstance(data, model):
        return data
    return model.model_validate(data)


def _short(report_id: str) -> str:
    return report_id[:8]


class DomainStore:
    """
    Owns the four collections and funnels every mutation.

    Not-found conditions raise NotFoundError; business-rule violations
    (self-delete, deleting a referenced location) return False. Both are
    announced through the notifier.
    """

    def __init__(
        self,
        *,
        storage: SessionStorage,
        latency: float = 0.0,
        notifier: Notifier | None = None,
        users: Iterable[User] = (),
        locations: Iterable[Location] = (),
        reports: Iterable[Report] = (),
        credential_hashes: dict[str, str] | None = None,
    ):
        self._storage = storage
        self._latency = latency
        self.notifier = notifier or Notifier()

        self._users: list[User] = list(users)
        self._locations: list[Location] = list(locations)
        self._reports: list[Report] = list(reports)
        # Hashes arrive keyed by seeded email; held by user id from here on
        hashes = {email.lower(): hashed for email, hashed in (credential_hashes or {}).items()}
        self._credentials: dict[str, str] = {
            u.id: hashes[u.email.lower()] for u in self._users if u.email.lower() in hashes
        }

        self._pending = 0
        self._current_user: User | None = self._restore_session()

    @classmethod
    def from_seed(
        cls,
        seed: SeedData,
        *,
        storage: SessionStorage,
        latency: float = 0.0,
        notifier: Notifier | None = None,
        credential_hashes: dict[str, str] | None = None,
    ) -> "DomainStore":
        """Build a store from seed data, hashing the seeded credentials unless given."""
        if credential_hashes is None:
            credential_hashes = hash_credentials(seed.credentials)
        return cls(
            storage=storage,
            latency=latency,
            notifier=notifier,
            users=seed.users,
            locations=seed.locations,
            reports=seed.reports,
            credential_hashes=credential_hashes,
        )

    # ---------- Snapshots ----------

    @property
    def users(self) -> list[User]:
        return list(self._users)

    @property
    def locations(self) -> list[Location]:
        return list(self._locations)

    @property
    def reports(self) -> list[Report]:
        return list(self._reports)

    @property
    def current_user(self) -> User | None:
        return self._current_user

    @property
    def is_authenticated(self) -> bool:
        return self._current_user is not None

    @property
    def is_loading(self) -> bool:
        return self._pending > 0

    @property
    def notifications(self) -> list[Notification]:
        return self.notifier.items

    def get_user(self, user_id: str) -> User:
        return self._find(self._users, user_id, "User")

    def get_location(self, location_id: str) -> Location:
        return self._find(self._locations, location_id, "Location")

    def get_report(self, report_id: str) -> Report:
        return self._find(self._reports, report_id, "Report")

    # ---------- Internals ----------

    @staticmethod
    def _find(items: list[R], entity_id: str, kind: str) -> R:
        for item in items:
            if item.id == entity_id:
                return item
        raise NotFoundError(kind, entity_id)

    @staticmethod
    def _replace(items: list[R], updated: R) -> list[R]:
        return [updated if item.id == updated.id else item for item in items]

    @staticmethod
    def _timestamp(previous: datetime | None = None) -> datetime:
        """Current time, forced strictly after `previous`."""
        now = utcnow()
        if previous is not None and now <= previous:
            now = previous + timedelta(microseconds=1)
        return now

    @staticmethod
    def _merge(record: R, patch: BaseModel) -> R:
        """Apply explicitly set fields; a None never clears a required field."""
        fields = type(record).model_fields
        changes = {
            key: value
            for key, value in patch.model_dump(exclude_unset=True).items()
            if key in fields and (value is not None or not fields[key].is_required())
        }
        changes["updated_at"] = DomainStore._timestamp(record.updated_at)
        return record.model_copy(update=changes)

    @asynccontextmanager
    async def _busy(self) -> AsyncIterator[None]:
        self._pending += 1
        try:
            if self._latency > 0:
                await asyncio.sleep(self._latency)
            yield
        finally:
            self._pending -= 1

    def _not_found(self, exc: NotFoundError, title: str) -> NotFoundError:
        logger.warning("%s: %s", title, exc)
        self.notifier.alert(title, str(exc))
        return exc

    def _violation(self, violation: BusinessRuleViolation) -> bool:
        logger.warning("%s: %s", violation.title, violation.detail)
        self.notifier.alert(violation.title, violation.detail)
        return False

    def _unexpected(self, title: str, exc: Exception) -> UnexpectedError:
        logger.exception("%s", title)
        self.notifier.alert(title, GENERIC_ERROR)
        return UnexpectedError(f"{title}: {exc}")

    # ---------- Session ----------

    def _restore_session(self) -> User | None:
        raw = self._storage.get_item(SESSION_KEY)
        if raw is None:
            return None
        try:
            return User.model_validate_json(raw)
        except ValidationError as exc:
            logger.warning("Failed to parse stored user, clearing session: %s", exc)
            self._storage.remove_item(SESSION_KEY)
            return None

    def _set_session(self, user: User | None) -> None:
        self._current_user = user
        if user is None:
            self._storage.remove_item(SESSION_KEY)
        else:
            self._storage.set_item(SESSION_KEY, user.model_dump_json(by_alias=True))

    async def login(self, email: str, password: str) -> User:
        """
        Authenticate against the seeded credentials.

        Email matching is case-insensitive, password matching exact.

        Raises:
            AuthError: If no account matches; the session stays as it was
        """
        async with self._busy():
            try:
                key = email.strip().lower()
                user = next((u for u in self._users if u.email.lower() == key), None)
                hashed = self._credentials.get(user.id) if user is not None else None
                if hashed is None or not verify_password(password, hashed):
                    logger.warning("Login failed for %s", email)
                    self.notifier.alert("Login failed", "Invalid email or password")
                    raise AuthError()

                self._set_session(user)
            except StoreError:
                raise
            except Exception as exc:
                raise self._unexpected("Login error", exc) from exc

            logger.info("User %s logged in", user.id)
            self.notifier.info("Login successful", f"Welcome back, {user.full_name}")
            return user

    def logout(self) -> None:
        """Clear the session and its durable copy. Safe to call when logged out."""
        if self._current_user is not None:
            logger.info("User %s logged out", self._current_user.id)
        self._set_session(None)
        self.notifier.info("Logged out", "You have been successfully logged out")

    # ---------- Users ----------

    async def add_user(self, data: UserCreate | dict[str, Any]) -> User:
        """Create a user. The password is dropped; this store keeps no credentials for new users."""
        payload = _coerce(UserCreate, data)
        async with self._busy():
            try:
                now = self._timestamp()
                user = User(
                    id=generate_id(),
                    created_at=now,
                    updated_at=now,
                    **payload.model_dump(exclude={"password"}),
                )
                self._users = [*self._users, user]
            except Exception as exc:
                raise self._unexpected("Error adding user", exc) from exc

            logger.info("User %s added", user.id)
            self.notifier.info("User added", f"{user.full_name} has been added successfully")
            return user

    async def update_user(self, user_id: str, partial: UserUpdate | dict[str, Any]) -> User:
        """
        Merge a partial update into a user.

        When the user is the one logged in, the session copy (and its durable
        record) is replaced by the updated user.

        Raises:
            NotFoundError: If the user doesn't exist
        """
        patch = _coerce(UserUpdate, partial)
        async with self._busy():
            try:
                user = self._merge(self.get_user(user_id), patch)
                self._users = self._replace(self._users, user)
                if self._current_user is not None and self._current_user.id == user_id:
                    self._set_session(user)
            except NotFoundError as exc:
                raise self._not_found(exc, "Error updating user") from None
            except Exception as exc:
                raise self._unexpected("Error updating user", exc) from exc

            logger.info("User %s updated", user_id)
            self.notifier.info("User updated", f"{user.full_name}'s information has been updated")
            return user

    async def delete_user(self, user_id: str) -> bool:
        """
        Remove a user.

        Returns False if the user is the one logged in.

        Raises:
            NotFoundError: If the user doesn't exist
        """
        async with self._busy():
            if self._current_user is not None and self._current_user.id == user_id:
                return self._violation(BusinessRuleViolation(
                    "Cannot delete",
                    "You cannot delete your own account while logged in",
                ))
            try:
                user = self.get_user(user_id)
                self._users = [u for u in self._users if u.id != user_id]
            except NotFoundError as exc:
                raise self._not_found(exc, "Error deleting user") from None
            except Exception:
                logger.exception("Delete user error")
                self.notifier.alert("Error deleting user", GENERIC_ERROR)
                return False

            logger.info("User %s deleted", user_id)
            self.notifier.info("User deleted", f"{user.full_name} has been removed")
            return True

    async def change_password(self, user_id: str, new_password: str) -> bool:
        """
        Accept a password change for a user.

        Nothing is stored: the mock keeps no credentials beyond the seeded
        accounts, so the new password has no effect on login.

        Raises:
            NotFoundError: If the user doesn't exist
        """
        async with self._busy():
            try:
                user = self.get_user(user_id)
            except NotFoundError as exc:
                raise self._not_found(exc, "Error updating password") from None

            logger.info("Password change requested for user %s (not stored)", user_id)
            self.notifier.info("Password updated", f"Password for {user.full_name} has been updated")
            return True

    # ---------- Locations ----------

    async def add_location(self, data: LocationCreate | dict[str, Any]) -> Location:
        payload = _coerce(LocationCreate, data)
        async with self._busy():
            try:
                now = self._timestamp()
                location = Location(id=generate_id(), created_at=now, updated_at=now, **payload.model_dump())
                self._locations = [*self._locations, location]
            except Exception as exc:
                raise self._unexpected("Error adding location", exc) from exc

            logger.info("Location %s added", location.id)
            self.notifier.info("Location added", f"{location.name} has been added successfully")
            return location

    async def update_location(self, location_id: str, partial: LocationUpdate | dict[str, Any]) -> Location:
        """
        Raises:
            NotFoundError: If the location doesn't exist
        """
        patch = _coerce(LocationUpdate, partial)
        async with self._busy():
            try:
                location = self._merge(self.get_location(location_id), patch)
                self._locations = self._replace(self._locations, location)
            except NotFoundError as exc:
                raise self._not_found(exc, "Error updating location") from None
            except Exception as exc:
                raise self._unexpected("Error updating location", exc) from exc

            logger.info("Location %s updated", location_id)
            self.notifier.info("Location updated", f"{location.name} has been updated")
            return location

    async def delete_location(self, location_id: str) -> bool:
        """
        Remove a location.

        Returns False while any report still references it.

        Raises:
            NotFoundError: If the location doesn't exist
        """
        async with self._busy():
            try:
                location = self.get_location(location_id)
            except NotFoundError as exc:
                raise self._not_found(exc, "Error deleting location") from None

            if any(r.location_id == location_id for r in self._reports):
                return self._violation(BusinessRuleViolation(
                    "Cannot delete location",
                    "This location is used in existing reports",
                ))

            self._locations = [loc for loc in self._locations if loc.id != location_id]
            logger.info("Location %s deleted", location_id)
            self.notifier.info("Location deleted", f"{location.name} has been removed")
            return True

    # ---------- Reports ----------

    async def add_report(self, data: ReportCreate | dict[str, Any]) -> Report:
        """Append a report with whatever status the caller supplies."""
        payload = _coerce(ReportCreate, data)
        async with self._busy():
            try:
                now = self._timestamp()
                report = Report(id=generate_id(), created_at=now, updated_at=now, **payload.model_dump())
                self._reports = [*self._reports, report]
            except Exception as exc:
                raise self._unexpected("Error adding report", exc) from exc

            logger.info("Report %s added by technician %s", report.id, report.technician_id)
            self.notifier.info("Report added", "New report has been submitted successfully")
            return report

    async def submit_report(self, technician: User, data: ReportSubmission | dict[str, Any]) -> Report:
        """
        Technician submission flow.

        Snapshots the technician's name and badge and the location's name,
        and always starts the report as pending.

        Raises:
            NotFoundError: If the chosen location doesn't exist
        """
        submission = _coerce(ReportSubmission, data)
        try:
            location = self.get_location(submission.location_id)
        except NotFoundError as exc:
            raise self._not_found(exc, "Error adding report") from None

        return await self.add_report(ReportCreate(
            technician_id=technician.id,
            technician_name=technician.full_name,
            badge_number=technician.badge_number,
            unit_id=submission.unit_id,
            location_id=location.id,
            location_name=location.name,
            device_id=submission.device_id,
            card_number=submission.card_number,
            status=ReportStatus.PENDING,
            date=utcnow(),
            description=submission.description,
            notes=submission.notes,
            images=submission.images or [PLACEHOLDER_IMAGE],
        ))

    async def update_report(self, report_id: str, partial: ReportUpdate | dict[str, Any]) -> Report:
        """
        Raises:
            NotFoundError: If the report doesn't exist
        """
        patch = _coerce(ReportUpdate, partial)
        async with self._busy():
            try:
                report = self._merge(self.get_report(report_id), patch)
                self._reports = self._replace(self._reports, report)
            except NotFoundError as exc:
                raise self._not_found(exc, "Error updating report") from None
            except Exception as exc:
                raise self._unexpected("Error updating report", exc) from exc

            logger.info("Report %s updated", report_id)
            self.notifier.info("Report updated", f"Report #{_short(report_id)} has been updated")
            return report

    async def delete_report(self, report_id: str) -> bool:
        """
        Raises:
            NotFoundError: If the report doesn't exist
        """
        async with self._busy():
            try:
                self.get_report(report_id)
                self._reports = [r for r in self._reports if r.id != report_id]
            except NotFoundError as exc:
                raise self._not_found(exc, "Error deleting report") from None
            except Exception:
                logger.exception("Delete report error")
                self.notifier.alert("Error deleting report", GENERIC_ERROR)
                return False

            logger.info("Report %s deleted", report_id)
            self.notifier.info("Report deleted", f"Report #{_short(report_id)} has been removed")
            return True

    async def update_report_status(self, report_id: str, status: ReportStatus | str) -> Report:
        """
        Move a report to a new status.

        Raises:
            NotFoundError: If the report doesn't exist
            ValueError: If status isn't one of pending/completed/rejected
        """
        status = ReportStatus(status)
        async with self._busy():
            try:
                current = self.get_report(report_id)
                report = current.model_copy(update={
                    "status": status,
                    "updated_at": self._timestamp(current.updated_at),
                })
                self._reports = self._replace(self._reports, report)
            except NotFoundError as exc:
                raise self._not_found(exc, "Error updating status") from None
            except Exception as exc:
                raise self._unexpected("Error updating status", exc) from exc

            logger.info("Report %s status -> %s", report_id, status.value)
            self.notifier.info("Status updated", f"Report has been {STATUS_MESSAGES[status]}")
            return report


# ---------- FastAPI dependency ----------

_store: DomainStore | None = None


def build_store() -> DomainStore:
    """Build the application store from settings and the static seed."""
    return DomainStore.from_seed(
        build_seed(),
        storage=build_storage(settings.SESSION_STORE_PATH),
        latency=settings.SIMULATED_LATENCY_MS / 1000,
    )


def get_store() -> DomainStore:
    """Provide the application's domain store."""
    global _store
    if _store is None:
        _store = build_store()
    return _store
