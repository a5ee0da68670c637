from __future__ import annotations

from datetime import date, datetime
from typing import Optional

import pytest

from worklog_tracker.container import build_services
from worklog_tracker.core.enums import Role, WorkLogStatus
from worklog_tracker.core.exceptions import DuplicateKeyError, UnauthorizedError
from worklog_tracker.main import create_app
from worklog_tracker.users.model import User
from worklog_tracker.worklogs.model import DailyLogRow, NewWorkLog, WorkLog


class InMemoryUsers:
    def __init__(self):
        self._by_id: dict[int, User] = {}
        self._id = 0

    def add(self, email: str, name: str, role: Role = Role.USER) -> User:
        user_id = self.create_user(email=email, name=name, image=None, google_id=None, role=role)
        return self._by_id[user_id]

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._by_id.get(int(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._by_id.values() if u.email == email), None)

    def create_user(self, *, email, name, image, google_id, role=Role.USER) -> int:
        if self.get_by_email(email):
            raise DuplicateKeyError(email)
        if google_id and any(u.google_id == google_id for u in self._by_id.values()):
            raise DuplicateKeyError(google_id)
        self._id += 1
        self._by_id[self._id] = User(
            user_id=self._id, email=email, name=name, role=role, image=image, google_id=google_id
        )
        return self._id

    def set_google_id(self, user_id: int, google_id: str) -> bool:
        u = self._by_id[user_id]
        if u.google_id:
            return False
        self._by_id[user_id] = User(u.user_id, u.email, u.name, u.role, u.image, google_id)
        return True

    def set_role(self, user_id: int, role: Role) -> bool:
        u = self._by_id[user_id]
        self._by_id[user_id] = User(u.user_id, u.email, u.name, role, u.image, u.google_id)
        return True

    def list_by_role(self, role: Optional[Role] = None):
        users = [u for u in self._by_id.values() if role is None or u.role == role]
        return sorted(users, key=lambda u: u.name)


class InMemoryWorkLogs:
    """Dict keyed by (user_id, work_date): the unique key is the dict key."""

    def __init__(self, users: Optional[InMemoryUsers] = None):
        self._users = users
        self._by_user_date: dict[tuple[int, date], WorkLog] = {}
        self._id = 0

    def all(self) -> list[WorkLog]:
        return list(self._by_user_date.values())

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[WorkLog]:
        return self._by_user_date.get((user_id, work_date))

    def list_for_user_in_range(self, user_id: int, start_date: date, end_date: date):
        items = [
            r for (uid, d), r in self._by_user_date.items() if uid == user_id and start_date <= d <= end_date
        ]
        return sorted(items, key=lambda r: r.work_date)

    def list_recent_for_user(self, user_id: int, *, limit: int, offset: int = 0):
        items = sorted(
            (r for r in self._by_user_date.values() if r.user_id == user_id),
            key=lambda r: r.work_date,
            reverse=True,
        )
        return items[offset : offset + limit]

    def count_for_user(self, user_id: int) -> int:
        return sum(1 for r in self._by_user_date.values() if r.user_id == user_id)

    def create_log(self, log: NewWorkLog) -> int:
        key = (log.user_id, log.work_date)
        if key in self._by_user_date:
            raise DuplicateKeyError(str(key))
        self._id += 1
        self._by_user_date[key] = WorkLog(
            log_id=self._id,
            user_id=log.user_id,
            work_date=log.work_date,
            start_time=log.start_time,
            end_time=log.end_time,
            duration=log.duration,
            status=log.status,
        )
        return self._id

    def create_many(self, logs) -> int:
        keys = [(log.user_id, log.work_date) for log in logs]
        if any(k in self._by_user_date for k in keys) or len(set(keys)) != len(keys):
            raise DuplicateKeyError("week off overlap")
        for log in logs:
            self.create_log(log)
        return len(logs)

    def update_end(self, *, log_id: int, end_time: datetime, duration, status: WorkLogStatus) -> bool:
        for key, r in self._by_user_date.items():
            if r.log_id == log_id:
                if r.end_time is not None:
                    return False
                self._by_user_date[key] = WorkLog(
                    log_id=r.log_id,
                    user_id=r.user_id,
                    work_date=r.work_date,
                    start_time=r.start_time,
                    end_time=end_time,
                    duration=duration,
                    status=status,
                )
                return True
        return False

    def list_in_range(self, start_date: date, end_date: date):
        return [r for r in self._by_user_date.values() if start_date <= r.work_date <= end_date]

    def list_daily_rows(self, work_date: date):
        rows = []
        for r in self._by_user_date.values():
            if r.work_date != work_date:
                continue
            u = self._users.get_by_id(r.user_id)
            rows.append(
                DailyLogRow(
                    log_id=r.log_id,
                    user_id=r.user_id,
                    user_name=u.name,
                    user_email=u.email,
                    work_date=r.work_date,
                    start_time=r.start_time,
                    end_time=r.end_time,
                    duration=r.duration,
                    status=r.status,
                )
            )
        return sorted(rows, key=lambda row: row.user_name)


class FakeIdentityProvider:
    def __init__(self):
        self.profiles = {}

    def verify(self, credential: str):
        profile = self.profiles.get(credential)
        if not profile:
            raise UnauthorizedError("Invalid Google credential")
        return profile


@pytest.fixture
def fixed_now() -> datetime:
    # Monday
    return datetime(2024, 6, 3, 8, 30, 0)


@pytest.fixture
def users_repo() -> InMemoryUsers:
    return InMemoryUsers()


@pytest.fixture
def worklogs_repo(users_repo) -> InMemoryWorkLogs:
    return InMemoryWorkLogs(users_repo)


@pytest.fixture
def alice(users_repo) -> User:
    return users_repo.add("alice@example.com", "Alice")


@pytest.fixture
def admin(users_repo) -> User:
    return users_repo.add("boss@example.com", "Boss", role=Role.ADMIN)


@pytest.fixture
def identity_provider() -> FakeIdentityProvider:
    return FakeIdentityProvider()


@pytest.fixture
def container(users_repo, worklogs_repo, identity_provider):
    return build_services(
        users_repo=users_repo,
        worklogs_repo=worklogs_repo,
        identity_provider=identity_provider,
    )


@pytest.fixture
def app(container):
    return create_app(container, settings_module="worklog_tracker.config.testing")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(email: str) -> None:
        with client.session_transaction() as sess:
            sess["email"] = email

    return _login
