from __future__ import annotations

from dataclasses import dataclass

from .access.service import AccessControl
from .database.connection import DBConfig, DatabaseConnection
from .reports.service import ReportService
from .users.identity import GoogleIdentityProvider
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService
from .worklogs.mysql_worklog_repository import MySQLWorkLogRepository
from .worklogs.repository import WorkLogRepository
from .worklogs.service import AttendanceService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    worklogs_repo: WorkLogRepository

    identity_provider: GoogleIdentityProvider
    access_control: AccessControl
    auth_service: AuthService
    user_service: UserService
    attendance_service: AttendanceService
    report_service: ReportService


def build_services(
    *,
    users_repo: UserRepository,
    worklogs_repo: WorkLogRepository,
    identity_provider: GoogleIdentityProvider,
) -> Container:
    """Wire services over the given repositories (MySQL in the app, in-memory in tests)."""
    access_control = AccessControl(users_repo)
    return Container(
        users_repo=users_repo,
        worklogs_repo=worklogs_repo,
        identity_provider=identity_provider,
        access_control=access_control,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        attendance_service=AttendanceService(worklogs_repo),
        report_service=ReportService(worklogs_repo, users_repo, access_control),
    )


def build_container(*, db_config: dict, google_client_id: str = "") -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return build_services(
        users_repo=MySQLUserRepository(conn),
        worklogs_repo=MySQLWorkLogRepository(conn),
        identity_provider=GoogleIdentityProvider(google_client_id),
    )
