from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import Callable, Optional

from .admissions.locks import SessionLockRegistry
from .admissions.mysql_admission_repository import MySQLAdmissionLedger
from .admissions.repository import AdmissionLedger
from .admissions.service import AdmissionService
from .catalog.mysql_session_repository import MySQLSessionRepository
from .catalog.mysql_track_repository import MySQLTrackRepository
from .catalog.repository import SessionRepository, TrackRepository
from .catalog.service import CatalogService
from .database.connection import DBConfig, DatabaseConnection
from .database.mysql_base import ping
from .notifications.dispatcher import NotificationDispatcher
from .notifications.gateway import NotificationGateway, SMTPNotificationGateway, mail_config_from_dict
from .participants.credentials import CredentialService
from .participants.mysql_participant_repository import MySQLParticipantRepository
from .participants.repository import ParticipantRepository
from .participants.service import IdentityService
from .proceedings.mysql_proceedings_repository import MySQLProceedingsRepository
from .proceedings.repository import ProceedingsRepository
from .proceedings.service import ProceedingsService
from .proceedings.storage import LocalProceedingsStorage
from .registrations.mysql_registration_repository import MySQLRegistrationRepository
from .registrations.repository import RegistrationRepository
from .registrations.service import RegistrationService


@dataclass(frozen=True)
class Container:
    ping: Callable[[], int]

    participants_repo: ParticipantRepository
    tracks_repo: TrackRepository
    sessions_repo: SessionRepository
    admission_ledger: AdmissionLedger
    registrations_repo: RegistrationRepository
    proceedings_repo: ProceedingsRepository

    notifier: NotificationDispatcher

    identity_service: IdentityService
    catalog_service: CatalogService
    admission_service: AdmissionService
    registration_service: RegistrationService
    proceedings_service: ProceedingsService


def assemble_container(
    *,
    ping: Callable[[], int],
    participants_repo: ParticipantRepository,
    tracks_repo: TrackRepository,
    sessions_repo: SessionRepository,
    admission_ledger: AdmissionLedger,
    registrations_repo: RegistrationRepository,
    proceedings_repo: ProceedingsRepository,
    notifier: NotificationDispatcher,
    credentials: CredentialService,
    storage: LocalProceedingsStorage,
) -> Container:
    """Wire services over the given repositories (MySQL in production, fakes in tests)."""

    identity_service = IdentityService(participants_repo, credentials, notifier)
    catalog_service = CatalogService(tracks_repo, sessions_repo)
    admission_service = AdmissionService(
        admission_ledger,
        participants_repo,
        sessions_repo,
        locks=SessionLockRegistry(),
    )
    registration_service = RegistrationService(registrations_repo, participants_repo, sessions_repo)
    proceedings_service = ProceedingsService(proceedings_repo, storage)

    return Container(
        ping=ping,
        participants_repo=participants_repo,
        tracks_repo=tracks_repo,
        sessions_repo=sessions_repo,
        admission_ledger=admission_ledger,
        registrations_repo=registrations_repo,
        proceedings_repo=proceedings_repo,
        notifier=notifier,
        identity_service=identity_service,
        catalog_service=catalog_service,
        admission_service=admission_service,
        registration_service=registration_service,
        proceedings_service=proceedings_service,
    )


def build_container(
    *,
    db_config: dict,
    secret_key: str,
    mail_config: Optional[dict] = None,
    upload_folder: str | Path = "uploads",
    gateway: Optional[NotificationGateway] = None,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    gateway = gateway or SMTPNotificationGateway(mail_config_from_dict(mail_config or {}))

    return assemble_container(
        ping=partial(ping, conn),
        participants_repo=MySQLParticipantRepository(conn),
        tracks_repo=MySQLTrackRepository(conn),
        sessions_repo=MySQLSessionRepository(conn),
        admission_ledger=MySQLAdmissionLedger(conn),
        registrations_repo=MySQLRegistrationRepository(conn),
        proceedings_repo=MySQLProceedingsRepository(conn),
        notifier=NotificationDispatcher(gateway),
        credentials=CredentialService(secret_key),
        storage=LocalProceedingsStorage(upload_folder),
    )
