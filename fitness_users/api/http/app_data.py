from dataclasses import dataclass

from fitness_users.core.services import DbSessionService


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
