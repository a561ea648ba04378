"""Enum definitions for MetalLB migration."""

from enum import Enum


class OutputFormat(Enum):
    """Rendering formats for resource documents."""

    YAML = "yaml"
    JSON = "json"

    @property
    def extension(self) -> str:
        """File extension used when writing one file per kind."""
        return self.value


class MigrationMode(Enum):
    """How the migration is applied."""

    OFFLINE = "offline"
    ONLINE = "online"


class MigrationStage(Enum):
    """Stages reported in migration errors and logs."""

    RETRIEVAL = "retrieval"
    BACKUP = "backup"
    PREFLIGHT = "pre-flight"
    CONVERSION = "conversion"
    PRINT = "print"
    DELETION = "deletion"
    CREATION = "creation"
