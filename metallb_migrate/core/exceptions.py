"""Core exceptions for MetalLB migration operations."""


class MetalLBMigrateError(Exception):
    """Base exception for MetalLB migration operations."""


class ConfigurationError(MetalLBMigrateError):
    """Configuration validation or loading failed."""


class UnsupportedProtocolError(MetalLBMigrateError):
    """An AddressPool declares a protocol that cannot be converted."""

    def __init__(self, namespace: str, name: str, protocol: str):
        self.namespace = namespace
        self.name = name
        self.protocol = protocol
        super().__init__(
            f"unsupported protocol {protocol!r} for AddressPool '{namespace}/{name}'"
        )


class UnrecognizedSchemaError(MetalLBMigrateError):
    """A document does not match a supported legacy group, version or kind."""

    def __init__(self, message: str, source: str | None = None):
        self.source = source
        if source:
            message = f"{source}: {message}"
        super().__init__(message)


class StoreError(MetalLBMigrateError):
    """Listing, creating or deleting a resource in the store failed."""


class ResourceNotFoundError(StoreError):
    """The addressed resource does not exist in the store."""


class ResourceIOError(MetalLBMigrateError):
    """Reading or writing resource files failed."""


class MigrationError(MetalLBMigrateError):
    """A migration stage failed."""

    def __init__(self, stage: str, message: str):
        self.stage = stage
        super().__init__(f"error during {stage} step: {message}")


class BackupError(MigrationError):
    """Writing the pre-migration backup failed."""

    def __init__(self, message: str):
        super().__init__("backup", message)
