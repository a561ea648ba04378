"""Runtime settings for MetalLB migration.

Provides centralized configuration using Pydantic BaseSettings with
environment variable and ``.env`` support. Command line flags override
these values.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MigrateSettings(BaseSettings):
    """kubectl access and logging configuration."""

    kubectl_bin: str = Field(
        "kubectl", alias="KUBECTL_BIN", description="kubectl executable name or path"
    )

    kubeconfig: str | None = Field(
        None, alias="MIGRATE_KUBECONFIG", description="kubeconfig file passed to kubectl"
    )

    kube_context: str | None = Field(
        None, alias="KUBE_CONTEXT", description="kubeconfig context passed to kubectl"
    )

    kubectl_timeout: int = Field(
        60, alias="KUBECTL_TIMEOUT", gt=0, description="kubectl call timeout in seconds"
    )

    log_level: str = Field("INFO", alias="LOG_LEVEL", description="Log level")

    log_dir: str | None = Field(
        None, alias="LOG_DIR", description="Directory for the JSON log file, none to disable"
    )

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)


def load_settings(**overrides) -> MigrateSettings:
    """Load settings from the environment, applying non-empty overrides."""
    settings = MigrateSettings()
    values = {key: value for key, value in overrides.items() if value is not None}
    if not values:
        return settings
    return settings.model_copy(update=values)
