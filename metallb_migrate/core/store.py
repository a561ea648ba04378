"""Resource stores keyed by kind, namespace and name.

``KubectlStore`` talks to a live cluster through the kubectl CLI.
``InMemoryStore`` keeps manifests in process, in insertion order.
"""

import copy
import json
import shutil
import subprocess
from typing import Any, Protocol

import structlog

from ..constants import KIND_PLURALS, METALLB_API_GROUP, METALLB_GROUP_VERSION
from .exceptions import ResourceNotFoundError, StoreError
from .settings import MigrateSettings

logger = structlog.get_logger()

Manifest = dict[str, Any]


class ResourceStore(Protocol):
    """List, create and delete resources addressed by kind/namespace/name."""

    def list(self, kind: str, limit: int = 0) -> list[Manifest]:
        """Return manifests of ``kind``; ``limit`` > 0 asks for at most that many."""
        ...

    def create(self, manifest: Manifest) -> None: ...

    def delete(self, kind: str, namespace: str, name: str) -> None:
        """Delete one resource, raising ResourceNotFoundError if it is absent."""
        ...


def _key(manifest: Manifest) -> tuple[str, str, str]:
    metadata = manifest.get("metadata") or {}
    return (manifest.get("kind", ""), metadata.get("namespace", ""), metadata.get("name", ""))


class InMemoryStore:
    """Ordered in-process store, returning copies so callers never share state."""

    def __init__(self, manifests: list[Manifest] | None = None):
        self._objects: dict[tuple[str, str, str], Manifest] = {}
        for manifest in manifests or []:
            self.create(manifest)

    def list(self, kind: str, limit: int = 0) -> list[Manifest]:
        items = [
            copy.deepcopy(manifest)
            for (item_kind, _, _), manifest in self._objects.items()
            if item_kind == kind
        ]
        return items[:limit] if limit > 0 else items

    def get(self, kind: str, namespace: str, name: str) -> Manifest:
        try:
            return copy.deepcopy(self._objects[(kind, namespace, name)])
        except KeyError:
            raise ResourceNotFoundError(f"{kind} '{namespace}/{name}' not found") from None

    def create(self, manifest: Manifest) -> None:
        key = _key(manifest)
        if key in self._objects:
            kind, namespace, name = key
            raise StoreError(f"{kind} '{namespace}/{name}' already exists")
        self._objects[key] = copy.deepcopy(manifest)

    def delete(self, kind: str, namespace: str, name: str) -> None:
        try:
            del self._objects[(kind, namespace, name)]
        except KeyError:
            raise ResourceNotFoundError(f"{kind} '{namespace}/{name}' not found") from None


class KubectlStore:
    """Store backed by the MetalLB custom resources of a live cluster."""

    def __init__(self, settings: MigrateSettings):
        self.settings = settings
        self.logger = logger.bind(component="kubectl_store")
        self._kubectl_bin = shutil.which(settings.kubectl_bin) or settings.kubectl_bin

    def _base_command(self) -> list[str]:
        cmd = [self._kubectl_bin]
        if self.settings.kubeconfig:
            cmd.extend(["--kubeconfig", self.settings.kubeconfig])
        if self.settings.kube_context:
            cmd.extend(["--context", self.settings.kube_context])
        return cmd

    def _run_kubectl(
        self, args: list[str], stdin: str | None = None
    ) -> subprocess.CompletedProcess:
        """Execute kubectl, translating launch failures and timeouts to StoreError."""
        cmd = self._base_command() + args
        self.logger.debug("Executing kubectl", command=" ".join(cmd))
        try:
            return subprocess.run(  # nosec B603
                cmd,
                input=stdin,
                check=False,
                capture_output=True,
                text=True,
                timeout=self.settings.kubectl_timeout,
            )
        except subprocess.TimeoutExpired:
            raise StoreError(
                f"kubectl {args[0]} timed out after {self.settings.kubectl_timeout} seconds"
            ) from None
        except OSError as e:
            raise StoreError(f"cannot execute {self._kubectl_bin}: {e}") from e

    @staticmethod
    def _plural(kind: str) -> str:
        try:
            return KIND_PLURALS[kind]
        except KeyError:
            raise StoreError(f"unsupported kind {kind!r}") from None

    def list(self, kind: str, limit: int = 0) -> list[Manifest]:
        path = f"/apis/{METALLB_GROUP_VERSION}/{self._plural(kind)}"
        if limit > 0:
            path += f"?limit={limit}"
        result = self._run_kubectl(["get", "--raw", path])
        if result.returncode != 0:
            raise StoreError(f"failed to list {kind} in cluster: {result.stderr.strip()}")
        try:
            payload = json.loads(result.stdout)
        except json.JSONDecodeError as e:
            raise StoreError(f"invalid {kind} list returned by cluster: {e}") from e
        items = payload.get("items") or []
        for item in items:
            # Items of a raw list may omit their own type meta
            item.setdefault("apiVersion", METALLB_GROUP_VERSION)
            item.setdefault("kind", kind)
        return items

    def create(self, manifest: Manifest) -> None:
        kind, namespace, name = _key(manifest)
        result = self._run_kubectl(["create", "-f", "-"], stdin=json.dumps(manifest))
        if result.returncode != 0:
            raise StoreError(
                f"failed to create {kind} '{namespace}/{name}': {result.stderr.strip()}"
            )
        self.logger.debug("Created resource", kind=kind, namespace=namespace, name=name)

    def delete(self, kind: str, namespace: str, name: str) -> None:
        args = ["delete", f"{self._plural(kind)}.{METALLB_API_GROUP}", name]
        if namespace:
            args.extend(["-n", namespace])
        result = self._run_kubectl(args)
        if result.returncode != 0:
            error = result.stderr.strip()
            if "NotFound" in error or "not found" in error:
                raise ResourceNotFoundError(f"{kind} '{namespace}/{name}' not found")
            raise StoreError(f"failed to delete {kind} '{namespace}/{name}': {error}")
        self.logger.debug("Deleted resource", kind=kind, namespace=namespace, name=name)
