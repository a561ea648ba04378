"""Shared resource model pieces: object metadata and manifest conversion."""

from typing import Any, ClassVar

from pydantic import (
    BaseModel,
    ConfigDict,
    SerializerFunctionWrapHandler,
    model_serializer,
)

from ..constants import METALLB_GROUP_VERSION


class ObjectMeta(BaseModel):
    """Identity of a namespaced resource.

    Server-populated metadata (uid, resourceVersion, timestamps) is dropped on
    read so a converted object can be created fresh.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    namespace: str = ""

    def manifest(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name}
        if self.namespace:
            data["namespace"] = self.namespace
        return data


class SpecModel(BaseModel):
    """Base for resource specs using the camelCase field names of the CRDs."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    # Fields left out of every dump when empty or zero, nested specs included
    omit_empty: ClassVar[frozenset[str]] = frozenset()

    @model_serializer(mode="wrap")
    def serialize_spec(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        for name in self.omit_empty:
            field = type(self).model_fields[name]
            for key in (name, field.alias):
                if key in data and not data[key]:
                    del data[key]
        return data

    def manifest(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class MetalLBResource(BaseModel):
    """A typed MetalLB resource with a Kubernetes-style manifest form."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    kind: ClassVar[str]

    metadata: ObjectMeta
    spec: SpecModel

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> str:
        return self.metadata.namespace

    @property
    def qualified_name(self) -> str:
        """``namespace/name`` for log and error messages."""
        return f"{self.namespace}/{self.name}" if self.namespace else self.name

    def to_manifest(self) -> dict[str, Any]:
        """Render as an ``apiVersion``/``kind``/``metadata``/``spec`` mapping."""
        return {
            "apiVersion": METALLB_GROUP_VERSION,
            "kind": self.kind,
            "metadata": self.metadata.manifest(),
            "spec": self.spec.manifest(),
        }

    @classmethod
    def from_manifest(cls, data: dict[str, Any]):
        """Build from a manifest mapping.

        Raises:
            pydantic.ValidationError: If metadata or spec do not validate
        """
        return cls.model_validate(
            {"metadata": data.get("metadata") or {}, "spec": data.get("spec") or {}}
        )
