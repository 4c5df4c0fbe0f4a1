"""Representation of the cluster objects managed by playground.

The installer tracker keeps its state in a single ConfigMap. The object is
read and written as a Kubernetes object document and the server assigned
resource version is carried along so that updates can be conditioned on it.
"""

from dataclasses import dataclass, field
from typing import Any

from mashumaro import DataClassDictMixin, field_options
from mashumaro.config import BaseConfig

from .exceptions import InputException

__all__ = [
    "ConfigMap",
    "TRACKER_NAMESPACE",
    "TRACKER_NAME",
    "TRACKER_LABELS",
    "new_tracker_config_map",
]


CONFIG_MAP_KIND = "ConfigMap"
CONFIG_MAP_API_VERSION = "v1"

TRACKER_NAMESPACE = "kube-system"
TRACKER_NAME = "playground-plugin-installer-tracker"
TRACKER_LABELS = {
    "app.kubernetes.io/name": "playground",
    "app.kubernetes.io/component": "installer-tracker",
    "app.kubernetes.io/managed-by": "playground",
}


@dataclass
class ConfigMap(DataClassDictMixin):
    """A kubernetes ConfigMap holding string key/value data."""

    name: str
    """The name of the ConfigMap."""

    namespace: str
    """The namespace of the ConfigMap."""

    labels: dict[str, str] = field(default_factory=dict)
    """Labels on the object."""

    data: dict[str, str] = field(default_factory=dict)
    """The string data held by the ConfigMap."""

    resource_version: str | None = field(
        default=None, metadata=field_options(alias="resourceVersion")
    )
    """Version token assigned by the server, unset until persisted."""

    @property
    def namespaced_name(self) -> str:
        """Return the namespace and name joined as `namespace/name`."""
        return f"{self.namespace}/{self.name}"

    @classmethod
    def parse_doc(cls, doc: dict[str, Any]) -> "ConfigMap":
        """Parse a ConfigMap from a raw kubernetes object."""
        if doc.get("kind") != CONFIG_MAP_KIND:
            raise InputException(f"Invalid object expected '{CONFIG_MAP_KIND}': {doc}")
        if not (metadata := doc.get("metadata")):
            raise InputException(f"Invalid object missing metadata: {doc}")
        if not (name := metadata.get("name")):
            raise InputException(f"Invalid object missing metadata.name: {doc}")
        if not (namespace := metadata.get("namespace")):
            raise InputException(f"Invalid object missing metadata.namespace: {doc}")
        return cls(
            name=name,
            namespace=namespace,
            labels=dict(metadata.get("labels") or {}),
            data=dict(doc.get("data") or {}),
            resource_version=metadata.get("resourceVersion"),
        )

    def to_doc(self) -> dict[str, Any]:
        """Render the ConfigMap as a kubernetes object."""
        metadata: dict[str, Any] = {
            "name": self.name,
            "namespace": self.namespace,
        }
        if self.labels:
            metadata["labels"] = dict(self.labels)
        if self.resource_version:
            metadata["resourceVersion"] = self.resource_version
        return {
            "apiVersion": CONFIG_MAP_API_VERSION,
            "kind": CONFIG_MAP_KIND,
            "metadata": metadata,
            "data": dict(self.data),
        }

    class Config(BaseConfig):
        omit_none = True
        serialize_by_alias = True


def new_tracker_config_map() -> ConfigMap:
    """Return an unsaved, empty installer tracker ConfigMap."""
    return ConfigMap(
        name=TRACKER_NAME,
        namespace=TRACKER_NAMESPACE,
        labels=dict(TRACKER_LABELS),
        data={},
    )
