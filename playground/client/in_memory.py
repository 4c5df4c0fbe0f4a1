"""Module for an in memory object client."""

import asyncio
import logging

from playground.exceptions import ErrorKind, ObjectClientError
from playground.manifest import ConfigMap

from .client import ObjectClient

_LOGGER = logging.getLogger(__name__)


class InMemoryClient(ObjectClient):
    """In-memory implementation of the ObjectClient interface.

    Objects are keyed by namespace and name and each write assigns a new
    resource version, so conditional updates behave like they do against an
    API server. Every request is recorded in `requests` as a (verb, name) pair.
    """

    def __init__(self) -> None:
        """Initialize the InMemoryClient."""
        self._objects: dict[tuple[str, str], ConfigMap] = {}
        self._version = 0
        self.requests: list[tuple[str, str]] = []

    def _next_version(self) -> str:
        self._version += 1
        return str(self._version)

    async def get(self, namespace: str, name: str) -> ConfigMap | None:
        """Fetch an object, returning None if it does not exist."""
        self.requests.append(("get", name))
        await asyncio.sleep(0)
        if (obj := self._objects.get((namespace, name))) is None:
            _LOGGER.debug("Object %s/%s not found", namespace, name)
            return None
        return ConfigMap.from_dict(obj.to_dict())

    async def create(self, config_map: ConfigMap) -> ConfigMap:
        """Create a new object and return it as stored."""
        self.requests.append(("create", config_map.name))
        await asyncio.sleep(0)
        key = (config_map.namespace, config_map.name)
        if key in self._objects:
            raise ObjectClientError(
                ErrorKind.ALREADY_EXISTS,
                f"configmaps {config_map.name!r} already exists",
            )
        stored = ConfigMap.from_dict(config_map.to_dict())
        stored.resource_version = self._next_version()
        self._objects[key] = stored
        return ConfigMap.from_dict(stored.to_dict())

    async def update(self, config_map: ConfigMap) -> ConfigMap:
        """Replace an existing object and return it as stored."""
        self.requests.append(("update", config_map.name))
        await asyncio.sleep(0)
        key = (config_map.namespace, config_map.name)
        if (current := self._objects.get(key)) is None:
            raise ObjectClientError(
                ErrorKind.NOT_FOUND, f"configmaps {config_map.name!r} not found"
            )
        if (
            config_map.resource_version
            and config_map.resource_version != current.resource_version
        ):
            raise ObjectClientError(
                ErrorKind.CONFLICT,
                f"the object {config_map.namespaced_name} has been modified",
            )
        stored = ConfigMap.from_dict(config_map.to_dict())
        stored.resource_version = self._next_version()
        self._objects[key] = stored
        return ConfigMap.from_dict(stored.to_dict())

    def delete(self, namespace: str, name: str) -> None:
        """Remove an object, as cluster teardown would."""
        self._objects.pop((namespace, name), None)
