"""Client interface for reading and writing objects in the cluster."""

from abc import ABC, abstractmethod

from playground.manifest import ConfigMap


class ObjectClient(ABC):
    """Abstract base class for a client of namespaced ConfigMap objects.

    Failures are raised as `ObjectClientError` with a structured `ErrorKind`
    so that callers never need to inspect error messages.
    """

    @abstractmethod
    async def get(self, namespace: str, name: str) -> ConfigMap | None:
        """Fetch an object, returning None if it does not exist."""

    @abstractmethod
    async def create(self, config_map: ConfigMap) -> ConfigMap:
        """Create a new object and return it as stored by the server.

        Raises:
            ObjectClientError: With ErrorKind.ALREADY_EXISTS if the name is taken.
        """

    @abstractmethod
    async def update(self, config_map: ConfigMap) -> ConfigMap:
        """Replace an existing object and return it as stored by the server.

        When the object carries a resource version the update only succeeds if
        it is still the current version of the object.

        Raises:
            ObjectClientError: With ErrorKind.CONFLICT if the version is stale, or
                ErrorKind.NOT_FOUND if the object no longer exists.
        """
