"""Library for tracking which installer installed each plugin in a cluster.

The associations are stored in a single ConfigMap in the cluster that maps a
plugin name to an installer type. The ConfigMap is created the first time an
installer is recorded, and until then every plugin is treated as untracked.

The ConfigMap is shared by every process with access to the cluster, so updates
are made with optimistic concurrency: an update is conditioned on the resource
version that was read, and the read-modify-write sequence is retried when
another writer got there first.

Example usage:
```python
from playground.client import KubectlClient
from playground.config import KubeConfig
from playground.tracker import InstallerTracker, InstallerType

client = KubectlClient.from_kubeconfig(KubeConfig(kubeconfig="/tmp/kubeconfig"))
tracker = InstallerTracker(client)
await tracker.record("cert-manager", InstallerType.HELM)
installer = await tracker.get_installer("cert-manager")
```
"""

import asyncio
from collections.abc import Awaitable
from enum import StrEnum
from typing import TypeVar

from .client import ObjectClient
from .config import TrackerConfig
from .exceptions import (
    ConflictError,
    DeadlineExceededError,
    ErrorKind,
    InputException,
    ObjectClientError,
    TrackerError,
)
from .log import LogConfig
from .manifest import ConfigMap, TRACKER_NAME, TRACKER_NAMESPACE, new_tracker_config_map

__all__ = [
    "InstallerTracker",
    "InstallerType",
]

T = TypeVar("T")

RECORD = "record plugin installer"
GET = "get plugin installer"
LIST = "list plugins by installer"
REMOVE = "remove plugin installer"


class InstallerType(StrEnum):
    """The mechanism that installed a plugin."""

    HELM = "helm"
    ARGOCD = "argocd"


def _check_plugin_name(operation: str, plugin_name: str) -> None:
    if not plugin_name or not plugin_name.strip():
        raise InputException(f"Unable to {operation}: plugin name must not be empty")


def _check_installer_type(operation: str, installer_type: str) -> InstallerType:
    try:
        return InstallerType(installer_type)
    except ValueError as err:
        choices = ", ".join(str(t) for t in InstallerType)
        raise InputException(
            f"Unable to {operation}: unknown installer type '{installer_type}' "
            f"(expected one of {choices})"
        ) from err


class InstallerTracker:
    """Records the installer type of each plugin in the tracker ConfigMap."""

    def __init__(
        self,
        client: ObjectClient,
        config: TrackerConfig | None = None,
        log_config: LogConfig | None = None,
    ) -> None:
        """Initialize InstallerTracker."""
        self._client = client
        self._config = config or TrackerConfig()
        self._logger = (log_config or LogConfig()).logger(__name__)

    async def record(self, plugin_name: str, installer_type: str) -> None:
        """Record that the plugin was installed by the installer type."""
        _check_plugin_name(RECORD, plugin_name)
        installer = _check_installer_type(RECORD, installer_type)
        await self._with_deadline(
            RECORD,
            plugin_name,
            self._config.write_timeout,
            self._record(plugin_name, installer),
        )

    async def get_installer(self, plugin_name: str) -> str:
        """Return the installer type recorded for the plugin.

        An empty string is returned when the plugin is not tracked.
        """
        data = await self._with_deadline(
            GET, plugin_name, self._config.read_timeout, self._read(GET, plugin_name)
        )
        installer = data.get(plugin_name, "")
        self._logger.debug(
            "Found recorded installer type '%s' for plugin '%s'", installer, plugin_name
        )
        return installer

    async def list_by_installer(self, installer_type: str) -> set[str]:
        """Return the names of all plugins recorded with the installer type."""
        installer = _check_installer_type(LIST, installer_type)
        data = await self._with_deadline(
            LIST, None, self._config.read_timeout, self._read(LIST, None)
        )
        return {plugin for plugin, value in data.items() if value == installer}

    async def list_all(self) -> dict[str, str]:
        """Return every recorded plugin and its installer type."""
        return await self._with_deadline(
            LIST, None, self._config.read_timeout, self._read(LIST, None)
        )

    async def remove(self, plugin_name: str) -> None:
        """Forget the installer type of the plugin, if there is one."""
        _check_plugin_name(REMOVE, plugin_name)
        await self._with_deadline(
            REMOVE, plugin_name, self._config.write_timeout, self._remove(plugin_name)
        )

    async def _with_deadline(
        self,
        operation: str,
        plugin_name: str | None,
        timeout: float,
        coro: Awaitable[T],
    ) -> T:
        try:
            return await asyncio.wait_for(coro, timeout)
        except TimeoutError as err:
            raise DeadlineExceededError(
                operation, plugin_name, f"deadline of {timeout}s exceeded"
            ) from err

    async def _get(self, operation: str, plugin_name: str | None) -> ConfigMap | None:
        try:
            return await self._client.get(TRACKER_NAMESPACE, TRACKER_NAME)
        except ObjectClientError as err:
            raise TrackerError(
                operation, plugin_name, f"failed to get tracker ConfigMap: {err}"
            ) from err

    async def _read(self, operation: str, plugin_name: str | None) -> dict[str, str]:
        if (config_map := await self._get(operation, plugin_name)) is None:
            self._logger.debug("Tracker ConfigMap not found, no installers recorded")
            return {}
        return dict(config_map.data)

    async def _get_or_create(
        self, operation: str, plugin_name: str
    ) -> ConfigMap | None:
        """Fetch the tracker ConfigMap, creating it if it does not exist.

        Returns None if the ConfigMap was created by someone else and is
        already gone again, in which case the caller should start over.
        """
        if (config_map := await self._get(operation, plugin_name)) is not None:
            return config_map
        try:
            created = await self._client.create(new_tracker_config_map())
        except ObjectClientError as err:
            if err.kind != ErrorKind.ALREADY_EXISTS:
                raise TrackerError(
                    operation, plugin_name, f"failed to create tracker ConfigMap: {err}"
                ) from err
            self._logger.debug("Tracker ConfigMap was created concurrently")
            return await self._get(operation, plugin_name)
        self._logger.debug("Created new installer tracker ConfigMap")
        return created

    async def _update(
        self, operation: str, plugin_name: str, config_map: ConfigMap
    ) -> bool:
        """Replace the ConfigMap, returning False if it changed since it was read."""
        try:
            await self._client.update(config_map)
        except ObjectClientError as err:
            if err.kind in (ErrorKind.CONFLICT, ErrorKind.NOT_FOUND):
                self._logger.debug(
                    "Tracker ConfigMap changed while updating plugin '%s': %s",
                    plugin_name,
                    err.kind,
                )
                return False
            raise TrackerError(
                operation, plugin_name, f"failed to update tracker ConfigMap: {err}"
            ) from err
        return True

    async def _record(self, plugin_name: str, installer: InstallerType) -> None:
        for _ in range(self._config.max_attempts):
            if (config_map := await self._get_or_create(RECORD, plugin_name)) is None:
                continue
            if config_map.data.get(plugin_name) == installer:
                self._logger.debug(
                    "Installer type '%s' already recorded for plugin '%s'",
                    installer,
                    plugin_name,
                )
                return
            config_map.data[plugin_name] = str(installer)
            if not await self._update(RECORD, plugin_name, config_map):
                continue
            self._logger.debug(
                "Recorded installer type '%s' for plugin '%s'", installer, plugin_name
            )
            return
        raise ConflictError(
            RECORD,
            plugin_name,
            f"tracker ConfigMap was modified concurrently {self._config.max_attempts} times",
        )

    async def _remove(self, plugin_name: str) -> None:
        for _ in range(self._config.max_attempts):
            if (config_map := await self._get(REMOVE, plugin_name)) is None:
                self._logger.debug(
                    "Tracker ConfigMap not found, nothing to remove for plugin '%s'",
                    plugin_name,
                )
                return
            if plugin_name not in config_map.data:
                self._logger.debug(
                    "No installer recorded for plugin '%s', nothing to remove",
                    plugin_name,
                )
                return
            del config_map.data[plugin_name]
            if not await self._update(REMOVE, plugin_name, config_map):
                continue
            self._logger.debug(
                "Removed installer tracking record for plugin '%s'", plugin_name
            )
            return
        raise ConflictError(
            REMOVE,
            plugin_name,
            f"tracker ConfigMap was modified concurrently {self._config.max_attempts} times",
        )
