"""Object client that talks to the cluster by running kubectl."""

import json
import re
import shutil
from pathlib import Path
from typing import Any

from playground import command
from playground.config import KubeConfig
from playground.exceptions import (
    ErrorKind,
    InitializationError,
    InputException,
    KubectlException,
    ObjectClientError,
)
from playground.log import LogConfig
from playground.manifest import ConfigMap

from .client import ObjectClient

# kubectl prints the API status reason for failed requests, e.g.
# "Error from server (NotFound): configmaps "x" not found"
_STATUS_REASON = re.compile(r"^Error from server \((?P<reason>[A-Za-z]+)\)", re.M)

_REASON_KINDS = {
    "NotFound": ErrorKind.NOT_FOUND,
    "AlreadyExists": ErrorKind.ALREADY_EXISTS,
    "Conflict": ErrorKind.CONFLICT,
    "ServerTimeout": ErrorKind.TRANSIENT,
    "Timeout": ErrorKind.TRANSIENT,
    "TooManyRequests": ErrorKind.TRANSIENT,
    "ServiceUnavailable": ErrorKind.TRANSIENT,
    "InternalError": ErrorKind.TRANSIENT,
    "Unauthorized": ErrorKind.PERMANENT,
    "Forbidden": ErrorKind.PERMANENT,
    "BadRequest": ErrorKind.PERMANENT,
    "Invalid": ErrorKind.PERMANENT,
    "MethodNotAllowed": ErrorKind.PERMANENT,
}


def classify(err: KubectlException) -> ErrorKind:
    """Return the kind of failure reported by a kubectl invocation."""
    if (match := _STATUS_REASON.search(err.stderr)) is None:
        return ErrorKind.OTHER
    return _REASON_KINDS.get(match.group("reason"), ErrorKind.OTHER)


class KubectlClient(ObjectClient):
    """ObjectClient implementation backed by the kubectl command line tool."""

    def __init__(
        self, config: KubeConfig, log_config: LogConfig | None = None
    ) -> None:
        """Initialize KubectlClient."""
        self._config = config
        self._logger = (log_config or LogConfig()).logger(__name__)

    @classmethod
    def from_kubeconfig(
        cls, config: KubeConfig, log_config: LogConfig | None = None
    ) -> "KubectlClient":
        """Create a client after checking that the cluster is reachable by kubectl.

        Raises:
            InitializationError: If kubectl or the kubeconfig file is missing.
        """
        if shutil.which(config.kubectl) is None:
            raise InitializationError(
                f"Failed to create kubernetes client: '{config.kubectl}' not found"
            )
        if config.kubeconfig and not Path(config.kubeconfig).exists():
            raise InitializationError(
                "Failed to create kubernetes client: kubeconfig "
                f"'{config.kubeconfig}' does not exist"
            )
        return cls(config, log_config)

    def _base_args(self) -> list[str]:
        args = [self._config.kubectl]
        if self._config.kubeconfig:
            args.append(f"--kubeconfig={self._config.kubeconfig}")
        if self._config.context:
            args.append(f"--context={self._config.context}")
        if self._config.request_timeout:
            args.append(f"--request-timeout={self._config.request_timeout}")
        return args

    async def _run(self, verb: str, args: list[str], stdin: Any = None) -> str:
        cmd = command.Command(self._base_args() + args, exc=KubectlException)
        data = json.dumps(stdin).encode("utf-8") if stdin is not None else None
        try:
            return await command.run(cmd, stdin=data)
        except KubectlException as err:
            kind = classify(err)
            self._logger.debug("kubectl %s failed (%s): %s", verb, kind, err.stderr)
            raise ObjectClientError(kind, str(err)) from err

    async def get(self, namespace: str, name: str) -> ConfigMap | None:
        """Fetch a ConfigMap, returning None if it does not exist."""
        out = await self._run(
            "get",
            [
                "get",
                "configmap",
                name,
                f"--namespace={namespace}",
                "--ignore-not-found",
                "--output=json",
            ],
        )
        if not out.strip():
            return None
        return _parse(out)

    async def create(self, config_map: ConfigMap) -> ConfigMap:
        """Create a ConfigMap from its document on stdin."""
        out = await self._run(
            "create",
            ["create", "--filename=-", "--output=json"],
            stdin=config_map.to_doc(),
        )
        return _parse(out)

    async def update(self, config_map: ConfigMap) -> ConfigMap:
        """Replace a ConfigMap; the server checks the resource version if present."""
        out = await self._run(
            "replace",
            ["replace", "--filename=-", "--output=json"],
            stdin=config_map.to_doc(),
        )
        return _parse(out)


def _parse(out: str) -> ConfigMap:
    try:
        doc = json.loads(out)
    except json.JSONDecodeError as err:
        raise ObjectClientError(
            ErrorKind.OTHER, f"Unable to parse kubectl output: {err}"
        ) from err
    try:
        return ConfigMap.parse_doc(doc)
    except InputException as err:
        raise ObjectClientError(
            ErrorKind.OTHER, f"Unexpected kubectl output: {err}"
        ) from err
