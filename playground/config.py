"""Configuration objects for playground."""

from dataclasses import dataclass


@dataclass
class TrackerConfig:
    """Configuration for the InstallerTracker."""

    read_timeout: float = 10.0
    """Deadline in seconds for operations that only read the tracker."""

    write_timeout: float = 30.0
    """Deadline in seconds for operations that update the tracker, including retries."""

    max_attempts: int = 5
    """Number of fetch-mutate-update attempts before giving up on contention."""


@dataclass
class KubeConfig:
    """Configuration for reaching the cluster with kubectl."""

    kubeconfig: str | None = None
    """Path to the kubeconfig file, or the kubectl default when unset."""

    context: str | None = None
    """The kubeconfig context to use, or the current context when unset."""

    kubectl: str = "kubectl"
    """The kubectl binary."""

    request_timeout: str | None = None
    """Passed to kubectl as --request-timeout (e.g. "10s")."""
