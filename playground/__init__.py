"""
playground manages plugins in local development clusters.

The `tracker` module records which installer installed each plugin, backed by
a ConfigMap in the cluster that is reached through a `client`.
"""

__all__ = [
    "client",
    "manifest",
    "tracker",
    "exceptions",
    # Note this is exposed for CLI documentation, not to be used as a library
    "tool",
]
