"""
The client module provides access to the objects playground keeps in a cluster.

- Objects are addressed by namespace and name.
- Failures carry a structured ErrorKind instead of relying on message text.
- A kubectl backed implementation talks to a real cluster and an in-memory
  implementation backs tests and dry runs.
"""

from .client import ObjectClient
from .in_memory import InMemoryClient
from .kubectl import KubectlClient

__all__ = [
    "ObjectClient",
    "InMemoryClient",
    "KubectlClient",
]
