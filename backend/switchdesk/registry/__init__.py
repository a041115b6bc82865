"""In-memory registry of devices, scenes, sources, streams and recordings."""

from .registry import Registry
from .repository import InMemoryRepository, generate_id, utcnow

__all__ = [
    "InMemoryRepository",
    "Registry",
    "generate_id",
    "utcnow",
]
