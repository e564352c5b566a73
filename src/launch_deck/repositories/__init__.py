"""Repository and lookup helpers."""

from .lookups import Lookup, eq
from .repository import Repository

__all__ = ["Lookup", "Repository", "eq"]
