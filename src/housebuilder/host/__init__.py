"""Host boundary: the BuildHost contract and an in-memory implementation."""

from .interface import BuildHost, ParameterKey, transaction
from .memory import InMemoryHost, default_host

__all__ = ["BuildHost", "ParameterKey", "transaction", "InMemoryHost", "default_host"]
