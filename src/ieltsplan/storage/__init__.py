"""Key-value persistence for the shared StoredState object."""

from ieltsplan.storage.accessor import StateAccessor
from ieltsplan.storage.base import StateBackend
from ieltsplan.storage.kv_rest import KvRestBackend
from ieltsplan.storage.memory import MemoryBackend

__all__ = ["KvRestBackend", "MemoryBackend", "StateAccessor", "StateBackend"]
