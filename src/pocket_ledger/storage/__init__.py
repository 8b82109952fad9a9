from .kv_store import KeyValueStore
from .persistence import TransactionPersistence
from .tx_store import TransactionStore

__all__ = [
    "KeyValueStore",
    "TransactionPersistence",
    "TransactionStore",
]
