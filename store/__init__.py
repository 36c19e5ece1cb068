from store.memory_store import DocumentCollection, MemoryStore, new_id

__all__ = ["DocumentCollection", "MemoryStore", "new_id"]
