"""Local key-value storage for chat sessions.

Responsibilities:
    - String get/set contract shared by every backend
    - In-memory and NiceGUI browser storage via MemoryStore
    - On-disk JSON storage via FileStore
    - Validated JSON decoding with safe defaults
"""

from src.storage.store import (
    FileStore,
    KeyValueStore,
    MemoryStore,
    dump_json,
    encode_json,
    load_json,
)

__all__ = ["FileStore", "KeyValueStore", "MemoryStore", "dump_json", "encode_json", "load_json"]
