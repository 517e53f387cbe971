"""Key-value string stores used as the only durability mechanism.

Mirrors browser local storage: string keys, string values, last write wins.
Decoding is done by ``load_json``, which validates the stored value with a
pydantic ``TypeAdapter`` and falls back to a default instead of raising.
"""

import json
import logging
from collections.abc import Callable, MutableMapping
from pathlib import Path
from typing import Any, Protocol, TypeVar

from pydantic import TypeAdapter, ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")

_FILE_ADAPTER: TypeAdapter[dict[str, Any]] = TypeAdapter(dict[str, Any])


class KeyValueStore(Protocol):
    """Minimal local-storage contract."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    """Store backed by a mutable mapping.

    Wraps a plain dict by default. Any mapping works, including NiceGUI's
    per-browser ``app.storage.user``.
    """

    def __init__(self, mapping: MutableMapping[str, Any] | None = None) -> None:
        self._data: MutableMapping[str, Any] = {} if mapping is None else mapping

    def get(self, key: str) -> str | None:
        value = self._data.get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class FileStore:
    """Store persisted as a single JSON object on disk.

    The whole file is read on every ``get`` and rewritten on every ``set``.
    A missing or corrupt file reads as an empty store.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        try:
            raw = self._path.read_bytes()
        except FileNotFoundError:
            return {}
        except OSError as e:
            logger.warning(f"Could not read store file {self._path}: {e}")
            return {}

        try:
            data = _FILE_ADAPTER.validate_json(raw)
        except (ValueError, RecursionError) as e:
            logger.warning(f"Ignoring corrupt store file {self._path}: {type(e).__name__}")
            return {}

        return {k: v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        except (OSError, ValueError) as e:
            logger.error(f"Failed to write store file {self._path}: {e}")


def load_json(
    store: KeyValueStore,
    key: str,
    schema: TypeAdapter[T],
    default: Callable[[], T],
) -> T:
    """Read and validate a JSON value from the store.

    Args:
        store: Store to read from.
        key: Storage key.
        schema: Adapter describing the expected shape.
        default: Factory for the value used when the key is missing or
            holds malformed data.

    Returns:
        The validated value, or ``default()``.
    """
    raw = store.get(key)
    if raw is None:
        return default()

    try:
        return schema.validate_json(raw)
    except ValidationError as e:
        logger.warning(f"Discarding malformed value under '{key}': {e.error_count()} error(s)")
        return default()
    except RecursionError:
        logger.warning(f"Discarding malformed value under '{key}': nested too deeply")
        return default()


def encode_json(schema: TypeAdapter[T], value: T) -> str:
    """Serialize ``value`` with ``schema`` to JSON text.

    Raises:
        PydanticSerializationError: If the value cannot be encoded.
    """
    return schema.dump_json(value).decode("utf-8")


def dump_json(store: KeyValueStore, key: str, schema: TypeAdapter[T], value: T) -> None:
    """Serialize ``value`` with ``schema`` and write it under ``key``."""
    store.set(key, encode_json(schema, value))
