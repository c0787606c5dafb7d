"""
Export and import of the persisted state as one JSON object.

The object maps state keys to their values. Dumps taken from the browser
tool use ``bhagya-`` prefixed keys and hold every value as a JSON string;
both forms are accepted on import. Every entry is validated before
anything is written, so a bad file leaves the database untouched.
"""

import json
from dataclasses import dataclass, field
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ledgerbook.config import get_logger
from ledgerbook.core.exceptions import ValidationError
from ledgerbook.infrastructure.storage.sqlite.document_store import DOCUMENT_LIST
from ledgerbook.infrastructure.storage.sqlite.inventory_store import PRODUCT_LIST
from ledgerbook.infrastructure.storage.sqlite.ledger_store import COUNTER
from ledgerbook.infrastructure.storage.sqlite.state_store import (
    DOCUMENTS_KEY,
    ESTIMATE_COUNTER_KEY,
    INVOICE_COUNTER_KEY,
    PRODUCTS_KEY,
    SQLiteStateStore,
    dump_records,
)

logger = get_logger(__name__)

STATE_ADAPTERS: dict[str, TypeAdapter] = {
    PRODUCTS_KEY: PRODUCT_LIST,
    DOCUMENTS_KEY: DOCUMENT_LIST,
    INVOICE_COUNTER_KEY: COUNTER,
    ESTIMATE_COUNTER_KEY: COUNTER,
}

STATE_KEYS = tuple(STATE_ADAPTERS)

# Local storage key names used by the browser tool
KEY_ALIASES = {f"bhagya-{key}": key for key in STATE_KEYS}


@dataclass
class ImportResult:
    """Keys written by an import and keys it skipped."""

    imported: list[str] = field(default_factory=list)
    ignored: list[str] = field(default_factory=list)


def _normalize(key: str, value: Any) -> Any:
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError as e:
            raise ValidationError(key, f"not valid JSON: {e.msg}", value) from e

    try:
        parsed = STATE_ADAPTERS[key].validate_python(value)
    except PydanticValidationError as e:
        first = e.errors()[0]
        where = ".".join(str(part) for part in first["loc"]) or "value"
        raise ValidationError(key, f"{where}: {first['msg']}", value) from e

    return dump_records(parsed) if isinstance(parsed, list) else parsed


def prepare_import(data: Any) -> tuple[dict[str, Any], list[str]]:
    """
    Validate an export object and map it onto state keys.

    Returns:
        The entries to store and the keys that were not recognized.

    Raises:
        ValidationError: The object or one of its values is malformed.
    """
    if not isinstance(data, dict):
        raise ValidationError("state", "export file must contain a JSON object")

    entries: dict[str, Any] = {}
    ignored: list[str] = []
    for raw_key, value in data.items():
        key = KEY_ALIASES.get(raw_key, raw_key)
        if key not in STATE_ADAPTERS:
            ignored.append(raw_key)
            continue
        entries[key] = _normalize(key, value)

    return entries, ignored


async def export_state(store: SQLiteStateStore | None = None) -> dict[str, Any]:
    """Read every present state key as decoded JSON."""
    store = store or SQLiteStateStore()
    state = {}
    for key in STATE_KEYS:
        value = await store.load_raw(key)
        if value is not None:
            state[key] = value
    logger.info("state_exported", keys=sorted(state))
    return state


async def import_state(data: Any, store: SQLiteStateStore | None = None) -> ImportResult:
    """Validate an export object and write its keys in one transaction."""
    entries, ignored = prepare_import(data)
    for key in ignored:
        logger.warning("state_import_key_ignored", key=key)

    if entries:
        await (store or SQLiteStateStore()).save(entries)

    logger.info("state_imported", keys=sorted(entries), ignored=len(ignored))
    return ImportResult(imported=sorted(entries), ignored=ignored)
