"""
Record storage adapters.

The console only needs two capabilities from storage: create a record
and list a user's records (optionally for one calendar date). Storage
failures surface as StoreError and are left to the transport layer.
"""

import logging
import os
from collections import defaultdict
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple

import httpx

from .models import WireModel
from .records import RECORD_MODELS, RecordKind

logger = logging.getLogger("travel-console.store")


class StoreError(Exception):
    """Raised when a record could not be read or written."""


def _get_config() -> Dict[str, Any]:
    return {
        "store_url": os.getenv("TRAVEL_CONSOLE_STORE_URL", ""),
        "timeout": float(os.getenv("TRAVEL_CONSOLE_STORE_TIMEOUT", "15")),
    }


def _build_record(kind: RecordKind, user_id: str, payload: WireModel) -> WireModel:
    fields = payload.model_dump(by_alias=True, exclude_none=True)
    fields["userId"] = user_id
    return RECORD_MODELS[kind].model_validate(fields)


def _record_date(record: WireModel) -> Optional[date]:
    for attr in ("spent_at", "eaten_at", "logged_at", "met_on", "tagged_at", "created_at"):
        value = getattr(record, attr, None)
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
    return None


class RecordStore:
    """Interface every storage backend implements."""

    async def create(self, kind: RecordKind, user_id: str, payload: WireModel) -> WireModel:
        raise NotImplementedError

    async def list(
        self, kind: RecordKind, user_id: str, on_date: Optional[str] = None
    ) -> List[WireModel]:
        raise NotImplementedError


class InMemoryRecordStore(RecordStore):
    """Process-local store, newest records first."""

    def __init__(self) -> None:
        self._records: Dict[Tuple[str, RecordKind], List[WireModel]] = defaultdict(list)

    async def create(self, kind: RecordKind, user_id: str, payload: WireModel) -> WireModel:
        try:
            record = _build_record(kind, user_id, payload)
        except ValueError as e:
            raise StoreError(f"Invalid {kind.value} record: {e}") from e
        self._records[(user_id, kind)].insert(0, record)
        logger.debug(f"Stored {kind.value} {record.id} for {user_id}")
        return record

    async def list(
        self, kind: RecordKind, user_id: str, on_date: Optional[str] = None
    ) -> List[WireModel]:
        records = list(self._records.get((user_id, kind), []))
        if on_date is None:
            return records
        try:
            wanted = date.fromisoformat(on_date)
        except ValueError:
            logger.debug(f"Ignoring unparseable date filter {on_date!r}")
            return []
        return [r for r in records if _record_date(r) == wanted]


# Companion REST API paths per record kind
_PATHS = {
    RecordKind.PERSON: "/api/people",
    RecordKind.EXPENSE: "/api/expenses",
    RecordKind.JOURNAL: "/api/journal",
    RecordKind.WATER: "/api/water",
    RecordKind.MEAL: "/api/meals",
    RecordKind.PIN: "/api/pins",
}

# The companion API exposes no list endpoint for these
_WRITE_ONLY = frozenset({RecordKind.WATER, RecordKind.MEAL})


class HttpRecordStore(RecordStore):
    """Store backed by the companion app's REST API."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url, timeout=self.timeout, transport=self._transport
        )

    async def _request(self, method: str, path: str, user_id: str, **kwargs) -> Any:
        async with self._client() as client:
            try:
                resp = await client.request(
                    method, path, headers={"X-User-Id": user_id}, **kwargs
                )
            except httpx.HTTPError as exc:
                raise StoreError(f"Cannot reach record store at {self.base_url}: {exc}") from exc

        if resp.status_code >= 400:
            raise StoreError(f"{method} {path} returned HTTP {resp.status_code}: {resp.text[:200]}")

        try:
            return resp.json()
        except ValueError as exc:
            raise StoreError(f"{method} {path} returned non-JSON response") from exc

    async def create(self, kind: RecordKind, user_id: str, payload: WireModel) -> WireModel:
        body = payload.model_dump(mode="json", by_alias=True, exclude_none=True)
        data = await self._request("POST", _PATHS[kind], user_id, json=body)
        if not isinstance(data, dict):
            raise StoreError(f"Expected a {kind.value} record, got {type(data).__name__}")
        data.setdefault("userId", user_id)
        try:
            return RECORD_MODELS[kind].model_validate(data)
        except ValueError as exc:
            raise StoreError(f"Unexpected {kind.value} record from store: {exc}") from exc

    async def list(
        self, kind: RecordKind, user_id: str, on_date: Optional[str] = None
    ) -> List[WireModel]:
        if kind in _WRITE_ONLY:
            raise StoreError(f"Listing {kind.value} records is not supported by the record store")

        params = {"date": on_date} if on_date and kind == RecordKind.EXPENSE else None
        data = await self._request("GET", _PATHS[kind], user_id, params=params)
        if not isinstance(data, list):
            raise StoreError(f"Expected a list of {kind.value} records, got {type(data).__name__}")

        records = []
        for item in data:
            if isinstance(item, dict):
                item.setdefault("userId", user_id)
            try:
                records.append(RECORD_MODELS[kind].model_validate(item))
            except ValueError as exc:
                raise StoreError(f"Unexpected {kind.value} record from store: {exc}") from exc

        if on_date and kind != RecordKind.EXPENSE:
            records = [r for r in records if str(_record_date(r)) == on_date]
        return records


def create_store() -> RecordStore:
    """Build the configured store: HTTP when TRAVEL_CONSOLE_STORE_URL is set, else in-memory."""
    cfg = _get_config()
    if cfg["store_url"]:
        logger.info(f"Using HTTP record store at {cfg['store_url']}")
        return HttpRecordStore(cfg["store_url"], timeout=cfg["timeout"])
    logger.info("Using in-memory record store")
    return InMemoryRecordStore()
