"""Lookup-or-fetch orchestration shared by every resource kind.

A request walks CHECKING_STORE -> HIT, or CHECKING_STORE -> MISS -> FETCHING
-> NORMALIZING -> PERSISTING. Stored rows are trusted forever: there is no
TTL and nothing is ever refreshed, updated or deleted. Nothing is retried.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Mapping, Optional, Set, Union

from .errors import DataSourceError, StoreError
from .kinds import ResourceKind

logger = logging.getLogger(__name__)

Record = Dict[str, Any]

# OverflowError/OSError: epoch values outside the platform time_t range
_MALFORMED = (KeyError, TypeError, IndexError, ValueError, AttributeError, OverflowError, OSError)


class ResourceGateway:
    def __init__(self, store, kinds: Mapping[str, ResourceKind]) -> None:
        self._store = store
        self._kinds = dict(kinds)
        self._pending: Set[asyncio.Task] = set()

    @property
    def kinds(self) -> List[str]:
        return list(self._kinds)

    @property
    def pending_writes(self) -> int:
        return len(self._pending)

    def kind(self, name: str) -> ResourceKind:
        try:
            return self._kinds[name]
        except KeyError:
            raise ValueError(f"unknown resource kind: {name}") from None

    async def resolve(
        self,
        kind_name: str,
        key: Any,
        ref: Optional[Mapping[str, Any]] = None,
    ) -> Union[Record, List[Record]]:
        """
        Return stored rows for *key* or fetch, normalize and store them.

        *key* is the search text for ``location`` and a location id for every
        other kind; *ref* carries the caller-supplied coordinates / place name
        the upstream fetch needs and is not validated here.
        """
        kind = self.kind(kind_name)

        rows = await self._store.select(kind.table, kind.key_column, key)
        if rows:
            logger.info("[CACHE] hit kind=%s key=%r rows=%d", kind.name, key, len(rows))
            return rows if kind.many else rows[0]

        logger.info("[CACHE] miss kind=%s key=%r; fetching upstream", kind.name, key)
        raw = await kind.fetch(key, ref)

        if not kind.many:
            record = self._normalize(kind, key, raw)
            record["id"] = await self._store.insert_location(record)
            return record

        records = [self._normalize(kind, key, item) for item in raw]
        if records:
            self._schedule_write(kind, key, records)
        return records

    def _normalize(self, kind: ResourceKind, key: Any, item: Any) -> Record:
        try:
            return kind.normalize(key, item)
        except _MALFORMED as exc:
            raise DataSourceError(
                f"{kind.name} upstream item has unexpected shape: {exc!r}", kind=kind.name
            ) from exc

    def _schedule_write(self, kind: ResourceKind, location_id: Any, records: List[Record]) -> None:
        # The response does not wait on this write.
        task = asyncio.get_running_loop().create_task(
            self._write(kind, location_id, [dict(r) for r in records]),
            name=f"store-{kind.name}-{location_id}",
        )
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _write(self, kind: ResourceKind, location_id: Any, records: List[Record]) -> None:
        try:
            written = await self._store.insert_records(kind.table, location_id, records)
        except StoreError as exc:
            logger.error(
                "[DB] background write failed kind=%s location_id=%r: %s", kind.name, location_id, exc
            )
            return
        logger.info("[DB] stored kind=%s location_id=%r rows=%d", kind.name, location_id, written)

    async def drain(self) -> None:
        """Wait for every in-flight background write (used at shutdown)."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
