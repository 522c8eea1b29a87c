from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from psycopg import sql
from psycopg.rows import dict_row

from services.resources.errors import StoreError


LOCATION_TABLE = "locations"
LOCATION_COLUMNS = ("search_query", "formatted_query", "latitude", "longitude", "short_name")


async def fetch_rows(conn, table: str, column: str, value: Any) -> List[dict]:
    query = sql.SQL("select * from {table} where {column} = %s order by id").format(
        table=sql.Identifier(table),
        column=sql.Identifier(column),
    )

    async with conn.cursor(row_factory=dict_row) as cur:
        await cur.execute(query, (value,))
        rows = await cur.fetchall()

    return [dict(row) for row in rows or []]


async def _location_id(conn, search_query: str) -> Optional[int]:
    async with conn.cursor(row_factory=dict_row) as cur:
        await cur.execute(
            "select id from locations where search_query = %s",
            (search_query,),
        )
        row = await cur.fetchone()
    return row.get("id") if row else None


async def insert_location(conn, record: Dict[str, Any]) -> int:
    """
    Insert a location row once per search text and return its id.

    A conflicting insert is a no-op; the id of the row that won is read back.
    """
    query = sql.SQL(
        """
        insert into {table} ({columns})
        values ({values})
        on conflict (search_query) do nothing
        returning id
        """
    ).format(
        table=sql.Identifier(LOCATION_TABLE),
        columns=sql.SQL(", ").join(sql.Identifier(c) for c in LOCATION_COLUMNS),
        values=sql.SQL(", ").join(sql.Placeholder() * len(LOCATION_COLUMNS)),
    )

    async with conn.cursor(row_factory=dict_row) as cur:
        await cur.execute(query, tuple(record.get(c) for c in LOCATION_COLUMNS))
        row = await cur.fetchone()

    if row:
        return row["id"]

    existing = await _location_id(conn, record["search_query"])
    if existing is None:
        raise StoreError("location insert conflicted but no row was found", kind="location")
    return existing


async def insert_records(conn, table: str, location_id: int, records: Iterable[Dict[str, Any]]) -> int:
    """Append one row per record; each insert commits on its own."""
    written = 0
    async with conn.cursor() as cur:
        for record in records:
            columns = list(record.keys()) + ["location_id"]
            query = sql.SQL("insert into {table} ({columns}) values ({values})").format(
                table=sql.Identifier(table),
                columns=sql.SQL(", ").join(sql.Identifier(c) for c in columns),
                values=sql.SQL(", ").join(sql.Placeholder() * len(columns)),
            )
            await cur.execute(query, tuple(record.values()) + (location_id,))
            written += 1
    return written
