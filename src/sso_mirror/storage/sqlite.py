"""SQLite persistence for platform users and their linked identity records."""

from __future__ import annotations

import json
from pathlib import Path

import aiosqlite

_SCHEMA = """
-- Linked external-auth identities (mirrors the cluster Identity objects)
CREATE TABLE IF NOT EXISTS identities (
    name TEXT PRIMARY KEY,
    provider_name TEXT,
    provider_user_name TEXT,
    extra JSON NOT NULL DEFAULT '{}',
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

-- Platform users (mirrors the cluster User objects)
CREATE TABLE IF NOT EXISTS users (
    name TEXT PRIMARY KEY,
    full_name TEXT,
    identities JSON NOT NULL DEFAULT '[]',
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);
"""


class StorageEngine:
    """Async SQLite storage for sso-mirror input records."""

    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path
        self._db: aiosqlite.Connection | None = None

    async def initialize(self) -> None:
        """Open connection and create schema."""
        self._db = await aiosqlite.connect(str(self.db_path))
        self._db.row_factory = aiosqlite.Row
        await self._db.executescript(_SCHEMA)
        await self._db.commit()

    async def close(self) -> None:
        if self._db:
            await self._db.close()
            self._db = None

    @property
    def db(self) -> aiosqlite.Connection:
        if self._db is None:
            raise RuntimeError("StorageEngine not initialized, call initialize() first")
        return self._db

    # ----- Identities -----

    async def upsert_identity(
        self,
        *,
        name: str,
        extra: dict[str, str] | None = None,
        provider_name: str | None = None,
        provider_user_name: str | None = None,
    ) -> None:
        await self.db.execute(
            """INSERT INTO identities (name, provider_name, provider_user_name, extra)
               VALUES (?, ?, ?, ?)
               ON CONFLICT(name) DO UPDATE SET
                 provider_name=excluded.provider_name,
                 provider_user_name=excluded.provider_user_name,
                 extra=excluded.extra,
                 updated_at=CURRENT_TIMESTAMP""",
            (name, provider_name, provider_user_name, json.dumps(extra or {})),
        )
        await self.db.commit()

    async def get_identity(self, name: str) -> dict | None:
        cursor = await self.db.execute("SELECT * FROM identities WHERE name = ?", (name,))
        row = await cursor.fetchone()
        return _decode(row, "extra") if row else None

    async def list_identities(self) -> list[dict]:
        cursor = await self.db.execute("SELECT * FROM identities ORDER BY name")
        rows = await cursor.fetchall()
        return [_decode(row, "extra") for row in rows]

    # ----- Users -----

    async def upsert_user(
        self,
        *,
        name: str,
        identities: list[str] | None = None,
        full_name: str | None = None,
    ) -> None:
        await self.db.execute(
            """INSERT INTO users (name, full_name, identities)
               VALUES (?, ?, ?)
               ON CONFLICT(name) DO UPDATE SET
                 full_name=excluded.full_name,
                 identities=excluded.identities,
                 updated_at=CURRENT_TIMESTAMP""",
            (name, full_name, json.dumps(identities or [])),
        )
        await self.db.commit()

    async def get_user(self, name: str) -> dict | None:
        cursor = await self.db.execute("SELECT * FROM users WHERE name = ?", (name,))
        row = await cursor.fetchone()
        return _decode(row, "identities") if row else None

    async def list_users(self) -> list[dict]:
        cursor = await self.db.execute("SELECT * FROM users ORDER BY name")
        rows = await cursor.fetchall()
        return [_decode(row, "identities") for row in rows]


def _decode(row: aiosqlite.Row, json_column: str) -> dict:
    result = dict(row)
    result[json_column] = json.loads(result[json_column])
    return result
