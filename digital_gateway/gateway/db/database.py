"""SQLite storage for validation report snapshots via aiosqlite."""

from __future__ import annotations

import json
import logging
import os
import uuid
from pathlib import Path

import aiosqlite

from gateway.db.models import ReportRecord
from gateway.validator.models import ValidationReport

logger = logging.getLogger(__name__)


def _get_db_path() -> str:
    """Return the database file path (production vs dev mode)."""
    if os.environ.get("GATEWAY_DEV_MODE", "").lower() == "true":
        db_dir = Path(__file__).resolve().parent.parent.parent.parent / "data"
    else:
        db_dir = Path("/data")
    db_dir.mkdir(exist_ok=True)
    return str(db_dir / "digital_gateway.db")


SCHEMA_VERSION = 2

MIGRATIONS: dict[int, list[str]] = {
    1: [
        """
        CREATE TABLE IF NOT EXISTS mvt_reports (
            id              TEXT PRIMARY KEY,
            content_name    TEXT NOT NULL DEFAULT 'Unknown',
            score           REAL NOT NULL DEFAULT 0.0,
            status          TEXT NOT NULL DEFAULT 'pass',
            details_json    TEXT NOT NULL DEFAULT '{}',
            created_at      TEXT NOT NULL DEFAULT (datetime('now'))
        )
        """,
        """
        CREATE TABLE IF NOT EXISTS schema_version (
            version INTEGER NOT NULL
        )
        """,
        "INSERT INTO schema_version (version) VALUES (1)",
    ],
    2: [
        "ALTER TABLE mvt_reports ADD COLUMN source TEXT DEFAULT 'rules'",
        "ALTER TABLE mvt_reports ADD COLUMN source_url TEXT",
        "ALTER TABLE mvt_reports ADD COLUMN model TEXT DEFAULT ''",
        "UPDATE schema_version SET version = 2",
    ],
}


class Database:
    """Async SQLite wrapper with migration support."""

    def __init__(self, db_path: str | None = None) -> None:
        self._db_path = db_path or _get_db_path()
        self._conn: aiosqlite.Connection | None = None

    async def connect(self) -> None:
        """Open the database connection and run pending migrations."""
        self._conn = await aiosqlite.connect(self._db_path)
        self._conn.row_factory = aiosqlite.Row
        await self._conn.execute("PRAGMA journal_mode=WAL")
        await self._run_migrations()

    async def close(self) -> None:
        """Close the database connection."""
        if self._conn:
            await self._conn.close()
            self._conn = None

    @property
    def conn(self) -> aiosqlite.Connection:
        """Return the active connection (asserts it exists)."""
        assert self._conn is not None, "Database not connected"
        return self._conn

    async def _run_migrations(self) -> None:
        """Apply any pending schema migrations."""
        try:
            async with self.conn.execute(
                "SELECT version FROM schema_version LIMIT 1"
            ) as cursor:
                row = await cursor.fetchone()
                current = row["version"] if row else 0
        except aiosqlite.OperationalError:
            current = 0

        for version in sorted(MIGRATIONS.keys()):
            if version > current:
                for sql in MIGRATIONS[version]:
                    await self.conn.execute(sql)
                await self.conn.commit()
                logger.info("Applied database migration v%d", version)

    async def save_report(
        self,
        report: ValidationReport,
        source_url: str | None = None,
    ) -> str:
        """Persist a snapshot of ``report`` and return its id."""
        report_id = uuid.uuid4().hex
        await self.conn.execute(
            """INSERT INTO mvt_reports
               (id, content_name, score, status, details_json, source,
                source_url, model, created_at)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, datetime('now'))""",
            (
                report_id,
                report.content_name,
                report.score,
                report.status.value,
                json.dumps(report.to_dict()),
                report.source,
                source_url,
                report.model,
            ),
        )
        await self.conn.commit()
        return report_id

    async def save_failure(
        self,
        content_name: str,
        message: str,
        source_url: str | None = None,
    ) -> str:
        """Record a run that never produced a report (e.g. content unavailable)."""
        report_id = uuid.uuid4().hex
        await self.conn.execute(
            """INSERT INTO mvt_reports
               (id, content_name, score, status, details_json, source,
                source_url, created_at)
               VALUES (?, ?, 0.0, 'fail', ?, 'rules', ?, datetime('now'))""",
            (
                report_id,
                content_name,
                json.dumps({"error": message, "findings": []}),
                source_url,
            ),
        )
        await self.conn.commit()
        return report_id

    async def get_report(self, report_id: str) -> ReportRecord | None:
        async with self.conn.execute(
            "SELECT * FROM mvt_reports WHERE id = ?", (report_id,)
        ) as cursor:
            row = await cursor.fetchone()
        return ReportRecord(**dict(row)) if row else None

    async def list_reports(self, limit: int = 50, offset: int = 0) -> tuple[list[ReportRecord], int]:
        """Return one page of reports (newest first) and the total count."""
        async with self.conn.execute(
            "SELECT COUNT(*) as cnt FROM mvt_reports"
        ) as cursor:
            row = await cursor.fetchone()
            total = row["cnt"]

        async with self.conn.execute(
            "SELECT * FROM mvt_reports ORDER BY created_at DESC, rowid DESC "
            "LIMIT ? OFFSET ?",
            (limit, offset),
        ) as cursor:
            rows = await cursor.fetchall()

        return [ReportRecord(**dict(r)) for r in rows], total

    async def delete_report(self, report_id: str) -> bool:
        cursor = await self.conn.execute(
            "DELETE FROM mvt_reports WHERE id = ?", (report_id,)
        )
        await self.conn.commit()
        return cursor.rowcount > 0
