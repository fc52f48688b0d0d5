"""SQLite database setup and audit report storage.

Table: audit_reports
- id (integer, primary key)
- url (text)
- seo_score (integer)
- ai_score (integer)
- traditional_seo_results (json text)
- geo_results (json text)
- content_suggestions (json text)
- created_at (datetime)
"""

import json
import logging
import os
import sqlite3
from datetime import datetime, timezone
from pathlib import Path

from dotenv import load_dotenv

from errors import StorageError
from models import AuditReport

load_dotenv(dotenv_path=Path(__file__).resolve().parent / ".env")

logger = logging.getLogger(__name__)

DB_PATH = Path(os.getenv("SEOAUDIT_DB_PATH", str(Path(__file__).parent / "seoaudit.db")))

_COLUMNS = "id, url, seo_score, ai_score, traditional_seo_results, geo_results, content_suggestions, created_at"


def get_connection() -> sqlite3.Connection:
    """Return a connection to the SQLite database."""
    conn = sqlite3.connect(DB_PATH)
    conn.row_factory = sqlite3.Row
    return conn


def _row_to_report(row: sqlite3.Row) -> AuditReport:
    return {
        "id": row["id"],
        "url": row["url"],
        "seo_score": row["seo_score"],
        "ai_score": row["ai_score"],
        "traditional_seo_results": json.loads(row["traditional_seo_results"]),
        "geo_results": json.loads(row["geo_results"]),
        "content_suggestions": json.loads(row["content_suggestions"]),
        "created_at": row["created_at"],
    }


def init_db() -> None:
    """Create the audit_reports table if it does not exist."""
    try:
        conn = get_connection()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS audit_reports (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    url TEXT NOT NULL,
                    seo_score INTEGER NOT NULL,
                    ai_score INTEGER NOT NULL,
                    traditional_seo_results TEXT NOT NULL,
                    geo_results TEXT NOT NULL,
                    content_suggestions TEXT NOT NULL,
                    created_at TEXT NOT NULL
                )
                """
            )
            conn.execute("CREATE INDEX IF NOT EXISTS idx_audit_reports_url ON audit_reports (url)")
            conn.commit()
        finally:
            conn.close()
    except sqlite3.Error as exc:
        raise StorageError(f"Could not initialize database at {DB_PATH}: {exc}") from exc


def create_report(report: dict) -> AuditReport:
    """Store a new report and return it with its id and timestamp."""
    created_at = datetime.now(timezone.utc).isoformat()
    try:
        conn = get_connection()
        try:
            cursor = conn.execute(
                """
                INSERT INTO audit_reports
                    (url, seo_score, ai_score, traditional_seo_results, geo_results, content_suggestions, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    report["url"],
                    report["seo_score"],
                    report["ai_score"],
                    json.dumps(report["traditional_seo_results"]),
                    json.dumps(report["geo_results"]),
                    json.dumps(report["content_suggestions"]),
                    created_at,
                ),
            )
            conn.commit()
            report_id = cursor.lastrowid
        finally:
            conn.close()
    except sqlite3.Error as exc:
        raise StorageError(f"Could not store report for {report['url']}: {exc}") from exc

    logger.info("Stored report id=%s url=%s", report_id, report["url"])
    return {
        "id": report_id,
        "url": report["url"],
        "seo_score": report["seo_score"],
        "ai_score": report["ai_score"],
        "traditional_seo_results": report["traditional_seo_results"],
        "geo_results": report["geo_results"],
        "content_suggestions": report["content_suggestions"],
        "created_at": created_at,
    }


def get_report(report_id: int) -> AuditReport | None:
    """Fetch a report by id. Returns None when it does not exist."""
    try:
        conn = get_connection()
        try:
            row = conn.execute(
                f"SELECT {_COLUMNS} FROM audit_reports WHERE id = ?",
                (report_id,),
            ).fetchone()
        finally:
            conn.close()
    except sqlite3.Error as exc:
        raise StorageError(f"Could not read report {report_id}: {exc}") from exc
    return _row_to_report(row) if row is not None else None


def get_reports_by_url(url: str) -> list[AuditReport]:
    """Return every report stored for `url`, oldest first."""
    try:
        conn = get_connection()
        try:
            rows = conn.execute(
                f"SELECT {_COLUMNS} FROM audit_reports WHERE url = ? ORDER BY id",
                (url,),
            ).fetchall()
        finally:
            conn.close()
    except sqlite3.Error as exc:
        raise StorageError(f"Could not read reports for {url}: {exc}") from exc
    return [_row_to_report(row) for row in rows]


def list_reports(limit: int | None = 20) -> list[AuditReport]:
    """Return recent reports, newest first. limit=None returns every report."""
    # SQLite treats a negative LIMIT as no limit
    safe_limit = -1 if limit is None else max(1, min(100, int(limit)))
    try:
        conn = get_connection()
        try:
            rows = conn.execute(
                f"""
                SELECT {_COLUMNS}
                FROM audit_reports
                ORDER BY id DESC
                LIMIT ?
                """,
                (safe_limit,),
            ).fetchall()
        finally:
            conn.close()
    except sqlite3.Error as exc:
        raise StorageError(f"Could not list reports: {exc}") from exc
    return [_row_to_report(row) for row in rows]
