from __future__ import annotations
import hashlib
import logging
from pathlib import Path
from datetime import datetime, timezone

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine

from bookstore.config import LOG_LEVEL
from bookstore.db import make_engine

log = logging.getLogger("bookstore.migrate")

MIGRATIONS_DIR = Path(__file__).with_name("migrations")

def sha256(s: str) -> str:
    return hashlib.sha256(s.encode("utf-8")).hexdigest()

def ensure_schema_table(conn: Connection):
    conn.execute(text("""
        CREATE TABLE IF NOT EXISTS schema_migrations (
          filename TEXT PRIMARY KEY,
          checksum TEXT NOT NULL,
          applied_at TIMESTAMP NOT NULL
        )
    """))

def already_applied(conn: Connection, filename: str) -> bool:
    return bool(conn.execute(
        text("SELECT 1 FROM schema_migrations WHERE filename = :f"),
        {"f": filename}
    ).scalar())

def record_applied(conn: Connection, filename: str, checksum: str):
    conn.execute(
        text("INSERT INTO schema_migrations (filename, checksum, applied_at) VALUES (:f, :c, :t)"),
        {"f": filename, "c": checksum, "t": datetime.now(timezone.utc)}
    )

def run(engine: Engine | None = None, migrations_dir: Path = MIGRATIONS_DIR) -> list[str]:
    """
    Apply every pending *.sql file in name order, in one transaction.
    Returns the filenames applied by this run.
    """
    files = sorted(p for p in migrations_dir.glob("*.sql"))
    if not files:
        log.info("No migrations found.")
        return []

    engine = engine or make_engine()
    applied: list[str] = []
    with engine.begin() as conn:
        ensure_schema_table(conn)

        for f in files:
            filename = f.name
            sql = f.read_text()
            if already_applied(conn, filename):
                log.info("Skip %s (already applied)", filename)
                continue

            conn.execute(text(sql))
            record_applied(conn, filename, sha256(sql))
            applied.append(filename)
            log.info("Applied %s", filename)

    log.info("All migrations up to date.")
    return applied

if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    run()
