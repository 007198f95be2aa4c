"""
SQLite Exporter — Exports the inventory to a SQLite database.

One row per package key, so re-running a scan into the same database
updates rows rather than duplicating them.
"""

import logging
import sqlite3
from pathlib import Path

from layer_inventory.models.package import Package

logger = logging.getLogger(__name__)


CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS packages (
    key TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    version TEXT NOT NULL
)
"""

INSERT_SQL = """
INSERT OR REPLACE INTO packages (key, name, version)
VALUES (?, ?, ?)
"""


class SQLiteExporter:
    """
    Exports Package objects to a ``packages`` table.

    ``count`` is the number of rows written in this run; a row that replaces
    an existing key still counts once.
    """

    def __init__(self, db_path: Path):
        self.db_path = db_path
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(str(db_path))
        self.conn.execute(CREATE_TABLE_SQL)
        self.conn.commit()
        self.count = 0

    async def export(self, package: Package) -> None:
        """Export a single package to the SQLite database."""
        self.conn.execute(INSERT_SQL, (package.key(), package.name, package.version_string))
        self.count += 1

        # Commit every 100 items for performance
        if self.count % 100 == 0:
            self.conn.commit()

    async def finalize(self) -> None:
        """Commit remaining changes and close the connection."""
        self.conn.commit()
        self.conn.close()
        logger.info(f"[SQLite] Export complete: {self.count} rows written to {self.db_path}")
