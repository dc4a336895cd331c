"""
Database handle used for environment reporting
"""
import logging
import sqlite3
from pathlib import Path

logger = logging.getLogger(__name__)


class Database:
    """Minimal database handle exposing type and server version"""

    def __init__(self, db_type='sqlite', location=None):
        self.type = (db_type or 'sqlite').lower()
        self.location = location

    def connect(self, read_only=False):
        """Open a connection to the configured database"""
        if self.type != 'sqlite':
            raise ValueError(f"No driver available for database type: {self.type}")

        location = self.location or ':memory:'
        if read_only and location != ':memory:':
            return sqlite3.connect(Path(location).resolve().as_uri() + '?mode=ro', uri=True)
        return sqlite3.connect(location)

    def version(self):
        """Database version string, e.g. 'SQLite 3.45.1', None when unknown

        Reporting never creates the database file.
        """
        if self.type != 'sqlite':
            logger.warning(f"Cannot determine version for database type '{self.type}'")
            return None

        if self.location and self.location != ':memory:' and not Path(self.location).exists():
            return f"SQLite {sqlite3.sqlite_version}"

        try:
            connection = self.connect(read_only=True)
            try:
                row = connection.execute('SELECT sqlite_version()').fetchone()
            finally:
                connection.close()
        except (sqlite3.Error, OSError) as e:
            logger.warning(f"Cannot determine database version: {e}")
            return None
        return f"SQLite {row[0]}"
