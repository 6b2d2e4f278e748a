# logging_config.py

import logging
import sqlite3
import sys
from datetime import datetime, timezone

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class SQLiteHandler(logging.Handler):
    def __init__(self, db_path: str, max_entries: int = 10000):
        super().__init__()
        self.db_path = db_path
        self.max_entries = max_entries
        self.create_table()

    def create_table(self):
        """Creates the logs table if it doesn't exist."""
        conn = sqlite3.connect(self.db_path)
        try:
            cursor = conn.cursor()
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS logs (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    timestamp TEXT NOT NULL,
                    level TEXT NOT NULL,
                    logger TEXT,
                    message TEXT NOT NULL,
                    exception TEXT
                )
            """)
            # Create an index on the id column to optimize deletion queries
            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_logs_id ON logs (id DESC)
            """)
            conn.commit()
        finally:
            conn.close()

    def emit(self, record):
        """Inserts a log record into the SQLite database and enforces max log entries."""
        try:
            exception_text = None
            if record.exc_info:
                exception_text = logging.Formatter().formatException(record.exc_info)

            log_entry = {
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "level": record.levelname,
                "logger": record.name,
                "message": record.getMessage(),
                "exception": exception_text,
            }

            conn = sqlite3.connect(self.db_path)
            try:
                cursor = conn.cursor()
                cursor.execute("""
                    INSERT INTO logs (timestamp, level, logger, message, exception)
                    VALUES (:timestamp, :level, :logger, :message, :exception)
                """, log_entry)

                cursor.execute("SELECT COUNT(*) FROM logs")
                count = cursor.fetchone()[0]
                if count > self.max_entries:
                    # Delete the oldest rows beyond the cap
                    cursor.execute("""
                        DELETE FROM logs
                        WHERE id IN (
                            SELECT id FROM logs
                            ORDER BY id ASC
                            LIMIT ?
                        )
                    """, (count - self.max_entries,))
                conn.commit()
            finally:
                conn.close()
        except Exception:
            self.handleError(record)


def setup_logging(debug_mode: bool = False, log_db_path: str = "", max_entries: int = 10000):
    """
    Configure the root logger with a console handler and, when log_db_path is set,
    a SQLite handler for persistent logs. Safe to call more than once.
    """
    level = logging.DEBUG if debug_mode else logging.INFO
    logger = logging.getLogger()
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if getattr(handler, "_hookscout", False):
            logger.removeHandler(handler)
            handler.close()

    # Console handler for real-time logs
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    console_handler._hookscout = True
    logger.addHandler(console_handler)

    if log_db_path:
        sqlite_handler = SQLiteHandler(db_path=log_db_path, max_entries=max_entries)
        sqlite_handler.setLevel(level)
        sqlite_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        sqlite_handler._hookscout = True
        logger.addHandler(sqlite_handler)
