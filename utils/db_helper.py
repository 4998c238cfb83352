import logging
import os
import sqlite3

from app.calculation import Metrics
from app.errors import DatabaseError
from app.settings import ThemeName

logger = logging.getLogger(__name__)

DB_PATH = "data/typesprint.db"

BEST_WPM_KEY = "bestWPM"
THEME_KEY = "theme"


def _ensure_schema(conn):
    conn.execute("""
    CREATE TABLE IF NOT EXISTS kv(
        key TEXT PRIMARY KEY,
        value TEXT NOT NULL
    );
    """)
    conn.execute("""
    CREATE TABLE IF NOT EXISTS results(
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        wpm INTEGER,
        accuracy INTEGER,
        mistakes INTEGER,
        duration INTEGER,
        difficulty TEXT,
        created_at DATETIME DEFAULT CURRENT_TIMESTAMP
    );
    """)


def get_conn(db_path: str = DB_PATH):
    conn = None
    try:
        folder = os.path.dirname(db_path)
        if folder:
            os.makedirs(folder, exist_ok=True)
        conn = sqlite3.connect(db_path)
        _ensure_schema(conn)
    except (sqlite3.Error, OSError) as e:
        if conn is not None:
            conn.close()
        logger.error("Cannot open database %s: %s", db_path, e)
        raise DatabaseError(str(e))
    return conn


def get_value(key: str, db_path: str = DB_PATH) -> str | None:
    conn = get_conn(db_path)
    try:
        row = conn.execute("SELECT value FROM kv WHERE key=?", (key,)).fetchone()
        return row[0] if row else None
    except sqlite3.Error as e:
        raise DatabaseError(str(e))
    finally:
        conn.close()


def set_value(key: str, value: str, db_path: str = DB_PATH):
    conn = get_conn(db_path)
    try:
        conn.execute(
            "INSERT INTO kv(key, value) VALUES (?, ?) "
            "ON CONFLICT(key) DO UPDATE SET value=excluded.value",
            (key, value),
        )
        conn.commit()
    except sqlite3.Error as e:
        raise DatabaseError(str(e))
    finally:
        conn.close()


def load_best_wpm(db_path: str = DB_PATH) -> int:
    raw = get_value(BEST_WPM_KEY, db_path)
    try:
        return max(0, int(raw)) if raw is not None else 0
    except ValueError:
        logger.warning("Ignoring malformed %s value %r", BEST_WPM_KEY, raw)
        return 0


def update_best_wpm(wpm: int, db_path: str = DB_PATH) -> int:
    """Store ``wpm`` only if it beats the saved best. Returns the best afterwards."""
    best = load_best_wpm(db_path)
    if wpm > best:
        set_value(BEST_WPM_KEY, str(int(wpm)), db_path)
        return int(wpm)
    return best


def load_theme(db_path: str = DB_PATH) -> ThemeName | None:
    raw = get_value(THEME_KEY, db_path)
    if raw is None:
        return None
    try:
        return ThemeName(raw)
    except ValueError:
        logger.warning("Ignoring unknown theme %r", raw)
        return None


def save_theme(theme: ThemeName, db_path: str = DB_PATH):
    set_value(THEME_KEY, ThemeName(theme).value, db_path)


def insert_result(metrics: Metrics, duration: int, difficulty: str, db_path: str = DB_PATH):
    conn = get_conn(db_path)
    try:
        conn.execute(
            "INSERT INTO results(wpm, accuracy, mistakes, duration, difficulty) VALUES (?,?,?,?,?)",
            (metrics.wpm, metrics.accuracy, metrics.mistakes, duration, difficulty)
        )
        conn.commit()
    except sqlite3.Error as e:
        raise DatabaseError(str(e))
    finally:
        conn.close()


def recent_results(limit: int = 10, db_path: str = DB_PATH) -> list[dict]:
    conn = get_conn(db_path)
    try:
        conn.row_factory = sqlite3.Row
        rows = conn.execute(
            "SELECT wpm, accuracy, mistakes, duration, difficulty, created_at "
            "FROM results ORDER BY id DESC LIMIT ?",
            (limit,),
        ).fetchall()
        return [dict(r) for r in rows]
    except sqlite3.Error as e:
        raise DatabaseError(str(e))
    finally:
        conn.close()


class ResultStore:
    """Best-score and preference store handed to the session controller."""

    def __init__(self, db_path: str = DB_PATH):
        self.db_path = db_path

    def best_wpm(self) -> int:
        return load_best_wpm(self.db_path)

    def record(self, metrics: Metrics, duration: int, difficulty: str) -> int:
        insert_result(metrics, duration, difficulty, self.db_path)
        return update_best_wpm(metrics.wpm, self.db_path)

    def load_theme(self) -> ThemeName | None:
        return load_theme(self.db_path)

    def save_theme(self, theme: ThemeName):
        save_theme(theme, self.db_path)

    def recent(self, limit: int = 10) -> list[dict]:
        return recent_results(limit, self.db_path)
