from datetime import datetime
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event

# SQLAlchemy instance (init in app)
db = SQLAlchemy()


def _set_sqlite_pragma(dbapi_conn, connection_record):
    """Enable WAL mode and a busy timeout for SQLite."""
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA synchronous=NORMAL")
    cursor.execute("PRAGMA busy_timeout=5000")
    cursor.close()


def init_db_events(app):
    """Initialize database event listeners for SQLite optimizations."""
    if app.config.get('SQLALCHEMY_DATABASE_URI', '').startswith('sqlite'):
        with app.app_context():
            event.listen(db.engine, "connect", _set_sqlite_pragma)


class StorageEntry(db.Model):
    """One key, one text value. The whole record store lives in a single row."""
    __tablename__ = 'storage'
    key = db.Column(db.String(120), primary_key=True)
    value = db.Column(db.Text, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<StorageEntry {self.key} ({len(self.value or '')} chars)>"


def read_entry(key):
    """Return the stored text under ``key`` or None when nothing was saved yet."""
    entry = db.session.get(StorageEntry, key)
    return entry.value if entry is not None else None


def write_entry(key, value):
    """Replace the text stored under ``key`` and commit."""
    entry = db.session.get(StorageEntry, key)
    if entry is None:
        entry = StorageEntry(key=key, value=value)
        db.session.add(entry)
    else:
        entry.value = value
    db.session.commit()
    return entry
