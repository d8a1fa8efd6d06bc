"""
Persistence of the record store in a single key/value storage row.
"""
import json
from contextlib import nullcontext

from flask import has_app_context

from models import db, read_entry, write_entry
from store import COLLECTIONS


def empty_payload():
    return {name: [] for name in COLLECTIONS}


def dump_store(store):
    return json.dumps(store.to_dict(), ensure_ascii=False, separators=(',', ':'))


class StorageAdapter:
    """
    Reads and writes the whole store under one fixed key.

    Args:
        app: Flask application whose database holds the storage table
        key: storage key (default: app.config['STORAGE_KEY'])
    """

    def __init__(self, app, key=None):
        self.app = app
        self.key = key or app.config['STORAGE_KEY']

    def _context(self):
        # reuse the caller's app context (and its session) when there is one
        return nullcontext() if has_app_context() else self.app.app_context()

    def save(self, store):
        with self._context():
            try:
                write_entry(self.key, dump_store(store))
            except Exception:
                db.session.rollback()
                self.app.logger.exception(f'Failed to save data under {self.key}')
                raise

    def load(self):
        """Return the five collections; empty ones when nothing usable is stored."""
        with self._context():
            saved = read_entry(self.key)
        if saved is None:
            return empty_payload()

        try:
            parsed = json.loads(saved)
        except ValueError:
            self.app.logger.exception(f'Failed to parse saved data under {self.key}')
            return empty_payload()

        if not isinstance(parsed, dict):
            self.app.logger.warning(f'Saved data under {self.key} is not an object; starting empty')
            return empty_payload()

        payload = empty_payload()
        for name in COLLECTIONS:
            records = parsed.get(name)
            if isinstance(records, list):
                payload[name] = [r for r in records if isinstance(r, dict)]
        return payload
