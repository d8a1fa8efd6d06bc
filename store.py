"""
In-memory record store: five ordered collections of plain-dict records.

Records are kept newest first. Every mutation calls the store's ``on_change``
hook so the owner can persist the full store right after the change.
"""
import secrets
import string
import threading
from contextlib import contextmanager
from datetime import datetime, timezone

COLLECTIONS = ('operators', 'helipads', 'routes', 'notes', 'tasks')

# Fields accepted from callers for each kind of record
FIELDS = {
    'operators': ('name', 'base', 'services', 'phone', 'email'),
    'helipads': ('name', 'lat', 'lon', 'notes'),
    'routes': ('name', 'origin', 'destination', 'duration_min', 'notes'),
    'notes': ('title', 'body'),
    'tasks': ('title', 'due'),
}

# Field that must be non-empty on add, also used for search
REQUIRED_FIELD = {
    'operators': 'name',
    'helipads': 'name',
    'routes': 'name',
    'notes': 'title',
    'tasks': 'title',
}

DEFAULTS = {
    'tasks': {'done': False},
}

SYSTEM_FIELDS = ('id', 'created')

ID_ALPHABET = string.digits + string.ascii_lowercase
ID_LENGTH = 7


def new_id():
    """Random base-36 identifier."""
    return ''.join(secrets.choice(ID_ALPHABET) for _ in range(ID_LENGTH))


def now_iso():
    """UTC timestamp like 2025-01-31T09:15:02.123Z"""
    return datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


class Collection:
    """Ordered records of one kind, newest first."""

    def __init__(self, name, records=None):
        self.name = name
        self._records = list(records or [])

    def __iter__(self):
        return iter(self._records)

    def __len__(self):
        return len(self._records)

    def __repr__(self):
        return f"<Collection {self.name} ({len(self._records)})>"

    def ids(self):
        return {r.get('id') for r in self._records}

    def get(self, record_id):
        for r in self._records:
            if r.get('id') == record_id:
                return r
        return None

    def _unique_id(self, taken):
        rid = new_id()
        while rid in taken:
            rid = new_id()
        taken.add(rid)
        return rid

    def _build(self, fields, taken):
        record = {'id': self._unique_id(taken), 'created': now_iso()}
        record.update(DEFAULTS.get(self.name, {}))
        record.update({k: v for k, v in fields.items() if k not in SYSTEM_FIELDS})
        return record

    def add(self, fields):
        record = self._build(fields, self.ids())
        self._records.insert(0, record)
        return record

    def prepend(self, fields_list):
        """Add several records at the head, keeping their given order."""
        taken = self.ids()
        new_records = [self._build(fields, taken) for fields in fields_list]
        self._records[:0] = new_records
        return new_records

    def update(self, record_id, patch):
        record = self.get(record_id)
        if record is None:
            return False
        record.update({k: v for k, v in patch.items() if k not in SYSTEM_FIELDS})
        return True

    def toggle(self, record_id, field='done'):
        record = self.get(record_id)
        if record is None:
            return False
        record[field] = not record.get(field, False)
        return True

    def remove(self, record_id):
        before = len(self._records)
        self._records = [r for r in self._records if r.get('id') != record_id]
        return len(self._records) != before

    def clear(self):
        self._records = []

    def replace(self, records):
        self._records = [dict(r) for r in records]

    def to_list(self):
        return [dict(r) for r in self._records]


class RecordStore:
    """
    Holder of the operators, helipads, routes, notes and tasks collections.

    Mutations and their ``on_change`` call run under one lock. If ``on_change``
    raises, the touched collections are restored and the error propagates.

    Args:
        data: mapping of collection name to a list of records (missing names start empty)
        on_change: callable receiving the store after every mutation
    """

    def __init__(self, data=None, on_change=None):
        data = data or {}
        self.collections = {name: Collection(name, data.get(name)) for name in COLLECTIONS}
        self.on_change = on_change
        self._lock = threading.RLock()

    def __repr__(self):
        sizes = ', '.join(f'{name}={len(c)}' for name, c in self.collections.items())
        return f"<RecordStore {sizes}>"

    def _collection(self, kind):
        if kind not in self.collections:
            raise KeyError(f'Unknown collection: {kind}')
        return self.collections[kind]

    def _changed(self):
        if self.on_change is not None:
            self.on_change(self)

    @contextmanager
    def _mutation(self, *kinds):
        with self._lock:
            snapshot = {kind: self._collection(kind).to_list() for kind in kinds}
            try:
                yield
            except Exception:
                for kind, records in snapshot.items():
                    self.collections[kind].replace(records)
                raise

    # Reads
    def records(self, kind):
        with self._lock:
            return list(self._collection(kind))

    def get(self, kind, record_id):
        with self._lock:
            return self._collection(kind).get(record_id)

    def counts(self):
        with self._lock:
            return {name: len(c) for name, c in self.collections.items()}

    def to_dict(self):
        with self._lock:
            return {name: c.to_list() for name, c in self.collections.items()}

    @classmethod
    def from_dict(cls, payload, on_change=None):
        return cls(payload, on_change=on_change)

    # Mutations
    def add(self, kind, fields):
        with self._mutation(kind):
            record = self._collection(kind).add(fields)
            self._changed()
        return record['id']

    def prepend(self, kind, fields_list):
        with self._mutation(kind):
            new_records = self._collection(kind).prepend(fields_list)
            if new_records:
                self._changed()
        return [r['id'] for r in new_records]

    def update_operator(self, record_id, patch):
        with self._mutation('operators'):
            updated = self.collections['operators'].update(record_id, patch)
            if updated:
                self._changed()
        return updated

    def toggle_task(self, record_id):
        with self._mutation('tasks'):
            toggled = self.collections['tasks'].toggle(record_id)
            if toggled:
                self._changed()
        return toggled

    def remove(self, kind, record_id):
        with self._mutation(kind):
            removed = self._collection(kind).remove(record_id)
            if removed:
                self._changed()
        return removed

    def clear(self, kind):
        with self._mutation(kind):
            self._collection(kind).clear()
            self._changed()

    def replace(self, kind, records):
        with self._mutation(kind):
            self._collection(kind).replace(records)
            self._changed()

    def replace_many(self, payload):
        """Replace every collection named in ``payload`` and save once."""
        with self._mutation(*payload):
            for kind, records in payload.items():
                self._collection(kind).replace(records)
            if payload:
                self._changed()
