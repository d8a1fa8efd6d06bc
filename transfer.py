"""
JSON export/import of the whole store and CSV import of helipads.

CSV import expects a header row (e.g. ``name,lat,lon,notes``) and splits every
line on commas. Quoted fields containing commas are not supported.
"""
import json
import re

from store import COLLECTIONS
from utils import parse_coordinate


class ImportFormatError(ValueError):
    """Raised when an import document cannot be applied to the store."""


def export_document(store):
    """Pretty-printed JSON with all five collections."""
    return json.dumps(store.to_dict(), ensure_ascii=False, indent=2)


def parse_document(text):
    """
    Parse an import document into ``{collection: records}`` for the collections it names.

    Unknown top-level keys and null values are ignored.

    Raises:
        ImportFormatError: invalid JSON, a non-object document, or a collection
            that is not a list of objects
    """
    try:
        parsed = json.loads(text)
    except (TypeError, ValueError) as e:
        raise ImportFormatError('invalid JSON') from e

    if not isinstance(parsed, dict):
        raise ImportFormatError('invalid JSON: expected an object at the top level')

    found = {}
    for name in COLLECTIONS:
        records = parsed.get(name)
        if records is None:
            continue
        if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
            raise ImportFormatError(f'invalid JSON: "{name}" must be a list of objects')
        found[name] = records
    return found


def import_document(store, text):
    """Replace the collections present in ``text``; returns their names."""
    found = parse_document(text)
    store.replace_many(found)
    return list(found)


def parse_helipads_csv(text):
    """
    Turn CSV text into helipad field dicts, in file order.

    Header cells are trimmed and lower-cased. Empty lines are skipped; a line of
    spaces still counts as a row. Missing cells give an empty name/notes;
    unparsable coordinates become None.
    """
    lines = [line for line in re.split(r'\r?\n', text or '') if line]
    if not lines:
        raise ImportFormatError('CSV file is empty: a header row is required')

    header, rows = lines[0], lines[1:]
    cols = [c.strip().lower() for c in header.split(',')]

    helipads = []
    for row in rows:
        cells = [c.strip() for c in row.split(',')]
        obj = dict(zip(cols, cells))
        helipads.append({
            'name': obj.get('name') or '',
            'lat': parse_coordinate(obj.get('lat')),
            'lon': parse_coordinate(obj.get('lon')),
            'notes': obj.get('notes') or '',
        })
    return helipads


def import_helipads_csv(store, text):
    """Prepend the helipads found in ``text``; returns how many were imported."""
    helipads = parse_helipads_csv(text)
    return len(store.prepend('helipads', helipads))
