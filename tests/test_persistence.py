import json

import pytest
from config import TestingConfig
from helimarket import create_app, db
from helimarket.extensions import get_store
from models import StorageEntry, read_entry, write_entry
from persistence import StorageAdapter
from store import COLLECTIONS

KEY = 'heli_market_data_v1'


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


def file_config(path):
    class FileConfig(TestingConfig):
        SQLALCHEMY_DATABASE_URI = f'sqlite:///{path}'
    return FileConfig


def test_store_starts_empty_without_saved_data(app):
    assert get_store().to_dict() == {name: [] for name in COLLECTIONS}
    assert read_entry(KEY) is None


def test_every_mutation_is_written_through(app):
    store = get_store()
    rid = store.add('operators', {'name': 'Shimla Air'})
    saved = json.loads(read_entry(KEY))
    assert list(saved) == list(COLLECTIONS)
    assert saved['operators'][0]['id'] == rid

    store.remove('operators', rid)
    assert json.loads(read_entry(KEY))['operators'] == []


def test_save_keeps_a_single_row(app):
    store = get_store()
    for i in range(5):
        store.add('notes', {'title': f'note {i}'})
    assert StorageEntry.query.count() == 1


def test_load_returns_what_was_saved(app):
    store = get_store()
    store.add('helipads', {'name': 'Ridge Pad', 'lat': 31.1, 'lon': None, 'notes': ''})
    store.add('tasks', {'title': 'Survey'})
    assert StorageAdapter(app).load() == store.to_dict()


def test_corrupt_blob_loads_as_empty(app):
    write_entry(KEY, '{"operators": [ not json')
    assert StorageAdapter(app).load() == {name: [] for name in COLLECTIONS}


def test_non_object_blob_loads_as_empty(app):
    write_entry(KEY, '[1, 2, 3]')
    assert StorageAdapter(app).load() == {name: [] for name in COLLECTIONS}


def test_missing_or_bad_collections_load_as_empty_lists(app):
    write_entry(KEY, json.dumps({'notes': [{'id': 'a', 'title': 'kept'}, 'junk'], 'tasks': 'nope'}))
    payload = StorageAdapter(app).load()
    assert payload['notes'] == [{'id': 'a', 'title': 'kept'}]
    assert payload['tasks'] == []
    assert payload['operators'] == []


def test_store_survives_restart(tmp_path):
    config = file_config(tmp_path / 'heli.db')

    first = create_app(config)
    with first.app_context():
        store = get_store()
        rid = store.add('operators', {'name': 'Heli Himalaya', 'base': 'Kullu'})
        store.add('tasks', {'title': 'Renew permit', 'due': 'June'})
        expected = store.to_dict()
        db.session.remove()
        db.engine.dispose()

    second = create_app(config)
    with second.app_context():
        assert get_store().to_dict() == expected
        assert get_store().get('operators', rid)['base'] == 'Kullu'
        db.session.remove()
        db.engine.dispose()


def test_corrupt_storage_on_startup_gives_empty_store(tmp_path):
    config = file_config(tmp_path / 'heli.db')

    first = create_app(config)
    with first.app_context():
        write_entry(KEY, 'this is not json')
        db.session.remove()
        db.engine.dispose()

    second = create_app(config)
    with second.app_context():
        assert get_store().counts() == {name: 0 for name in COLLECTIONS}
        db.session.remove()
        db.engine.dispose()


def test_concurrent_adds_and_removes_match_storage(tmp_path):
    import threading

    app = create_app(file_config(tmp_path / 'heli.db'))
    with app.app_context():
        store = get_store()

    def worker(n):
        ids = [store.add('operators', {'name': f'Worker {n} op {i}'}) for i in range(20)]
        for rid in ids[::2]:
            store.remove('operators', rid)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    with app.app_context():
        assert len(store.records('operators')) == 40
        assert StorageAdapter(app).load() == store.to_dict()
        db.session.remove()
        db.engine.dispose()
