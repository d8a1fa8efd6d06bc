import json

import pytest
from store import RecordStore
from transfer import (ImportFormatError, export_document, import_document,
                      import_helipads_csv, parse_helipads_csv)


def make_store():
    s = RecordStore()
    s.add('operators', {'name': 'Shimla Air', 'base': 'Shimla', 'services': 'Charter', 'phone': '', 'email': 'ops@shimla.example'})
    s.add('helipads', {'name': 'Ridge Pad', 'lat': 31.1, 'lon': 77.2, 'notes': 'Gravel'})
    s.add('routes', {'name': 'Shimla - Kullu', 'origin': 'Ridge Pad', 'destination': 'Bhuntar', 'duration_min': '35', 'notes': ''})
    s.add('notes', {'title': 'Demand', 'body': 'Peak in May'})
    s.add('tasks', {'title': 'Call DGCA', 'due': '2025-06-01'})
    return s


def test_export_then_import_reproduces_store():
    source = make_store()
    target = RecordStore()
    replaced = import_document(target, export_document(source))
    assert sorted(replaced) == ['helipads', 'notes', 'operators', 'routes', 'tasks']
    assert target.to_dict() == source.to_dict()


def test_export_is_pretty_printed():
    text = export_document(make_store())
    assert text.startswith('{\n  "operators"')
    assert set(json.loads(text)) == {'operators', 'helipads', 'routes', 'notes', 'tasks'}


def test_partial_document_replaces_only_named_collection():
    s = make_store()
    before = s.to_dict()
    notes = [{'id': 'n1', 'created': '2025-01-01T00:00:00.000Z', 'title': 'Imported', 'body': ''}]
    assert import_document(s, json.dumps({'notes': notes, 'aircraft': [1, 2]})) == ['notes']
    after = s.to_dict()
    assert after['notes'] == notes
    for name in ('operators', 'helipads', 'routes', 'tasks'):
        assert after[name] == before[name]


def test_empty_list_clears_collection():
    s = make_store()
    import_document(s, '{"tasks": []}')
    assert s.records('tasks') == []
    assert len(s.records('notes')) == 1


def test_invalid_json_leaves_store_untouched():
    s = make_store()
    before = s.to_dict()
    with pytest.raises(ImportFormatError):
        import_document(s, '{"notes": [')
    assert s.to_dict() == before


@pytest.mark.parametrize('text', ['[1, 2]', '"notes"', '{"notes": "hello"}', '{"operators": [], "notes": [1]}'])
def test_wrong_shapes_are_rejected(text):
    s = make_store()
    before = s.to_dict()
    with pytest.raises(ImportFormatError):
        import_document(s, text)
    assert s.to_dict() == before


def test_csv_import_scenario():
    s = RecordStore()
    text = "name,lat,lon,notes\nRidge Pad,31.1,77.2,Gravel\nBad Row,xx,77.3,\n"
    assert import_helipads_csv(s, text) == 2
    first, second = s.records('helipads')
    assert (first['name'], first['lat'], first['lon'], first['notes']) == ('Ridge Pad', 31.1, 77.2, 'Gravel')
    assert (second['name'], second['lat'], second['lon'], second['notes']) == ('Bad Row', None, 77.3, '')
    assert first['id'] != second['id']
    assert first['created'] and second['created']


def test_csv_rows_go_before_existing_helipads():
    s = RecordStore()
    s.add('helipads', {'name': 'Old Pad', 'lat': None, 'lon': None, 'notes': ''})
    import_helipads_csv(s, 'name\nA\nB\n')
    assert [h['name'] for h in s.records('helipads')] == ['A', 'B', 'Old Pad']


def test_csv_header_is_case_and_order_insensitive():
    rows = parse_helipads_csv(' Notes , LON,Name ,LAT\r\ntarmac,77.1,Bhuntar,31.9\r\n')
    assert rows == [{'name': 'Bhuntar', 'lat': 31.9, 'lon': 77.1, 'notes': 'tarmac'}]


def test_csv_missing_columns_and_empty_lines():
    rows = parse_helipads_csv('name,lat\n\nOnly Name\n\n')
    assert rows == [{'name': 'Only Name', 'lat': None, 'lon': None, 'notes': ''}]


def test_csv_line_of_spaces_is_a_row():
    rows = parse_helipads_csv('name,lat,lon,notes\nRidge Pad,31.1,77.2,\n   \n')
    assert len(rows) == 2
    assert rows[1] == {'name': '', 'lat': None, 'lon': None, 'notes': ''}


def test_csv_quotes_are_not_interpreted():
    rows = parse_helipads_csv('name,notes\n"Pad, North",ok\n')
    assert rows[0]['name'] == '"Pad'
    assert rows[0]['notes'] == 'North"'


def test_csv_header_only_imports_nothing():
    s = RecordStore()
    assert import_helipads_csv(s, 'name,lat,lon,notes\n') == 0
    assert s.records('helipads') == []


def test_empty_csv_is_rejected():
    with pytest.raises(ImportFormatError):
        parse_helipads_csv('\n\n')
