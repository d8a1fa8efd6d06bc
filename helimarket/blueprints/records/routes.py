# helimarket/blueprints/records/routes.py
"""
Records routes - JSON views over the five record collections
"""

from flask import abort, current_app, jsonify, request

from helimarket.extensions import get_store
from store import FIELDS, REQUIRED_FIELD
from utils import filter_records, parse_coordinate
from . import records_bp

KINDS = 'any(operators, helipads, routes, notes, tasks)'

LABELS = {
    'operators': 'Operator',
    'helipads': 'Helipad',
    'routes': 'Route',
    'notes': 'Note',
    'tasks': 'Task',
}

SAMPLE_OPERATOR = {
    'name': 'Pawan Hans',
    'base': 'Multiple',
    'services': 'Charter, Heli-taxi',
    'phone': '',
    'email': '',
}


def _request_data():
    """JSON body if one was sent, form data otherwise."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form


def _clean(kind, name, value):
    if kind == 'helipads' and name in ('lat', 'lon'):
        return parse_coordinate(value)
    if value is None:
        return ''
    return value.strip() if isinstance(value, str) else value


def _collect_fields(kind, data, partial=False):
    fields = {}
    for name in FIELDS[kind]:
        if partial and name not in data:
            continue
        fields[name] = _clean(kind, name, data.get(name))
    return fields


def _missing_required(kind, fields):
    required = REQUIRED_FIELD[kind]
    if required in fields and not fields[required]:
        return jsonify({'success': False, 'error': f'{required} required'}), 400
    return None


def _with_contact(record):
    return dict(record, contact=record.get('email') or record.get('phone') or '')


# Routes
@records_bp.route('/')
def index():
    store = get_store()
    query = request.args.get('q', '').strip()
    operators = filter_records(store.records('operators'), query, REQUIRED_FIELD['operators'])
    return jsonify({
        'counts': store.counts(),
        'operators': operators[:8],
        'notes': store.records('notes')[:6],
        'tasks': store.records('tasks')[:6],
    })


@records_bp.route(f'/<{KINDS}:kind>')
def list_records(kind):
    store = get_store()
    query = request.args.get('q', '').strip()
    records = filter_records(store.records(kind), query, REQUIRED_FIELD[kind])
    return jsonify({'kind': kind, 'query': query, 'count': len(records), 'records': records})


@records_bp.route(f'/<{KINDS}:kind>/<record_id>')
def record_detail(kind, record_id):
    record = get_store().get(kind, record_id)
    if record is None:
        abort(404)
    if kind == 'operators':
        record = _with_contact(record)
    return jsonify(record)


@records_bp.route(f'/<{KINDS}:kind>', methods=['POST'])
def add_record(kind):
    fields = _collect_fields(kind, _request_data())
    error = _missing_required(kind, fields)
    if error is not None:
        return error

    try:
        record_id = get_store().add(kind, fields)
    except Exception:
        current_app.logger.exception(f'Failed to save new {kind} record')
        return jsonify({'success': False, 'error': 'Failed to save record'}), 500

    label = LABELS[kind]
    current_app.logger.info(f'{label} created: {record_id}')
    return jsonify({'success': True, 'record': get_store().get(kind, record_id)}), 201


@records_bp.route('/operators/sample', methods=['POST'])
def add_sample_operator():
    record_id = get_store().add('operators', SAMPLE_OPERATOR)
    current_app.logger.info(f'Sample operator created: {record_id}')
    return jsonify({'success': True, 'record': get_store().get('operators', record_id)}), 201


@records_bp.route('/operators/<record_id>/edit', methods=['POST'])
def edit_operator(record_id):
    store = get_store()
    if store.get('operators', record_id) is None:
        abort(404)

    patch = _collect_fields('operators', _request_data(), partial=True)
    error = _missing_required('operators', patch)
    if error is not None:
        return error

    store.update_operator(record_id, patch)
    current_app.logger.info(f'Operator updated: {record_id} fields={sorted(patch)}')
    return jsonify({'success': True, 'record': _with_contact(store.get('operators', record_id))})


@records_bp.route('/tasks/<record_id>/toggle', methods=['POST'])
def toggle_task(record_id):
    store = get_store()
    if not store.toggle_task(record_id):
        abort(404)
    task = store.get('tasks', record_id)
    current_app.logger.info(f'Task toggled: {record_id} done={task["done"]}')
    return jsonify({'success': True, 'record': task})


@records_bp.route(f'/<{KINDS}:kind>/<record_id>/delete', methods=['POST'])
def delete_record(kind, record_id):
    removed = get_store().remove(kind, record_id)
    if removed:
        current_app.logger.info(f'{LABELS[kind]} deleted: {record_id}')
    return jsonify({'success': True, 'removed': removed})


@records_bp.route(f'/<{KINDS}:kind>/clear', methods=['POST'])
def clear_records(kind):
    store = get_store()
    cleared = len(store.records(kind))
    store.clear(kind)
    current_app.logger.info(f'Cleared {cleared} {kind}')
    return jsonify({'success': True, 'cleared': cleared})
