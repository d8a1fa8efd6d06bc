# helimarket/blueprints/transfer/routes.py
"""
Import / export routes
"""

from io import BytesIO

from flask import current_app, jsonify, request, send_file

from helimarket.extensions import get_store
from transfer import ImportFormatError, export_document, import_document, import_helipads_csv
from . import transfer_bp


def _uploaded_text():
    """Text of the uploaded ``file`` field, or the raw request body."""
    upload = request.files.get('file')
    raw = upload.read() if upload is not None else request.get_data()
    return raw.decode('utf-8-sig', errors='replace')


@transfer_bp.route('/export')
def export():
    """Download every collection as a pretty-printed JSON file."""
    store = get_store()
    bio = BytesIO(export_document(store).encode('utf-8'))
    filename = current_app.config.get('EXPORT_FILENAME', 'heli_market_export.json')
    current_app.logger.info(f'Export: {store.counts()}')
    return send_file(bio, as_attachment=True, download_name=filename, mimetype='application/json')


@transfer_bp.route('/import/json', methods=['POST'])
def import_json():
    try:
        replaced = import_document(get_store(), _uploaded_text())
    except ImportFormatError as e:
        current_app.logger.warning(f'JSON import rejected: {e}')
        return jsonify({'success': False, 'error': 'Failed to import: invalid JSON'}), 400

    current_app.logger.info(f'JSON import replaced: {", ".join(replaced) or "nothing"}')
    return jsonify({'success': True, 'replaced': replaced, 'message': 'Import successful'})


@transfer_bp.route('/import/csv', methods=['POST'])
def import_csv():
    try:
        imported = import_helipads_csv(get_store(), _uploaded_text())
    except ImportFormatError as e:
        current_app.logger.warning(f'CSV import rejected: {e}')
        return jsonify({'success': False, 'error': str(e)}), 400

    current_app.logger.info(f'CSV import: {imported} helipads')
    return jsonify({'success': True, 'imported': imported, 'message': f'Imported {imported} helipads'})
