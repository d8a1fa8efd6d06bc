# helimarket/commands.py
"""
CLI commands: flask init-db, export-data, import-data, import-helipads
"""

import os
from datetime import datetime

import click

from helimarket.extensions import get_store
from models import db
from transfer import ImportFormatError, export_document, import_document, import_helipads_csv


def _read_text(path):
    with open(path, encoding='utf-8-sig') as f:
        return f.read()


def register_commands(app):

    @app.cli.command('init-db')
    def init_db():
        """Create database tables."""
        db.create_all()
        click.echo('Initialized the database.')

    @app.cli.command('export-data')
    @click.option('--output', '-o', default=None, help='Output file path (default: data/heli_market_export_YYYYMMDD_HHMMSS.json)')
    def export_data(output):
        """Write every collection to a JSON file."""
        if not output:
            timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
            output = os.path.join('data', f'heli_market_export_{timestamp}.json')

        output_dir = os.path.dirname(output)
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)

        with open(output, 'w', encoding='utf-8') as f:
            f.write(export_document(get_store()))
        click.echo(f'Export written: {output}')
        app.logger.info(f'Data exported by CLI: {output}')

    @app.cli.command('import-data')
    @click.argument('path', type=click.Path(exists=True, dir_okay=False))
    def import_data(path):
        """Replace the collections found in a JSON export file."""
        try:
            replaced = import_document(get_store(), _read_text(path))
        except ImportFormatError as e:
            raise click.ClickException(f'Failed to import: {e}')
        click.echo(f'Import successful: {", ".join(replaced) or "no collections found"}')
        app.logger.info(f'Data imported by CLI from {path}: {replaced}')

    @app.cli.command('import-helipads')
    @click.argument('path', type=click.Path(exists=True, dir_okay=False))
    def import_helipads(path):
        """Add helipads from a CSV file (header: name,lat,lon,notes)."""
        try:
            imported = import_helipads_csv(get_store(), _read_text(path))
        except ImportFormatError as e:
            raise click.ClickException(str(e))
        click.echo(f'Imported {imported} helipads')
        app.logger.info(f'Helipads imported by CLI from {path}: {imported}')
