import os

basedir = os.path.abspath(os.path.dirname(__file__))

class Config:
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL', f"sqlite:///{os.path.join(basedir, 'data', 'helimarket.db')}")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Single key under which the whole store is persisted
    STORAGE_KEY = os.environ.get('HELI_STORAGE_KEY', 'heli_market_data_v1')
    EXPORT_FILENAME = 'heli_market_export.json'


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
