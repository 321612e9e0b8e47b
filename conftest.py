import os

# Must be set before the app module (and config) is imported
os.environ['DATABASE_URL'] = 'sqlite:///:memory:'
os.environ.setdefault('FLASK_DEBUG', '0')

import pytest

from app import app as flask_app
from data.seed_data import seed_database


@pytest.fixture
def app():
    flask_app.config.update(TESTING=True)
    with flask_app.app_context():
        yield flask_app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def seeded(app):
    seed_database()
    return app
