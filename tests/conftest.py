"""
Pytest configuration and shared fixtures for radio button tests.
"""
import os
import tempfile

import pytest

from radio_buttons import create_app
from radio_buttons.extensions import db
from tests.models import OPTIONS_PATH, registry


@pytest.fixture(scope='function')
def app():
    """Create and configure a new app instance for each test."""
    # Create a temporary file to use as the database
    db_fd, db_path = tempfile.mkstemp()

    app = create_app(
        {
            'TESTING': True,
            'DATABASE_URL': f'sqlite:///{db_path}',
            'RADIO_BUTTONS_OPTIONS_PATH': str(OPTIONS_PATH),
        },
        registry=registry,
    )

    with app.app_context():
        db.create_all()

    yield app

    # Clean up database
    with app.app_context():
        db.session.remove()
        db.drop_all()

    os.close(db_fd)
    os.unlink(db_path)


@pytest.fixture
def runner(app):
    """A test runner for the app's Click commands."""
    return app.test_cli_runner()


@pytest.fixture
def app_context(app):
    """Provide an application context for tests that need it."""
    with app.app_context():
        yield
