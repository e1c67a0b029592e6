import pytest

from app import create_app
from db import database


@pytest.fixture
def app(tmp_path):
    app = create_app({
        "TESTING": True,
        "SECRET_KEY": "test",
        "SESSION_TYPE": None,
        "DATABASE_URL": f"sqlite:///{tmp_path / 'test.db'}",
    })
    yield app
    database.engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db_session(tmp_path):
    database.bind_engine(f"sqlite:///{tmp_path / 'results.db'}")
    database.init_database()
    with database.get_db() as db:
        yield db
    database.engine.dispose()
