import os, sys, pytest
# Ensure backend directory is on path so 'stockroom' can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)
from stockroom import create_app
from seed_helpers import ADMIN_EMAIL, ADMIN_PASSWORD


@pytest.fixture()
def app_instance():
    # Fresh in-memory stores and a fresh signing key per test
    app = create_app({
        'TESTING': True,
        'DATABASE_URL': 'sqlite+pysqlite:///:memory:',
        'DEFAULT_ADMIN_EMAIL': ADMIN_EMAIL,
        'DEFAULT_ADMIN_PASSWORD': ADMIN_PASSWORD,
    })
    yield app


@pytest.fixture()
def client(app_instance):
    return app_instance.test_client()


@pytest.fixture()
def admin_client(app_instance):
    c = app_instance.test_client()
    resp = c.post('/auth/login', json={'email': ADMIN_EMAIL, 'password': ADMIN_PASSWORD})
    assert resp.status_code == 200, resp.get_json()
    return c
