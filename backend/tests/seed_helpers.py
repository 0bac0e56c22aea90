"""Shared seeding helpers for tests (imported, not collected)."""
from stockroom.constants.roles import Role

ADMIN_EMAIL = 'admin@example.com'
ADMIN_PASSWORD = 'admin'


def create_user(app, email, password='pw', role=Role.READ, first_name='Test', last_name='User'):
    users = app.extensions['stockroom.users']
    return users.create(first_name=first_name, last_name=last_name, email=email, password=password, role=role)


def login_client(app, email, password='pw'):
    c = app.test_client()
    resp = c.post('/auth/login', json={'email': email, 'password': password})
    assert resp.status_code == 200, resp.get_json()
    return c


def cleared_session_cookie(resp) -> bool:
    return any(h.startswith('session=;') for h in resp.headers.getlist('Set-Cookie'))
