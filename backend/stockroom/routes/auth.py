from flask import Blueprint, current_app, g, make_response
from flask_jwt_extended import set_access_cookies, unset_access_cookies
from stockroom import get_users
from stockroom.constants.roles import READERS
from stockroom.decorators.auth import require_roles
from stockroom.errors import Unauthenticated
from stockroom.routes.users import user_json
from stockroom.services.passwords import verify_password
from stockroom.services.policy import current_user
from stockroom.services.tokens import get_signer
from stockroom.utils.validation import json_body, require_str

auth_bp = Blueprint('auth', __name__)


@auth_bp.post('/login')
def login():
    data = json_body()
    email = require_str(data, 'email', 'Missing email')
    password = require_str(data, 'password', 'Missing password', strip=False)
    user = get_users().find_by_email(email)
    if not verify_password(user.password_hash if user else None, password):
        current_app.logger.warning('Failed login attempt')
        raise Unauthenticated('Invalid email or password.')
    token = get_signer().issue(user)
    g.auth_user = user
    g.clear_session_cookie = False
    current_app.logger.info('User %s logged in', user.id)
    resp = make_response({'id': user.id, 'email': user.email, 'role': user.role.name})
    set_access_cookies(resp, token)
    return resp


@auth_bp.post('/logout')
def logout():
    # Tokens are not revocable; dropping the cookie is the whole logout
    resp = make_response({'status': 'logged out'})
    unset_access_cookies(resp)
    return resp


@auth_bp.get('/profile')
@require_roles(*READERS)
def profile():
    user = current_user()
    if user is None:
        raise Unauthenticated('User not authenticated.')
    return user_json(user)
