from __future__ import annotations
from typing import Optional
from flask import Blueprint, request, current_app
from stockroom import get_users
from stockroom.constants.roles import ADMINS
from stockroom.decorators.auth import require_roles
from stockroom.models.authz import User
from stockroom.utils.listing import COLLECTION_SCOPE, RESOURCE_SCOPE, make_cached_response, resource_etag, collection_etag
from stockroom.utils.validation import json_body, require_str, require_role

users_bp = Blueprint('users', __name__)


@users_bp.post('/create')
@require_roles(*ADMINS)
def create_user():
    draft = _user_draft(json_body())
    user = get_users().create(**draft)
    current_app.logger.info('User %s created with role %s', user.id, user.role.name)
    return user_json(user), 201


@users_bp.get('/list')
@require_roles(*ADMINS)
def list_users():
    first_name = request.args.get('firstName')
    last_name = request.args.get('lastName')
    rows = get_users().list(first_name=first_name, last_name=last_name)
    etag = collection_etag(user_filter_key(first_name, last_name), [user_fields(u) for u in rows])
    return make_cached_response([user_json(u) for u in rows], etag, scope=COLLECTION_SCOPE)


@users_bp.get('/list/<int:user_id>')
@require_roles(*ADMINS)
def get_user(user_id: int):
    user = get_users().get(user_id)
    return make_cached_response(user_json(user), resource_etag(user_fields(user)), scope=RESOURCE_SCOPE)


@users_bp.put('/update/<int:user_id>')
@require_roles(*ADMINS)
def update_user(user_id: int):
    store = get_users()
    store.get(user_id)  # 404 before body validation
    draft = _user_draft(json_body())
    user = store.update(user_id, **draft)
    current_app.logger.info('User %s updated', user.id)
    return user_json(user)


@users_bp.delete('/remove/<int:user_id>')
@require_roles(*ADMINS)
def delete_user(user_id: int):
    get_users().delete(user_id)
    current_app.logger.info('User %s removed', user_id)
    return {'status': 'deleted'}


def _user_draft(data: dict) -> dict:
    return {
        'first_name': require_str(data, 'firstName', 'Missing first name'),
        'last_name': require_str(data, 'lastName', 'Missing last name'),
        'email': require_str(data, 'email', 'Missing email'),
        'password': require_str(data, 'password', 'Missing password', strip=False),
        'role': require_role(data),
    }


def user_json(u: User) -> dict:
    return {
        'id': u.id,
        'firstName': u.first_name,
        'lastName': u.last_name,
        'email': u.email,
        'role': u.role.name,
    }


def user_fields(u: User) -> tuple:
    return (u.id, u.first_name, u.last_name, u.email, u.role.name)


def user_filter_key(first_name: Optional[str], last_name: Optional[str]) -> list:
    return [
        '*' if first_name is None else first_name.strip().casefold(),
        '*' if last_name is None else last_name.strip().casefold(),
    ]
