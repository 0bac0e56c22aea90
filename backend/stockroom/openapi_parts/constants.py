from typing import Any, Dict

from stockroom.utils.listing import COLLECTION_SCOPE, RESOURCE_SCOPE

PUBLIC_USER = {
    "type": "object",
    "properties": {
        "id": {"type": "integer"},
        "firstName": {"type": "string"},
        "lastName": {"type": "string"},
        "email": {"type": "string"},
        "role": {"type": "string", "enum": ["UNKNOWN", "READ", "WRITE", "ADMIN"]},
    },
    "required": ["id", "firstName", "lastName", "email", "role"],
}

USER_DRAFT = {
    "type": "object",
    "properties": {
        "firstName": {"type": "string"},
        "lastName": {"type": "string"},
        "email": {"type": "string"},
        "password": {"type": "string"},
        "role": {"oneOf": [{"type": "string"}, {"type": "integer", "minimum": 0, "maximum": 3}]},
    },
    "required": ["firstName", "lastName", "email", "password", "role"],
}

ITEM = {
    "type": "object",
    "properties": {"id": {"type": "integer"}, "name": {"type": "string"}, "num": {"type": "integer", "minimum": 0}},
    "required": ["id", "name", "num"],
}

ITEM_DRAFT = {
    "type": "object",
    "properties": {"name": {"type": "string"}, "num": {"type": "integer", "minimum": 0}},
    "required": ["name", "num"],
}

CREDENTIALS = {
    "type": "object",
    "properties": {"email": {"type": "string"}, "password": {"type": "string"}},
    "required": ["email", "password"],
}

ERROR = {
    "type": "object",
    "properties": {
        "error": {
            "type": "object",
            "properties": {"status": {"type": "integer"}, "title": {"type": "string"}, "detail": {"type": "string"}},
        }
    },
    "required": ["error"],
}

SCHEMAS: Dict[str, Any] = {
    "PublicUser": PUBLIC_USER,
    "UserDraft": USER_DRAFT,
    "Item": ITEM,
    "ItemDraft": ITEM_DRAFT,
    "Credentials": CREDENTIALS,
    "Error": ERROR,
}

# endpoint -> (response schema, is list, cache scope)
CACHEABLE = {
    "users.list_users": ("PublicUser", True, COLLECTION_SCOPE),
    "users.get_user": ("PublicUser", False, RESOURCE_SCOPE),
    "inventory.list_items": ("Item", True, COLLECTION_SCOPE),
    "inventory.get_item": ("Item", False, RESOURCE_SCOPE),
}

REQUEST_BODIES = {
    "auth.login": "Credentials",
    "users.create_user": "UserDraft",
    "users.update_user": "UserDraft",
    "inventory.create_item": "ItemDraft",
    "inventory.update_item": "ItemDraft",
}

RESPONSE_BODIES = {
    "auth.profile": "PublicUser",
    "users.create_user": "PublicUser",
    "users.update_user": "PublicUser",
    "inventory.create_item": "Item",
    "inventory.update_item": "Item",
}

CREATED = {"users.create_user", "inventory.create_item"}

CONFLICTS = {"users.create_user", "users.update_user", "inventory.create_item", "inventory.update_item"}

QUERY_PARAMS = {
    "users.list_users": ["firstName", "lastName"],
    "inventory.list_items": ["name"],
}
