from __future__ import annotations
from typing import Optional
from flask import Blueprint, request, current_app
from stockroom import get_items
from stockroom.constants.roles import READERS, WRITERS
from stockroom.decorators.auth import require_roles
from stockroom.models.item import Item
from stockroom.utils.listing import COLLECTION_SCOPE, RESOURCE_SCOPE, make_cached_response, resource_etag, collection_etag
from stockroom.utils.validation import json_body, require_str, require_non_negative_int

inv_bp = Blueprint('inventory', __name__)


@inv_bp.post('/create')
@require_roles(*WRITERS)
def create_item():
    draft = _item_draft(json_body())
    item = get_items().create(**draft)
    current_app.logger.info('Item %s created', item.id)
    return _item_json(item), 201


@inv_bp.get('/list')
@require_roles(*READERS)
def list_items():
    name = request.args.get('name')
    rows = get_items().list(name=name)
    etag = collection_etag(item_filter_key(name), [_item_fields(i) for i in rows])
    return make_cached_response([_item_json(i) for i in rows], etag, scope=COLLECTION_SCOPE)


@inv_bp.get('/list/<int:item_id>')
@require_roles(*READERS)
def get_item(item_id: int):
    item = get_items().get(item_id)
    return make_cached_response(_item_json(item), resource_etag(_item_fields(item)), scope=RESOURCE_SCOPE)


@inv_bp.put('/update/<int:item_id>')
@require_roles(*WRITERS)
def update_item(item_id: int):
    store = get_items()
    store.get(item_id)
    draft = _item_draft(json_body())
    item = store.update(item_id, **draft)
    current_app.logger.info('Item %s updated', item.id)
    return _item_json(item)


@inv_bp.delete('/remove/<int:item_id>')
@require_roles(*WRITERS)
def delete_item(item_id: int):
    get_items().delete(item_id)
    current_app.logger.info('Item %s removed', item_id)
    return {'status': 'deleted'}


def _item_draft(data: dict) -> dict:
    return {
        'name': require_str(data, 'name', "Missing item's name"),
        'num': require_non_negative_int(data, 'num', 'Incorrect amount'),
    }


def _item_json(i: Item) -> dict:
    return {'id': i.id, 'name': i.name, 'num': i.num}


def _item_fields(i: Item) -> tuple:
    return (i.id, i.name, i.num)


def item_filter_key(name: Optional[str]) -> str:
    if name is None or name.casefold() == 'all':
        return 'all'
    return name.casefold()
