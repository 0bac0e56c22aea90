from stockroom.constants.roles import Role
from seed_helpers import create_user, login_client


def test_create_item(admin_client):
    resp = admin_client.post('/inventory/create', json={'name': 'bolt', 'num': 10})
    assert resp.status_code == 201
    assert resp.get_json() == {'id': 1, 'name': 'bolt', 'num': 10}


def test_create_item_name_collision_is_case_insensitive(admin_client):
    assert admin_client.post('/inventory/create', json={'name': 'bolt', 'num': 10}).status_code == 201
    resp = admin_client.post('/inventory/create', json={'name': 'Bolt', 'num': 1})
    assert resp.status_code == 409
    assert resp.get_json()['error']['detail'] == 'Item with the same name already exists.'


def test_create_item_validation(admin_client):
    assert admin_client.post('/inventory/create', json={'num': 1}).status_code == 400
    assert admin_client.post('/inventory/create', json={'name': '  ', 'num': 1}).status_code == 400
    assert admin_client.post('/inventory/create', json={'name': 'x', 'num': -1}).status_code == 400
    assert admin_client.post('/inventory/create', json={'name': 'x', 'num': True}).status_code == 400
    assert admin_client.post('/inventory/create', json={'name': 'x', 'num': '3'}).status_code == 400
    assert admin_client.post('/inventory/create', json={'name': 'x'}).status_code == 400


def test_list_items_all_and_filtered(admin_client):
    for name, num in (('bolt', 1), ('nut', 2), ('washer', 3)):
        admin_client.post('/inventory/create', json={'name': name, 'num': num})
    everything = admin_client.get('/inventory/list')
    assert [i['name'] for i in everything.get_json()] == ['bolt', 'nut', 'washer']
    assert everything.headers['Cache-Control'] == 'private, max-age=0, must-revalidate'
    explicit_all = admin_client.get('/inventory/list?name=ALL')
    assert explicit_all.get_json() == everything.get_json()
    assert explicit_all.headers['ETag'] == everything.headers['ETag']
    only_nut = admin_client.get('/inventory/list?name=NUT')
    assert only_nut.get_json() == [{'id': 2, 'name': 'nut', 'num': 2}]
    assert only_nut.headers['ETag'] != everything.headers['ETag']


def test_list_items_conditional(admin_client):
    admin_client.post('/inventory/create', json={'name': 'bolt', 'num': 1})
    first = admin_client.get('/inventory/list')
    etag = first.headers['ETag']
    assert admin_client.get('/inventory/list', headers={'If-None-Match': etag}).status_code == 304
    admin_client.put('/inventory/update/1', json={'name': 'bolt', 'num': 2})
    changed = admin_client.get('/inventory/list', headers={'If-None-Match': etag})
    assert changed.status_code == 200
    assert changed.headers['ETag'] != etag


def test_get_item_conditional_and_head(admin_client):
    admin_client.post('/inventory/create', json={'name': 'bolt', 'num': 1})
    resp = admin_client.get('/inventory/list/1')
    assert resp.status_code == 200
    assert resp.headers['Cache-Control'] == 'public, max-age=0, must-revalidate'
    etag = resp.headers['ETag']
    head = admin_client.head('/inventory/list/1')
    assert head.status_code == 200
    assert head.data == b''
    assert head.headers['ETag'] == etag
    head_304 = admin_client.head('/inventory/list/1', headers={'If-None-Match': etag})
    assert head_304.status_code == 304
    assert admin_client.get('/inventory/list/7').status_code == 404


def test_update_item(admin_client):
    admin_client.post('/inventory/create', json={'name': 'bolt', 'num': 1})
    admin_client.post('/inventory/create', json={'name': 'nut', 'num': 1})
    resp = admin_client.put('/inventory/update/1', json={'name': 'BOLT', 'num': 5})
    assert resp.status_code == 200
    assert resp.get_json() == {'id': 1, 'name': 'BOLT', 'num': 5}
    assert admin_client.put('/inventory/update/1', json={'name': 'Nut', 'num': 5}).status_code == 409
    assert admin_client.put('/inventory/update/9', json={'name': 'x', 'num': 5}).status_code == 404
    assert admin_client.put('/inventory/update/1', json={'name': 'x', 'num': -5}).status_code == 400


def test_delete_item_and_ids_not_reused(admin_client):
    admin_client.post('/inventory/create', json={'name': 'bolt', 'num': 1})
    assert admin_client.delete('/inventory/remove/1').status_code == 200
    assert admin_client.delete('/inventory/remove/1').status_code == 404
    resp = admin_client.post('/inventory/create', json={'name': 'bolt', 'num': 1})
    assert resp.get_json()['id'] == 2


def test_reader_can_list_but_not_mutate(app_instance, admin_client):
    admin_client.post('/inventory/create', json={'name': 'bolt', 'num': 1})
    create_user(app_instance, 'r@example.com', role=Role.READ)
    reader = login_client(app_instance, 'r@example.com')
    assert reader.get('/inventory/list').status_code == 200
    assert reader.get('/inventory/list/1').status_code == 200
    assert reader.put('/inventory/update/1', json={'name': 'bolt', 'num': 3}).status_code == 403
    assert reader.delete('/inventory/remove/1').status_code == 403


def test_amount_beyond_storage_range_is_rejected(admin_client):
    resp = admin_client.post('/inventory/create', json={'name': 'big', 'num': 10**20})
    assert resp.status_code == 400
    assert resp.get_json()['error']['detail'] == 'Incorrect amount'
    assert admin_client.post('/inventory/create', json={'name': 'max', 'num': 2**63 - 1}).status_code == 201
    assert admin_client.put('/inventory/update/1', json={'name': 'max', 'num': 2**63}).status_code == 400


def test_id_beyond_storage_range_is_not_found(admin_client):
    huge = 99999999999999999999
    assert admin_client.get(f'/inventory/list/{huge}').status_code == 404
    assert admin_client.put(f'/inventory/update/{huge}', json={'name': 'x', 'num': 1}).status_code == 404
    resp = admin_client.delete(f'/inventory/remove/{huge}')
    assert resp.status_code == 404
    assert resp.get_json()['error']['detail'] == 'Item not found.'
