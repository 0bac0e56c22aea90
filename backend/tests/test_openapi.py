def test_openapi_spec_available(client):
    resp = client.get('/openapi.json')
    assert resp.status_code == 200
    body = resp.get_json()
    assert body['openapi'].startswith('3.')
    for path in ('/auth/login', '/auth/logout', '/auth/profile', '/users/create', '/users/list',
                 '/users/list/{user_id}', '/users/update/{user_id}', '/users/remove/{user_id}',
                 '/inventory/create', '/inventory/list', '/inventory/list/{item_id}',
                 '/inventory/update/{item_id}', '/inventory/remove/{item_id}'):
        assert path in body['paths'], path


def test_required_roles_documented(client):
    paths = client.get('/openapi.json').get_json()['paths']
    assert paths['/auth/login']['post']['x-required-roles'] == []
    assert paths['/users/list']['get']['x-required-roles'] == ['ADMIN']
    assert paths['/inventory/create']['post']['x-required-roles'] == ['WRITE', 'ADMIN']
    assert paths['/inventory/list']['get']['x-required-roles'] == ['READ', 'WRITE', 'ADMIN']


def test_list_caching_headers_documented(client):
    paths = client.get('/openapi.json').get_json()['paths']
    for p in ('/users/list', '/users/list/{user_id}', '/inventory/list', '/inventory/list/{item_id}'):
        get_op = paths[p]['get']
        assert '304' in get_op['responses'], p
        for h in ('ETag', 'Cache-Control'):
            assert h in get_op['responses']['200']['headers'], f'{p} missing header doc {h}'
    param = paths['/inventory/list/{item_id}']['get']['parameters'][0]
    assert param == {'name': 'item_id', 'in': 'path', 'required': True, 'schema': {'type': 'integer'}}


def test_docs_page(client):
    resp = client.get('/docs')
    assert resp.status_code == 200
    assert b'redoc' in resp.data


def test_cache_scope_documented(client):
    paths = client.get('/openapi.json').get_json()['paths']
    single = paths['/inventory/list/{item_id}']['get']
    listing = paths['/users/list']['get']
    assert single['x-cache-scope'] == 'public'
    assert listing['x-cache-scope'] == 'private'
    cc = listing['responses']['200']['headers']['Cache-Control']['schema']
    assert cc['example'] == 'private, max-age=0, must-revalidate'


def test_documented_scope_matches_served_header(admin_client):
    admin_client.post('/inventory/create', json={'name': 'bolt', 'num': 1})
    paths = admin_client.get('/openapi.json').get_json()['paths']
    for path, url in (('/inventory/list', '/inventory/list'), ('/inventory/list/{item_id}', '/inventory/list/1')):
        documented = paths[path]['get']['responses']['200']['headers']['Cache-Control']['schema']['example']
        assert admin_client.get(url).headers['Cache-Control'] == documented
