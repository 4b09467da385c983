from app.version import API_PREFIX

URL = f'{API_PREFIX}/categories'


def test_public_list_shows_active_with_counts(client, make_category, make_vendor):
    cows = make_category('Cows')
    make_category('Hidden', is_active=False)
    make_vendor(categories=[cows])

    resp = client.get(URL)
    assert resp.status_code == 200
    items = resp.get_json()['data']
    assert [c['nameEn'] for c in items] == ['Cows']
    assert items[0]['_count'] == {'vendors': 1, 'products': 0}


def test_inactive_category_visible_to_admin_only(client, admin, make_category, auth_headers):
    hidden = make_category(is_active=False)
    assert client.get(f'{URL}/{hidden.id}').status_code == 404
    resp = client.get(f'{URL}/{hidden.id}', headers=auth_headers(admin))
    assert resp.status_code == 200
    assert resp.get_json()['data']['isActive'] is False


def test_admin_crud(client, admin, auth_headers):
    headers = auth_headers(admin)
    resp = client.post(URL, json={'nameAr': 'إبل', 'nameEn': 'Camels', 'icon': '🐪'}, headers=headers)
    assert resp.status_code == 201
    category_id = resp.get_json()['data']['id']

    resp = client.put(f'{URL}/{category_id}', json={'nameEn': 'Camel'}, headers=headers)
    assert resp.status_code == 200
    assert resp.get_json()['data']['nameEn'] == 'Camel'
    assert resp.get_json()['data']['nameAr'] == 'إبل'

    assert client.delete(f'{URL}/{category_id}', headers=headers).status_code == 200
    assert client.get(f'{URL}/{category_id}').status_code == 404


def test_category_validation_and_permissions(client, admin, make_user, auth_headers):
    assert client.post(URL, json={'nameEn': 'x'}, headers=auth_headers(admin)).status_code == 400
    assert client.post(URL, json={'nameAr': 'x', 'nameEn': 'x'}, headers=auth_headers(make_user())).status_code == 403
    assert client.put(f'{URL}/999', json={'nameEn': 'x'}, headers=auth_headers(admin)).status_code == 404
