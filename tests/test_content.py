from app.version import API_PREFIX

SLIDERS = f'{API_PREFIX}/sliders'
CONTENT = f'{API_PREFIX}/app-content'


def slider(**extra):
    body = {'image': 'https://cdn.example.com/s.jpg', 'titleAr': 'عنوان', 'titleEn': 'Title'}
    body.update(extra)
    return body


def test_sliders_ordering_and_visibility(client, admin, auth_headers):
    headers = auth_headers(admin)
    second = client.post(SLIDERS, json=slider(titleEn='Second', order=2), headers=headers).get_json()['data']
    client.post(SLIDERS, json=slider(titleEn='First', order=1), headers=headers)
    client.put(f'{SLIDERS}/{second["id"]}', json={'isActive': False}, headers=headers)

    public = client.get(SLIDERS).get_json()['data']
    assert [s['titleEn'] for s in public] == ['First']
    everything = client.get(f'{SLIDERS}/all', headers=headers).get_json()['data']
    assert [s['titleEn'] for s in everything] == ['First', 'Second']


def test_slider_delete_and_permissions(client, admin, make_user, auth_headers):
    headers = auth_headers(admin)
    created = client.post(SLIDERS, json=slider(), headers=headers)
    assert created.status_code == 201
    slider_id = created.get_json()['data']['id']
    assert client.post(SLIDERS, json=slider(), headers=auth_headers(make_user())).status_code == 403
    assert client.post(SLIDERS, json={'image': 'x'}, headers=headers).status_code == 400
    assert client.delete(f'{SLIDERS}/{slider_id}', headers=headers).status_code == 200
    assert client.delete(f'{SLIDERS}/{slider_id}', headers=headers).status_code == 404


def test_app_content_upsert(client, admin, auth_headers):
    headers = auth_headers(admin)
    assert client.get(f'{CONTENT}/about').status_code == 404

    resp = client.put(f'{CONTENT}/ABOUT', json={'contentAr': 'عن التطبيق', 'contentEn': 'About us'}, headers=headers)
    assert resp.status_code == 200
    assert resp.get_json()['data']['updatedBy'] == admin.id

    client.put(f'{CONTENT}/about', json={'contentAr': 'محدث', 'contentEn': 'Updated'}, headers=headers)
    resp = client.get(f'{CONTENT}/about')
    assert resp.get_json()['data']['contentEn'] == 'Updated'
    assert len(client.get(CONTENT, headers=headers).get_json()['data']) == 1


def test_unknown_content_type(client, admin, auth_headers):
    assert client.get(f'{CONTENT}/faq').status_code == 404
    assert client.put(f'{CONTENT}/faq', json={'contentAr': 'x', 'contentEn': 'y'},
                      headers=auth_headers(admin)).status_code == 404
