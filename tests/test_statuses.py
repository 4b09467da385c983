from app.version import API_PREFIX

URL = f'{API_PREFIX}/statuses'


def offer(**extra):
    body = {'image': 'https://cdn.example.com/offer.jpg', 'titleEn': 'Eid offer', 'price': 300}
    body.update(extra)
    return body


def test_vendor_publishes_and_public_lists(client, make_vendor, auth_headers):
    vendor = make_vendor()
    resp = client.post(URL, json=offer(), headers=auth_headers(vendor.user))
    assert resp.status_code == 201
    status = resp.get_json()['data']
    assert status['vendorId'] == vendor.id
    assert status['price'] == 300.0

    listed = client.get(f'{URL}?vendorId={vendor.id}').get_json()['data']['statuses']
    assert [s['id'] for s in listed] == [status['id']]
    assert client.get(f'{URL}/{status["id"]}').status_code == 200


def test_admin_must_name_vendor(client, admin, make_vendor, auth_headers):
    vendor = make_vendor()
    assert client.post(URL, json=offer(), headers=auth_headers(admin)).status_code == 400
    resp = client.post(URL, json=offer(vendorId=vendor.id), headers=auth_headers(admin))
    assert resp.status_code == 201
    assert resp.get_json()['data']['vendorId'] == vendor.id


def test_validation_and_roles(client, make_user, make_vendor, auth_headers):
    vendor = make_vendor()
    assert client.post(URL, json={'titleEn': 'no image'}, headers=auth_headers(vendor.user)).status_code == 400
    assert client.post(URL, json=offer(price=-5), headers=auth_headers(vendor.user)).status_code == 400
    assert client.post(URL, json=offer(), headers=auth_headers(make_user())).status_code == 403


def test_only_owner_or_admin_modifies(client, admin, make_vendor, auth_headers):
    owner, other = make_vendor(), make_vendor()
    status_id = client.post(URL, json=offer(), headers=auth_headers(owner.user)).get_json()['data']['id']

    assert client.put(f'{URL}/{status_id}', json={'titleEn': 'x'}, headers=auth_headers(other.user)).status_code == 403
    resp = client.put(f'{URL}/{status_id}', json={'titleEn': 'Updated'}, headers=auth_headers(owner.user))
    assert resp.get_json()['data']['titleEn'] == 'Updated'

    assert client.delete(f'{URL}/{status_id}', headers=auth_headers(admin)).status_code == 200
    assert client.get(f'{URL}/{status_id}').status_code == 404
    assert client.get(URL).get_json()['data']['statuses'] == []
