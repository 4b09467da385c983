import pytest

from app.version import API_PREFIX
from models import db
from models.product import Product

URL = f'{API_PREFIX}/products'


def product_body(category_id, **overrides):
    body = {
        'categoryId': category_id,
        'nameAr': 'بقرة حلوب',
        'nameEn': 'Dairy Cow',
        'price': 1500.5,
        'age': '3 years',
        'weight': '450kg',
        'images': ['https://cdn.example.com/cow.jpg'],
        'specifications': [{'key': 'breed', 'valueAr': 'هولشتاين', 'valueEn': 'Holstein'}],
    }
    body.update(overrides)
    return body


@pytest.fixture
def vendor(make_vendor, make_category):
    return make_vendor(categories=[make_category('Cows')])


def create(client, vendor, auth_headers, **overrides):
    category_id = vendor.categories[0].category_id
    return client.post(URL, json=product_body(category_id, **overrides), headers=auth_headers(vendor.user))


def test_vendor_creates_unapproved_product(client, vendor, auth_headers):
    resp = create(client, vendor, auth_headers)
    assert resp.status_code == 201
    data = resp.get_json()['data']
    assert data['isApproved'] is False
    assert data['price'] == 1500.5
    assert data['images'] == ['https://cdn.example.com/cow.jpg']
    assert data['specifications'] == [{'key': 'breed', 'valueAr': 'هولشتاين', 'valueEn': 'Holstein'}]
    assert data['vendor']['id'] == vendor.id


def test_vendor_needs_matching_category(client, vendor, make_category, auth_headers):
    other = make_category('Fish')
    resp = client.post(URL, json=product_body(other.id), headers=auth_headers(vendor.user))
    assert resp.status_code == 403
    assert resp.get_json()['message'] == 'You are not authorized to add products in this category'


def test_negative_price_rejected(client, vendor, auth_headers):
    assert create(client, vendor, auth_headers, price=-1).status_code == 400


def test_public_sees_only_approved(client, vendor, admin, auth_headers):
    product_id = create(client, vendor, auth_headers).get_json()['data']['id']

    assert client.get(URL).get_json()['data']['products'] == []
    assert client.get(f'{URL}/{product_id}').status_code == 404
    assert client.get(f'{URL}/{product_id}', headers=auth_headers(vendor.user)).status_code == 200

    resp = client.put(f'{URL}/{product_id}/approve', json={'isApproved': True}, headers=auth_headers(admin))
    assert resp.status_code == 200
    assert resp.get_json()['data']['approvedAt'] is not None

    listed = client.get(URL).get_json()['data']
    assert [p['id'] for p in listed['products']] == [product_id]
    assert listed['pagination']['total'] == 1
    assert client.get(f'{URL}/{product_id}').status_code == 200


def test_admin_can_filter_by_approval(client, vendor, admin, auth_headers):
    create(client, vendor, auth_headers)
    resp = client.get(f'{URL}?isApproved=false', headers=auth_headers(admin))
    assert len(resp.get_json()['data']['products']) == 1
    # the filter is ignored for everybody else
    resp = client.get(f'{URL}?isApproved=false')
    assert resp.get_json()['data']['products'] == []


def test_filters_and_search(client, vendor, admin, auth_headers):
    for name in ('Dairy Cow', 'Beef Cow', 'Ram'):
        pid = create(client, vendor, auth_headers, nameEn=name).get_json()['data']['id']
        client.put(f'{URL}/{pid}/approve', json={'isApproved': True}, headers=auth_headers(admin))

    resp = client.get(f'{URL}?search=cow')
    assert sorted(p['nameEn'] for p in resp.get_json()['data']['products']) == ['Beef Cow', 'Dairy Cow']
    resp = client.get(f'{URL}?vendorId={vendor.id}&limit=2')
    data = resp.get_json()['data']
    assert len(data['products']) == 2
    assert data['pagination']['pages'] == 2


def test_update_resets_approval_and_replaces_specs(client, vendor, admin, auth_headers):
    pid = create(client, vendor, auth_headers).get_json()['data']['id']
    client.put(f'{URL}/{pid}/approve', json={'isApproved': True}, headers=auth_headers(admin))

    resp = client.put(
        f'{URL}/{pid}',
        json={'price': 1800, 'specifications': [{'key': 'milk', 'valueAr': '20 لتر', 'valueEn': '20 L'}]},
        headers=auth_headers(vendor.user),
    )
    assert resp.status_code == 200
    data = resp.get_json()['data']
    assert data['price'] == 1800
    assert data['isApproved'] is False
    assert [s['key'] for s in data['specifications']] == ['milk']
    assert data['nameEn'] == 'Dairy Cow'


def test_other_vendor_cannot_edit_or_delete(client, vendor, make_vendor, auth_headers):
    pid = create(client, vendor, auth_headers).get_json()['data']['id']
    intruder = make_vendor()
    assert client.put(f'{URL}/{pid}', json={'price': 1}, headers=auth_headers(intruder.user)).status_code == 404
    assert client.delete(f'{URL}/{pid}', headers=auth_headers(intruder.user)).status_code == 403


def test_soft_delete(client, vendor, admin, auth_headers):
    pid = create(client, vendor, auth_headers).get_json()['data']['id']
    assert client.delete(f'{URL}/{pid}', headers=auth_headers(vendor.user)).status_code == 200
    product = db.session.get(Product, pid)
    assert product is not None and product.is_active is False
    assert client.get(f'{URL}/{pid}', headers=auth_headers(admin)).status_code == 404
