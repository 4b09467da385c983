from app.version import API_PREFIX
from models import db
from models.message import Message, MessageType
from models.notification import Notification, NotificationType
from models.order import Order, OrderStatus
from models.product import Product
from models.user import Role, RoleChangeLog, User
from models.vendor import ApplicationStatus, Vendor, VendorApplication, VendorApplicationLog


def add_product(vendor, approved=True, price=100):
    product = Product(
        vendor_id=vendor.id,
        category_id=vendor.categories[0].category_id,
        name_ar='خروف',
        name_en='Sheep',
        price=price,
        is_approved=approved,
    )
    db.session.add(product)
    db.session.commit()
    return product


def test_dashboard_stats(client, admin, make_user, make_vendor, auth_headers):
    make_user()
    vendor = make_vendor()
    add_product(vendor, approved=False)
    add_product(vendor, approved=True)

    resp = client.get(f'{API_PREFIX}/admin/dashboard/stats', headers=auth_headers(admin))
    assert resp.status_code == 200
    stats = resp.get_json()['data']
    assert stats['totalUsers'] == 1
    assert stats['totalVendors'] == 1
    assert stats['totalProducts'] == 2
    assert stats['pendingProducts'] == 1
    assert stats['pendingApplications'] == 0
    assert stats['totalOrders'] == 0
    assert stats['totalCategories'] == 1


def test_pending_products(client, admin, make_vendor, auth_headers):
    vendor = make_vendor()
    pending = add_product(vendor, approved=False)
    add_product(vendor, approved=True)
    resp = client.get(f'{API_PREFIX}/admin/products/pending', headers=auth_headers(admin))
    assert [p['id'] for p in resp.get_json()['data']['products']] == [pending.id]


def test_admin_orders_filter(client, admin, make_user, make_vendor, auth_headers):
    buyer = make_user()
    vendor = make_vendor()
    db.session.add_all([
        Order(user_id=buyer.id, vendor_id=vendor.id, status=OrderStatus.PENDING, total_amount=10),
        Order(user_id=buyer.id, vendor_id=vendor.id, status=OrderStatus.COMPLETED, total_amount=20),
    ])
    db.session.commit()
    headers = auth_headers(admin)
    resp = client.get(f'{API_PREFIX}/admin/orders?status=COMPLETED', headers=headers)
    orders = resp.get_json()['data']['orders']
    assert [o['status'] for o in orders] == ['COMPLETED']
    assert client.get(f'{API_PREFIX}/admin/orders?status=LOST', headers=headers).status_code == 400


def test_create_user_with_role(client, admin, auth_headers):
    body = {'fullName': 'Second Admin', 'email': 'second@example.com', 'phone': '+201555555555',
            'password': 'secret123', 'role': 'ADMIN'}
    resp = client.post(f'{API_PREFIX}/admin/users', json=body, headers=auth_headers(admin))
    assert resp.status_code == 201
    assert resp.get_json()['data']['role'] == 'ADMIN'

    body.update(email='v@example.com', phone='+201666666666', role='VENDOR')
    resp = client.post(f'{API_PREFIX}/admin/users', json=body, headers=auth_headers(admin))
    assert resp.status_code == 400


def test_update_role_records_change(client, admin, make_user, auth_headers):
    user = make_user()
    resp = client.put(f'{API_PREFIX}/admin/users/{user.id}/role', json={'role': 'ADMIN'}, headers=auth_headers(admin))
    assert resp.status_code == 200
    assert resp.get_json()['data']['role'] == 'ADMIN'
    change = RoleChangeLog.query.filter_by(user_id=user.id).one()
    assert (change.old_role, change.new_role, change.reason) == ('USER', 'ADMIN', 'admin_role_change')


def test_cannot_change_own_role_or_delete_self(client, admin, auth_headers):
    headers = auth_headers(admin)
    assert client.put(f'{API_PREFIX}/admin/users/{admin.id}/role', json={'role': 'USER'},
                      headers=headers).status_code == 400
    assert client.delete(f'{API_PREFIX}/admin/users/{admin.id}', headers=headers).status_code == 400


def test_demoting_vendor_removes_profile(client, admin, make_vendor, auth_headers):
    vendor = make_vendor()
    user_id = vendor.user_id
    resp = client.put(f'{API_PREFIX}/admin/users/{user_id}/role', json={'role': 'USER'}, headers=auth_headers(admin))
    assert resp.status_code == 200
    assert Vendor.query.filter_by(user_id=user_id).count() == 0
    assert db.session.get(User, user_id).role is Role.USER
    assert VendorApplication.query.filter_by(user_id=user_id, status=ApplicationStatus.APPROVED).count() == 0
    change = RoleChangeLog.query.filter_by(user_id=user_id).order_by(RoleChangeLog.id.desc()).first()
    assert (change.old_role, change.new_role) == ('VENDOR', 'USER')


def test_delete_user(client, admin, make_user, auth_headers):
    user = make_user()
    resp = client.delete(f'{API_PREFIX}/admin/users/{user.id}', headers=auth_headers(admin))
    assert resp.status_code == 200
    assert db.session.get(User, user.id) is None
    assert client.delete(f'{API_PREFIX}/admin/users/{user.id}', headers=auth_headers(admin)).status_code == 404


def test_delete_vendor_demotes_and_retires_application(client, admin, make_vendor, auth_headers,
                                                      application_payload):
    vendor = make_vendor()
    add_product(vendor)
    user_id, vendor_id = vendor.user_id, vendor.id
    category_id = vendor.categories[0].category_id
    application_id = VendorApplication.query.filter_by(user_id=user_id).one().id

    resp = client.delete(f'{API_PREFIX}/admin/vendors/{vendor_id}', headers=auth_headers(admin))
    assert resp.status_code == 200
    db.session.expire_all()
    assert db.session.get(Vendor, vendor_id) is None
    assert Product.query.filter_by(vendor_id=vendor_id).count() == 0
    user = db.session.get(User, user_id)
    assert user.role is Role.USER
    assert user.vendor_profile is None
    assert VendorApplication.query.filter_by(user_id=user_id, status=ApplicationStatus.APPROVED).count() == 0
    assert VendorApplicationLog.query.filter_by(application_id=application_id).count() == 0
    assert client.delete(f'{API_PREFIX}/admin/vendors/{vendor_id}', headers=auth_headers(admin)).status_code == 404

    again = client.post(f'{API_PREFIX}/vendors/apply', json=application_payload([category_id]),
                        headers=auth_headers(user))
    assert again.status_code == 201
    assert again.get_json()['data']['status'] == 'PENDING'


def test_reports(client, admin, make_user, make_vendor, auth_headers):
    buyer = make_user()
    vendor = make_vendor()
    db.session.add_all([
        Order(user_id=buyer.id, vendor_id=vendor.id, status=OrderStatus.COMPLETED, total_amount=150),
        Order(user_id=buyer.id, vendor_id=vendor.id, status=OrderStatus.CANCELLED, total_amount=50),
    ])
    db.session.commit()
    headers = auth_headers(admin)

    resp = client.get(f'{API_PREFIX}/admin/reports?type=orders', headers=headers)
    assert resp.status_code == 200
    report = resp.get_json()['data']
    assert report['breakdown'] == {'COMPLETED': 1, 'CANCELLED': 1}
    assert report['total'] == 2
    assert report['summary']['totalRevenue'] == 150.0

    users = client.get(f'{API_PREFIX}/admin/reports?type=users', headers=headers).get_json()['data']
    assert users['breakdown'] == {'ADMIN': 1, 'USER': 1, 'VENDOR': 1}

    assert client.get(f'{API_PREFIX}/admin/reports?type=weather', headers=headers).status_code == 400
    assert client.get(f'{API_PREFIX}/admin/reports?type=users&startDate=yesterday',
                      headers=headers).status_code == 400


def test_admin_sends_notification(client, admin, make_user, auth_headers):
    user = make_user()
    body = {'userId': user.id, 'type': 'OFFER', 'titleAr': 'عرض', 'titleEn': 'Offer',
            'messageAr': 'خصم', 'messageEn': 'Discount'}
    resp = client.post(f'{API_PREFIX}/admin/notifications', json=body, headers=auth_headers(admin))
    assert resp.status_code == 201
    assert resp.get_json()['data']['userId'] == user.id


def test_admin_lists_messages(client, admin, make_user, make_vendor, auth_headers):
    buyer = make_user()
    vendor = make_vendor()
    db.session.add_all([
        Message(sender_id=buyer.id, receiver_id=vendor.user_id, content_ar='سؤال', content_en='Question',
                type=MessageType.INQUIRY),
        Message(sender_id=buyer.id, receiver_id=admin.id, content_ar='شكوى', content_en='Complaint',
                type=MessageType.COMPLAINT),
    ])
    db.session.commit()
    headers = auth_headers(admin)

    data = client.get(f'{API_PREFIX}/admin/messages', headers=headers).get_json()['data']
    assert data['pagination']['total'] == 2
    assert {m['sender']['id'] for m in data['messages']} == {buyer.id}

    complaints = client.get(f'{API_PREFIX}/admin/messages?type=COMPLAINT', headers=headers).get_json()['data']
    assert [m['receiver']['id'] for m in complaints['messages']] == [admin.id]
    assert client.get(f'{API_PREFIX}/admin/messages?type=SPAM', headers=headers).status_code == 400


def test_admin_lists_notifications_with_filters(client, admin, make_user, auth_headers):
    first, second = make_user(), make_user()
    db.session.add_all([
        Notification(user_id=first.id, type=NotificationType.ORDER, title_ar='طلب', title_en='Order',
                     message_ar='جديد', message_en='New'),
        Notification(user_id=first.id, type=NotificationType.OFFER, title_ar='عرض', title_en='Offer',
                     message_ar='خصم', message_en='Discount', is_read=True),
        Notification(user_id=second.id, type=NotificationType.OFFER, title_ar='عرض', title_en='Offer',
                     message_ar='خصم', message_en='Discount'),
    ])
    db.session.commit()
    headers = auth_headers(admin)
    url = f'{API_PREFIX}/admin/notifications'

    everything = client.get(url, headers=headers).get_json()['data']
    assert everything['pagination']['total'] == 3
    assert all(n['user']['id'] in (first.id, second.id) for n in everything['notifications'])

    offers = client.get(f'{url}?type=OFFER&isRead=false', headers=headers).get_json()['data']['notifications']
    assert [n['userId'] for n in offers] == [second.id]
    mine = client.get(f'{url}?userId={first.id}', headers=headers).get_json()['data']['notifications']
    assert {n['type'] for n in mine} == {'ORDER', 'OFFER'}
    assert client.get(f'{url}?type=PIGEON', headers=headers).status_code == 400


def test_notification_listing_is_admin_only(client, make_user, auth_headers):
    user = make_user()
    assert client.get(f'{API_PREFIX}/admin/notifications', headers=auth_headers(user)).status_code == 403
    assert client.get(f'{API_PREFIX}/admin/messages').status_code == 401


def admin_product_body(vendor, **overrides):
    body = {
        'vendorId': vendor.id,
        'categoryId': vendor.categories[0].category_id,
        'nameAr': 'ماعز',
        'nameEn': 'Goat',
        'price': 800,
        'specifications': [{'key': 'breed', 'valueAr': 'شامي', 'valueEn': 'Damascus'}],
    }
    body.update(overrides)
    return body


def test_admin_creates_approved_product(client, admin, make_vendor, auth_headers):
    vendor = make_vendor()
    resp = client.post(f'{API_PREFIX}/admin/products', json=admin_product_body(vendor), headers=auth_headers(admin))
    assert resp.status_code == 201
    body = resp.get_json()
    assert body['message'] == 'Product created successfully'
    product = body['data']
    assert product['vendorId'] == vendor.id
    assert product['isApproved'] is True
    assert product['approvedAt'] is not None
    assert product['specifications'] == [{'key': 'breed', 'valueAr': 'شامي', 'valueEn': 'Damascus'}]

    listed = client.get(f'{API_PREFIX}/products?vendorId={vendor.id}').get_json()['data']['products']
    assert [p['id'] for p in listed] == [product['id']]


def test_admin_create_product_rejects_unknown_vendor_or_category(client, admin, make_vendor, auth_headers):
    vendor = make_vendor()
    headers = auth_headers(admin)
    url = f'{API_PREFIX}/admin/products'
    resp = client.post(url, json=admin_product_body(vendor, vendorId=9999), headers=headers)
    assert resp.status_code == 404
    assert resp.get_json()['message'] == 'Vendor not found'
    assert client.post(url, json=admin_product_body(vendor, categoryId=9999), headers=headers).status_code == 404
    assert client.post(url, json=admin_product_body(vendor, price=-1), headers=headers).status_code == 400
    assert Product.query.count() == 0


def test_admin_update_keeps_product_published(client, admin, make_vendor, auth_headers):
    vendor = make_vendor()
    product = add_product(vendor, approved=False)
    body = {'price': 950, 'specifications': [{'key': 'age', 'valueAr': 'سنتان', 'valueEn': 'Two years'}]}

    resp = client.put(f'{API_PREFIX}/admin/products/{product.id}', json=body, headers=auth_headers(admin))
    assert resp.status_code == 200
    assert resp.get_json()['message'] == 'Product updated successfully'
    updated = resp.get_json()['data']
    assert updated['price'] == 950.0
    assert updated['isApproved'] is True
    assert updated['approvedAt'] is not None
    assert [s['key'] for s in updated['specifications']] == ['age']
    assert updated['nameEn'] == 'Sheep'

    missing = client.put(f'{API_PREFIX}/admin/products/9999', json=body, headers=auth_headers(admin))
    assert missing.status_code == 404
    assert missing.get_json()['message'] == 'Product not found'
