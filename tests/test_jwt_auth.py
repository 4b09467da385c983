import datetime as dt

import jwt
import pytest

from app.utils import TokenError, create_access_token, create_refresh_token, decode_token
from app.version import API_PREFIX

ME = f'{API_PREFIX}/auth/me'


def test_access_token_allows_request(client, make_user):
    user = make_user()
    token = create_access_token(user.id, user.role.value)
    r = client.get(ME, headers={'Authorization': f'Bearer {token}'})
    assert r.status_code == 200


def test_missing_header_is_401(client):
    r = client.get(ME)
    assert r.status_code == 401
    assert r.get_json()['message'] == 'Authentication required'


def test_expired_access_token_blocked(app, client, make_user):
    user = make_user()
    past = dt.datetime.utcnow() - dt.timedelta(seconds=1)
    expired = jwt.encode(
        {'sub': str(user.id), 'role': 'USER', 'type': 'access', 'exp': past},
        app.config['JWT_SECRET'],
        algorithm='HS256',
    )
    r = client.get(ME, headers={'Authorization': f'Bearer {expired}'})
    assert r.status_code == 401
    assert r.get_json()['message'] == 'Token expired'


def test_tampered_token_blocked(client, make_user):
    user = make_user()
    forged = jwt.encode(
        {'sub': str(user.id), 'role': 'ADMIN', 'type': 'access',
         'exp': dt.datetime.utcnow() + dt.timedelta(minutes=5)},
        'some-other-secret',
        algorithm='HS256',
    )
    r = client.get(ME, headers={'Authorization': f'Bearer {forged}'})
    assert r.status_code == 401
    assert r.get_json()['message'] == 'Invalid token'


def test_refresh_token_cannot_authenticate_requests(client, make_user):
    user = make_user()
    token = create_refresh_token(user.id)
    r = client.get(ME, headers={'Authorization': f'Bearer {token}'})
    assert r.status_code == 401


def test_deactivated_user_token_rejected(client, make_user):
    user = make_user(is_active=False)
    token = create_access_token(user.id, user.role.value)
    r = client.get(ME, headers={'Authorization': f'Bearer {token}'})
    assert r.status_code == 401
    assert r.get_json()['message'] == 'Invalid token or user not active'


def test_decode_checks_token_type(app):
    token = create_refresh_token(5)
    assert decode_token(token, expected_type='refresh')['sub'] == '5'
    with pytest.raises(TokenError):
        decode_token(token, expected_type='access')
