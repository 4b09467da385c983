import os
import sys
import itertools
import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from models import db
from models.category import Category
from models.user import Role, User

_seq = itertools.count(1)


@pytest.fixture(scope='session')
def app_instance():
    os.environ.setdefault('APP_ENV', 'testing')
    from app import create_app
    from app.config import TestingConfig
    app = create_app(TestingConfig)
    app.config.update(
        TESTING=True,
        SQLALCHEMY_DATABASE_URI='sqlite:///:memory:',
        SQLALCHEMY_TRACK_MODIFICATIONS=False
    )
    return app


@pytest.fixture(scope='function')
def app(app_instance):
    with app_instance.app_context():
        db.drop_all()
        db.create_all()
        yield app_instance
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    from app.services.identity import hash_password

    def _make(role=Role.USER, password='secret123', full_name=None, is_active=True):
        n = next(_seq)
        user = User(
            full_name=full_name or f'User {n}',
            email=f'user{n}@example.com',
            phone=f'+2010000{n:05d}',
            password_hash=hash_password(password),
            role=role,
            is_active=is_active,
        )
        db.session.add(user)
        db.session.commit()
        return user

    return _make


@pytest.fixture
def auth_headers(app):
    from app.utils.jwt import create_access_token

    def _headers(user):
        token = create_access_token(user.id, user.role.value)
        return {'Authorization': f'Bearer {token}'}

    return _headers


@pytest.fixture
def admin(make_user):
    return make_user(role=Role.ADMIN, full_name='Admin')


@pytest.fixture
def make_category(app):
    def _make(name_en=None, name_ar=None, is_active=True):
        n = next(_seq)
        category = Category(
            name_en=name_en or f'Category {n}',
            name_ar=name_ar or f'فئة {n}',
            is_active=is_active,
        )
        db.session.add(category)
        db.session.commit()
        return category

    return _make


@pytest.fixture
def application_payload():
    def _payload(category_ids, **overrides):
        payload = {
            'fullName': 'Green Farm Owner',
            'phone': '+201234567890',
            'email': 'farm@example.com',
            'storeName': 'Green Farm',
            'specialization': list(category_ids),
            'city': 'Cairo',
            'region': 'Giza',
            'yearsOfExperience': 5,
            'whatsappNumber': '+201234567890',
            'callNumber': '+201234567891',
        }
        payload.update(overrides)
        return payload

    return _payload


@pytest.fixture
def make_vendor(make_user, make_category, admin):
    """Create an approved vendor through the real submit/review path."""
    from types import SimpleNamespace
    from app.services import vendor_applications
    from app.services.vendor_workflow import ReviewAction

    def _make(categories=None, store_name='Green Farm'):
        user = make_user()
        categories = categories or [make_category()]
        data = SimpleNamespace(
            fullName=user.full_name,
            phone=user.phone,
            email=user.email,
            storeName=store_name,
            specialization=[c.id for c in categories],
            city='Cairo',
            region='Giza',
            yearsOfExperience=3,
            whatsappNumber=user.phone,
            callNumber=user.phone,
        )
        application = vendor_applications.submit_application(user, data)
        vendor_applications.review(application, ReviewAction.APPROVE, admin)
        db.session.commit()
        return user.vendor_profile

    return _make
