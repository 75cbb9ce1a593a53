"""Shared fixtures: an in-memory application with an admin and an editor."""

import pytest

from causeway import create_app
from causeway.config import TestConfig
from causeway.extensions import db
from causeway.models import Category, Page, PublishStatus, Resource, ResourceType, User, UserRole
from causeway.services.publishing import initial_status

ADMIN_EMAIL = 'admin@test.com'
EDITOR_EMAIL = 'editor@test.com'
PASSWORD = 'TestPass123!'


@pytest.fixture
def app(tmp_path):
    """Create and configure a test application instance."""
    app = create_app(TestConfig)
    app.config['UPLOAD_FOLDER'] = str(tmp_path / 'uploads')

    with app.app_context():
        db.create_all()

    # Requests push their own app context so login state never leaks between clients
    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Create a test client for the app."""
    return app.test_client()


def _create_user(app, email, role):
    with app.app_context():
        user = User(email=email, name=email.split("@")[0].title(), role=role)
        user.set_password(PASSWORD)
        db.session.add(user)
        db.session.commit()
        return user.id


@pytest.fixture
def admin_user(app):
    return _create_user(app, ADMIN_EMAIL, UserRole.ADMIN)


@pytest.fixture
def editor_user(app):
    return _create_user(app, EDITOR_EMAIL, UserRole.EDITOR)


def _login(client, email):
    response = client.post('/api/auth/login', json={'email': email, 'password': PASSWORD})
    assert response.status_code == 200
    return client


@pytest.fixture
def admin_client(app, admin_user):
    """Test client logged in as an admin."""
    return _login(app.test_client(), ADMIN_EMAIL)


@pytest.fixture
def editor_client(app, editor_user):
    """Test client logged in as an editor."""
    return _login(app.test_client(), EDITOR_EMAIL)


@pytest.fixture
def make_category(app):
    """Factory for categories; returns the new id."""
    def _make(name_en='Banking', slug=None, **fields):
        with app.app_context():
            category = Category(
                name_en=name_en,
                slug=slug or name_en.lower().replace(' ', '-'),
                **fields,
            )
            db.session.add(category)
            db.session.commit()
            return category.id
    return _make


@pytest.fixture
def make_resource(app):
    """Factory for resources, published reports by default; returns the new id."""
    def _make(title_en='Open Banking Report', slug=None, status=PublishStatus.PUBLISHED, **fields):
        fields.setdefault('type', ResourceType.REPORT)
        fields.setdefault('tags', [])
        with app.app_context():
            resource = Resource(
                title_en=title_en,
                slug=slug or title_en.lower().replace(' ', '-'),
                **fields,
            )
            initial_status(resource, status)
            db.session.add(resource)
            db.session.commit()
            return resource.id
    return _make


@pytest.fixture
def make_page(app):
    """Factory for pages, published and without blocks by default; returns the new id."""
    def _make(title_en='About', slug='about', status=PublishStatus.PUBLISHED, **fields):
        fields.setdefault('blocks_en', [])
        fields.setdefault('blocks_ar', [])
        with app.app_context():
            page = Page(title_en=title_en, slug=slug, **fields)
            initial_status(page, status)
            db.session.add(page)
            db.session.commit()
            return page.id
    return _make
