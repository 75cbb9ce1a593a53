"""Tests for the Flask CLI commands."""

from causeway.extensions import db
from causeway.models import Category, Page, PublishStatus, Resource, User, UserRole
from causeway.services import health as health_service


def test_user_create_and_set_password(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=[
        'user', 'create', '--email', 'Owner@Test.com', '--password', 'secret123', '--role', 'ADMIN',
    ])
    assert result.exit_code == 0
    assert 'User created successfully!' in result.output

    result = runner.invoke(args=['user', 'create', '--email', 'owner@test.com', '--password', 'x'])
    assert 'already exists' in result.output

    result = runner.invoke(args=['user', 'set-password', '--email', 'owner@test.com', '--password', 'changed'])
    assert 'Password updated.' in result.output

    with app.app_context():
        user = db.session.query(User).filter_by(email='owner@test.com').one()
        assert user.role is UserRole.ADMIN
        assert user.check_password('changed')


def test_seed_demo_is_idempotent(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=['seed', 'demo'])
    assert result.exit_code == 0, result.output
    assert 'Seed complete!' in result.output

    result = runner.invoke(args=['seed', 'demo'])
    assert result.exit_code == 0
    assert 'Resources created: 0' in result.output

    with app.app_context():
        assert db.session.query(Category).count() == 6
        assert db.session.query(Resource).count() == 6
        assert db.session.query(Page).count() == 2
        draft = db.session.query(Resource).filter_by(slug='payment-innovations-saudi-vision-2030').one()
        assert draft.status is PublishStatus.DRAFT
        assert draft.published_at is None
        about = db.session.query(Page).filter_by(slug='about').one()
        assert about.published_at is not None


def test_links_check(app, make_resource, monkeypatch):
    make_resource(title_en='Dead Link', slug='dead-link', external_url='https://dead.test')

    def head(url, timeout=None, allow_redirects=False):
        raise health_service.requests.ConnectionError('refused')

    monkeypatch.setattr(health_service.requests, 'head', head)
    result = app.test_cli_runner().invoke(args=['links', 'check', '--timeout', '1'])
    assert result.exit_code == 0
    assert 'Checked 1 links, 1 broken' in result.output
