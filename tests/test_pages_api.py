"""Tests for the page and block endpoints."""

from causeway.extensions import db
from causeway.models import AuditLog, Page, PublishStatus


class TestPages:

    def test_create_with_explicit_slug(self, editor_client):
        response = editor_client.post('/api/pages', json={
            'titleEn': 'About CauseWay',
            'titleAr': 'عن كوزواي',
            'slug': '/about/',
            'status': 'PUBLISHED',
        })
        assert response.status_code == 201
        data = response.get_json()['data']
        assert data['slug'] == 'about'
        assert data['publishedAt'] is not None
        assert data['blocksEn'] == [] and data['blocksAr'] == []

    def test_explicit_slug_conflict(self, editor_client, make_page):
        make_page(slug='about')
        response = editor_client.post('/api/pages', json={'titleEn': 'About Us', 'slug': 'about'})
        assert response.status_code == 400
        assert response.get_json()['error'] == 'A page with this slug already exists'

    def test_derived_slug_gets_suffix(self, editor_client, make_page):
        make_page(title_en='Services', slug='services')
        data = editor_client.post('/api/pages', json={'titleEn': 'Services'}).get_json()['data']
        assert data['slug'].startswith('services-')

    def test_update_slug_conflict(self, editor_client, make_page):
        make_page(slug='about')
        other = make_page(title_en='Contact', slug='contact')
        response = editor_client.patch(f'/api/pages/{other}', json={'slug': 'about'})
        assert response.status_code == 400

    def test_explicit_slugs_are_normalized(self, client, editor_client, make_page):
        response = editor_client.post('/api/pages', json={
            'titleEn': 'Insights', 'slug': 'Insights/Open Banking', 'status': 'PUBLISHED',
        })
        assert response.status_code == 201
        assert response.get_json()['data']['slug'] == 'insights-open-banking'
        assert client.get('/en/insights-open-banking').status_code == 200

        page_id = make_page(title_en='Team', slug='team')
        data = editor_client.patch(f'/api/pages/{page_id}', json={'slug': 'Our Team'}).get_json()['data']
        assert data['slug'] == 'our-team'

        response = editor_client.post('/api/pages', json={'titleEn': 'Symbols', 'slug': '!!!'})
        assert response.status_code == 400
        assert response.get_json()['error'].startswith('slug:')

    def test_duplicate_block_ids_rejected(self, editor_client):
        response = editor_client.post('/api/pages', json={
            'titleEn': 'Landing',
            'blocksEn': [
                {'id': 'a', 'type': 'hero', 'data': {}},
                {'id': 'a', 'type': 'text', 'data': {}},
            ],
        })
        assert response.status_code == 400

    def test_public_reads_hide_drafts(self, client, admin_client, make_page):
        make_page(title_en='Draft', slug='draft', status=PublishStatus.DRAFT)
        make_page(title_en='Live', slug='live')

        listing = client.get('/api/pages').get_json()
        assert [p['slug'] for p in listing['data']] == ['live']
        assert client.get('/api/pages/draft').status_code == 404

        admin_listing = admin_client.get('/api/pages', headers={'X-Admin': 'true'}).get_json()
        assert admin_listing['total'] == 2

    def test_delete_requires_admin(self, app, editor_client, admin_client, make_page):
        page_id = make_page()
        assert editor_client.delete(f'/api/pages/{page_id}').status_code == 403
        assert admin_client.delete(f'/api/pages/{page_id}').status_code == 200
        with app.app_context():
            assert db.session.get(Page, page_id) is None


class TestBlocks:

    def test_add_update_remove(self, app, editor_client, make_page):
        page_id = make_page()

        response = editor_client.post(f'/api/pages/{page_id}/blocks/en', json={'type': 'hero'})
        assert response.status_code == 201
        block = response.get_json()['data']
        assert block['type'] == 'hero'
        assert block['data'] == {'title': '', 'content': '', 'items': []}

        url = f"/api/pages/{page_id}/blocks/en/{block['id']}"
        first = editor_client.patch(url, json={'data': {'title': 'X'}}).get_json()['data']
        second = editor_client.patch(url, json={'data': {'title': 'X'}}).get_json()['data']
        assert first == second
        assert second['data']['title'] == 'X'

        page = editor_client.get(f'/api/pages/{page_id}').get_json()['data']
        assert page['blocksEn'] == [second]
        assert page['blocksAr'] == []

        assert editor_client.delete(url).status_code == 200
        page = editor_client.get(f'/api/pages/{page_id}').get_json()['data']
        assert page['blocksEn'] == []

        with app.app_context():
            operations = [
                log.details.get('operation')
                for log in db.session.query(AuditLog).filter_by(entity_id=page_id).all()
            ]
            assert sorted(operations) == ['add', 'remove', 'update', 'update']

    def test_remove_unknown_block_is_noop(self, editor_client, make_page):
        page_id = make_page()
        response = editor_client.delete(f'/api/pages/{page_id}/blocks/ar/missing')
        assert response.status_code == 200
        assert response.get_json()['success'] is True

    def test_update_unknown_block(self, editor_client, make_page):
        page_id = make_page()
        response = editor_client.patch(f'/api/pages/{page_id}/blocks/en/missing', json={'data': {'title': 'X'}})
        assert response.status_code == 404

    def test_unsupported_locale_and_type(self, editor_client, make_page):
        page_id = make_page()
        assert editor_client.post(f'/api/pages/{page_id}/blocks/fr', json={'type': 'hero'}).status_code == 400
        assert editor_client.post(f'/api/pages/{page_id}/blocks/en', json={'type': 'carousel'}).status_code == 400

    def test_missing_page(self, editor_client):
        assert editor_client.post('/api/pages/missing/blocks/en', json={'type': 'text'}).status_code == 404
