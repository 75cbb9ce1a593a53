"""Tests for the category endpoints."""

from causeway.extensions import db
from causeway.models import AuditAction, AuditLog, Category, Resource


class TestCategoryDeleteGuard:

    def test_delete_blocked_until_resources_reassigned(self, app, admin_client, make_category, make_resource):
        risk = make_category(name_en='Risk')
        other = make_category(name_en='Governance')
        resource_id = make_resource(title_en='Risk Guide', category_id=risk)

        response = admin_client.delete(f'/api/categories/{risk}')
        assert response.status_code == 400
        assert response.get_json() == {
            'success': False,
            'error': 'Cannot delete category with assigned resources. Reassign resources first.',
        }
        with app.app_context():
            assert db.session.get(Category, risk) is not None
            assert db.session.get(Resource, resource_id).category_id == risk

        response = admin_client.patch(f'/api/resources/{resource_id}', json={'categoryId': other})
        assert response.status_code == 200

        response = admin_client.delete(f'/api/categories/{risk}')
        assert response.status_code == 200
        with app.app_context():
            assert db.session.get(Category, risk) is None

    def test_delete_detaches_children(self, app, admin_client, make_category):
        parent = make_category(name_en='Banking')
        child = make_category(name_en='Open Banking', parent_id=parent)

        assert admin_client.delete(f'/api/categories/{parent}').status_code == 200
        with app.app_context():
            assert db.session.get(Category, child).parent_id is None

    def test_editor_cannot_delete(self, editor_client, make_category):
        category_id = make_category()
        assert editor_client.delete(f'/api/categories/{category_id}').status_code == 403


class TestCategoryListing:

    def test_lists_enabled_with_counts_and_children(self, client, make_category, make_resource):
        parent = make_category(name_en='Banking', sort_order=1)
        child = make_category(name_en='Open Banking', parent_id=parent, sort_order=2)
        make_category(name_en='Hidden', enabled=False)
        make_resource(title_en='Open Banking Report', category_id=child)

        data = client.get('/api/categories').get_json()['data']
        assert [c['nameEn'] for c in data] == ['Banking', 'Open Banking']
        assert data[0]['children'][0]['id'] == child
        assert data[1]['resourceCount'] == 1

    def test_include_disabled_requires_session(self, client, admin_client, make_category):
        make_category(name_en='Hidden', enabled=False)

        assert client.get('/api/categories?includeDisabled=true').status_code == 401
        data = admin_client.get('/api/categories?includeDisabled=true').get_json()['data']
        assert [c['nameEn'] for c in data] == ['Hidden']

    def test_detail_by_slug(self, client, make_category, make_resource):
        category_id = make_category(name_en='Payments', slug='payments')
        make_resource(title_en='Payments Outlook', category_id=category_id)

        data = client.get('/api/categories/payments').get_json()['data']
        assert data['id'] == category_id
        assert [r['titleEn'] for r in data['resources']] == ['Payments Outlook']
        assert client.get('/api/categories/missing').status_code == 404


class TestCategoryWrites:

    def test_create_derives_slug(self, editor_client):
        response = editor_client.post('/api/categories', json={'nameEn': 'ESG & Sustainability', 'nameAr': 'الاستدامة'})
        assert response.status_code == 201
        data = response.get_json()['data']
        assert data['slug'] == 'esg-sustainability'
        assert data['enabled'] is True
        assert data['children'] == []

    def test_nesting_limited_to_one_level(self, editor_client, make_category):
        top = make_category(name_en='Banking')
        middle = make_category(name_en='Retail', parent_id=top)

        response = editor_client.post('/api/categories', json={'nameEn': 'Cards', 'parentId': middle})
        assert response.status_code == 400

        response = editor_client.patch(f'/api/categories/{top}', json={'parentId': top})
        assert response.status_code == 400

        response = editor_client.patch(f'/api/categories/{top}', json={'parentId': make_category(name_en='Other')})
        assert response.status_code == 400

    def test_unknown_parent(self, editor_client):
        response = editor_client.post('/api/categories', json={'nameEn': 'Cards', 'parentId': 'missing'})
        assert response.status_code == 400

    def test_reorder(self, app, editor_client, make_category):
        a = make_category(name_en='A', sort_order=0)
        b = make_category(name_en='B', sort_order=1)
        c = make_category(name_en='C', sort_order=2)

        response = editor_client.post('/api/categories/reorder', json={'ids': [c, a, b]})
        assert response.status_code == 200
        assert [item['id'] for item in response.get_json()['data']] == [c, a, b]

        with app.app_context():
            orders = {cat.id: cat.sort_order for cat in db.session.query(Category).all()}
            assert orders == {c: 0, a: 1, b: 2}
            assert db.session.query(AuditLog).filter_by(action=AuditAction.REORDER).count() == 1

    def test_reorder_rejects_unknown_and_duplicate_ids(self, editor_client, make_category):
        a = make_category(name_en='A')

        assert editor_client.post('/api/categories/reorder', json={'ids': [a, 'missing']}).status_code == 400
        assert editor_client.post('/api/categories/reorder', json={'ids': [a, a]}).status_code == 400
        assert editor_client.post('/api/categories/reorder', json={'ids': []}).status_code == 400
