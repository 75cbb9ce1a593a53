"""Tests for the resource endpoints."""

from causeway.extensions import db
from causeway.i18n import get_localized_field
from causeway.models import AuditAction, AuditLog, PublishStatus, Resource


def _audit_actions(app, entity_id):
    with app.app_context():
        logs = db.session.query(AuditLog).filter_by(entity_id=entity_id).all()
        return sorted(log.action.value for log in logs)


class TestResourceLifecycle:
    """Create, publish and read back a resource."""

    def test_create_then_publish(self, app, client, editor_client):
        response = editor_client.post('/api/resources', json={
            'titleEn': 'Open Banking Report',
            'status': 'DRAFT',
        })
        assert response.status_code == 201
        created = response.get_json()['data']
        resource_id = created['id']
        assert created['slug'] == 'open-banking-report'
        assert created['publishedAt'] is None
        assert created['createdBy']['email'] == 'editor@test.com'

        # Drafts stay out of the public listing
        assert client.get('/api/resources').get_json()['total'] == 0
        assert client.get(f'/api/resources/{resource_id}').status_code == 404

        response = editor_client.put(f'/api/resources/{resource_id}', json={'status': 'PUBLISHED'})
        assert response.status_code == 200
        assert response.get_json()['data']['publishedAt'] is not None

        assert _audit_actions(app, resource_id) == [AuditAction.CREATE.value, AuditAction.PUBLISH.value]

        listing = client.get('/api/resources').get_json()
        assert [item['id'] for item in listing['data']] == [resource_id]
        assert client.get('/api/resources/open-banking-report').status_code == 200

        with app.app_context():
            resource = db.session.get(Resource, resource_id)
            assert get_localized_field(resource, 'title', 'ar') == 'Open Banking Report'

    def test_unpublish_keeps_published_at(self, app, editor_client):
        response = editor_client.post('/api/resources', json={
            'titleEn': 'GCC Outlook',
            'status': 'PUBLISHED',
        })
        resource = response.get_json()['data']
        published_at = resource['publishedAt']
        assert published_at is not None

        response = editor_client.patch(f"/api/resources/{resource['id']}", json={'status': 'DRAFT'})
        data = response.get_json()['data']
        assert data['status'] == 'DRAFT'
        assert data['publishedAt'] == published_at
        assert _audit_actions(app, resource['id']) == ['CREATE', 'PUBLISH', 'UNPUBLISH']

    def test_duplicate_titles_get_distinct_slugs(self, editor_client):
        first = editor_client.post('/api/resources', json={'titleEn': 'Risk Guide'}).get_json()['data']
        second = editor_client.post('/api/resources', json={'titleEn': 'Risk Guide'}).get_json()['data']

        assert first['slug'] == 'risk-guide'
        assert second['slug'] != first['slug']
        assert second['slug'].startswith('risk-guide-')

    def test_title_change_keeps_slug(self, editor_client):
        created = editor_client.post('/api/resources', json={'titleEn': 'Old Title'}).get_json()['data']
        updated = editor_client.put(
            f"/api/resources/{created['id']}", json={'titleEn': 'New Title'}
        ).get_json()['data']
        assert updated['titleEn'] == 'New Title'
        assert updated['slug'] == 'old-title'

    def test_update_records_changed_fields(self, app, editor_client):
        created = editor_client.post('/api/resources', json={'titleEn': 'Payments'}).get_json()['data']
        editor_client.patch(f"/api/resources/{created['id']}", json={'priority': 3, 'titleAr': 'المدفوعات'})

        with app.app_context():
            log = (
                db.session.query(AuditLog)
                .filter_by(entity_id=created['id'], action=AuditAction.UPDATE)
                .one()
            )
            assert sorted(log.details['changes']) == ['priority', 'titleAr']


class TestResourceValidation:

    def test_title_required(self, editor_client):
        response = editor_client.post('/api/resources', json={'titleAr': 'تقرير'})
        assert response.status_code == 400
        assert response.get_json()['success'] is False

    def test_invalid_type(self, editor_client):
        response = editor_client.post('/api/resources', json={'titleEn': 'Report', 'type': 'MEMO'})
        assert response.status_code == 400

    def test_unknown_category(self, editor_client):
        response = editor_client.post('/api/resources', json={'titleEn': 'Report', 'categoryId': 'nope'})
        assert response.status_code == 400
        assert 'categoryId' in response.get_json()['error']

    def test_explicit_null_title_leaves_title_alone(self, editor_client):
        created = editor_client.post('/api/resources', json={'titleEn': 'Keep Me'}).get_json()['data']
        response = editor_client.patch(f"/api/resources/{created['id']}", json={'titleEn': None})
        assert response.status_code == 200
        assert response.get_json()['data']['titleEn'] == 'Keep Me'

    def test_update_missing_resource(self, editor_client):
        response = editor_client.put('/api/resources/missing', json={'titleEn': 'X'})
        assert response.status_code == 404

    def test_invalid_type_filter(self, client):
        assert client.get('/api/resources?type=memo').status_code == 400


class TestResourceListing:

    def test_featured_then_priority_for_every_sort(self, client, make_resource):
        a = make_resource(title_en='Alpha', featured=True, priority=1)
        b = make_resource(title_en='Bravo', featured=False, priority=100)
        c = make_resource(title_en='Charlie', featured=True, priority=5)

        for sort in ('latest', 'oldest', 'title'):
            data = client.get(f'/api/resources?sort={sort}').get_json()['data']
            assert [item['id'] for item in data] == [c, a, b]

    def test_pagination_is_clamped(self, client, make_resource):
        make_resource(title_en='Only One')
        body = client.get('/api/resources?limit=1000&page=0').get_json()
        assert body['limit'] == 100
        assert body['page'] == 1
        assert body['total'] == 1
        assert body['totalPages'] == 1

    def test_filters(self, client, make_category, make_resource):
        category_id = make_category(name_en='Risk', slug='risk')
        match = make_resource(title_en='Risk Guide', category_id=category_id, tags=['basel'])
        make_resource(title_en='Payments Outlook')

        by_slug = client.get('/api/resources?category=risk').get_json()['data']
        assert [item['id'] for item in by_slug] == [match]
        by_id = client.get(f'/api/resources?category={category_id}').get_json()['data']
        assert [item['id'] for item in by_id] == [match]

        by_tag = client.get('/api/resources?search=BASEL').get_json()['data']
        assert [item['id'] for item in by_tag] == [match]

    def test_search_matches_wildcards_and_tag_syntax_literally(self, client, make_resource):
        match = make_resource(title_en='Capital 100% Guide', slug='capital-guide', tags=['net_zero'])
        make_resource(title_en='Open Banking Report', tags=[])

        def ids(term):
            response = client.get('/api/resources', query_string={'search': term})
            return [item['id'] for item in response.get_json()['data']]

        assert ids('%') == [match]
        assert ids('%%') == []
        assert ids('a_k') == []
        assert ids('t_z') == [match]
        assert ids('[]') == []
        assert ids('",') == []
        assert ids('zero') == [match]

    def test_status_filter_needs_admin_view(self, admin_client, client, make_resource):
        make_resource(title_en='Draft Note', status=PublishStatus.DRAFT)
        make_resource(title_en='Live Note')

        public = client.get('/api/resources?status=DRAFT').get_json()
        assert public['total'] == 1
        assert public['data'][0]['status'] == 'PUBLISHED'

        admin = admin_client.get('/api/resources?status=DRAFT', headers={'X-Admin': 'true'}).get_json()
        assert [item['titleEn'] for item in admin['data']] == ['Draft Note']

    def test_admin_view_requires_session(self, client):
        response = client.get('/api/resources', headers={'X-Admin': 'true'})
        assert response.status_code == 401

    def test_admin_view_reads_drafts(self, admin_client, make_resource):
        resource_id = make_resource(title_en='Hidden', status=PublishStatus.DRAFT)
        response = admin_client.get(f'/api/resources/{resource_id}?admin=true')
        assert response.status_code == 200


class TestResourcePermissions:

    def test_anonymous_cannot_create(self, client):
        assert client.post('/api/resources', json={'titleEn': 'X'}).status_code == 401

    def test_editor_cannot_delete(self, editor_client, make_resource):
        resource_id = make_resource()
        assert editor_client.delete(f'/api/resources/{resource_id}').status_code == 403

    def test_admin_deletes(self, app, admin_client, make_resource):
        resource_id = make_resource()
        response = admin_client.delete(f'/api/resources/{resource_id}')
        assert response.status_code == 200
        assert response.get_json()['success'] is True
        assert _audit_actions(app, resource_id) == ['DELETE']
        assert admin_client.delete(f'/api/resources/{resource_id}').status_code == 404
