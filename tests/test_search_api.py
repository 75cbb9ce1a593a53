"""Tests for cross-entity search."""

from causeway.models import PublishStatus


def test_query_too_short(client):
    response = client.get('/api/search?q=a')
    assert response.status_code == 400
    assert response.get_json()['success'] is False

    assert client.get('/api/search?q=%20a%20').status_code == 400


def test_two_characters_succeed(client):
    response = client.get('/api/search?q=ab')
    assert response.status_code == 200
    body = response.get_json()
    assert body == {'success': True, 'data': {'resources': [], 'pages': []}, 'query': 'ab'}


def test_searches_published_resources_and_pages(client, make_resource, make_page):
    make_resource(title_en='Open Banking Report', publisher='CauseWay Research')
    make_resource(title_en='Banking Draft', status=PublishStatus.DRAFT)
    make_page(title_en='Services', slug='services', content_en='<p>Open banking advisory</p>')

    data = client.get('/api/search?q=banking').get_json()['data']
    assert [r['titleEn'] for r in data['resources']] == ['Open Banking Report']
    assert [p['slug'] for p in data['pages']] == ['services']

    by_publisher = client.get('/api/search?q=research&type=resources').get_json()['data']
    assert list(by_publisher) == ['resources']
    assert len(by_publisher['resources']) == 1


def test_arabic_query(client, make_resource):
    make_resource(title_en='Payments', title_ar='المدفوعات الرقمية', slug='payments')
    data = client.get('/api/search', query_string={'q': 'المدفوعات'}).get_json()['data']
    assert len(data['resources']) == 1


def test_type_and_limit(client, make_resource):
    for index in range(3):
        make_resource(title_en=f'Risk Note {index}', slug=f'risk-note-{index}')

    data = client.get('/api/search?q=risk&type=pages').get_json()['data']
    assert data == {'pages': []}

    data = client.get('/api/search?q=risk&limit=2').get_json()['data']
    assert len(data['resources']) == 2

    assert client.get('/api/search?q=risk&type=people').status_code == 400


def test_like_wildcards_are_literal(client, make_resource, make_page):
    make_resource(title_en='Open Banking Report', tags=[])
    make_page(title_en='Services', slug='services', content_en='<p>Open banking advisory</p>')

    for term in ('%%', '__', '[]'):
        data = client.get('/api/search', query_string={'q': term}).get_json()['data']
        assert data == {'resources': [], 'pages': []}

    make_resource(title_en='Fees 10% Lower', slug='fees')
    data = client.get('/api/search', query_string={'q': '0%'}).get_json()['data']
    assert [r['slug'] for r in data['resources']] == ['fees']
