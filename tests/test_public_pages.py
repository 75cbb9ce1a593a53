"""Tests for the server-rendered public site and sitemap."""

from xml.etree import ElementTree

from causeway.models import PublishStatus

SITEMAP_NS = {
    'sm': 'http://www.sitemaps.org/schemas/sitemap/0.9',
    'xhtml': 'http://www.w3.org/1999/xhtml',
}


class TestPublicPage:

    def test_arabic_page_renders_rtl(self, client, make_page):
        make_page(
            title_en='About CauseWay',
            title_ar='عن كوزواي',
            content_ar='<p>نبذة</p>',
            blocks_ar=[{'id': 'h1', 'type': 'hero', 'data': {'title': 'مرحبا'}}],
        )
        response = client.get('/ar/about')
        assert response.status_code == 200
        html = response.get_data(as_text=True)
        assert 'dir="rtl"' in html
        assert 'lang="ar"' in html
        assert 'عن كوزواي' in html
        assert '<p>نبذة</p>' in html
        assert 'مرحبا' in html
        assert 'hreflang="en" href="/en/about"' in html

    def test_missing_translation_falls_back_to_english(self, client, make_page):
        make_page(title_en='Services', slug='services', content_en='<p>Advisory</p>')
        html = client.get('/ar/services').get_data(as_text=True)
        assert '<h1>Services</h1>' in html
        assert '<p>Advisory</p>' in html

    def test_blocks_do_not_fall_back(self, client, make_page):
        make_page(blocks_en=[{'id': 'b1', 'type': 'text', 'data': {'title': 'English only'}}])
        assert 'English only' in client.get('/en/about').get_data(as_text=True)
        assert 'English only' not in client.get('/ar/about').get_data(as_text=True)

    def test_block_data_is_escaped(self, client, make_page):
        make_page(blocks_en=[{'id': 'b1', 'type': 'faq', 'data': {'title': '<script>x</script>'}}])
        html = client.get('/en/about').get_data(as_text=True)
        assert '<script>x</script>' not in html
        assert '&lt;script&gt;' in html

    def test_cards_render_items(self, client, make_page):
        make_page(blocks_en=[{
            'id': 's1',
            'type': 'stats',
            'data': {'items': [{'value': '20+', 'title': 'Years'}]},
        }])
        html = client.get('/en/about').get_data(as_text=True)
        assert '20+' in html
        assert 'cards-stats' in html

    def test_every_block_type_renders_with_empty_data(self, client, make_page):
        block_types = ('hero', 'text', 'cards', 'cta', 'stats', 'image', 'faq', 'team')
        make_page(blocks_en=[
            {'id': f'b-{block_type}', 'type': block_type, 'data': {}}
            for block_type in block_types
        ])
        response = client.get('/en/about')
        assert response.status_code == 200
        html = response.get_data(as_text=True)
        for block_type in block_types:
            assert f'id="block-b-{block_type}"' in html

    def test_malformed_items_are_ignored(self, client, make_page):
        make_page(blocks_en=[
            {'id': 'f1', 'type': 'faq', 'data': {'title': 'Questions', 'items': 5}},
            {'id': 't1', 'type': 'team', 'data': {'items': 'not a list'}},
            {'id': 's1', 'type': 'stats', 'data': {'items': [7, {'value': '15', 'title': 'Markets'}]}},
        ])
        response = client.get('/en/about')
        assert response.status_code == 200
        html = response.get_data(as_text=True)
        assert 'Questions' in html
        assert 'class="faq"' not in html
        assert 'cards-team' not in html
        assert html.count('class="card"') == 1
        assert 'Markets' in html

    def test_unpublished_and_unknown_pages_are_not_found(self, client, make_page):
        make_page(title_en='Draft', slug='draft', status=PublishStatus.DRAFT)

        for path in ('/en/draft', '/en/missing', '/fr/draft'):
            response = client.get(path)
            assert response.status_code == 404
            assert 'does not exist' in response.get_data(as_text=True)

    def test_security_headers(self, client, make_page):
        make_page()
        response = client.get('/en/about')
        assert response.headers['X-Content-Type-Options'] == 'nosniff'
        assert response.headers['X-Frame-Options'] == 'DENY'


class TestSitemap:

    def test_lists_static_and_published_pages(self, client, make_page):
        make_page(slug='about')
        make_page(title_en='Methodology', slug='methodology')
        make_page(title_en='Draft', slug='draft', status=PublishStatus.DRAFT)

        response = client.get('/sitemap.xml')
        assert response.status_code == 200
        assert response.headers['Content-Type'].startswith('application/xml')

        root = ElementTree.fromstring(response.data)
        urls = root.findall('sm:url', SITEMAP_NS)
        locs = [url.find('sm:loc', SITEMAP_NS).text for url in urls]

        assert 'https://example.test/en' in locs
        assert 'https://example.test/ar/resources' in locs
        assert 'https://example.test/ar/methodology' in locs
        assert locs.count('https://example.test/en/about') == 1
        assert not any(loc.endswith('/draft') for loc in locs)
        # Seven static paths and one extra page, once per locale
        assert len(urls) == 16

        home = urls[locs.index('https://example.test/en')]
        assert home.find('sm:priority', SITEMAP_NS).text == '1.0'
        alternates = {
            link.get('hreflang'): link.get('href')
            for link in home.findall('xhtml:link', SITEMAP_NS)
        }
        assert alternates == {'en': 'https://example.test/en', 'ar': 'https://example.test/ar'}

        page_url = urls[locs.index('https://example.test/en/methodology')]
        assert page_url.find('sm:priority', SITEMAP_NS).text == '0.6'
