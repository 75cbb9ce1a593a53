"""Server-rendered public pages, sitemap and local upload serving."""

from __future__ import annotations

from flask import (
    Blueprint,
    abort,
    current_app,
    make_response,
    render_template,
    send_from_directory,
)

from causeway.i18n import LOCALES, get_localized_field, other_locale, text_direction
from causeway.services.blocks import render_blocks
from causeway.services.pages import PageService
from causeway.services.sitemap import sitemap_entries

public_bp = Blueprint('public', __name__)

BLOCK_TEMPLATES = {
    'hero': 'public/blocks/hero.html',
    'text': 'public/blocks/text.html',
    'cards': 'public/blocks/cards.html',
    'cta': 'public/blocks/cta.html',
    'stats': 'public/blocks/cards.html',
    'image': 'public/blocks/image.html',
    'faq': 'public/blocks/faq.html',
    'team': 'public/blocks/cards.html',
}
GENERIC_BLOCK_TEMPLATE = 'public/blocks/generic.html'


@public_bp.route('/<locale>/<slug>')
def page(locale, slug):
    """Render a published CMS page in the requested locale."""
    if locale not in LOCALES:
        abort(404)
    cms_page = PageService.get_published_by_slug(slug)
    if cms_page is None:
        abort(404)

    blocks = [
        {
            'block': block,
            'template': BLOCK_TEMPLATES.get(block.type.value, GENERIC_BLOCK_TEMPLATE),
        }
        for block in render_blocks(cms_page, locale)
    ]
    return render_template(
        'public/page.html',
        page=cms_page,
        locale=locale,
        alternate_locale=other_locale(locale),
        direction=text_direction(locale),
        title=get_localized_field(cms_page, 'title', locale),
        content=get_localized_field(cms_page, 'content', locale),
        meta_title=get_localized_field(cms_page, 'meta_title', locale),
        meta_desc=get_localized_field(cms_page, 'meta_desc', locale),
        blocks=blocks,
    )


@public_bp.route('/sitemap.xml')
def sitemap():
    entries = sitemap_entries(current_app.config['SITE_URL'])
    response = make_response(render_template('sitemap.xml', entries=entries))
    response.headers['Content-Type'] = 'application/xml; charset=utf-8'
    return response


@public_bp.route('/uploads/<path:filename>')
def uploaded_file(filename):
    """Serve files stored by the local storage backend."""
    if current_app.config.get('STORAGE_BACKEND', 'local') != 'local':
        abort(404)
    return send_from_directory(current_app.config['UPLOAD_FOLDER'], filename)
