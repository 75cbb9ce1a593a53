"""Page and page-block endpoints."""

from __future__ import annotations

from flask import jsonify, request

from causeway.auth import admin_required, admin_view_context, auth_required
from causeway.errors import NotFoundError
from causeway.schemas import BlockCreate, BlockUpdate, PageCreate, PageUpdate
from causeway.services.pages import PageService, serialize_page
from causeway.services.pagination import PageParams, page_envelope

from . import api_bp
from .helpers import deleted, parse_body, success


@api_bp.route('/pages', methods=['GET'])
def list_pages():
    auth = admin_view_context()
    params = PageParams.from_args(request.args)
    items, total = PageService.list_pages(params, admin=auth is not None)
    return jsonify(page_envelope([serialize_page(p) for p in items], total, params))


@api_bp.route('/pages', methods=['POST'])
@auth_required
def create_page(auth):
    data = parse_body(PageCreate)
    page = PageService.create_page(data, auth.user_id)
    return success(serialize_page(page), 201)


@api_bp.route('/pages/<id_or_slug>', methods=['GET'])
def get_page(id_or_slug):
    auth = admin_view_context()
    page = PageService.get_page(id_or_slug, public=auth is None)
    return success(serialize_page(page))


@api_bp.route('/pages/<page_id>', methods=['PUT', 'PATCH'])
@auth_required
def update_page(page_id, auth):
    data = parse_body(PageUpdate)
    page = PageService.update_page(page_id, data, auth.user_id)
    return success(serialize_page(page))


@api_bp.route('/pages/<page_id>', methods=['DELETE'])
@admin_required
def delete_page(page_id, auth):
    PageService.delete_page(page_id, auth.user_id)
    return deleted('Page deleted')


# ============= Blocks =============

@api_bp.route('/pages/<page_id>/blocks/<locale>', methods=['POST'])
@auth_required
def add_block(page_id, locale, auth):
    data = parse_body(BlockCreate)
    block = PageService.add_block(page_id, locale, data.type, auth.user_id)
    return success(block.to_dict(), 201)


@api_bp.route('/pages/<page_id>/blocks/<locale>/<block_id>', methods=['PATCH', 'PUT'])
@auth_required
def update_block(page_id, locale, block_id, auth):
    data = parse_body(BlockUpdate)
    block = PageService.update_block(page_id, locale, block_id, data.data, auth.user_id)
    if block is None:
        raise NotFoundError('Block not found')
    return success(block.to_dict())


@api_bp.route('/pages/<page_id>/blocks/<locale>/<block_id>', methods=['DELETE'])
@auth_required
def remove_block(page_id, locale, block_id, auth):
    removed = PageService.remove_block(page_id, locale, block_id, auth.user_id)
    return jsonify({
        'success': True,
        'message': 'Block removed' if removed else 'Block not found; nothing removed',
    })
