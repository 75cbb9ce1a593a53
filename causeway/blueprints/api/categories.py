"""Category endpoints."""

from __future__ import annotations

from flask import jsonify

from causeway.auth import admin_required, auth_required, current_auth
from causeway.errors import Unauthorized
from causeway.schemas import CategoryCreate, CategoryReorder, CategoryUpdate
from causeway.services.categories import CategoryService, serialize_category

from . import api_bp
from .helpers import bool_arg, deleted, parse_body, success


@api_bp.route('/categories', methods=['GET'])
def list_categories():
    """Enabled categories; ``includeDisabled=true`` needs a session."""
    include_disabled = bool_arg('includeDisabled')
    if include_disabled and not current_auth().authorized:
        raise Unauthorized('Authentication required for admin view')
    return jsonify({'success': True, 'data': CategoryService.list_categories(include_disabled)})


@api_bp.route('/categories', methods=['POST'])
@auth_required
def create_category(auth):
    data = parse_body(CategoryCreate)
    category = CategoryService.create_category(data, auth.user_id)
    return success(serialize_category(category), 201)


@api_bp.route('/categories/reorder', methods=['POST'])
@auth_required
def reorder_categories(auth):
    data = parse_body(CategoryReorder)
    categories = CategoryService.reorder_categories(data.ids, auth.user_id)
    return success([serialize_category(category) for category in categories])


@api_bp.route('/categories/<id_or_slug>', methods=['GET'])
def get_category(id_or_slug):
    category = CategoryService.get_category(id_or_slug)
    return success(CategoryService.category_detail(category))


@api_bp.route('/categories/<category_id>', methods=['PUT', 'PATCH'])
@auth_required
def update_category(category_id, auth):
    data = parse_body(CategoryUpdate)
    category = CategoryService.update_category(category_id, data, auth.user_id)
    return success(serialize_category(category))


@api_bp.route('/categories/<category_id>', methods=['DELETE'])
@admin_required
def delete_category(category_id, auth):
    CategoryService.delete_category(category_id, auth.user_id)
    return deleted('Category deleted')
