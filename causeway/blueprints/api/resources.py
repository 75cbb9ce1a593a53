"""Resource endpoints."""

from __future__ import annotations

from flask import jsonify, request

from causeway.auth import admin_required, admin_view_context, auth_required
from causeway.models import PublishStatus, ResourceType
from causeway.schemas import ResourceCreate, ResourceUpdate
from causeway.services.pagination import PageParams, page_envelope
from causeway.services.resources import SORT_ORDERS, ResourceService, serialize_resource

from . import api_bp
from .helpers import deleted, enum_arg, parse_body, success


@api_bp.route('/resources', methods=['GET'])
def list_resources():
    """List resources; the admin view also sees drafts and archived items."""
    auth = admin_view_context()
    params = PageParams.from_args(request.args)
    sort = request.args.get('sort', 'latest')

    items, total = ResourceService.list_resources(
        params,
        admin=auth is not None,
        search=(request.args.get('search') or '').strip() or None,
        category=request.args.get('category') or None,
        resource_type=enum_arg(ResourceType, 'type'),
        status=enum_arg(PublishStatus, 'status'),
        sort=sort if sort in SORT_ORDERS else 'latest',
    )
    return jsonify(page_envelope([serialize_resource(r) for r in items], total, params))


@api_bp.route('/resources', methods=['POST'])
@auth_required
def create_resource(auth):
    data = parse_body(ResourceCreate)
    resource = ResourceService.create_resource(data, auth.user_id)
    return success(serialize_resource(resource), 201)


@api_bp.route('/resources/<id_or_slug>', methods=['GET'])
def get_resource(id_or_slug):
    auth = admin_view_context()
    resource = ResourceService.get_resource(id_or_slug, public=auth is None)
    return success(serialize_resource(resource))


@api_bp.route('/resources/<resource_id>', methods=['PUT', 'PATCH'])
@auth_required
def update_resource(resource_id, auth):
    data = parse_body(ResourceUpdate)
    resource = ResourceService.update_resource(resource_id, data, auth.user_id)
    return success(serialize_resource(resource))


@api_bp.route('/resources/<resource_id>', methods=['DELETE'])
@admin_required
def delete_resource(resource_id, auth):
    ResourceService.delete_resource(resource_id, auth.user_id)
    return deleted('Resource deleted')
