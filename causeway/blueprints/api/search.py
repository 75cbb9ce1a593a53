"""Cross-entity search endpoint."""

from __future__ import annotations

from flask import jsonify, request

from causeway.services.search import SearchService

from . import api_bp


@api_bp.route('/search', methods=['GET'])
def search():
    query = (request.args.get('q') or '').strip()
    results = SearchService.search(
        query,
        search_type=request.args.get('type', 'all'),
        limit=SearchService.parse_limit(request.args.get('limit')),
    )
    return jsonify({'success': True, 'data': results, 'query': query})
