"""Tests for page/limit parsing."""

from causeway.services.pagination import MAX_LIMIT, PageParams, page_envelope


def test_defaults():
    params = PageParams.from_args({})
    assert (params.page, params.limit, params.offset) == (1, 20, 0)


def test_clamps_out_of_range_values():
    params = PageParams.from_args({'page': '0', 'limit': '1000'})
    assert params.page == 1
    assert params.limit == MAX_LIMIT

    params = PageParams.from_args({'page': 'abc', 'limit': '-5'})
    assert (params.page, params.limit) == (1, 20)


def test_offset():
    assert PageParams.from_args({'page': '3', 'limit': '10'}).offset == 20


def test_envelope_total_pages():
    envelope = page_envelope([], 41, PageParams(page=1, limit=20))
    assert envelope['totalPages'] == 3
    assert envelope['success'] is True
    assert page_envelope([], 0, PageParams())['totalPages'] == 0
