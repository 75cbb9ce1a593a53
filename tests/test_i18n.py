"""Tests for bilingual field resolution and display helpers."""

import pytest

from causeway.i18n import (
    Localized,
    completion_score,
    format_file_size,
    get_localized_field,
    normalize_locale,
    resolve,
    text_direction,
    truncate,
)
from causeway.models import Resource


class TestResolve:

    def test_requested_locale_wins(self):
        assert resolve(Localized('Report', 'تقرير'), 'ar') == 'تقرير'
        assert resolve(Localized('Report', 'تقرير'), 'en') == 'Report'

    def test_falls_back_to_other_locale(self):
        assert resolve(Localized('Report', None), 'ar') == 'Report'
        assert resolve(Localized(None, 'تقرير'), 'en') == 'تقرير'

    def test_empty_string_counts_as_missing(self):
        assert resolve(Localized('Report', ''), 'ar') == 'Report'

    def test_both_missing_gives_empty_string(self):
        assert resolve(Localized(None, ''), 'ar') == ''

    def test_unknown_locale_treated_as_english(self):
        assert resolve(Localized('Report', 'تقرير'), 'fr') == 'Report'


def test_get_localized_field_reads_model_pairs():
    resource = Resource(title_en='Open Banking', title_ar=None)
    assert get_localized_field(resource, 'title', 'ar') == 'Open Banking'


def test_get_localized_field_rejects_plain_attributes():
    resource = Resource(slug='open-banking')
    with pytest.raises(TypeError):
        get_localized_field(resource, 'slug', 'en')


def test_locale_helpers():
    assert normalize_locale('AR') == 'ar'
    assert normalize_locale(None) == 'en'
    assert text_direction('ar') == 'rtl'
    assert text_direction('en') == 'ltr'


@pytest.mark.parametrize('size, expected', [
    (0, '0 B'),
    (512, '512 B'),
    (1024, '1 KB'),
    (1536, '1.5 KB'),
    (15 * 1024 * 1024, '15 MB'),
])
def test_format_file_size(size, expected):
    assert format_file_size(size) == expected


def test_truncate():
    assert truncate('short', 10) == 'short'
    assert truncate('a long description', 6) == 'a long...'


def test_completion_score():
    assert completion_score(['a', '', None, 'b']) == 50
    assert completion_score([]) == 100
