"""Bilingual field resolution and small display helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

LOCALES = ('en', 'ar')
DEFAULT_LOCALE = 'en'
RTL_LOCALES = {'ar'}


@dataclass(frozen=True)
class Localized:
    """An English/Arabic pair of values for one logical field."""

    en: str | None = None
    ar: str | None = None

    def get(self, locale: str) -> str | None:
        return self.ar if locale == 'ar' else self.en


def normalize_locale(locale: str | None) -> str:
    """Return a supported locale tag, defaulting to English."""
    if locale and locale.lower() in LOCALES:
        return locale.lower()
    return DEFAULT_LOCALE


def other_locale(locale: str) -> str:
    return 'en' if normalize_locale(locale) == 'ar' else 'ar'


def text_direction(locale: str) -> str:
    return 'rtl' if normalize_locale(locale) in RTL_LOCALES else 'ltr'


def _present(value: Any) -> bool:
    return isinstance(value, str) and value != ''


def resolve(value: Localized, locale: str) -> str:
    """
    Pick the display string for a locale.

    The requested locale wins when it holds a non-empty string; otherwise
    the other locale is used; otherwise the result is an empty string.
    """
    locale = normalize_locale(locale)
    preferred = value.get(locale)
    if _present(preferred):
        return preferred
    fallback = value.get(other_locale(locale))
    if _present(fallback):
        return fallback
    return ''


def get_localized_field(entity: Any, field: str, locale: str) -> str:
    """Resolve a bilingual attribute (e.g. ``title``) exposed as a :class:`Localized`."""
    value = getattr(entity, field, None)
    if value is None:
        return ''
    if not isinstance(value, Localized):
        raise TypeError(f"{type(entity).__name__}.{field} is not a localized field")
    return resolve(value, locale)


def localized(en_attr: str, ar_attr: str) -> property:
    """Expose two column attributes as a read-only :class:`Localized` property."""

    def getter(self) -> Localized:
        return Localized(getattr(self, en_attr), getattr(self, ar_attr))

    return property(getter)


def format_file_size(size: int) -> str:
    if size <= 0:
        return '0 B'
    units = ['B', 'KB', 'MB', 'GB']
    index = 0
    while size >= 1024 ** (index + 1) and index < len(units) - 1:
        index += 1
    scaled = round(size / (1024 ** index), 1)
    return f"{scaled:g} {units[index]}"


def truncate(text: str, length: int) -> str:
    if len(text) <= length:
        return text
    return text[:length] + '...'


def completion_score(values: Iterable[Any]) -> int:
    """Percentage of values that are filled in (not None and not an empty string)."""
    values = list(values)
    if not values:
        return 100
    filled = sum(1 for value in values if value is not None and value != '')
    return round(filled / len(values) * 100)


__all__ = [
    'LOCALES',
    'DEFAULT_LOCALE',
    'Localized',
    'normalize_locale',
    'other_locale',
    'text_direction',
    'resolve',
    'get_localized_field',
    'localized',
    'format_file_size',
    'truncate',
    'completion_score',
]
