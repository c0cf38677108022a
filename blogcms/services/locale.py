"""Locale token helpers.

Locales are compared by normalized value: lowercase with ``-`` as the
separator, so ``en_US`` and ``EN-us`` are the same locale.
"""

import re

_SEPARATORS = re.compile(r'[,\s;]+')


def normalize_locale(value):
    """Lowercase, trim and map ``_`` to ``-``. Empty input stays empty."""
    if not value:
        return ''
    return value.strip().lower().replace('_', '-')


def parse_locale_list(value):
    """Split a free-form locale list into unique normalized locales.

    Accepts commas, semicolons and any whitespace as separators. Empty
    tokens are dropped and the first occurrence of a locale wins.
    """
    if not value:
        return []
    
    result = []
    seen = set()
    for token in _SEPARATORS.split(value):
        locale = normalize_locale(token)
        if not locale or locale in seen:
            continue
        seen.add(locale)
        result.append(locale)
    return result
