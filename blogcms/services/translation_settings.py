"""Resolve post translation settings from the database.

Settings are read fresh on every call and handed to the translation
service explicitly; nothing here is cached.
"""

from dataclasses import dataclass

from blogcms.models import AppSecret, SiteSettings
from blogcms.services.locale import normalize_locale, parse_locale_list

DEFAULT_SOURCE_LOCALE = 'ja'
DEFAULT_TARGET_LOCALE = 'en'
DEFAULT_TRANSLATION_MODEL = 'gemini-1.5-flash'


@dataclass(frozen=True)
class TranslationSettings:
    enabled: bool
    source_locale: str
    locales: tuple
    model: str
    api_key: str = ''

    @property
    def is_active(self):
        """True when a translation run could actually call the engine."""
        return self.enabled and bool(self.api_key.strip()) and len(self.locales) > 0


def load_gemini_api_key(store, settings_record=None):
    """Prefer the key in ``app_secrets``; fall back to the legacy settings field."""
    secret = store.find_first(AppSecret)
    if secret is not None:
        key = (secret.gemini_api_key or '').strip()
        if key:
            return key
    if settings_record is not None:
        return (settings_record.gemini_api_key or '').strip()
    return ''


def load_translation_settings(store):
    """Build a ``TranslationSettings`` from the settings and secrets rows."""
    record = store.find_first(SiteSettings)
    if record is None:
        return TranslationSettings(
            enabled=False,
            source_locale=DEFAULT_SOURCE_LOCALE,
            locales=(DEFAULT_TARGET_LOCALE,),
            model=DEFAULT_TRANSLATION_MODEL,
            api_key=load_gemini_api_key(store),
        )

    source_locale = (
        normalize_locale(record.translation_source_locale)
        or normalize_locale(record.site_language)
        or DEFAULT_SOURCE_LOCALE
    )

    # The fallback applies before the source locale is removed, so a site
    # authored in "en" with no configured locales ends up with no targets.
    locales = parse_locale_list(record.translation_locales) or [DEFAULT_TARGET_LOCALE]
    locales = tuple(locale for locale in locales if locale != source_locale)

    model = (record.translation_model or '').strip() or DEFAULT_TRANSLATION_MODEL

    return TranslationSettings(
        enabled=bool(record.enable_post_translation),
        source_locale=source_locale,
        locales=locales,
        model=model,
        api_key=load_gemini_api_key(store, record),
    )
