"""Database bootstrap steps run by ``flask init-db``."""

import logging

from blogcms import db
from blogcms.models import AppSecret, SiteSettings
from blogcms.services.record_store import RecordStore

logger = logging.getLogger(__name__)


def migrate_gemini_api_key_to_secrets(store):
    """Move a Gemini key stored on the settings row into ``app_secrets``.

    An existing secret key is never overwritten. The legacy field is
    cleared whenever it held a value.

    Returns:
        True if anything changed.
    """
    settings = store.find_first(SiteSettings)
    if settings is None:
        return False

    legacy_key = (settings.gemini_api_key or '').strip()
    if not legacy_key:
        return False

    secret = store.find_first(AppSecret)
    if secret is None:
        secret = AppSecret()

    if not secret.has_gemini_api_key:
        secret.gemini_api_key = legacy_key
        store.save(secret)
        logger.info("Moved Gemini API key from settings to app_secrets")

    settings.gemini_api_key = ''
    store.save(settings)
    return True


def ensure_settings_record(store):
    """Create the single settings row if the table is empty."""
    record = store.find_first(SiteSettings)
    if record is not None:
        return record
    logger.info("Creating default settings record")
    return store.save(SiteSettings())


def bootstrap_database(store=None):
    store = store or RecordStore()
    db.create_all()
    migrate_gemini_api_key_to_secrets(store)
    return ensure_settings_record(store)
