"""Post translation service.

Each (post, locale) pair moves from absent to done through one upsert call.
A pair that is already done is only translated again when ``force`` is
set, which is what the post create/update hook does. Bulk runs leave done
pairs alone, so rerunning a partly failed run only retries what is missing.

Nothing is written for a pair until the engine has returned a usable
translation. Two triggers racing on the same pair may both call the engine;
the unique (source_post_id, locale) index keeps it to one row.
"""

import logging
import re
from dataclasses import dataclass

from flask import current_app

from blogcms.models import Post, PostTranslation
from blogcms.services.errors import BulkTranslationError, TranslationConfigError
from blogcms.services.gemini import GeminiTranslator
from blogcms.services.record_store import RecordStore
from blogcms.services.translation_settings import load_translation_settings

logger = logging.getLogger(__name__)

EXCERPT_LENGTH = 160
ELLIPSIS = '...'

_TAG = re.compile(r'<[^>]*(?:>|$)')


@dataclass
class TranslationRunSummary:
    success: int = 0
    failed: int = 0
    total: int = 0

    def __str__(self):
        return f"success={self.success} failed={self.failed} total={self.total}"


def build_excerpt(html, max_len=EXCERPT_LENGTH):
    """Plain-text excerpt of ``html``: tags removed, whitespace collapsed,
    cut to ``max_len`` characters with an ellipsis when truncated."""
    if max_len <= 0 or not html:
        return ''
    text = ' '.join(_TAG.sub(' ', html).replace('>', '').split())
    if len(text) <= max_len:
        return text
    return text[:max_len].strip() + ELLIPSIS


def upsert_post_translation(store, engine, source, target_locale, settings, title, body, force):
    """Translate ``source`` into ``target_locale`` and save the result.

    Returns the translation row, or the existing row untouched when it is
    already done and ``force`` is false.

    Raises:
        EngineError: translation failed after retries; nothing was written.
        PersistenceError: the translated row could not be saved.
    """
    translated = store.find_first(
        PostTranslation,
        source_post_id=source.id,
        locale=target_locale,
    )
    if translated is not None and translated.translation_done and not force:
        logger.debug(f"Skipping done translation post={source.id} locale={target_locale}")
        return translated

    translated_title, translated_body = engine.translate(
        title,
        body,
        settings.source_locale,
        target_locale,
        settings.model,
        settings.api_key,
    )

    if translated is None:
        translated = PostTranslation(source_post_id=source.id, locale=target_locale)

    translated.slug = source.slug
    translated.tags = source.tags
    translated.category = source.category
    translated.author_id = source.author_id
    translated.published = source.published
    translated.published_at = source.published_at
    translated.title = translated_title
    translated.body = translated_body
    translated.excerpt = build_excerpt(translated_body, EXCERPT_LENGTH)
    translated.translation_done = True

    return store.save(translated)


def translate_post(store, engine, post, settings, force=True):
    """Translate ``post`` into every target locale, in order.

    A failing locale is logged and the remaining locales still run. The
    first error is raised once all locales have been attempted.
    """
    title = (post.title or '').strip()
    body = (post.body or '').strip()
    if not title or not body:
        logger.debug(f"Post {post.id} has no title or body, nothing to translate")
        return

    first_error = None
    for locale in settings.locales:
        try:
            upsert_post_translation(store, engine, post, locale, settings, title, body, force)
        except Exception as e:
            if first_error is None:
                first_error = e
            logger.warning(f"Translation locale failed source={post.id} locale={locale} err={e}")

    if first_error is not None:
        raise first_error


def default_engine():
    return GeminiTranslator.from_config(current_app.config)


def trigger_post_translation(post, store=None, engine=None):
    """Post create/update hook: refresh every translation of ``post``.

    Never raises; failures are logged so the triggering write stands.
    """
    if post is None:
        return
    store = store or RecordStore()
    try:
        settings = load_translation_settings(store)
    except Exception as e:
        logger.error(f"Translation settings load failed: {e}")
        return
    if not settings.is_active:
        return

    try:
        translate_post(store, engine or default_engine(), post, settings, force=True)
    except Exception as e:
        logger.error(f"Translation failed for source post={post.id}: {e}")


def translate_all_posts(store=None, engine=None, settings=None):
    """Translate every post into every target locale, skipping done pairs.

    Returns:
        TranslationRunSummary for the run.

    Raises:
        TranslationConfigError: translation is disabled, has no API key or
            no target locales. Raised before any engine call.
        BulkTranslationError: at least one post failed; carries the summary.
    """
    store = store or RecordStore()
    if settings is None:
        settings = load_translation_settings(store)
    if not settings.enabled:
        raise TranslationConfigError("post translation is disabled in settings")
    if not settings.api_key.strip():
        raise TranslationConfigError("gemini_api_key is empty in settings")
    if not settings.locales:
        raise TranslationConfigError("translation_locales is empty in settings")

    engine = engine or default_engine()
    posts = store.find_all(Post, order_by=Post.published_at.desc())

    summary = TranslationRunSummary(total=len(posts))
    for post in posts:
        try:
            translate_post(store, engine, post, settings, force=False)
        except Exception as e:
            summary.failed += 1
            logger.error(f"translate-posts: failed source={post.id} slug={post.slug} err={e}")
            continue
        summary.success += 1

    logger.info(f"translate-posts finished: {summary}")
    if summary.failed:
        raise BulkTranslationError(summary)
    return summary
