"""Errors raised by the post translation pipeline."""


class TranslationError(Exception):
    """Base class for translation pipeline failures."""


class TranslationConfigError(TranslationError):
    """Translation settings do not allow a run (disabled, no key, no locales)."""


class EngineError(TranslationError):
    """The translation engine call failed.
    
    ``kind`` is one of ``transport``, ``http`` or ``parse``. HTTP failures
    also carry the response ``status`` and raw ``body``.
    """
    
    TRANSPORT = 'transport'
    HTTP = 'http'
    PARSE = 'parse'
    
    def __init__(self, kind, detail, status=None, body=None):
        self.kind = kind
        self.detail = detail
        self.status = status
        self.body = body
        super().__init__(str(self))
    
    def __str__(self):
        if self.kind == self.HTTP:
            return f"gemini request failed: status={self.status}"
        return f"gemini {self.kind} error: {self.detail}"


class PersistenceError(TranslationError):
    """Saving a record failed. Not retried."""


class BulkTranslationError(TranslationError):
    """At least one post failed during a bulk translation run."""
    
    def __init__(self, summary):
        self.summary = summary
        super().__init__(f"translation failed for {summary.failed} posts")
