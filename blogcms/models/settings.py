"""Site settings and secret storage models (single-row tables)."""

from blogcms import db


class SiteSettings(db.Model):
    """Site-wide configuration, including post translation options."""
    
    __tablename__ = 'settings'
    
    id = db.Column(db.Integer, primary_key=True)
    site_name = db.Column(db.String(255), nullable=True)
    description = db.Column(db.Text, nullable=True)
    site_url = db.Column(db.String(255), nullable=True)
    site_language = db.Column(db.String(20), nullable=True)
    enable_post_translation = db.Column(db.Boolean, default=False, nullable=False)
    translation_source_locale = db.Column(db.String(20), nullable=True)
    translation_locales = db.Column(db.Text, nullable=True)  # e.g. "en, zh_CN; ko"
    translation_model = db.Column(db.String(100), nullable=True)
    # Legacy location of the Gemini key, superseded by AppSecret
    gemini_api_key = db.Column(db.String(255), nullable=True)
    
    def to_dict(self):
        """Public view of the settings. Never includes the API key."""
        return {
            'id': self.id,
            'site_name': self.site_name,
            'description': self.description,
            'site_url': self.site_url,
            'site_language': self.site_language,
            'enable_post_translation': self.enable_post_translation,
            'translation_source_locale': self.translation_source_locale,
            'translation_locales': self.translation_locales,
            'translation_model': self.translation_model,
        }


class AppSecret(db.Model):
    """Admin-only secrets."""
    
    __tablename__ = 'app_secrets'
    
    id = db.Column(db.Integer, primary_key=True)
    gemini_api_key = db.Column(db.String(255), nullable=True)
    
    @property
    def has_gemini_api_key(self):
        return bool((self.gemini_api_key or '').strip())
