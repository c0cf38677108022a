"""Site settings routes."""

from flask import Blueprint, request, jsonify
from blogcms import db
from blogcms.models import SiteSettings, AppSecret
from blogcms.services.locale import normalize_locale, parse_locale_list
from blogcms.utils import editor_required, admin_required

settings_bp = Blueprint('settings', __name__)

SETTINGS_ALLOWED_FIELDS = {
    'site_name', 'description', 'site_url', 'site_language',
    'enable_post_translation', 'translation_source_locale',
    'translation_locales', 'translation_model'
}


def _get_or_create_settings():
    settings = SiteSettings.query.order_by(SiteSettings.id).first()
    if settings is None:
        settings = SiteSettings()
        db.session.add(settings)
    return settings


@settings_bp.route('', methods=['GET'])
def get_settings():
    """Public site settings. The Gemini key is never returned."""
    settings = SiteSettings.query.order_by(SiteSettings.id).first()
    if settings is None:
        return jsonify({}), 200
    return jsonify(settings.to_dict()), 200


@settings_bp.route('', methods=['PUT'])
@editor_required
def update_settings():
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({'error': 'Request body must be a JSON object'}), 400

    unknown = set(data.keys()) - SETTINGS_ALLOWED_FIELDS
    if unknown:
        return jsonify({'error': f"Unknown fields: {', '.join(sorted(unknown))}"}), 400
    if 'enable_post_translation' in data and not isinstance(data['enable_post_translation'], bool):
        return jsonify({'error': 'enable_post_translation must be a boolean'}), 400
    if 'translation_source_locale' in data and not isinstance(data['translation_source_locale'], str):
        return jsonify({'error': 'translation_source_locale must be a string'}), 400
    if 'translation_locales' in data:
        locales = data['translation_locales']
        if not (isinstance(locales, str) or
                (isinstance(locales, list) and all(isinstance(item, str) for item in locales))):
            return jsonify({'error': 'translation_locales must be a string or a list of strings'}), 400

    # Store locales in their normalized form so admins see what will be used
    if 'translation_source_locale' in data:
        data['translation_source_locale'] = normalize_locale(data['translation_source_locale'])
    if 'translation_locales' in data:
        locales = data['translation_locales']
        if isinstance(locales, list):
            locales = ','.join(locales)
        data['translation_locales'] = ', '.join(parse_locale_list(locales))
    
    try:
        settings = _get_or_create_settings()
        for key, value in data.items():
            setattr(settings, key, value)
        db.session.commit()
        return jsonify(settings.to_dict()), 200
    except Exception as e:
        db.session.rollback()
        return jsonify({'error': str(e)}), 500


@settings_bp.route('/secret', methods=['PUT'])
@admin_required
def update_secret():
    """Store the Gemini API key in ``app_secrets``."""
    data = request.get_json(silent=True) or {}
    key = data.get('gemini_api_key')
    if key is not None and not isinstance(key, str):
        return jsonify({'error': 'gemini_api_key must be a string'}), 400
    
    try:
        secret = AppSecret.query.order_by(AppSecret.id).first()
        if secret is None:
            secret = AppSecret()
            db.session.add(secret)
        secret.gemini_api_key = (key or '').strip()
        db.session.commit()
        return jsonify({'has_gemini_api_key': secret.has_gemini_api_key}), 200
    except Exception as e:
        db.session.rollback()
        return jsonify({'error': str(e)}), 500
