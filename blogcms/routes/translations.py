"""Public read access to translated posts."""

from flask import Blueprint, jsonify
from blogcms.models import PostTranslation
from blogcms.services.locale import normalize_locale

translations_bp = Blueprint('translations', __name__)


@translations_bp.route('/<locale>/<slug>', methods=['GET'])
def get_translation(locale, slug):
    """Get the finished translation of a post by locale and slug."""
    translation = PostTranslation.query.filter_by(
        locale=normalize_locale(locale),
        slug=slug,
        translation_done=True
    ).first()
    if not translation:
        return jsonify({'error': 'Translation not found'}), 404
    return jsonify(translation.to_dict()), 200
