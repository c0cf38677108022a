"""Authentication routes for CMS users."""

from flask import Blueprint, request, jsonify, g
from blogcms.models import CmsUser
from blogcms.utils import token_required, create_token

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/login', methods=['POST'])
def login():
    """Exchange email and password for an access token."""
    data = request.get_json(silent=True) or {}
    email = (data.get('email') or '').strip().lower()
    password = data.get('password') or ''
    
    if not email or not password:
        return jsonify({'error': 'Email and password are required'}), 400
    
    user = CmsUser.query.filter_by(email=email).first()
    if not user or not user.check_password(password):
        return jsonify({'error': 'Invalid email or password'}), 401
    
    return jsonify({
        'token': create_token(user),
        'user': user.to_dict()
    }), 200


@auth_bp.route('/me', methods=['GET'])
@token_required
def me():
    return jsonify(g.current_user.to_dict()), 200
