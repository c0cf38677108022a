"""Shared authentication utilities.

Routes use these decorators to resolve the calling ``CmsUser`` from a
bearer JWT. The user is stored on ``g.current_user``.
"""

from datetime import datetime, timedelta, timezone
from functools import wraps
from flask import request, jsonify, current_app, g
import jwt


def _get_secret_key():
    """Get JWT secret from Flask app config (single source of truth)."""
    return current_app.config['JWT_SECRET_KEY']


def create_token(user):
    """Issue a signed access token for ``user``."""
    expires = datetime.now(timezone.utc) + timedelta(
        seconds=current_app.config['JWT_ACCESS_TOKEN_EXPIRES']
    )
    payload = {'user_id': user.id, 'role': user.role, 'exp': expires}
    return jwt.encode(payload, _get_secret_key(), algorithm='HS256')


def token_required(f):
    """
    Decorator to require valid JWT token, setting g.current_user.
    
    Usage:
        @bp.route('/protected')
        @token_required
        def protected_route():
            user = g.current_user
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        from blogcms import db
        from blogcms.models import CmsUser
        
        auth_header = request.headers.get('Authorization')
        
        if not auth_header:
            return jsonify({'error': 'Token is missing'}), 401
        
        try:
            # Support both "Bearer <token>" and raw token formats
            token = auth_header.split(' ')[1] if ' ' in auth_header else auth_header
            payload = jwt.decode(token, _get_secret_key(), algorithms=['HS256'])
        except jwt.ExpiredSignatureError:
            return jsonify({'error': 'Token has expired'}), 401
        except jwt.InvalidTokenError:
            return jsonify({'error': 'Token is invalid'}), 401
        
        user_id = payload.get('user_id')
        current_user = db.session.get(CmsUser, user_id) if user_id is not None else None
        if not current_user:
            return jsonify({'error': 'User not found'}), 401
        g.current_user = current_user
        
        return f(*args, **kwargs)
    return decorated


def _role_required(*roles):
    def decorator(f):
        @wraps(f)
        @token_required
        def decorated(*args, **kwargs):
            if g.current_user.role not in roles:
                return jsonify({'error': 'Insufficient permissions'}), 403
            return f(*args, **kwargs)
        return decorated
    return decorator


editor_required = _role_required('admin', 'editor')
admin_required = _role_required('admin')
