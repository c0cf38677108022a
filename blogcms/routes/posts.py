"""Post routes. Writes emit post events once committed."""

from flask import Blueprint, request, jsonify, g
from datetime import datetime, timezone
from sqlalchemy.exc import IntegrityError
from blogcms import db, events
from blogcms.events import POST_CREATED, POST_UPDATED
from blogcms.models import Post
from blogcms.utils import editor_required

posts_bp = Blueprint('posts', __name__)

REQUIRED_FIELDS = ('title', 'slug', 'body')

# Fields a client may set on create/update (prevent mass assignment)
EDITABLE_FIELDS = {
    'title', 'slug', 'body', 'excerpt', 'tags', 'category',
    'author_id', 'published', 'published_at'
}


def _parse_datetime(value):
    if value in (None, ''):
        return None
    if isinstance(value, str) and value.endswith('Z'):
        value = value[:-1] + '+00:00'
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _apply_fields(post, data):
    """Copy editable fields from ``data`` onto ``post``. Returns an error or None."""
    unknown = set(data.keys()) - EDITABLE_FIELDS
    if unknown:
        return f"Unknown fields: {', '.join(sorted(unknown))}"

    for key, value in data.items():
        if key == 'published_at':
            try:
                value = _parse_datetime(value)
            except (TypeError, ValueError):
                return "published_at must be an ISO 8601 datetime"
        elif key == 'published' and not isinstance(value, bool):
            return "published must be a boolean"
        elif key == 'tags' and isinstance(value, list):
            value = ','.join(str(tag).strip() for tag in value if str(tag).strip())
        setattr(post, key, value)
    return None


@posts_bp.route('', methods=['GET'])
def get_posts():
    """Get posts, newest first.

    Query params:
    - published: 'true' / 'false' to filter by publish state
    - category: Filter by category
    - page: Page number (default: 1)
    - per_page: Items per page (default: 20)
    """
    try:
        page = request.args.get('page', 1, type=int)
        per_page = min(request.args.get('per_page', 20, type=int), 100)
        category = request.args.get('category')
        published = request.args.get('published')

        query = Post.query
        if published is not None:
            query = query.filter_by(published=published.lower() in ('true', '1', 'yes'))
        if category:
            query = query.filter_by(category=category)

        posts = query.order_by(Post.published_at.desc(), Post.id.desc()).paginate(
            page=page, per_page=per_page, error_out=False
        )

        return jsonify({
            'posts': [post.to_dict() for post in posts.items],
            'total': posts.total,
            'pages': posts.pages,
            'current_page': page
        }), 200
    except Exception as e:
        return jsonify({'error': str(e)}), 500


@posts_bp.route('/<int:post_id>', methods=['GET'])
def get_post(post_id):
    """Get a specific post by ID."""
    post = db.session.get(Post, post_id)
    if not post:
        return jsonify({'error': 'Post not found'}), 404
    return jsonify(post.to_dict()), 200


@posts_bp.route('/<int:post_id>/translations', methods=['GET'])
def get_post_translations(post_id):
    """List the translations of a post."""
    post = db.session.get(Post, post_id)
    if not post:
        return jsonify({'error': 'Post not found'}), 404

    translations = post.translations
    return jsonify({
        'source_post_id': post.id,
        'translations': [t.to_dict() for t in translations]
    }), 200


@posts_bp.route('', methods=['POST'])
@editor_required
def create_post():
    """Create a new post and translate it."""
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({'error': 'Request body must be a JSON object'}), 400

    if not all(data.get(k) for k in REQUIRED_FIELDS):
        return jsonify({'error': 'Missing required fields'}), 400

    post = Post()
    error = _apply_fields(post, data)
    if error:
        return jsonify({'error': error}), 400
    if post.author_id is None:
        post.author_id = g.current_user.id

    try:
        db.session.add(post)
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return jsonify({'error': 'Slug already exists'}), 409
    except Exception as e:
        db.session.rollback()
        return jsonify({'error': str(e)}), 500

    events.emit(POST_CREATED, post)

    return jsonify({
        'message': 'Post created successfully',
        'post': post.to_dict()
    }), 201


@posts_bp.route('/<int:post_id>', methods=['PUT'])
@editor_required
def update_post(post_id):
    """Update an existing post and refresh its translations."""
    post = db.session.get(Post, post_id)
    if not post:
        return jsonify({'error': 'Post not found'}), 404

    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({'error': 'Request body must be a JSON object'}), 400
    for key in REQUIRED_FIELDS:
        if key in data and not data[key]:
            return jsonify({'error': f'{key} cannot be empty'}), 400

    error = _apply_fields(post, data)
    if error:
        db.session.rollback()
        return jsonify({'error': error}), 400

    try:
        post.updated_at = datetime.utcnow()
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return jsonify({'error': 'Slug already exists'}), 409
    except Exception as e:
        db.session.rollback()
        return jsonify({'error': str(e)}), 500

    events.emit(POST_UPDATED, post)

    return jsonify({
        'message': 'Post updated successfully',
        'post': post.to_dict()
    }), 200


@posts_bp.route('/<int:post_id>', methods=['DELETE'])
@editor_required
def delete_post(post_id):
    """Delete a post and its translations."""
    try:
        post = db.session.get(Post, post_id)
        if not post:
            return jsonify({'error': 'Post not found'}), 404

        db.session.delete(post)
        db.session.commit()

        return jsonify({'message': 'Post deleted successfully'}), 200
    except Exception as e:
        db.session.rollback()
        return jsonify({'error': str(e)}), 500
