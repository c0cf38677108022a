"""Routes package for the blog CMS."""


def register_routes(app):
    """Register all route blueprints with the application."""
    from .auth import auth_bp
    from .posts import posts_bp
    from .settings import settings_bp
    from .translations import translations_bp
    
    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(posts_bp, url_prefix='/api/posts')
    app.register_blueprint(settings_bp, url_prefix='/api/settings')
    app.register_blueprint(translations_bp, url_prefix='/api/translations')
