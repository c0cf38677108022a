#!/usr/bin/env python
"""Database initialization script for the blog CMS backend.

Creates all tables, moves a legacy Gemini key into app_secrets and makes
sure the single settings record exists. Same as ``flask init-db``.

Usage:
    python init_db.py
"""

import os
import sys
from blogcms import create_app
from blogcms.services.bootstrap import bootstrap_database


def init_database():
    """Initialize the database. Returns True on success."""
    config_name = os.getenv('FLASK_ENV', 'development')
    app = create_app(config_name)
    
    with app.app_context():
        try:
            print(f"Database URI: {app.config['SQLALCHEMY_DATABASE_URI']}")
            bootstrap_database()
            print("Database initialization complete.")
            return True
        except Exception as e:
            print(f"Error creating database: {type(e).__name__}: {e}")
            return False


if __name__ == '__main__':
    success = init_database()
    sys.exit(0 if success else 1)
