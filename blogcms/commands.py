"""Flask CLI commands.

Usage:
    flask --app wsgi init-db
    flask --app wsgi translate-posts
"""

import logging
import sys

import click
from flask.cli import with_appcontext

from blogcms.services.bootstrap import bootstrap_database
from blogcms.services.errors import BulkTranslationError, TranslationConfigError
from blogcms.services.translation import translate_all_posts

logger = logging.getLogger(__name__)


@click.command('init-db')
@with_appcontext
def init_db_command():
    """Create tables and the default settings record."""
    bootstrap_database()
    click.echo("Database initialized.")


@click.command('translate-posts')
@with_appcontext
def translate_posts_command():
    """Translate existing source posts using Gemini."""
    try:
        summary = translate_all_posts()
    except TranslationConfigError as e:
        logger.error(f"translate-posts aborted: {e}")
        sys.exit(1)
    except BulkTranslationError as e:
        logger.error(f"translate-posts: {e} ({e.summary})")
        sys.exit(1)
    click.echo(f"translate-posts finished: {summary}")


def register_commands(app):
    app.cli.add_command(init_db_command)
    app.cli.add_command(translate_posts_command)
