"""Create CMS tables: users, posts, translations, settings, secrets.

Revision ID: create_cms_tables
Revises:
Create Date: 2026-10-18
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'create_cms_tables'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table('cms_users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=120), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False, server_default='viewer'),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_cms_users_email'), 'cms_users', ['email'], unique=True)

    op.create_table('posts',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('slug', sa.String(length=255), nullable=False),
        sa.Column('body', sa.Text(), nullable=False),
        sa.Column('excerpt', sa.Text(), nullable=True),
        sa.Column('tags', sa.String(length=500), nullable=True),
        sa.Column('category', sa.String(length=100), nullable=True),
        sa.Column('author_id', sa.Integer(), nullable=True),
        sa.Column('published', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('published_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['author_id'], ['cms_users.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_posts_slug'), 'posts', ['slug'], unique=True)
    op.create_index(op.f('ix_posts_category'), 'posts', ['category'], unique=False)
    op.create_index(op.f('ix_posts_author_id'), 'posts', ['author_id'], unique=False)
    op.create_index(op.f('ix_posts_published'), 'posts', ['published'], unique=False)
    op.create_index(op.f('ix_posts_published_at'), 'posts', ['published_at'], unique=False)

    op.create_table('post_translations',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('source_post_id', sa.Integer(), nullable=False),
        sa.Column('locale', sa.String(length=20), nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('slug', sa.String(length=255), nullable=False),
        sa.Column('body', sa.Text(), nullable=False),
        sa.Column('excerpt', sa.Text(), nullable=True),
        sa.Column('tags', sa.String(length=500), nullable=True),
        sa.Column('category', sa.String(length=100), nullable=True),
        sa.Column('author_id', sa.Integer(), nullable=True),
        sa.Column('published', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('published_at', sa.DateTime(), nullable=True),
        sa.Column('translation_done', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['author_id'], ['cms_users.id'], ),
        sa.ForeignKeyConstraint(['source_post_id'], ['posts.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('source_post_id', 'locale', name='idx_post_translations_source_locale')
    )
    op.create_index(op.f('ix_post_translations_source_post_id'), 'post_translations', ['source_post_id'], unique=False)
    op.create_index('idx_post_translations_slug_locale', 'post_translations', ['slug', 'locale'], unique=False)

    op.create_table('settings',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('site_name', sa.String(length=255), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('site_url', sa.String(length=255), nullable=True),
        sa.Column('site_language', sa.String(length=20), nullable=True),
        sa.Column('enable_post_translation', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('translation_source_locale', sa.String(length=20), nullable=True),
        sa.Column('translation_locales', sa.Text(), nullable=True),
        sa.Column('translation_model', sa.String(length=100), nullable=True),
        sa.Column('gemini_api_key', sa.String(length=255), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table('app_secrets',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('gemini_api_key', sa.String(length=255), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )


def downgrade():
    op.drop_table('app_secrets')
    op.drop_table('settings')
    op.drop_index('idx_post_translations_slug_locale', table_name='post_translations')
    op.drop_index(op.f('ix_post_translations_source_post_id'), table_name='post_translations')
    op.drop_table('post_translations')
    op.drop_index(op.f('ix_posts_published_at'), table_name='posts')
    op.drop_index(op.f('ix_posts_published'), table_name='posts')
    op.drop_index(op.f('ix_posts_author_id'), table_name='posts')
    op.drop_index(op.f('ix_posts_category'), table_name='posts')
    op.drop_index(op.f('ix_posts_slug'), table_name='posts')
    op.drop_table('posts')
    op.drop_index(op.f('ix_cms_users_email'), table_name='cms_users')
    op.drop_table('cms_users')
