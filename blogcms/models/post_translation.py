"""Machine-translated copy of a post in one target locale."""

from datetime import datetime
from blogcms import db


class PostTranslation(db.Model):
    """One row per (source post, locale). Written only by the translation service."""
    
    __tablename__ = 'post_translations'
    
    id = db.Column(db.Integer, primary_key=True)
    source_post_id = db.Column(db.Integer, db.ForeignKey('posts.id'), nullable=False, index=True)
    locale = db.Column(db.String(20), nullable=False)
    title = db.Column(db.Text, nullable=False)
    slug = db.Column(db.String(255), nullable=False)
    body = db.Column(db.Text, nullable=False)
    excerpt = db.Column(db.Text, nullable=True)
    tags = db.Column(db.String(500), nullable=True)
    category = db.Column(db.String(100), nullable=True)
    author_id = db.Column(db.Integer, db.ForeignKey('cms_users.id'), nullable=True)
    published = db.Column(db.Boolean, default=False, nullable=False)
    published_at = db.Column(db.DateTime, nullable=True)
    translation_done = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
    
    __table_args__ = (
        db.UniqueConstraint('source_post_id', 'locale', name='idx_post_translations_source_locale'),
        db.Index('idx_post_translations_slug_locale', 'slug', 'locale'),
    )
    
    def to_dict(self):
        return {
            'id': self.id,
            'source_post_id': self.source_post_id,
            'locale': self.locale,
            'title': self.title,
            'slug': self.slug,
            'body': self.body,
            'excerpt': self.excerpt,
            'tags': self.tags,
            'category': self.category,
            'author_id': self.author_id,
            'published': self.published,
            'published_at': self.published_at.isoformat() if self.published_at else None,
            'translation_done': self.translation_done,
            'updated_at': self.updated_at.isoformat()
        }
    
    def __repr__(self):
        return f'<PostTranslation {self.source_post_id}:{self.locale}>'
