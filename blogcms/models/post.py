"""Post model for authored blog content."""

from datetime import datetime
from blogcms import db


class Post(db.Model):
    """Source-language blog post. Translations hang off it by locale."""
    
    __tablename__ = 'posts'
    
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(255), unique=True, nullable=False, index=True)
    body = db.Column(db.Text, nullable=False)  # HTML
    excerpt = db.Column(db.Text, nullable=True)
    tags = db.Column(db.String(500), nullable=True)  # comma separated
    category = db.Column(db.String(100), nullable=True, index=True)
    author_id = db.Column(db.Integer, db.ForeignKey('cms_users.id'), nullable=True, index=True)
    published = db.Column(db.Boolean, default=False, nullable=False, index=True)
    published_at = db.Column(db.DateTime, nullable=True, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
    
    translations = db.relationship(
        'PostTranslation',
        backref='source_post',
        lazy=True,
        order_by='PostTranslation.locale',
        cascade='all',
    )
    
    def to_dict(self):
        """Convert post to dictionary."""
        return {
            'id': self.id,
            'title': self.title,
            'slug': self.slug,
            'body': self.body,
            'excerpt': self.excerpt,
            'tags': self.tags,
            'category': self.category,
            'author_id': self.author_id,
            'published': self.published,
            'published_at': self.published_at.isoformat() if self.published_at else None,
            'created_at': self.created_at.isoformat(),
            'updated_at': self.updated_at.isoformat()
        }
    
    def __repr__(self):
        return f'<Post {self.id}: {self.slug}>'
