"""CMS user model for editorial accounts."""

from datetime import datetime
from werkzeug.security import generate_password_hash, check_password_hash
from blogcms import db

ROLES = ('admin', 'editor', 'viewer')


class CmsUser(db.Model):
    """Editorial account that can sign in to the admin API."""
    
    __tablename__ = 'cms_users'
    
    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    name = db.Column(db.String(120), nullable=False)
    role = db.Column(db.String(20), default='viewer', nullable=False)  # 'admin', 'editor', 'viewer'
    password_hash = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    
    posts = db.relationship('Post', backref='author', lazy=True, foreign_keys='Post.author_id')
    
    def set_password(self, password):
        """Hash and set the user password."""
        self.password_hash = generate_password_hash(password)
    
    def check_password(self, password):
        """Check if the provided password matches the hash."""
        return check_password_hash(self.password_hash, password)
    
    @property
    def can_edit(self):
        return self.role in ('admin', 'editor')
    
    def to_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'name': self.name,
            'role': self.role,
            'created_at': self.created_at.isoformat(),
        }
    
    def __repr__(self):
        return f'<CmsUser {self.email}>'
