"""Database models for the blog CMS."""

from .user import CmsUser
from .post import Post
from .post_translation import PostTranslation
from .settings import SiteSettings, AppSecret

__all__ = ['CmsUser', 'Post', 'PostTranslation', 'SiteSettings', 'AppSecret']
