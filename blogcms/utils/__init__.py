"""Shared utilities for the blog CMS backend."""

from blogcms.utils.auth import token_required, editor_required, admin_required, create_token

__all__ = [
    'token_required',
    'editor_required',
    'admin_required',
    'create_token',
]
