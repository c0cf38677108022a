"""Service layer for the blog CMS."""
