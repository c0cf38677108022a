#!/usr/bin/env python3
"""Create or update a CMS user account.

Usage:
    python scripts/create_cms_user.py admin@example.com "Site Admin" admin
"""

import getpass
import sys
import os

# Add parent directory to path to import blogcms modules
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from blogcms import create_app, db
from blogcms.models import CmsUser
from blogcms.models.user import ROLES


def create_cms_user(email: str, name: str, role: str, password: str) -> CmsUser:
    """Create the user, or reset name/role/password if the email exists."""
    email = email.strip().lower()
    user = CmsUser.query.filter_by(email=email).first()
    if user is None:
        user = CmsUser(email=email)
        db.session.add(user)
    user.name = name
    user.role = role
    user.set_password(password)
    db.session.commit()
    return user


if __name__ == '__main__':
    if len(sys.argv) != 4 or sys.argv[3] not in ROLES:
        print(f"Usage: python {sys.argv[0]} <email> <name> <{'|'.join(ROLES)}>")
        sys.exit(1)
    
    app = create_app(os.getenv('FLASK_ENV', 'development'))
    with app.app_context():
        password = getpass.getpass('Password: ')
        user = create_cms_user(sys.argv[1], sys.argv[2], sys.argv[3], password)
        print(f"Saved {user.role} {user.email} (id={user.id})")
