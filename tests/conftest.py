"""
Pytest configuration and fixtures for testing the blog CMS backend.
"""

import os
import sys
from datetime import datetime, timedelta
import pytest
from faker import Faker

# Add the parent directory to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from blogcms import create_app, db
from blogcms.models import CmsUser, Post, SiteSettings, AppSecret
from blogcms.services.errors import EngineError
from blogcms.services.record_store import RecordStore
from blogcms.services.translation_settings import TranslationSettings

fake = Faker()


class FakeEngine:
    """Translation engine double that records every call.
    
    Calls for a locale in ``fail_locales`` or a title in ``fail_titles``
    raise an HTTP ``EngineError``.
    """
    
    def __init__(self, fail_locales=(), fail_titles=(), prefix='tr'):
        self.fail_locales = set(fail_locales)
        self.fail_titles = set(fail_titles)
        self.prefix = prefix
        self.calls = []
    
    def translate(self, title, body, source_locale, target_locale, model, api_key):
        self.calls.append({
            'title': title,
            'body': body,
            'source_locale': source_locale,
            'target_locale': target_locale,
            'model': model,
            'api_key': api_key,
        })
        if target_locale in self.fail_locales or title in self.fail_titles:
            raise EngineError(EngineError.HTTP, 'unexpected status 503', status=503, body='unavailable')
        return (
            f"[{self.prefix}:{target_locale}] {title}",
            f"<p>[{self.prefix}:{target_locale}]</p>{body}",
        )
    
    @property
    def locales_called(self):
        return [call['target_locale'] for call in self.calls]


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    os.environ['JWT_SECRET_KEY'] = 'test-secret-key-for-testing'

    app = create_app('testing')
    app.config['JWT_SECRET_KEY'] = 'test-secret-key-for-testing'

    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client for each test function."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Create a fresh database session for each test."""
    with app.app_context():
        for table in reversed(db.metadata.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()
        yield db.session
        db.session.rollback()


@pytest.fixture
def store(db_session):
    return RecordStore()


@pytest.fixture
def fake_engine():
    return FakeEngine()


@pytest.fixture
def active_settings():
    """Translation settings that allow engine calls, built in memory."""
    return TranslationSettings(
        enabled=True,
        source_locale='ja',
        locales=('en', 'ko', 'zh-cn'),
        model='gemini-1.5-flash',
        api_key='test-key',
    )


def _create_post(**overrides):
    data = {
        'title': fake.sentence(nb_words=5),
        'slug': fake.unique.slug(),
        'body': f"<p>{fake.paragraph()}</p>",
        'tags': 'travel,food',
        'category': 'diary',
        'published': True,
        'published_at': datetime(2026, 1, 1) + timedelta(days=fake.pyint(0, 300)),
    }
    data.update(overrides)
    post = Post(**data)
    db.session.add(post)
    db.session.commit()
    return post


@pytest.fixture
def make_post(db_session):
    """Factory creating committed posts."""
    return _create_post


@pytest.fixture
def make_site_settings(db_session):
    """Factory storing settings and (optionally) the secret key rows."""
    def _make(secret_key='test-key', **overrides):
        data = {
            'site_name': 'Test Blog',
            'site_language': 'ja',
            'enable_post_translation': True,
            'translation_locales': 'en, ko',
            'translation_model': 'gemini-1.5-flash',
        }
        data.update(overrides)
        settings = SiteSettings(**data)
        db.session.add(settings)
        if secret_key is not None:
            db.session.add(AppSecret(gemini_api_key=secret_key))
        db.session.commit()
        return settings
    return _make


def _create_user(role='editor', password='testpassword123'):
    user = CmsUser(
        email=fake.unique.email(),
        name=fake.name(),
        role=role,
    )
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    return {'id': user.id, 'email': user.email, 'role': user.role, 'password': password}


def _get_token(client, email, password):
    """Login and return JWT token."""
    resp = client.post('/api/auth/login', json={
        'email': email,
        'password': password,
    })
    data = resp.get_json()
    if not data or 'token' not in data:
        raise RuntimeError(f"Login failed: status={resp.status_code}, body={data}")
    return data['token']


@pytest.fixture
def editor_user(app, db_session):
    return _create_user(role='editor')


@pytest.fixture
def admin_user(app, db_session):
    return _create_user(role='admin')


@pytest.fixture
def viewer_user(app, db_session):
    return _create_user(role='viewer')


@pytest.fixture
def editor_headers(client, editor_user):
    token = _get_token(client, editor_user['email'], editor_user['password'])
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def admin_headers(client, admin_user):
    token = _get_token(client, admin_user['email'], admin_user['password'])
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def viewer_headers(client, viewer_user):
    token = _get_token(client, viewer_user['email'], viewer_user['password'])
    return {'Authorization': f'Bearer {token}'}
