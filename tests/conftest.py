"""
Pytest configuration and fixtures for testing the SkillExchange API.
"""

import os
import sys
import pytest
from faker import Faker

# Add the parent directory to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from skillexchange import create_app, db
from skillexchange.constants import SkillCategory, SkillLevel
from skillexchange.models import User, Skill, UserSkill
from skillexchange.services import redis_client

fake = Faker()


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    os.environ['FLASK_ENV'] = 'testing'

    app = create_app('testing')

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


def _create_user(password='testpassword123', skills=(), **overrides):
    """Helper to create a user with sensible defaults."""
    data = {
        'name': fake.name()[:50],
        'email': fake.unique.email(),
    }
    data.update(overrides)
    user = User(**data)
    user.set_password(password)
    for skill in skills:
        user.skills.append(_build_user_skill(**skill))
    db.session.add(user)
    db.session.commit()
    user.password = password
    return user


def _build_user_skill(**overrides):
    data = {
        'name': 'Python',
        'category': SkillCategory.PROGRAMMING,
        'level': SkillLevel.INTERMEDIATE,
        'tags': [],
        'certifications': [],
        'is_teaching': True,
        'is_learning': False,
    }
    data.update(overrides)
    return UserSkill(**data)


def _create_skill(**overrides):
    """Helper to create a catalog skill."""
    data = {
        'name': fake.word().capitalize() + ' ' + fake.pystr(min_chars=6, max_chars=8),
        'description': fake.sentence(),
        'category': SkillCategory.OTHER,
        'tags': [],
        'available_levels': ['beginner', 'intermediate'],
        'search_keywords': [],
        'popularity_score': 10,
    }
    data.update(overrides)
    skill = Skill(**data)
    db.session.add(skill)
    db.session.commit()
    return skill


@pytest.fixture
def make_user(db_session):
    """Factory: make_user(skills=[{...}], rating=4.5, city='Riga', ...)."""
    return _create_user


@pytest.fixture
def make_skill(db_session):
    """Factory: make_skill(name='JavaScript', tags=[...], ...)."""
    return _create_skill


@pytest.fixture
def test_user(db_session):
    """Create a test user."""
    return _create_user()


@pytest.fixture
def second_user(db_session):
    """Create a second test user for interaction tests."""
    return _create_user(password='testpassword456')


def _get_token(client, email, password):
    """Login and return JWT token."""
    resp = client.post('/api/auth/login', json={
        'email': email,
        'password': password,
    })
    data = resp.get_json()
    if not data or not data.get('success'):
        raise RuntimeError(
            f"Login failed: status={resp.status_code}, body={resp.data[:200]}"
        )
    return data['data']['token']


@pytest.fixture
def auth_headers(client, test_user):
    """Get authentication headers for test user."""
    token = _get_token(client, test_user.email, test_user.password)
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def second_auth_headers(client, second_user):
    """Get authentication headers for second user."""
    token = _get_token(client, second_user.email, second_user.password)
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def catalog(db_session):
    """The seeded catalog: JavaScript, Python, React, Figma, English."""
    from skillexchange.seed_data import SKILLS_DATA

    skills = {}
    for entry in SKILLS_DATA:
        fields = {k: v for k, v in entry.items() if k != 'stats'}
        fields['category'] = SkillCategory(fields['category'])
        skills[entry['name']] = _create_skill(**fields, **entry['stats'])
    return skills


class FakeRedis:
    """In-memory stand-in for the two sorted-set commands popular searches use."""

    def __init__(self):
        self.sorted_sets = {}

    def zincrby(self, key, amount, member):
        scores = self.sorted_sets.setdefault(key, {})
        scores[member] = scores.get(member, 0) + amount
        return scores[member]

    def zrevrange(self, key, start, end):
        scores = self.sorted_sets.get(key, {})
        ranked = sorted(scores, key=lambda m: (-scores[m], m))
        return ranked[start:end + 1]


@pytest.fixture
def fake_redis(monkeypatch):
    """Route the redis client module to an in-memory fake."""
    fake_client = FakeRedis()
    monkeypatch.setattr(redis_client, '_redis_client', fake_client)
    return fake_client
