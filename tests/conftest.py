"""
Shared fixtures: app on an in-memory database, clients, fake clock and
a fixed sequence of challenges for the contact form gate.
"""
import pytest

from app import create_app
from config import TestingConfig
from models import db as _db
from utils.captcha_helper import Challenge, generate_challenge

START_TIME = 1_700_000_000.0


class FakeClock:
    """Callable clock the tests can move forward."""

    def __init__(self, now=START_TIME):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class ChallengeSequence:
    """Generator returning queued challenges first, random ones afterwards."""

    def __init__(self, *challenges):
        self.queue = list(challenges)
        self.calls = 0

    def push(self, *challenges):
        self.queue.extend(challenges)

    def __call__(self):
        self.calls += 1
        if self.queue:
            return self.queue.pop(0)
        return generate_challenge()


def add(left, right):
    return Challenge(left, right, 'add', left + right)


def multiply(left, right):
    return Challenge(left, right, 'multiply', left * right)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(app):
    client = app.test_client()
    response = client.post('/admin/login', data={
        'email': TestingConfig.SEED_ADMIN_EMAIL,
        'password': TestingConfig.SEED_ADMIN_PASSWORD,
    })
    assert response.status_code == 302
    return client


@pytest.fixture
def gate_env(monkeypatch, clock):
    """Route-level gate with the fake clock and a controllable challenge queue."""
    import routes.public
    sequence = ChallengeSequence()
    monkeypatch.setattr(routes.public, 'gate_clock', clock)
    monkeypatch.setattr(routes.public, 'gate_generator', sequence)
    return sequence
