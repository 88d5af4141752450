import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

# Ensure project root is on sys.path
sys.path.append(str(Path(__file__).resolve().parents[1]))

from domain.models.member import AuthenticationResult, Member
from services.login_handler import LoginHandler


class FakeAuthenticator:
    """Accepts exactly the given (email, password) pairs."""

    def __init__(self, members=None):
        self.members = members or {}
        self.calls = []

    def authenticate(self, credentials):
        self.calls.append(dict(credentials))
        entry = self.members.get(credentials.get("Email"))
        if entry and entry[0] == credentials.get("Password"):
            return AuthenticationResult.success(entry[1])
        return AuthenticationResult.failure("Wrong email or password.")


class RecordingIdentityStore:
    def __init__(self, fail_with=None, session=None):
        self.fail_with = fail_with
        self.session = session
        self.logins = []
        self.logouts = 0

    def log_in(self, member, remember=False, request_context=None):
        if self.fail_with is not None:
            raise self.fail_with
        self.logins.append((member, remember))
        if self.session is not None:
            self.session.set("loggedInAs", member.id)

    def log_out(self, request_context=None):
        self.logouts += 1
        if self.session is not None:
            self.session.clear("loggedInAs")


class DictSessionStore:
    def __init__(self):
        self.data = {}

    def get(self, key, default=None):
        return self.data.get(key, default)

    def set(self, key, value):
        self.data[key] = value

    def clear(self, key):
        self.data.pop(key, None)


def make_member(**overrides) -> Member:
    data = {
        "id": "1",
        "email": "sam@example.com",
        "first_name": "Sam",
        "surname": "Minnée",
        "password_expired": False,
    }
    data.update(overrides)
    return Member(**data)


@pytest.fixture
def member():
    return make_member()


@pytest.fixture
def session_store():
    return DictSessionStore()


@pytest.fixture
def identity_store(session_store):
    return RecordingIdentityStore(session=session_store)


@pytest.fixture
def authenticator(member):
    return FakeAuthenticator({"sam@example.com": ("1nitialPassword", member)})


@pytest.fixture
def request_context():
    return SimpleNamespace(host_url="http://www.example.com/")


@pytest.fixture
def make_handler(authenticator, identity_store, session_store):
    def _make(config=None, **overrides):
        return LoginHandler(
            "/Security/login",
            overrides.get("authenticator", authenticator),
            overrides.get("identity_store", identity_store),
            overrides.get("session_store", session_store),
            config=config or {},
        )

    return _make


@pytest.fixture
def member_factory():
    return make_member


@pytest.fixture
def fake_authenticator_cls():
    return FakeAuthenticator


@pytest.fixture
def identity_store_cls():
    return RecordingIdentityStore
