import os
import sys
import pytest

# make sure the repo root is on sys.path
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from logging_config import get_colorful_logger
from auth.config import AuthConfig, TokenOptions

SECRET = "test-secret-0123456789abcdef0123456789abcdef"


@pytest.fixture(scope="session")
def logger():
    return get_colorful_logger("tests", use_rich=False)


@pytest.fixture
def secret():
    return SECRET


@pytest.fixture
def config():
    """Reference pair alice/hunter2 with a one hour token lifetime."""
    return AuthConfig(
        secret=SECRET,
        username="alice",
        password="hunter2",
        token_options=TokenOptions(expires_in=3600),
    )


@pytest.fixture
def unconfigured():
    return AuthConfig(secret=SECRET)


@pytest.fixture
def make_client():
    """
    Factory building a TestClient around create_app().
    Usage: client = make_client(config, public_paths=(...))
    """
    from fastapi.testclient import TestClient
    from main import create_app

    def _mk(cfg, **kwargs):
        return TestClient(create_app(cfg, **kwargs))
    return _mk
