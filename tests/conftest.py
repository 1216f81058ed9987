# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Builds apps around injected fake settings
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# app.main creates the module-level app (and loads settings) on import

os.environ.setdefault("API_USERNAME", "env-user")
os.environ.setdefault("API_PASSWORD", "env-pass")
os.environ.setdefault("API_JWT_SECRET", "env-secret")
os.environ.setdefault("ENVIRONMENT", "development")

import pytest
from fastapi.testclient import TestClient

from app.auth.tokens import TokenIssuer, TokenVerifier
from app.config import Settings
from app.main import create_app

TEST_USERNAME = "goodUser"
TEST_PASSWORD = "goodPass"
TEST_SECRET = "test-signing-secret"


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def settings():
    """Settings with fake credentials, independent of the environment."""
    return Settings(
        API_USERNAME=TEST_USERNAME,
        API_PASSWORD=TEST_PASSWORD,
        API_JWT_SECRET=TEST_SECRET,
        ENVIRONMENT="development",
        _env_file=None,
    )


@pytest.fixture
def issuer(settings):
    return TokenIssuer(settings)


@pytest.fixture
def verifier(settings):
    return TokenVerifier(settings)


@pytest.fixture
def app(settings):
    """Fresh app built around the fake settings."""
    return create_app(settings)


@pytest.fixture
def client(app):
    """Test client that returns 500 responses instead of raising."""
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def token(issuer):
    """A valid token for the fake settings."""
    return issuer.issue(TEST_USERNAME, TEST_PASSWORD)
