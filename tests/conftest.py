"""
Pytest fixtures for the test suite.

Nothing here talks to Entra, Graph or Key Vault: MSAL apps, Graph services
and secret clients are MagicMocks, and route tests override the auth
dependencies instead of signing in.
"""
from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from travelbook.config import AppConfig, AzureAdConfig
from travelbook.graph import GraphUserService
from travelbook.identity.context import UserPrincipal
from travelbook.identity.msal_client import TokenAcquisition
from travelbook.settings import Settings

TEST_DOMAIN = "testdomain.com"


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig(
        azure_ad=AzureAdConfig(
            tenant_id="tenant-1",
            client_id="client-1",
            client_secret="secret",
            domain=TEST_DOMAIN,
            signed_out_redirect_uri="https://localhost/",
        ),
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(session_secret="test-secret", session_https_only=False)


@pytest.fixture
def principal() -> UserPrincipal:
    return UserPrincipal(
        object_id="oid-1",
        tenant_id="tenant-1",
        preferred_username="jdoe@testdomain.com",
        name="John Doe",
        login_hint="hint-1",
    )


@pytest.fixture
def msal_app() -> MagicMock:
    """Stand-in for msal.ConfidentialClientApplication (construction would hit the network)."""
    return MagicMock()


@pytest.fixture
def token_acquisition(msal_app) -> TokenAcquisition:
    return TokenAcquisition(msal_app)


@pytest.fixture
def graph() -> MagicMock:
    return MagicMock(spec=GraphUserService)
