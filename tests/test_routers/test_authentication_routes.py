"""Sign-in / sign-out routes (MSAL mocked, no lifespan)."""

from urllib.parse import parse_qs, urlparse

import pytest
from fastapi.testclient import TestClient

from travelbook.main import create_app


@pytest.fixture
def app(app_config, settings, token_acquisition):
    app = create_app(config=app_config, settings=settings)
    app.state.token_acquisition = token_acquisition
    return app


@pytest.fixture
def client(app):
    return TestClient(app, follow_redirects=False)


def test_log_in_redirects_to_authorize_url(client, msal_app):
    msal_app.initiate_auth_code_flow.return_value = {"auth_uri": "https://login.example/authorize?x=1", "state": "s"}

    resp = client.get("/Authentication/LogIn")

    assert resp.status_code == 302
    assert resp.headers["location"] == "https://login.example/authorize?x=1"
    kwargs = msal_app.initiate_auth_code_flow.call_args.kwargs
    assert kwargs["redirect_uri"] == "http://testserver/signin-oidc"
    assert kwargs["scopes"] == ["user.read", "user.readwrite.all", "device.read.all"]
    assert kwargs["login_hint"] is None


def test_full_sign_in_then_log_out(client, msal_app):
    msal_app.initiate_auth_code_flow.return_value = {"auth_uri": "https://login.example/authorize", "state": "s"}
    msal_app.acquire_token_by_auth_code_flow.return_value = {
        "id_token": "raw-id-token",
        "id_token_claims": {"oid": "oid-1", "tid": "tenant-1", "login_hint": "hint-1"},
    }
    account = {"home_account_id": "oid-1.tenant-1"}
    msal_app.get_accounts.return_value = [account]

    client.get("/Authentication/LogIn")
    callback = client.get("/signin-oidc", params={"code": "c", "state": "s"})
    assert callback.status_code == 302
    assert callback.headers["location"] == "/"
    flow_arg = msal_app.acquire_token_by_auth_code_flow.call_args.kwargs["auth_code_flow"]
    assert flow_arg["state"] == "s"

    logout = client.post("/Authentication/LogOut")

    assert logout.status_code == 302
    query = parse_qs(urlparse(logout.headers["location"]).query)
    assert query["id_token_hint"] == ["raw-id-token"]
    assert query["logout_hint"] == ["hint-1"]
    msal_app.remove_account.assert_called_once_with(account)


def test_callback_without_flow_is_400(client):
    resp = client.get("/signin-oidc", params={"code": "c"})
    assert resp.status_code == 400


def test_callback_with_msal_error_is_400(client, msal_app):
    msal_app.initiate_auth_code_flow.return_value = {"auth_uri": "https://login.example/authorize", "state": "s"}
    msal_app.acquire_token_by_auth_code_flow.return_value = {"error": "access_denied"}

    client.get("/Authentication/LogIn")
    resp = client.get("/signin-oidc", params={"error": "access_denied", "state": "s"})

    assert resp.status_code == 400
    assert "access_denied" in resp.json()["detail"]


def test_signed_out_callback_redirects_home(client):
    resp = client.get("/signout-callback-oidc")
    assert resp.status_code == 302
    assert resp.headers["location"] == "/"


def test_log_out_without_session(client, msal_app):
    resp = client.post("/Authentication/LogOut")
    assert resp.status_code == 302
    assert resp.headers["location"].startswith("https://login.microsoftonline.com/tenant-1/oauth2/v2.0/logout?")
    msal_app.remove_account.assert_not_called()
