"""Tests for the Graph /users client (requests mocked)."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from travelbook.graph import GraphServiceError, GraphUser, GraphUserService, PasswordProfile


def _response(status_code=200, json_body=None, content=b"{}", text="", reason="OK"):
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = 200 <= status_code < 300
    resp.content = content
    resp.text = text
    resp.reason = reason
    resp.json.return_value = json_body
    return resp


@patch("travelbook.graph.client.requests.request")
def test_get_users_sends_select_and_filter(mock_request):
    mock_request.return_value = _response(
        json_body={
            "value": [
                {"id": "u1", "userPrincipalName": "a@contoso.com", "displayName": "A", "mailNickname": "a"},
            ]
        }
    )
    service = GraphUserService("graph-token")

    users = service.get_users(select=["id", "displayName"], filter="id eq 'u1'")

    assert users == [GraphUser(id="u1", user_principal_name="a@contoso.com", display_name="A", mail_nickname="a")]
    args, kwargs = mock_request.call_args
    assert args == ("GET", "https://graph.microsoft.com/v1.0/users")
    assert kwargs["params"] == {"$select": "id,displayName", "$filter": "id eq 'u1'"}
    assert kwargs["headers"]["Authorization"] == "Bearer graph-token"


@patch("travelbook.graph.client.requests.request")
def test_get_users_empty_value(mock_request):
    mock_request.return_value = _response(json_body={"value": []})
    assert GraphUserService("t").get_users() == []


@patch("travelbook.graph.client.requests.request")
def test_create_user_posts_camel_case_body(mock_request):
    mock_request.return_value = _response(
        status_code=201,
        json_body={"id": "new-id", "userPrincipalName": "jdoe@contoso.com", "displayName": "John Doe", "mailNickname": "jdoe"},
    )
    user = GraphUser(
        account_enabled=True,
        display_name="John Doe",
        mail_nickname="jdoe",
        user_principal_name="jdoe@contoso.com",
        password_profile=PasswordProfile(force_change_password_next_sign_in=True, password="pw"),
    )

    created = GraphUserService("t", base_url="https://graph.example/v1.0/").create_user(user)

    assert created.id == "new-id"
    args, kwargs = mock_request.call_args
    assert args == ("POST", "https://graph.example/v1.0/users")
    assert kwargs["json"] == {
        "displayName": "John Doe",
        "mailNickname": "jdoe",
        "userPrincipalName": "jdoe@contoso.com",
        "accountEnabled": True,
        "passwordProfile": {"forceChangePasswordNextSignIn": True, "password": "pw"},
    }


@patch("travelbook.graph.client.requests.request")
def test_create_user_empty_body_returns_none(mock_request):
    mock_request.return_value = _response(status_code=201, content=b"")
    assert GraphUserService("t").create_user(GraphUser(display_name="x")) is None


@patch("travelbook.graph.client.requests.request")
def test_graph_error_message_and_status(mock_request):
    mock_request.return_value = _response(
        status_code=403,
        json_body={"error": {"code": "Authorization_RequestDenied", "message": "Insufficient privileges"}},
        reason="Forbidden",
    )
    with pytest.raises(GraphServiceError) as exc_info:
        GraphUserService("t").get_users()
    assert exc_info.value.status_code == 403
    assert exc_info.value.message == "Insufficient privileges"


@patch("travelbook.graph.client.requests.request")
def test_graph_error_without_json_body(mock_request):
    resp = _response(status_code=502, text="Bad gateway", reason="Bad Gateway")
    resp.json.side_effect = ValueError("no json")
    mock_request.return_value = resp

    with pytest.raises(GraphServiceError) as exc_info:
        GraphUserService("t").get_users()
    assert exc_info.value.message == "Bad gateway"


@patch("travelbook.graph.client.requests.request")
def test_network_error_maps_to_503(mock_request):
    mock_request.side_effect = requests.ConnectionError("down")
    with pytest.raises(GraphServiceError) as exc_info:
        GraphUserService("t").get_users()
    assert exc_info.value.status_code == 503
