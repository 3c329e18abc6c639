"""Tests for the API-driven user seeder."""
import pytest
import requests
from unittest.mock import Mock, patch

from fyla.circuit_breaker import CircuitBreakerOpen
from fyla.seeding.fixtures import CLIENTS, PROVIDERS
from fyla.seeding.users import UserSeeder


def response(status_code=200, payload=None):
    resp = Mock()
    resp.status_code = status_code
    resp.json.return_value = payload or {}
    return resp


def http_error(status_code, payload=None):
    return requests.exceptions.HTTPError(f"{status_code} Error", response=response(status_code, payload))


def registered(user_id):
    return response(200, {"user": {"id": user_id}, "token": f"token-{user_id}"})


@pytest.fixture
def seeder():
    return UserSeeder("http://localhost:5002/api/", "password123", session=Mock(), pause=0)


class TestRegister:

    def test_register_payload(self, seeder):
        with patch("fyla.seeding.users.call_with_protection", return_value=registered(7)) as mock_call:
            result = seeder.register(CLIENTS[0], "Client")

        assert result["user"]["id"] == 7
        args, kwargs = mock_call.call_args
        assert args[1:3] == ("POST", "http://localhost:5002/api/auth/register")
        assert kwargs["json"] == {
            "fullName": "Emma Johnson",
            "email": CLIENTS[0]["email"],
            "password": "password123",
            "confirmPassword": "password123",
            "phoneNumber": CLIENTS[0]["phone_number"],
            "role": "Client",
        }
        assert "Authorization" not in kwargs["headers"]

    @pytest.mark.parametrize("status_code", [400, 409])
    def test_existing_email_skipped(self, seeder, status_code):
        error = http_error(status_code, {"message": "Email already registered"})
        with patch("fyla.seeding.users.call_with_protection", side_effect=error):
            assert seeder.register(CLIENTS[0], "Client") is None

    def test_other_errors_propagate(self, seeder):
        with patch("fyla.seeding.users.call_with_protection", side_effect=http_error(500)):
            with pytest.raises(requests.exceptions.HTTPError):
                seeder.register(CLIENTS[0], "Client")


class TestRun:

    def test_provider_gets_profile_and_services(self, seeder):
        calls = [registered(21), response(204)] + [response(201)] * 3
        with patch("fyla.seeding.users.call_with_protection", side_effect=calls) as mock_call:
            report = seeder.run(clients=[], providers=PROVIDERS[:1])

        assert report.created == [PROVIDERS[0]["email"]]
        assert report.services_added == 3
        profile_args, profile_kwargs = mock_call.call_args_list[1]
        assert profile_args[1:3] == ("PUT", "http://localhost:5002/api/users/21")
        assert profile_kwargs["headers"] == {"Authorization": "Bearer token-21"}
        assert profile_kwargs["json"]["profilePictureUrl"].endswith("seed=SophiaGrace")
        service_names = [kwargs["json"]["name"] for _, kwargs in mock_call.call_args_list[2:]]
        assert service_names == ["Basic Facial", "Deep Cleansing Facial", "Anti-Aging Facial"]
        assert mock_call.call_args_list[0].kwargs["json"]["role"] == "ServiceProvider"

    def test_clients_get_no_services(self, seeder):
        with patch("fyla.seeding.users.call_with_protection", side_effect=[registered(1), response(204)]) as mock_call:
            report = seeder.run(clients=CLIENTS[:1], providers=[])

        assert report.created == [CLIENTS[0]["email"]]
        assert report.services_added == 0
        assert mock_call.call_count == 2

    def test_skip_and_failure_recorded(self, seeder):
        calls = [
            http_error(409),
            requests.exceptions.ConnectionError("refused"),
            registered(3),
            response(204),
        ]
        with patch("fyla.seeding.users.call_with_protection", side_effect=calls):
            report = seeder.run(clients=CLIENTS[:3], providers=[])

        assert report.skipped == [CLIENTS[0]["email"]]
        assert report.failed == [CLIENTS[1]["email"]]
        assert report.created == [CLIENTS[2]["email"]]

    def test_open_circuit_aborts_run(self, seeder):
        with patch("fyla.seeding.users.call_with_protection", side_effect=CircuitBreakerOpen("open")):
            with pytest.raises(CircuitBreakerOpen):
                seeder.run(clients=CLIENTS[:2], providers=[])
