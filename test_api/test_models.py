"""
Unit Tests for Models and Configuration
"""

import pytest
import httpx
from pydantic import ValidationError
from auth_contract.config.settings import ContractConfig, load_identities
from auth_contract.models.models import HttpOutcome, Identity, RunState


class TestIdentity:

    @pytest.mark.unit
    @pytest.mark.parametrize("field", ["email", "username", "password"])
    def test_empty_field_rejected(self, field):
        data = {"email": "a@example.com", "username": "a", "password": "pw"}
        data[field] = ""
        with pytest.raises(ValidationError):
            Identity(**data)

    @pytest.mark.unit
    def test_identity_is_immutable(self, sample_identity):
        with pytest.raises(ValidationError):
            sample_identity.password = "other"

    @pytest.mark.unit
    def test_payloads(self, sample_identity):
        assert sample_identity.registration_payload() == {
            "email": "gin@ex.com",
            "username": "ginuser",
            "password": "pw123",
        }
        assert sample_identity.login_payload() == {"email": "gin@ex.com", "password": "pw123"}


class TestHttpOutcome:

    @pytest.mark.unit
    @pytest.mark.parametrize("status_code, ok", [(200, True), (201, True), (299, True), (301, False), (403, False), (500, False)])
    def test_ok_is_2xx(self, status_code, ok):
        outcome = HttpOutcome.from_response(httpx.Response(status_code, text="x"))
        assert outcome.ok is ok
        assert outcome.status_code == status_code

    @pytest.mark.unit
    def test_json_decodes_body(self):
        outcome = HttpOutcome.from_response(httpx.Response(200, json=[{"Username": "admin"}]))
        assert outcome.json() == [{"Username": "admin"}]

    @pytest.mark.unit
    def test_json_raises_on_garbage(self):
        outcome = HttpOutcome.from_response(httpx.Response(200, text="not json"))
        with pytest.raises(ValueError):
            outcome.json()


class TestRunState:

    @pytest.mark.unit
    def test_starts_without_sessions(self):
        state = RunState()
        assert state.user_token == ""
        assert state.admin_token == ""

    @pytest.mark.unit
    def test_states_are_independent(self):
        first, second = RunState(), RunState()
        first.user_token = "abc"
        assert second.user_token == ""


class TestConfiguration:

    @pytest.mark.unit
    def test_defaults(self, monkeypatch):
        for name in ("CONTRACT_BASE_URL", "CONTRACT_TIMEOUT", "CONTRACT_TARGET_USER_ID"):
            monkeypatch.delenv(name, raising=False)
        config = ContractConfig.from_env()
        assert config.base_url == "http://localhost:8080"
        assert config.timeout == 30.0
        assert config.target_user_id == "1"

    @pytest.mark.unit
    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("CONTRACT_BASE_URL", "http://target:9000")
        monkeypatch.setenv("CONTRACT_TIMEOUT", "5")
        monkeypatch.setenv("CONTRACT_TARGET_USER_ID", "7")
        config = ContractConfig.from_env()
        assert config.base_url == "http://target:9000"
        assert config.timeout == 5.0
        assert config.target_user_id == "7"

    @pytest.mark.unit
    def test_default_identities(self, monkeypatch):
        for name in ("USER", "ADMIN"):
            for field in ("EMAIL", "USERNAME", "PASSWORD"):
                monkeypatch.delenv(f"CONTRACT_{name}_{field}", raising=False)
        identities = load_identities()
        assert identities.user == Identity(email="testuser@example.com", username="testuser", password="testpass")
        assert identities.admin == Identity(email="admin@example.com", username="admin", password="adminpass")

    @pytest.mark.unit
    def test_admin_identity_override(self, monkeypatch):
        monkeypatch.setenv("CONTRACT_ADMIN_PASSWORD", "rotated")
        assert load_identities().admin.password == "rotated"
