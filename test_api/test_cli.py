"""
Tests for the command-line runner
"""

import pytest
import httpx
from unittest.mock import patch
import run_contract
from app import create_app
from seeded_service.config.store import seed_store


def _client_for(app):
    def factory(base_url, timeout):
        return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test", timeout=timeout)
    return factory


class TestRunContract:

    @pytest.mark.integration
    def test_conforming_target_exits_zero(self, capsys):
        with patch("run_contract.build_client", _client_for(create_app())):
            exit_code = run_contract.main(["--extended", "--preflight"])
        assert exit_code == 0
        out = capsys.readouterr().out
        assert "Passed: 18/18" in out

    @pytest.mark.integration
    def test_rerun_on_same_target_exits_one(self, capsys):
        app = create_app()
        with patch("run_contract.build_client", _client_for(app)):
            assert run_contract.main([]) == 0
            assert run_contract.main([]) == 1
        assert "FAIL [contract]" in capsys.readouterr().out

    @pytest.mark.integration
    def test_unseeded_target_fails_preflight(self, capsys):
        app = create_app(seed_store(admin_email="root@example.com", admin_username="root", admin_password="rootpass"))
        with patch("run_contract.build_client", _client_for(app)):
            exit_code = run_contract.main(["--preflight"])
        assert exit_code == 2
        assert "Preflight failed" in capsys.readouterr().out

    @pytest.mark.unit
    def test_url_and_timeout_flags(self):
        seen = {}

        def factory(base_url, timeout):
            seen.update(base_url=base_url, timeout=timeout)
            return httpx.AsyncClient(transport=httpx.ASGITransport(app=create_app()), base_url="http://test")

        with patch("run_contract.build_client", factory):
            run_contract.main(["--url", "http://target:9000", "--timeout", "5"])
        assert seen == {"base_url": "http://target:9000", "timeout": 5.0}
