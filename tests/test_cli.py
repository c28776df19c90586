from __future__ import annotations

import asyncio

import httpx
import pytest
from typer.testing import CliRunner

from directus_sdk.adapters.http_client import build_async_client
from directus_sdk.cli import doctor
from directus_sdk.cli.main import app
from directus_sdk.client import DirectusClient
from directus_sdk.core.config import get_user_env_file

from conftest import Recorder

runner = CliRunner()

HEALTHY = {
    ("GET", "/server/health"): (200, {"status": "ok"}),
    ("GET", "/server/info"): (200, {"data": {"project": {"project_name": "Blog"}}}),
    ("GET", "/users/me"): (200, {"data": {"id": "u1", "email": "bot@example.com"}}),
    ("POST", "/auth/login"): (200, {"data": {"access_token": "a1", "refresh_token": "r1"}}),
    ("POST", "/auth/logout"): (204, None),
}


@pytest.fixture
def patch_client(monkeypatch):
    def _patch(routes):
        recorder = Recorder(dict(routes))

        def factory(url, *, settings):
            http_client = build_async_client(settings, base_url=url, transport=httpx.MockTransport(recorder))
            return DirectusClient(url, settings=settings, http_client=http_client)

        monkeypatch.setattr(doctor, "DirectusClient", factory)
        return recorder

    return _patch


def test_collect_report_without_credentials(make_client):
    client, _ = make_client(dict(HEALTHY))

    report = asyncio.run(doctor.collect_report(client))

    rows = {check: status for check, status, _ in report.rows}
    assert rows == {
        "Base URL": "OK",
        "Health": "OK",
        "Server info": "OK",
        "Static token": "OPTIONAL",
        "Login": "SKIPPED",
    }
    assert report.ok
    assert report.server_info.project.project_name == "Blog"


def test_collect_report_with_token_and_login(make_client):
    client, recorder = make_client(
        dict(HEALTHY),
        static_token="static",
        email="bot@example.com",
        password="pw",
    )

    report = asyncio.run(doctor.collect_report(client))

    rows = {check: (status, details) for check, status, details in report.rows}
    assert rows["Static token"] == ("OK", "bot@example.com")
    assert rows["Login"] == ("OK", "bot@example.com")
    assert ("POST", "/auth/logout") in [(r.method, r.url.path) for r in recorder.requests]


def test_collect_report_flags_failures(make_client):
    client, _ = make_client(
        {
            ("GET", "/server/health"): (500, {"status": "error"}),
            ("GET", "/server/info"): (500, {"errors": [{"message": "boom"}]}),
        }
    )

    report = asyncio.run(doctor.collect_report(client))

    assert not report.ok
    rows = {check: (status, details) for check, status, details in report.rows}
    assert rows["Health"][0] == "FAIL"
    assert rows["Server info"] == ("FAIL", "boom")


def test_doctor_run_prints_table(patch_client):
    recorder = patch_client(HEALTHY)

    result = runner.invoke(app, ["doctor", "run", "--url", "http://cms.test"])

    assert result.exit_code == 0, result.output
    assert "Directus Doctor" in result.output
    assert "Blog" in result.output
    assert recorder.requests[0].url.host == "cms.test"


def test_doctor_run_exits_non_zero_on_failure(patch_client):
    patch_client({("GET", "/server/health"): (500, None)})

    result = runner.invoke(app, ["doctor", "run", "--url", "http://cms.test"])

    assert result.exit_code == 1


def test_doctor_setup_writes_user_env():
    result = runner.invoke(app, ["doctor", "setup"], input="https://cms.example.com/\nsecret-token\n")

    assert result.exit_code == 0, result.output
    lines = get_user_env_file().read_text(encoding="utf-8").splitlines()
    assert "DIRECTUS_URL=https://cms.example.com" in lines
    assert "DIRECTUS_STATIC_TOKEN=secret-token" in lines


def test_doctor_setup_rejects_bad_url():
    result = runner.invoke(app, ["doctor", "setup"], input="cms.example.com\n\n")

    assert result.exit_code != 0
    assert not get_user_env_file().exists()
