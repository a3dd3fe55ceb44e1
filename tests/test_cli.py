"""Tests for sonar_client/cli.py"""

import base64
import json
import textwrap

import pytest
import yaml
from click.testing import CliRunner

from sonar_client.cli import cli, option_class
from sonar_client.services.projects import ProjectsService, ProjectsUpdateKeyOption
from sonar_client.services.server import ServerService

from support import BASE, form, query


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("SONAR_URL", "SONAR_TOKEN", "SONAR_USERNAME", "SONAR_PASSWORD", "SONAR_PASSCODE"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config_file(tmp_path):
    p = tmp_path / "sonar-config.yaml"
    p.write_text(textwrap.dedent("""\
        server:
          url: "https://sonar.example.com"
          token: "squ_abc123"
        projects:
          billing: "com.example.billing"
        """), encoding="utf-8")
    return p


@pytest.fixture
def run(config_file):
    runner = CliRunner()

    def _run(*args: str):
        return runner.invoke(cli, ["--config", str(config_file), *args], obj={})

    return _run


# ---------------------------------------------------------------------------
# Command generation
# ---------------------------------------------------------------------------

def test_option_class():
    assert option_class(ProjectsService.update_key) is ProjectsUpdateKeyOption
    assert option_class(ServerService.version) is None


def test_help_lists_services():
    result = CliRunner().invoke(cli, ["--help"])
    assert result.exit_code == 0
    for name in ("webhooks", "qualitygates", "project-branches", "user-tokens"):
        assert name in result.output


def test_method_names_are_kebab_case():
    result = CliRunner().invoke(cli, ["navigation", "--help"])
    assert result.exit_code == 0
    assert "global" in result.output
    assert "marketplace" in result.output


def test_paginated_commands_offer_all_pages():
    result = CliRunner().invoke(cli, ["projects", "search", "--help"])
    assert "--all-pages" in result.output
    assert "--on-provisioned-only / --no-on-provisioned-only" in result.output


@pytest.mark.parametrize("command", ["search-gitlab-repos", "search-bitbucketcloud-repos", "list-github-repositories"])
def test_alm_listings_have_no_all_pages(command):
    result = CliRunner().invoke(cli, ["alm-integrations", command, "--help"])
    assert result.exit_code == 0, result.output
    assert "--all-pages" not in result.output
    assert "--page-size" in result.output


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

def test_json_output_with_alias(run, requests_mock):
    adapter = requests_mock.get(f"{BASE}/api/webhooks/list", json={"webhooks": []})
    result = run("webhooks", "list", "--project", "billing")

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {"webhooks": []}
    assert query(adapter.last_request) == {"project": "com.example.billing"}


def test_list_and_bool_options(run, requests_mock):
    adapter = requests_mock.get(f"{BASE}/api/issues/search", json={"issues": []})
    result = run("issues", "search", "--severities", "BLOCKER,CRITICAL", "--resolved", "--no-in-new-code-period")

    assert result.exit_code == 0, result.output
    params = query(adapter.last_request)
    assert params["severities"] == "BLOCKER,CRITICAL"
    assert params["resolved"] == "true"
    assert params["inNewCodePeriod"] == "false"


def test_unset_bool_is_not_sent(run, requests_mock):
    adapter = requests_mock.get(f"{BASE}/api/projects/search", json={"components": []})
    run("projects", "search")
    assert "onProvisionedOnly" not in query(adapter.last_request)


def test_post_with_renamed_field(run, requests_mock):
    adapter = requests_mock.post(f"{BASE}/api/projects/update_key", status_code=204)
    result = run("projects", "update-key", "--from", "old-key", "--to", "new-key")

    assert result.exit_code == 0, result.output
    assert form(adapter.last_request) == {"from": "old-key", "to": "new-key"}
    assert result.output == ""


def test_all_pages(run, requests_mock):
    requests_mock.get(
        f"{BASE}/api/projects/search",
        [
            {"json": {"components": [{"key": "a"}], "paging": {"pageIndex": 1, "pageSize": 1, "total": 2}}},
            {"json": {"components": [{"key": "b"}], "paging": {"pageIndex": 2, "pageSize": 1, "total": 2}}},
        ],
    )
    result = run("projects", "search", "--all-pages")

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert [c["key"] for c in data["components"]] == ["a", "b"]
    assert data["paging"]["total"] == 2


def test_yaml_output(run, requests_mock):
    requests_mock.get(f"{BASE}/api/metrics/types", json={"types": ["INT", "FLOAT"]})
    result = run("--format", "yaml", "metrics", "types")

    assert result.exit_code == 0, result.output
    assert yaml.safe_load(result.output) == {"types": ["INT", "FLOAT"]}


def test_text_output(run, requests_mock):
    requests_mock.get(f"{BASE}/api/server/version", text="10.4.1.88267\n")
    result = run("server", "version")
    assert result.output == "10.4.1.88267\n"


def test_bytes_output(run, requests_mock):
    requests_mock.get(f"{BASE}/api/analysis_cache/get", content=b"\x1f\x8b\x08")
    result = run("analysis-cache", "get", "--project", "billing")
    assert result.exit_code == 0
    assert result.stdout_bytes == b"\x1f\x8b\x08"


def test_output_file(run, requests_mock, tmp_path):
    requests_mock.get(f"{BASE}/api/metrics/types", json={"types": ["INT"]})
    out = tmp_path / "types.json"
    result = run("--output", str(out), "--pretty", "metrics", "types")

    assert result.exit_code == 0, result.output
    assert json.loads(out.read_text()) == {"types": ["INT"]}
    assert "written to" in result.output


def test_url_without_config_file(tmp_path, requests_mock):
    requests_mock.get(f"{BASE}/api/server/version", text="10.4")
    result = CliRunner().invoke(
        cli, ["--config", str(tmp_path / "absent.yaml"), "--url", BASE, "server", "version"], obj={},
    )
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "10.4"


# ---------------------------------------------------------------------------
# Credentials: settings file, environment and flags
# ---------------------------------------------------------------------------

def _basic(login: str, password: str = "") -> str:
    return "Basic " + base64.b64encode(f"{login}:{password}".encode()).decode()


@pytest.fixture
def status(requests_mock):
    return requests_mock.get(f"{BASE}/api/system/status", json={"status": "UP"})


def test_environment_without_settings_file(tmp_path, monkeypatch, status):
    monkeypatch.setenv("SONAR_URL", BASE)
    monkeypatch.setenv("SONAR_TOKEN", "squ_env")
    result = CliRunner().invoke(cli, ["--config", str(tmp_path / "absent.yaml"), "system", "status"], obj={})

    assert result.exit_code == 0, result.output
    assert status.last_request.headers["Authorization"] == _basic("squ_env")


def test_url_flag_keeps_environment_credentials(tmp_path, monkeypatch, status):
    monkeypatch.setenv("SONAR_TOKEN", "squ_env")
    monkeypatch.setenv("SONAR_PASSCODE", "pc-env")
    result = CliRunner().invoke(
        cli, ["--config", str(tmp_path / "absent.yaml"), "--url", BASE, "system", "status"], obj={},
    )

    assert result.exit_code == 0, result.output
    headers = status.last_request.headers
    assert headers["Authorization"] == _basic("squ_env")
    assert headers["X-Sonar-Passcode"] == "pc-env"


def test_url_flag_with_half_environment_login(tmp_path, monkeypatch, status):
    monkeypatch.setenv("SONAR_USERNAME", "ci")
    result = CliRunner().invoke(
        cli, ["--config", str(tmp_path / "absent.yaml"), "--url", BASE, "system", "status"], obj={},
    )
    assert result.exit_code == 1
    assert "set together" in result.output
    assert not status.called


def test_settings_file_token(run, status):
    assert run("system", "status").exit_code == 0
    assert status.last_request.headers["Authorization"] == _basic("squ_abc123")


def test_environment_token_beats_settings_file(run, monkeypatch, status):
    monkeypatch.setenv("SONAR_TOKEN", "squ_env")
    assert run("system", "status").exit_code == 0
    assert status.last_request.headers["Authorization"] == _basic("squ_env")


def test_token_flag_beats_environment(run, monkeypatch, status):
    monkeypatch.setenv("SONAR_TOKEN", "squ_env")
    assert run("--token", "squ_flag", "system", "status").exit_code == 0
    assert status.last_request.headers["Authorization"] == _basic("squ_flag")


def test_login_flags_beat_token(run, status):
    result = run("--username", "admin", "--password", "secret", "system", "status")
    assert result.exit_code == 0, result.output
    assert status.last_request.headers["Authorization"] == _basic("admin", "secret")


@pytest.mark.parametrize("flags", [["--username", "admin"], ["--password", "secret"]])
def test_login_flags_come_in_pairs(run, status, flags):
    result = run(*flags, "system", "status")
    assert result.exit_code == 2
    assert "--username and --password must be given together" in result.output
    assert not status.called


def test_timeout_flag(run, status):
    assert run("--timeout", "2.5", "system", "status").exit_code == 0
    assert status.last_request.timeout == 2.5


@pytest.mark.parametrize("value", ["0", "-1"])
def test_timeout_must_be_positive(run, status, value):
    result = run(f"--timeout={value}", "system", "status")
    assert result.exit_code == 2
    assert not status.called


# ---------------------------------------------------------------------------
# Table output
# ---------------------------------------------------------------------------

def test_table_lists_main_collection(run, requests_mock):
    requests_mock.get(f"{BASE}/api/webhooks/list", json={"webhooks": [
        {"key": "wh-1", "name": "ci", "url": "https://ci.example.com", "hasSecret": True},
        {"key": "wh-2", "name": "[chat]", "url": "https://chat.example.com"},
    ]})
    result = run("--format", "table", "webhooks", "list")

    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    header = next(line for line in lines if "key" in line)
    assert header.split() == ["key", "name", "url", "hasSecret"]
    row = next(line for line in lines if "wh-1" in line)
    assert row.split() == ["wh-1", "ci", "https://ci.example.com", "true"]
    assert any("[chat]" in line for line in lines)


def test_table_scalar_list(run, requests_mock):
    requests_mock.get(f"{BASE}/api/metrics/types", json={"types": ["INT", "FLOAT"]})
    result = run("--format", "table", "metrics", "types")
    assert result.exit_code == 0, result.output
    cells = [line.strip() for line in result.output.splitlines() if line.strip().isalpha()]
    assert cells == ["types", "INT", "FLOAT"]


def test_table_single_object(run, requests_mock):
    requests_mock.get(f"{BASE}/api/system/status", json={"id": "x1", "version": "10.4", "status": "UP"})
    result = run("--format", "table", "system", "status")

    assert result.exit_code == 0, result.output
    rows = [line.split() for line in result.output.splitlines() if line.strip()]
    assert ["FIELD", "VALUE"] in rows
    assert ["status", "UP"] in rows


def test_table_empty_collection(run, requests_mock):
    requests_mock.get(f"{BASE}/api/webhooks/list", json={"webhooks": []})
    result = run("--format", "table", "webhooks", "list")
    assert result.output.strip() == "(no results)"


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

def test_validation_error_exits_1(run, requests_mock):
    result = run("webhooks", "create", "--name", "ci")
    assert result.exit_code == 1
    assert "Invalid option" in result.output
    assert "'url'" in result.output
    assert not requests_mock.called


def test_not_found_exits_1(run, requests_mock):
    requests_mock.get(f"{BASE}/api/webhooks/list", status_code=404,
                      json={"errors": [{"msg": "Project not found"}]})
    result = run("webhooks", "list", "--project", "missing")
    assert result.exit_code == 1
    assert "Not found" in result.output


def test_missing_config_exits_1(tmp_path):
    result = CliRunner().invoke(cli, ["--config", str(tmp_path / "absent.yaml"), "server", "version"], obj={})
    assert result.exit_code == 1
    assert "Bad settings" in result.output


# ---------------------------------------------------------------------------
# init
# ---------------------------------------------------------------------------

def test_init_writes_template(tmp_path):
    out = tmp_path / "sonar-config.yaml"
    result = CliRunner().invoke(cli, ["init", "--output", str(out)])
    assert result.exit_code == 0
    assert out.exists()


def test_init_refuses_to_overwrite(tmp_path):
    out = tmp_path / "sonar-config.yaml"
    out.write_text("existing")
    result = CliRunner().invoke(cli, ["init", "--output", str(out)])
    assert result.exit_code == 1
    assert "exists already" in result.output
