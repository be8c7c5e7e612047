import json

import pytest

from phabricator.config import (
    ClientOptions,
    normalize_api_url,
    options_from_env,
    resolve_options,
)
from phabricator.errors import ConfigError


def _write_arcrc(tmp_path, hosts):
    path = tmp_path / "arcrc"
    path.write_text(json.dumps({"hosts": hosts}), encoding="utf-8")
    return str(path)


def test_negative_timeout_is_rejected():
    with pytest.raises(ConfigError, match="Negative timeout"):
        resolve_options(ClientOptions(api_url="https://phab.example.com/api/", token="t", timeout_seconds=-1))


def test_zero_timeout_selects_default():
    resolved = resolve_options(
        ClientOptions(api_url="https://phab.example.com/api/", token="t", timeout_seconds=0)
    )
    assert resolved.timeout_seconds == 10.0


def test_unknown_log_level_is_rejected():
    with pytest.raises(ConfigError, match="apocalypse"):
        resolve_options(ClientOptions(api_url="https://phab.example.com/api/", token="t", log_level="apocalypse"))


def test_token_without_api_url_is_rejected():
    with pytest.raises(ConfigError, match="without an API endpoint"):
        resolve_options(ClientOptions(token="t"))


def test_single_arcrc_host_supplies_url_and_token(tmp_path):
    arcrc = _write_arcrc(tmp_path, {"https://phab.example.com/api/": {"token": "cli-abc"}})
    resolved = resolve_options(ClientOptions(arcrc_path=arcrc, log_level="debug"))
    assert resolved.api_url == "https://phab.example.com/api/"
    assert resolved.token == "cli-abc"
    assert resolved.log_level == 10


def test_multiple_arcrc_hosts_are_ambiguous(tmp_path):
    arcrc = _write_arcrc(
        tmp_path,
        {
            "https://a.example.com/api/": {"token": "cli-a"},
            "https://b.example.com/api/": {"token": "cli-b"},
        },
    )
    with pytest.raises(ConfigError, match="Exactly one"):
        resolve_options(ClientOptions(arcrc_path=arcrc))


def test_arcrc_lookup_by_api_url(tmp_path):
    arcrc = _write_arcrc(
        tmp_path,
        {
            "https://a.example.com/api/": {"token": "cli-a"},
            "https://b.example.com/api/": {"token": "cli-b"},
        },
    )
    resolved = resolve_options(ClientOptions(api_url="https://b.example.com/api", arcrc_path=arcrc))
    assert resolved.token == "cli-b"
    assert resolved.api_url == "https://b.example.com/api/"

    with pytest.raises(ConfigError, match="No token"):
        resolve_options(ClientOptions(api_url="https://c.example.com/api/", arcrc_path=arcrc))


def test_missing_or_broken_arcrc(tmp_path):
    with pytest.raises(ConfigError, match="Unable to open"):
        resolve_options(ClientOptions(arcrc_path=str(tmp_path / "missing")))
    broken = tmp_path / "broken"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError, match="Unable to parse"):
        resolve_options(ClientOptions(arcrc_path=str(broken)))


@pytest.mark.parametrize("url", ["phab.example.com/api", "ftp://phab.example.com/api/", ""])
def test_unparseable_api_url(url):
    with pytest.raises(ConfigError, match="API URL"):
        normalize_api_url(url)


def test_options_from_env(monkeypatch):
    monkeypatch.setenv("PHABRICATOR_API_URL", "https://phab.example.com/api/")
    monkeypatch.setenv("PHABRICATOR_API_TOKEN", "api-xyz")
    monkeypatch.setenv("PHABRICATOR_TIMEOUT_SECONDS", "2.5")
    monkeypatch.delenv("PHABRICATOR_LOG_LEVEL", raising=False)
    opts = options_from_env(ClientOptions(log_level="WARNING"))
    assert opts.api_url == "https://phab.example.com/api/"
    assert opts.token == "api-xyz"
    assert opts.timeout_seconds == 2.5
    assert opts.log_level == "WARNING"

    monkeypatch.setenv("PHABRICATOR_TIMEOUT_SECONDS", "soon")
    with pytest.raises(ConfigError):
        options_from_env()
