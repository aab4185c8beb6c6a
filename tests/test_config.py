from __future__ import annotations

import json

import pytest

from core.config import AppSettings
from core.domain.models import ServersConfig
from core.resources_loader import load_servers_config, resolve_servers


def _write_config(path, payload) -> None:
    path.write_text(json.dumps(payload), encoding="utf-8")


def test_load_servers_config_ignores_other_sections(tmp_path):
    path = tmp_path / "prism.json"
    _write_config(
        path,
        {
            "country": "Example",
            "serversUrls": {"wms": ["http://wms.test/ows"], "wcs": ["http://wcs.test/ows"]},
            "layers": {},
        },
    )

    config = load_servers_config(path)

    assert config.servers_urls.wms == ["http://wms.test/ows"]
    assert config.servers_urls.wcs == ["http://wcs.test/ows"]


def test_missing_servers_block_defaults_to_empty_lists():
    config = ServersConfig.model_validate({"serversUrls": {"wms": ["http://a"]}})
    assert config.servers_urls.wcs == []
    assert ServersConfig.model_validate({}).servers_urls.wms == []


def test_resolve_servers_merges_file_and_settings(tmp_path):
    path = tmp_path / "servers.json"
    _write_config(path, {"serversUrls": {"wms": ["http://a/wms", "http://b/wms"]}})
    settings = AppSettings(
        servers_config_path=path,
        wms_servers=["http://b/wms", "http://c/wms"],
        wcs_servers=["http://a/wcs"],
    )

    servers = resolve_servers(settings)

    assert servers.wms == ["http://a/wms", "http://b/wms", "http://c/wms"]
    assert servers.wcs == ["http://a/wcs"]


def test_resolve_servers_finds_prism_json_in_cwd(tmp_path):
    _write_config(tmp_path / "prism.json", {"serversUrls": {"wcs": ["http://cwd/wcs"]}})
    assert resolve_servers(AppSettings()).wcs == ["http://cwd/wcs"]


def test_resolve_servers_without_any_config():
    servers = resolve_servers(AppSettings())
    assert servers.wms == []
    assert servers.wcs == []


def test_server_lists_from_environment(monkeypatch):
    monkeypatch.setenv("OWS_DATES_WMS_SERVERS", '["http://env/wms"]')
    monkeypatch.setenv("OWS_DATES_HTTP_TIMEOUT_SECONDS", "5")

    settings = AppSettings()

    assert settings.wms_servers == ["http://env/wms"]
    assert settings.http_timeout_seconds == 5.0
    assert resolve_servers(settings).wms == ["http://env/wms"]


def test_malformed_config_raises(tmp_path):
    path = tmp_path / "prism.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        load_servers_config(path)


def test_explicit_missing_config_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        resolve_servers(AppSettings(servers_config_path=tmp_path / "nope.json"))
