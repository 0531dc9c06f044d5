import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from spare_time.config import _canon_prefix, load_allowed_origins


def test_rejects_wildcard_origin(monkeypatch):
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example,*")
    with pytest.raises(ValueError, match="wildcard"):
        load_allowed_origins()


def test_requires_allowed_origins(monkeypatch):
    monkeypatch.delenv("ALLOWED_ORIGINS", raising=False)
    with pytest.raises(ValueError, match="must be set"):
        load_allowed_origins()


def test_rejects_only_blank_origins(monkeypatch):
    monkeypatch.setenv("ALLOWED_ORIGINS", " , ,")
    with pytest.raises(ValueError, match="at least one"):
        load_allowed_origins()


def test_parses_origin_list(monkeypatch):
    monkeypatch.setenv("ALLOWED_ORIGINS", " https://a.example , https://b.example ")
    assert load_allowed_origins() == ["https://a.example", "https://b.example"]


@pytest.mark.parametrize(
    "raw, expected",
    [(None, "/api"), ("", "/api"), ("v1/", "/v1"), ("/", "/"), (" /bowl ", "/bowl")],
)
def test_api_prefix_is_canonical(raw, expected):
    assert _canon_prefix(raw) == expected


def test_cors_preflight_allows_configured_origin(api_client):
    client, _ = api_client
    resp = client.options(
        "/api/v0/scores",
        headers={
            "Origin": "http://testserver",
            "Access-Control-Request-Method": "POST",
        },
    )
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "http://testserver"
