from __future__ import annotations

import pytest
from django.test import Client


@pytest.mark.django_db
def test_csp_has_expected_directives():
    r = Client().get("/")
    assert r.status_code == 200
    csp = r.headers.get("Content-Security-Policy", "")
    assert csp
    assert "'unsafe-inline'" not in csp
    assert "img-src 'self' data:" in csp
    assert "script-src 'self';" in csp
    # Channels sockets
    assert "connect-src 'self' ws: wss:" in csp
    assert "frame-ancestors 'none'" in csp
    assert "object-src 'none'" in csp


@pytest.mark.django_db
def test_docs_page_allows_swagger_cdn_only_there():
    c = Client()
    docs = c.get("/docs/").headers["Content-Security-Policy"]
    assert "script-src 'self' https://cdn.jsdelivr.net" in docs
    assert "'unsafe-inline'" not in docs
    landing = c.get("/").headers["Content-Security-Policy"]
    assert "cdn.jsdelivr.net" not in landing
