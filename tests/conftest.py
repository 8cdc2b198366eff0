# tests/conftest.py

from __future__ import annotations
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest
import requests

# Ensure the repository root (parent of /tests) is on sys.path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


class FakeResponse:
    def __init__(self, status_code: int, text: str) -> None:
        self.status_code = status_code
        self.text = text


class FakeSession:
    """Stands in for requests.Session; records every POST and answers via ``responder``."""

    def __init__(self, responder: Optional[Callable[[Dict[str, Any]], Tuple[int, str]]] = None) -> None:
        self.responder = responder or (lambda payload: (200, "<p>ok</p>"))
        self.calls: List[Dict[str, Any]] = []

    def post(self, url, json=None, headers=None, timeout=None):  # noqa: ANN001
        self.calls.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        status, text = self.responder(json)
        return FakeResponse(status, text)


@pytest.fixture(autouse=True)
def ensure_clean_env(monkeypatch):
    # Prevent accidental leakage from developer shells
    for k in ["GFM_API_BASE", "GITHUB_TOKEN", "GH_TOKEN", "GFM_TIMEOUT"]:
        monkeypatch.delenv(k, raising=False)
    yield


@pytest.fixture
def fake_session(monkeypatch):
    """Install a FakeSession as requests.Session; returns the installer."""

    def install(responder=None) -> FakeSession:
        session = FakeSession(responder)
        monkeypatch.setattr(requests, "Session", lambda: session)
        return session

    return install
