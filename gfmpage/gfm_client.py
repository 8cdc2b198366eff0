#!/usr/bin/env python3
from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Union

import requests

from gfmpage import __version__

DEFAULT_API_BASE = "https://api.github.com"
DEFAULT_TIMEOUT: Tuple[float, float] = (10, 60)  # (connect, read)

MODE_PLAIN = "markdown"
MODE_GFM = "gfm"
MODES = (MODE_PLAIN, MODE_GFM)

USER_AGENT = f"gfm-page/{__version__}"


class RenderError(RuntimeError):
    """The rendering service answered with something other than HTTP 200."""

    def __init__(self, status_code: int, body: str = "") -> None:
        self.status_code = status_code
        self.body = body
        detail = f": {body.strip()[:200]}" if body and body.strip() else ""
        super().__init__(f"Markdown API HTTP {status_code}{detail}")


class ConfigError(RuntimeError):
    """Renderer settings (env, config file or flags) are unusable."""


def check_timeout(value, source: str = "timeout") -> Union[float, Tuple[float, float]]:
    """Return ``value`` as seconds (or a (connect, read) pair); reject non-numbers and values <= 0."""
    parts = value if isinstance(value, (list, tuple)) else [value]
    try:
        secs = [float(p) for p in parts]
    except (TypeError, ValueError):
        raise ConfigError(f"{source} must be a number of seconds, got {value!r}")
    # "not > 0" also rejects NaN
    if len(secs) not in (1, 2) or not all(s > 0 for s in secs):
        raise ConfigError(f"{source} must be positive seconds (or a connect, read pair), got {value!r}")
    return secs[0] if len(secs) == 1 else (secs[0], secs[1])


@dataclass
class RendererConfig:
    api_base: str = DEFAULT_API_BASE
    token: Optional[str] = None
    timeout: Union[float, Tuple[float, float]] = DEFAULT_TIMEOUT

    @staticmethod
    def from_file(path: str) -> "RendererConfig":
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        timeout = data.get("timeout")
        return RendererConfig(
            api_base=data.get("api_base", DEFAULT_API_BASE),
            token=data.get("token"),
            timeout=DEFAULT_TIMEOUT if timeout is None else check_timeout(timeout, f"timeout in {path}"),
        )

    @staticmethod
    def from_env() -> "RendererConfig":
        # GITHUB_TOKEN is what Actions exports; GH_TOKEN is the gh CLI name
        token = os.environ.get("GITHUB_TOKEN") or os.environ.get("GH_TOKEN") or None
        raw_timeout = os.environ.get("GFM_TIMEOUT")
        if raw_timeout:
            timeout = check_timeout(raw_timeout, "GFM_TIMEOUT")
        else:
            timeout = DEFAULT_TIMEOUT
        return RendererConfig(
            api_base=os.environ.get("GFM_API_BASE", DEFAULT_API_BASE),
            token=token,
            timeout=timeout,
        )


@dataclass(frozen=True)
class ConversionRequest:
    text: str
    mode: str = MODE_PLAIN
    context: Optional[str] = None

    def to_payload(self) -> Dict[str, str]:
        payload = {"text": self.text, "mode": self.mode}
        # context is only meaningful for gfm; the API ignores it otherwise
        if self.mode == MODE_GFM and self.context is not None:
            payload["context"] = self.context
        return payload


@dataclass
class ConversionResult:
    html_fragment: str
    status_code: int

    @property
    def ok(self) -> bool:
        return self.status_code == 200


def build_request(text: str, mode: str, context: Optional[str] = None) -> ConversionRequest:
    if mode not in MODES:
        raise ValueError(f"Unknown render mode {mode!r}; expected one of {', '.join(MODES)}")
    return ConversionRequest(text=text, mode=mode, context=context if mode == MODE_GFM else None)


class GfmClient:
    def __init__(self, cfg: Optional[RendererConfig] = None) -> None:
        self.cfg = cfg or RendererConfig()
        self.session = requests.Session()

    @property
    def endpoint(self) -> str:
        return f"{self.cfg.api_base.rstrip('/')}/markdown"

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": USER_AGENT,
        }
        if self.cfg.token:
            headers["Authorization"] = f"Bearer {self.cfg.token}"
        return headers

    # ----- Public API -----
    def render(self, req: ConversionRequest) -> ConversionResult:
        """
        POST the request to /markdown once. No retry; connection errors propagate.
        """
        resp = self.session.post(
            self.endpoint,
            json=req.to_payload(),
            headers=self._headers(),
            timeout=self.cfg.timeout,
        )
        return ConversionResult(html_fragment=resp.text, status_code=resp.status_code)

    def render_html(self, req: ConversionRequest) -> str:
        result = self.render(req)
        if not result.ok:
            raise RenderError(result.status_code, result.html_fragment)
        return result.html_fragment
