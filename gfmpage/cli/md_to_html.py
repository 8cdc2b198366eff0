#!/usr/bin/env python3
"""
md_to_html.py
Renders a Markdown file through the GitHub Markdown API and wraps the result in an HTML page.

Usage:
  python -m gfmpage README.md --mode gfm --context owner/repo -o out/readme.html
  python -m gfmpage notes.md --mode markdown --template page.tmpl --title "Notes" --skip-heading

Env:
  GFM_API_BASE   (optional; defaults to https://api.github.com)
  GITHUB_TOKEN / GH_TOKEN   (optional; raises the anonymous rate limit)
  GFM_TIMEOUT    (optional; seconds)

Exit codes: 0 ok, 2 input not found, 3 render failed, 4 bad config or template,
5 input unreadable or output not writable.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

import requests

from gfmpage.gfm_client import (
    MODE_GFM,
    MODES,
    ConfigError,
    GfmClient,
    RenderError,
    RendererConfig,
    build_request,
    check_timeout,
)
from gfmpage.md_source import load_markdown, resolve_subtitle, resolve_title, strip_first_heading
from gfmpage.page_templates import TemplateContext, TemplateError, load_template, render_page

EXIT_OK = 0
EXIT_INPUT_MISSING = 2
EXIT_RENDER_FAILED = 3
EXIT_CONFIG_ERROR = 4
EXIT_TEMPLATE_ERROR = EXIT_CONFIG_ERROR
EXIT_IO_ERROR = 5


def write_output(html_text: str, out_path: Optional[str] = None) -> None:
    if out_path:
        out = Path(out_path)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(html_text, encoding="utf-8")
        print(f"[OK] Wrote {out}")
    else:
        sys.stdout.write(html_text)
        sys.stdout.flush()


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(
        prog="md-to-html",
        description="Render Markdown via the GitHub Markdown API into an HTML page",
    )
    ap.add_argument("input", help="Markdown file to render")
    ap.add_argument("--mode", required=True, choices=list(MODES),
                    help="'markdown' for plain rendering, 'gfm' for repository-flavored rendering")
    ap.add_argument("-o", "--out", default=None, help="Output HTML path (default: stdout)")
    ap.add_argument("--context", default=None,
                    help="Repository (owner/repo) used to resolve issue and user references; gfm mode only")
    ap.add_argument("--template", default=None, help="Custom page template with {title}, {subtitle}, {content}")
    ap.add_argument("--title", default=None, help="Page title (default: first '# ' heading in the file)")
    ap.add_argument("--subtitle", default=None, help="Page subtitle (default: 'Document')")
    ap.add_argument("--no-template", action="store_true", help="Emit only the rendered HTML fragment")
    ap.add_argument("--skip-heading", action="store_true",
                    help="Do not send the first two lines (heading + blank line) for rendering")
    ap.add_argument("--api-base", default=None, help="Override GFM_API_BASE (e.g. a GitHub Enterprise API URL)")
    ap.add_argument("--token", default=None, help="Override GITHUB_TOKEN")
    ap.add_argument("--timeout", type=float, default=None, help="Request timeout in seconds")
    return ap.parse_args(argv)


def _config_from_args(args: argparse.Namespace) -> RendererConfig:
    cfg = RendererConfig.from_env()
    if args.api_base:
        cfg.api_base = args.api_base
    if args.token:
        cfg.token = args.token
    if args.timeout is not None:
        cfg.timeout = check_timeout(args.timeout, "--timeout")
    return cfg


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)

    in_path = Path(args.input)
    if not in_path.is_file():
        print(f"[WARN] Input not found: {in_path}", file=sys.stderr)
        return EXIT_INPUT_MISSING

    if args.context and args.mode != MODE_GFM:
        print("[WARN] --context only applies to --mode gfm; ignoring it", file=sys.stderr)

    # Fail on bad settings or a bad template before spending an API call on the document.
    try:
        cfg = _config_from_args(args)
        template = None
        if args.template and not args.no_template:
            template = load_template(args.template)
    except (ConfigError, TemplateError) as e:
        print(f"[ERR] {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    try:
        original = load_markdown(in_path)
    except (OSError, UnicodeDecodeError) as e:
        print(f"[ERR] Could not read {in_path}: {e}", file=sys.stderr)
        return EXIT_IO_ERROR
    text = strip_first_heading(original) if args.skip_heading else original

    client = GfmClient(cfg)
    try:
        fragment = client.render_html(build_request(text, args.mode, args.context))
    except RenderError as e:
        print(f"[ERR] Render failed: {e}", file=sys.stderr)
        return EXIT_RENDER_FAILED
    except requests.RequestException as e:
        print(f"[ERR] Render request failed: {e}", file=sys.stderr)
        return EXIT_RENDER_FAILED

    if args.no_template:
        page = fragment
    else:
        ctx = TemplateContext(
            title=resolve_title(original, args.title),
            subtitle=resolve_subtitle(args.subtitle),
            content=fragment,
        )
        page = render_page(ctx, template)

    try:
        write_output(page, args.out)
    except OSError as e:
        print(f"[ERR] Could not write {args.out or 'stdout'}: {e}", file=sys.stderr)
        return EXIT_IO_ERROR
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
