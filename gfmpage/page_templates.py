#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Page templates for rendered Markdown.

Exports:
- TemplateContext: the three values a template can reference
- DEFAULT_TEMPLATE: built-in minimal HTML5 page
- load_template(path): read a user template, raising TemplateError on failure
- expand_template(template, ctx): replace {title}, {subtitle} and {content}
- render_page(ctx, template): default page, or the given template text, expanded

Custom templates are plain text with ``{title}``, ``{subtitle}`` and
``{content}`` placeholders. Nothing else in the template is interpreted, so
CSS/JS braces and unknown ``{names}`` pass through untouched.
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Union

PLACEHOLDERS = ("title", "subtitle", "content")
RE_PLACEHOLDER = re.compile(r"\{(" + "|".join(PLACEHOLDERS) + r")\}")

DEFAULT_TEMPLATE = """<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8"/>
<meta name="viewport" content="width=device-width,initial-scale=1"/>
<title>{title}</title>
</head>
<body>
<article class="markdown-body">
{content}
</article>
</body>
</html>
"""


class TemplateError(RuntimeError):
    """A custom template could not be loaded."""


@dataclass
class TemplateContext:
    title: str
    subtitle: str
    content: str

    def as_dict(self) -> Dict[str, str]:
        return {"title": self.title, "subtitle": self.subtitle, "content": self.content}


def load_template(path: Union[str, Path]) -> str:
    p = Path(path)
    if not p.is_file():
        raise TemplateError(f"Template not found: {p}")
    try:
        return p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise TemplateError(f"Could not read template {p}: {e}") from e


def expand_template(template: str, ctx: TemplateContext) -> str:
    values = ctx.as_dict()
    # Single pass, so a value that itself contains "{title}" is not expanded again.
    return RE_PLACEHOLDER.sub(lambda m: values[m.group(1)], template)


def render_page(ctx: TemplateContext, template: Optional[str] = None) -> str:
    if template is None:
        escaped = TemplateContext(
            title=html.escape(ctx.title),
            subtitle=html.escape(ctx.subtitle),
            content=ctx.content,
        )
        return expand_template(DEFAULT_TEMPLATE, escaped)
    return expand_template(template, ctx)
