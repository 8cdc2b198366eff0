#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Markdown source helpers: reading the input file and working out the page title.

Exports:
- DEFAULT_SUBTITLE: subtitle used when none is given on the command line
- load_markdown(path, skip_heading): file text, optionally without its leading heading
- strip_first_heading(text): drop the first two lines (ATX heading + blank line)
- find_first_heading(text): text of the first level-1 ATX heading, or None
- resolve_title(text, override): explicit title, else first heading, else ""
- resolve_subtitle(override): explicit subtitle, else DEFAULT_SUBTITLE
"""

from __future__ import annotations

import re
import sys
from pathlib import Path
from typing import Optional, Union

DEFAULT_SUBTITLE = "Document"

# "# Title" with exactly one marker; "## Sub" and "#tag" are not level-1 headings.
RE_H1 = re.compile(r"^#[ \t]+(\S.*)$")
# Optional closing sequence: "# Title ##" is the heading "Title".
RE_H1_CLOSE = re.compile(r"(?:^|[ \t]+)#+[ \t]*$")


def strip_first_heading(text: str) -> str:
    """
    Remove the first two lines of ``text``.

    Assumes the document opens with an ATX heading followed by a blank line.
    Setext headings ("Title" underlined with "===") are not detected.
    """
    lines = text.splitlines(keepends=True)
    if lines and not RE_H1.match(lines[0].rstrip("\r\n")):
        print(
            f"[WARN] --skip-heading: first line is not a '# ' heading, dropping it anyway: {lines[0].rstrip()!r}",
            file=sys.stderr,
        )
    return "".join(lines[2:])


def load_markdown(path: Union[str, Path], skip_heading: bool = False) -> str:
    # utf-8-sig drops a leading BOM so line 1 can still match as a heading
    text = Path(path).read_text(encoding="utf-8-sig")
    if skip_heading:
        return strip_first_heading(text)
    return text


def find_first_heading(text: str) -> Optional[str]:
    for line in text.splitlines():
        m = RE_H1.match(line)
        if m:
            # Only the one opening marker is removed; "#hashtag" and "C#" survive intact.
            title = RE_H1_CLOSE.sub("", m.group(1).strip())
            if title:
                return title
    return None


def resolve_title(text: str, override: Optional[str] = None) -> str:
    """
    Pick the page title.

    An explicit ``override`` wins verbatim, even if the document has no heading.
    Otherwise the first level-1 heading of the *untrimmed* document is used.
    When neither exists a warning is printed and the title is left empty.
    """
    if override is not None:
        return override
    found = find_first_heading(text)
    if found is None:
        print("[WARN] No title found: no '# ' heading in document and no --title given", file=sys.stderr)
        return ""
    return found


def resolve_subtitle(override: Optional[str] = None) -> str:
    return override if override is not None else DEFAULT_SUBTITLE
