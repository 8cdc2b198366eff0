"""gfm-page: render Markdown through the GitHub Markdown API into a standalone HTML page."""

__version__ = "0.1.0"
