"""
widget.py — The events widget resource
=======================================
Visual clients render tool output through one HTML document, advertised on
every tool via the "openai/outputTemplate" _meta key.
"""

from pathlib import Path

from mcp import types
from mcp.server.lowlevel.helper_types import ReadResourceContents

WIDGET_URI = "ui://widget/events.html"
WIDGET_NAME = "event-widget"
WIDGET_MIME_TYPE = "text/html+skybridge"
WIDGET_META = {"openai/widgetPrefersBorder": True}


def load_widget_html(path: Path) -> str:
    return Path(path).read_text(encoding="utf-8")


class WidgetResource:
    def __init__(self, html: str):
        self.html = html

    def resources(self) -> list[types.Resource]:
        return [
            types.Resource(
                uri=WIDGET_URI,
                name=WIDGET_NAME,
                mimeType=WIDGET_MIME_TYPE,
                _meta=WIDGET_META,
            )
        ]

    def contents(self, uri: str) -> list[ReadResourceContents]:
        if str(uri) != WIDGET_URI:
            raise ValueError(f"Unknown resource: {uri}")
        return [ReadResourceContents(content=self.html, mime_type=WIDGET_MIME_TYPE, meta=WIDGET_META)]
