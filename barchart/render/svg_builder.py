"""Lightweight SVG generation utility for chart rendering."""
from __future__ import annotations

import html
from typing import List, Optional


def _num(value: float) -> str:
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


class SVGBuilder:
    """Accumulate SVG elements and serialise them into one document."""

    def __init__(self, width: int, height: int, css_class: Optional[str] = None) -> None:
        self.width = width
        self.height = height
        self.css_class = css_class
        self.elements: List[str] = []
        self._open_groups = 0

    def open_group(self, *, translate: Optional[tuple] = None, css_class: Optional[str] = None) -> None:
        attrs = ""
        if css_class:
            attrs += f' class="{self._escape(css_class)}"'
        if translate:
            attrs += f' transform="translate({_num(translate[0])},{_num(translate[1])})"'
        self.elements.append(f"<g{attrs}>")
        self._open_groups += 1

    def close_group(self) -> None:
        if not self._open_groups:
            raise ValueError("No open group to close")
        self.elements.append("</g>")
        self._open_groups -= 1

    def add_rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        *,
        css_class: Optional[str] = None,
        tooltip: Optional[str] = None,
    ) -> None:
        attrs = f'x="{_num(x)}" y="{_num(y)}" width="{_num(width)}" height="{_num(height)}"'
        if css_class:
            attrs = f'class="{self._escape(css_class)}" ' + attrs
        if tooltip:
            self.elements.append(f"<rect {attrs}><title>{self._escape(tooltip)}</title></rect>")
        else:
            self.elements.append(f"<rect {attrs}/>")

    def add_line(self, x1: float, y1: float, x2: float, y2: float, stroke: str = "#000", stroke_width: float = 1) -> None:
        self.elements.append(
            f'<line x1="{_num(x1)}" y1="{_num(y1)}" x2="{_num(x2)}" y2="{_num(y2)}" '
            f'stroke="{self._escape(stroke)}" stroke-width="{_num(stroke_width)}"/>'
        )

    def add_text(self, x: float, y: float, text: str, anchor: str = "start", font_size: int = 10) -> None:
        self.elements.append(
            f'<text x="{_num(x)}" y="{_num(y)}" text-anchor="{anchor}" font-size="{font_size}">'
            f"{self._escape(text)}</text>"
        )

    def _escape(self, text: str) -> str:
        return html.escape(text, quote=True)

    def build(self) -> str:
        if self._open_groups:
            raise ValueError(f"{self._open_groups} group(s) left open")
        class_attr = f' class="{self._escape(self.css_class)}"' if self.css_class else ""
        header = (
            f'<svg xmlns="http://www.w3.org/2000/svg"{class_attr} '
            f'width="{self.width}" height="{self.height}" viewBox="0 0 {self.width} {self.height}">'
        )
        return "\n".join([header, *self.elements, "</svg>"])
