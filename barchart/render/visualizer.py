"""Rendering adapters turning encoded chart geometry into embeddable artefacts."""
from __future__ import annotations

import base64
import html
import io
from typing import Optional

import matplotlib

matplotlib.use("Agg")  # headless, rendering happens inside request handlers
import matplotlib.pyplot as plt  # noqa: E402

from barchart.models import AxisDescriptor, ChartGeometry, RenderedChart
from barchart.render.svg_builder import SVGBuilder
from barchart.utils.logger import configure_logger, log_extra

logger = configure_logger(__name__)

TICK_SIZE = 6
BAR_COLOR = "steelblue"

_PAGE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
<style>
.bar {{ fill: {color}; }}
</style>
</head>
<body>
{svg}
</body>
</html>
"""


class Visualizer:
    """Draw a ``ChartGeometry`` as SVG markup, a base64 PNG or an HTML page."""

    def svg(self, geometry: ChartGeometry) -> str:
        canvas = geometry.canvas
        builder = SVGBuilder(canvas.outer_width, canvas.outer_height, css_class="chart")
        builder.open_group(translate=(canvas.margins.left, canvas.margins.top))
        for bar in geometry.bars:
            builder.add_rect(
                bar.x, bar.y, bar.width, bar.height, css_class="bar", tooltip=f"{bar.category}: {bar.value:g}"
            )
        self._svg_axis(builder, geometry.value_axis, length=canvas.width)
        self._svg_axis(builder, geometry.category_axis, length=canvas.height)
        builder.close_group()
        logger.info("Rendered SVG chart", extra=log_extra(bars=len(geometry.bars)))
        return builder.build()

    def _svg_axis(self, builder: SVGBuilder, axis: AxisDescriptor, *, length: float) -> None:
        builder.open_group(translate=(axis.offset_x, axis.offset_y), css_class=f"axis axis-{axis.orientation}")
        horizontal = axis.orientation in ("top", "bottom")
        # ticks point away from the plot area
        sign = 1 if axis.orientation in ("bottom", "right") else -1
        if horizontal:
            builder.add_line(0, 0, length, 0)
        else:
            builder.add_line(0, 0, 0, length)
        for tick in axis.ticks:
            if horizontal:
                builder.add_line(tick.position, 0, tick.position, sign * TICK_SIZE)
                if tick.label:
                    builder.add_text(tick.position, sign * (TICK_SIZE + 12), tick.label, anchor="middle")
            else:
                builder.add_line(0, tick.position, sign * TICK_SIZE, tick.position)
                if tick.label:
                    anchor = "end" if sign < 0 else "start"
                    builder.add_text(sign * (TICK_SIZE + 3), tick.position + 3, tick.label, anchor=anchor)
        builder.close_group()

    def html(self, geometry: ChartGeometry, *, title: str) -> str:
        return _PAGE.format(title=html.escape(title), color=BAR_COLOR, svg=self.svg(geometry))

    async def png(self, geometry: ChartGeometry, *, title: Optional[str] = None) -> RenderedChart:
        canvas = geometry.canvas
        logger.info("Rendering PNG chart", extra=log_extra(bars=len(geometry.bars)))
        fig = plt.figure(figsize=(canvas.outer_width / 100, canvas.outer_height / 100), dpi=100)
        try:
            ax = fig.add_axes(
                [
                    canvas.margins.left / canvas.outer_width,
                    canvas.margins.bottom / canvas.outer_height,
                    canvas.width / canvas.outer_width,
                    canvas.height / canvas.outer_height,
                ]
            )
            ax.set_xlim(0, canvas.width)
            # plot-area pixels grow downwards
            ax.set_ylim(canvas.height, 0)
            ax.barh(
                [bar.y for bar in geometry.bars],
                [bar.width for bar in geometry.bars],
                height=[bar.height for bar in geometry.bars],
                left=[bar.x for bar in geometry.bars],
                align="edge",
                color=BAR_COLOR,
            )
            ax.set_xticks(
                [tick.position for tick in geometry.value_axis.ticks],
                labels=[tick.label for tick in geometry.value_axis.ticks],
            )
            ax.set_yticks(
                [tick.position for tick in geometry.category_axis.ticks],
                labels=[tick.label for tick in geometry.category_axis.ticks],
            )
            ax.spines["top"].set_visible(False)
            ax.spines["right"].set_visible(False)
            if title:
                ax.set_title(title)
            encoded = self._to_base64(fig)
        finally:
            plt.close(fig)
        return RenderedChart(format="png", title=title, image=encoded)

    def _to_base64(self, fig) -> str:
        buffer = io.BytesIO()
        fig.savefig(buffer, format="png")
        buffer.seek(0)
        return base64.b64encode(buffer.read()).decode("utf-8")
