"""Turn a dataset plus canvas geometry into bars and axis ticks."""
from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional, Sequence, Tuple, Union

from barchart.config import Settings, get_settings
from barchart.core.dataset import TEAM_SCORES, load_dataset
from barchart.core.scales import BandScale, LinearScale, compute_category_scale, compute_value_scale, nice_ticks
from barchart.models import (
    AxisDescriptor,
    AxisTick,
    BarGeometry,
    Canvas,
    ChartGeometry,
    InvalidInput,
    Margins,
    Record,
    UnknownCategory,
)
from barchart.utils.logger import configure_logger, log_extra

logger = configure_logger(__name__)


def encode_bars(
    dataset: Sequence[Record],
    value_scale: LinearScale,
    category_scale: BandScale,
) -> Tuple[BarGeometry, ...]:
    """One rectangle per record, in dataset order, anchored at ``x == 0``."""

    bars = []
    for record in dataset:
        if record.category not in category_scale:
            raise UnknownCategory(f"Category not in band domain: {record.category!r}", value=record.category)
        bars.append(
            BarGeometry(
                category=record.category,
                value=record.value,
                x=0.0,
                y=category_scale.band_start(record.category),
                width=value_scale(record.value),
                height=category_scale.bandwidth,
            )
        )
    return tuple(bars)


def generate_axis_ticks(
    scale: Union[LinearScale, BandScale],
    desired_tick_count: int = 10,
    *,
    show_labels: bool = True,
) -> Tuple[AxisTick, ...]:
    """Tick positions and labels for either scale.

    A linear scale gets nice ticks over its domain; ``desired_tick_count`` is
    an upper bound. A band scale gets one tick per category at the band
    centre and ignores the count. ``show_labels=False`` blanks every label.
    """

    if isinstance(scale, LinearScale):
        ticks = [
            AxisTick(position=scale(value), label=label)
            for value, label in nice_ticks(scale.domain_max, desired_tick_count)
        ]
    elif isinstance(scale, BandScale):
        ticks = [AxisTick(position=scale.band_center(category), label=category) for category in scale.domain]
    else:
        raise InvalidInput(f"Unsupported scale: {type(scale).__name__}", value=scale)

    if not show_labels:
        ticks = [AxisTick(position=tick.position, label="") for tick in ticks]
    return tuple(ticks)


class ChartEncoder:
    """Run the whole pipeline: coerce, scale, lay out bars, derive axes."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or get_settings()

    @property
    def canvas(self) -> Canvas:
        settings = self._settings
        return Canvas(
            outer_width=settings.outer_width,
            outer_height=settings.outer_height,
            margins=Margins(
                top=settings.margin_top,
                right=settings.margin_right,
                bottom=settings.margin_bottom,
                left=settings.margin_left,
            ),
        )

    def encode(self, rows: Iterable[Mapping[str, Any]] = TEAM_SCORES) -> ChartGeometry:
        settings = self._settings
        canvas = self.canvas
        dataset = load_dataset(rows)

        value_scale = compute_value_scale(dataset, canvas.width)
        category_scale = compute_category_scale(
            dataset,
            canvas.height,
            settings.band_padding,
            reverse=settings.reverse_categories,
        )
        bars = encode_bars(dataset, value_scale, category_scale)

        value_axis = AxisDescriptor(
            orientation="bottom",
            offset_y=canvas.height,
            ticks=list(generate_axis_ticks(value_scale, settings.tick_count)),
        )
        category_axis = AxisDescriptor(
            orientation="left",
            ticks=list(generate_axis_ticks(category_scale, show_labels=settings.show_category_labels)),
        )
        logger.info(
            "Chart encoded",
            extra=log_extra(records=len(bars), domain_max=value_scale.domain_max, bandwidth=category_scale.bandwidth),
        )
        return ChartGeometry(canvas=canvas, bars=list(bars), value_axis=value_axis, category_axis=category_axis)
