"""Linear and band scales used to place bars and ticks.

Both scales are immutable value objects built by ``compute_value_scale`` and
``compute_category_scale``. Pixel coordinates are relative to the plot area
(the canvas minus its margins), with ``y`` growing downwards as in SVG.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from barchart.models import InvalidInput, Record, UnknownCategory

_NICE_FACTORS = (1, 2, 5)
_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


@dataclass(frozen=True)
class LinearScale:
    """Map ``[0, domain_max]`` onto ``[0, width]`` proportionally."""

    domain_max: float
    width: float

    def __call__(self, value: float) -> float:
        if self.domain_max == 0:
            return 0.0
        return value / self.domain_max * self.width

    @property
    def domain(self) -> Tuple[float, float]:
        return (0.0, self.domain_max)

    @property
    def range(self) -> Tuple[float, float]:
        return (0.0, self.width)


@dataclass(frozen=True)
class BandScale:
    """Split ``[0, extent]`` into one equal slot per category.

    Each band is the slot shrunk by ``padding`` and centred in it. With
    ``reverse`` the first category takes the slot furthest from zero, which is
    what a ``[height, 0]`` range does.
    """

    domain: Tuple[str, ...]
    extent: float
    padding: float
    reverse: bool = False
    _index: Dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_index", {category: i for i, category in enumerate(self.domain)})

    @property
    def step(self) -> float:
        return self.extent / len(self.domain)

    @property
    def bandwidth(self) -> float:
        return self.step * (1 - self.padding)

    def __contains__(self, category: object) -> bool:
        return category in self._index

    def _slot(self, category: str) -> int:
        try:
            i = self._index[category]
        except KeyError:
            raise UnknownCategory(f"Category not in band domain: {category!r}", value=category) from None
        return len(self.domain) - 1 - i if self.reverse else i

    def slot_bounds(self, category: str) -> Tuple[float, float]:
        slot, n = self._slot(category), len(self.domain)
        return (self.extent * slot / n, self.extent * (slot + 1) / n)

    def band_start(self, category: str) -> float:
        start, _ = self.slot_bounds(category)
        return start + self.step * self.padding / 2

    def band_center(self, category: str) -> float:
        return self.band_start(category) + self.bandwidth / 2

    def __call__(self, category: str) -> float:
        return self.band_start(category)


def compute_value_scale(dataset: Sequence[Record], width: float) -> LinearScale:
    """Build the value scale with domain ``[0, max(value)]``."""

    if not dataset:
        raise InvalidInput("Dataset is empty", value=list(dataset))
    if not math.isfinite(width) or width <= 0:
        raise InvalidInput(f"Width must be positive: {width!r}", value=width)
    return LinearScale(domain_max=max(record.value for record in dataset), width=float(width))


def compute_category_scale(
    dataset: Sequence[Record],
    height: float,
    padding: float = 0.33,
    *,
    reverse: bool = False,
) -> BandScale:
    """Build the band scale over the dataset's categories in dataset order."""

    categories = tuple(record.category for record in dataset)
    if not categories:
        raise InvalidInput("Dataset is empty", value=list(dataset))
    if not math.isfinite(height) or height <= 0:
        raise InvalidInput(f"Height must be positive: {height!r}", value=height)
    if not 0 <= padding < 1:
        raise InvalidInput(f"Padding must be in [0, 1): {padding!r}", value=padding)
    if len(set(categories)) != len(categories):
        raise InvalidInput("Categories must be unique", value=categories)
    return BandScale(domain=categories, extent=float(height), padding=float(padding), reverse=reverse)


def _pow10(factor: int, power: int) -> float:
    # parsing a decimal literal saturates to 0.0 or inf instead of raising OverflowError
    return float(f"{factor}e{power}")


def _increment(stop: float, count: int) -> Tuple[int, int]:
    step = stop / count
    if step == 0:
        # subnormal domain too small to split
        step = stop
    exponent = math.log10(step)
    power = math.floor(exponent)
    error = 10 ** (exponent - power)
    if error >= _E10:
        return 1, power + 1
    if error >= _E5:
        return 5, power
    if error >= _E2:
        return 2, power
    return 1, power


def _bump(factor: int, power: int) -> Tuple[int, int]:
    position = _NICE_FACTORS.index(factor)
    if position == len(_NICE_FACTORS) - 1:
        return _NICE_FACTORS[0], power + 1
    return _NICE_FACTORS[position + 1], power


def _values(stop: float, factor: int, power: int) -> Optional[np.ndarray]:
    """Multiples of the increment in ``[0, stop]``, or None when the increment underflows."""

    increment = _pow10(factor, power)
    if increment == 0:
        return None
    n = math.floor(stop / increment * (1 + 1e-12))
    divisor = _pow10(1, -power) if power < 0 else math.inf
    if math.isfinite(divisor):
        # dividing keeps 0.1 steps exact
        values = np.arange(n + 1) * factor / divisor
    else:
        values = np.arange(n + 1) * increment
    return np.minimum(values, stop)


def nice_ticks(domain_max: float, count: int) -> List[Tuple[float, str]]:
    """Return at most ``count`` (value, label) pairs on 1/2/5 x 10^k steps.

    Ticks start at zero and never pass ``domain_max``. A zero domain yields the
    single tick ``0``. At the top of the float range a step that overflows
    leaves only the ``0`` tick; subnormal domains skip steps that underflow to
    zero.
    """

    if count < 1:
        raise InvalidInput(f"Tick count must be at least 1: {count!r}", value=count)
    if domain_max == 0:
        return [(0.0, "0")]

    factor, power = _increment(domain_max, count)
    values = _values(domain_max, factor, power)
    while values is None or len(values) > count:
        factor, power = _bump(factor, power)
        values = _values(domain_max, factor, power)

    decimals = max(0, -power)
    return [(float(value), f"{value:.{decimals}f}") for value in values]
