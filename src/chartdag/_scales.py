"""Scale transforms mapping a data domain onto a visual range."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from chartdag._errors import UnsupportedScaleTypeError

DEFAULT_BAND_PADDING = 0.1


@dataclass(frozen=True, slots=True)
class LinearScale:
    """Affine map from a continuous ``(d0, d1)`` domain to ``(r0, r1)``.

    A degenerate domain maps every value to the middle of the range. A
    domain with a missing bound (no values to measure) and a missing
    input both map to None.
    """

    domain: tuple[float | None, float | None]
    range: tuple[float, float]

    def __call__(self, value: float | None) -> float | None:
        d0, d1 = self.domain
        if value is None or d0 is None or d1 is None:
            return None
        r0, r1 = self.range
        span = d1 - d0
        t = (value - d0) / span if span else 0.5
        return r0 + t * (r1 - r0)

    def bandwidth(self) -> float:
        return 0


@dataclass(frozen=True, slots=True)
class BandScale:
    """Split a range into equal bands, one per category of the domain.

    Inner and outer padding are both ``padding`` (a fraction of the step)
    and the bands are centred in the range. Values outside the domain map
    to None.
    """

    domain: tuple[Any, ...]
    range: tuple[float, float]
    padding: float = DEFAULT_BAND_PADDING

    @property
    def step(self) -> float:
        r0, r1 = self.range
        return abs(r1 - r0) / max(1, len(self.domain) - self.padding + self.padding * 2)

    def bandwidth(self) -> float:
        return self.step * (1 - self.padding)

    def __call__(self, value: Any) -> float | None:
        try:
            index = self.domain.index(value)
        except ValueError:
            return None
        r0, r1 = self.range
        reverse = r1 < r0
        start, stop = (r1, r0) if reverse else (r0, r1)
        step = self.step
        n = len(self.domain)
        start += (stop - start - step * (n - self.padding)) * 0.5
        if reverse:
            index = n - 1 - index
        return start + step * index


def make_scale(
    scale_type: str,
    domain: Sequence[Any],
    range_: Sequence[float],
    *,
    band_padding: float = DEFAULT_BAND_PADDING,
) -> LinearScale | BandScale:
    """Construct a scale transform.

    Raises:
        UnsupportedScaleTypeError: For anything but "linear" and "band".

    """
    match scale_type:
        case "linear":
            d0, d1 = domain
            r0, r1 = range_
            return LinearScale(domain=(d0, d1), range=(r0, r1))
        case "band":
            r0, r1 = range_
            return BandScale(domain=tuple(domain), range=(r0, r1), padding=band_padding)
        case _:
            raise UnsupportedScaleTypeError(scale_type)
