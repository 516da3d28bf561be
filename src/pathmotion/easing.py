"""Easing curves for path animation.

Every curve maps normalized progress ``p`` in ``[0, 1]`` to an eased value.
Most curves stay inside ``[0, 1]``; the elastic and back families overshoot
between the endpoints but always return exactly 0 at ``p=0`` and exactly 1 at
``p=1``.

Based on Robert Penner's easing equations (BSD License).

Example:
    >>> from pathmotion.easing import EASINGS, get_easing
    >>> EASINGS["ease_in_quad"](0.5)
    0.25
    >>> get_easing("no_such_curve") is EASINGS["linear"]
    True
"""

from __future__ import annotations
import logging
import math
from typing import Callable, Dict, Optional, Union

log = logging.getLogger(__name__)

EasingFunction = Callable[[float], float]

BACK_OVERSHOOT = 1.70158
ELASTIC_PERIOD = 0.3


def linear(p: float) -> float:
    return p


def smooth(p: float) -> float:
    """Half-cosine curve."""
    return 0.5 - math.cos(p * math.pi) / 2


# -------------------- Polynomial --------------------

def ease_in_quad(p: float) -> float:
    return p * p


def ease_out_quad(p: float) -> float:
    return -(p * (p - 2))


def ease_in_out_quad(p: float) -> float:
    p *= 2
    if p < 1:
        return 0.5 * p * p
    p -= 1
    return -0.5 * (p * (p - 2) - 1)


def ease_in_cubic(p: float) -> float:
    return p ** 3


def ease_out_cubic(p: float) -> float:
    return (p - 1) ** 3 + 1


def ease_in_out_cubic(p: float) -> float:
    p *= 2
    if p < 1:
        return 0.5 * p ** 3
    return 0.5 * ((p - 2) ** 3 + 2)


def ease_in_quart(p: float) -> float:
    return p ** 4


def ease_out_quart(p: float) -> float:
    return -((p - 1) ** 4 - 1)


def ease_in_out_quart(p: float) -> float:
    p *= 2
    if p < 1:
        return 0.5 * p ** 4
    return -0.5 * ((p - 2) ** 4 - 2)


def ease_in_quint(p: float) -> float:
    return p ** 5


def ease_out_quint(p: float) -> float:
    return (p - 1) ** 5 + 1


def ease_in_out_quint(p: float) -> float:
    p *= 2
    if p < 1:
        return 0.5 * p ** 5
    return 0.5 * ((p - 2) ** 5 + 2)


# -------------------- Sinusoidal --------------------

def ease_in_sine(p: float) -> float:
    # cos(pi/2) is not exactly zero in floating point
    if p == 1:
        return 1.0
    return 1 - math.cos(p * (math.pi / 2))


def ease_out_sine(p: float) -> float:
    return math.sin(p * (math.pi / 2))


def ease_in_out_sine(p: float) -> float:
    return -0.5 * (math.cos(math.pi * p) - 1)


# -------------------- Exponential --------------------

def ease_in_expo(p: float) -> float:
    if p == 0:
        return 0.0
    return 2 ** (10 * (p - 1))


def ease_out_expo(p: float) -> float:
    if p == 1:
        return 1.0
    return 1 - 2 ** (-10 * p)


def ease_in_out_expo(p: float) -> float:
    if p == 0:
        return 0.0
    if p == 1:
        return 1.0
    p *= 2
    if p < 1:
        return 0.5 * 2 ** (10 * (p - 1))
    return 0.5 * (2 - 2 ** (-10 * (p - 1)))


# -------------------- Circular --------------------

def ease_in_circ(p: float) -> float:
    return 1 - math.sqrt(1 - p * p)


def ease_out_circ(p: float) -> float:
    return math.sqrt(1 - (p - 1) ** 2)


def ease_in_out_circ(p: float) -> float:
    p *= 2
    if p < 1:
        return -0.5 * (math.sqrt(1 - p * p) - 1)
    p -= 2
    return 0.5 * (math.sqrt(1 - p * p) + 1)


# -------------------- Elastic --------------------

def _elastic_shift(period: float) -> float:
    return period / (2 * math.pi) * math.asin(1.0)


def ease_in_elastic(p: float) -> float:
    if p == 0:
        return 0.0
    if p == 1:
        return 1.0
    s = _elastic_shift(ELASTIC_PERIOD)
    p -= 1
    return -(2 ** (10 * p) * math.sin((p - s) * (2 * math.pi) / ELASTIC_PERIOD))


def ease_out_elastic(p: float) -> float:
    if p == 0:
        return 0.0
    if p == 1:
        return 1.0
    s = _elastic_shift(ELASTIC_PERIOD)
    return 2 ** (-10 * p) * math.sin((p - s) * (2 * math.pi) / ELASTIC_PERIOD) + 1


def ease_in_out_elastic(p: float) -> float:
    if p == 0:
        return 0.0
    p *= 2
    if p == 2:
        return 1.0
    period = ELASTIC_PERIOD * 1.5
    s = _elastic_shift(period)
    p -= 1
    wave = math.sin((p - s) * (2 * math.pi) / period)
    if p < 0:
        return -0.5 * 2 ** (10 * p) * wave
    return 0.5 * 2 ** (-10 * p) * wave + 1


# -------------------- Back --------------------
# Written as p*p*(p + s*(p - 1)) rather than p*p*((s + 1)*p - s) so the
# endpoints come out exact.

def ease_in_back(p: float) -> float:
    s = BACK_OVERSHOOT
    return p * p * (p + s * (p - 1))


def ease_out_back(p: float) -> float:
    s = BACK_OVERSHOOT
    p -= 1
    return p * p * (p + s * (p + 1)) + 1


def ease_in_out_back(p: float) -> float:
    s = BACK_OVERSHOOT * 1.525
    p *= 2
    if p < 1:
        return 0.5 * (p * p * (p + s * (p - 1)))
    p -= 2
    return 0.5 * (p * p * (p + s * (p + 1)) + 2)


# -------------------- Bounce --------------------

def ease_out_bounce(p: float) -> float:
    if p < 1 / 2.75:
        return 7.5625 * p * p
    if p < 2 / 2.75:
        p -= 1.5 / 2.75
        return 7.5625 * p * p + 0.75
    if p < 2.5 / 2.75:
        p -= 2.25 / 2.75
        return 7.5625 * p * p + 0.9375
    p -= 2.625 / 2.75
    return 7.5625 * p * p + 0.984375


def ease_in_bounce(p: float) -> float:
    return 1 - ease_out_bounce(1 - p)


def ease_in_out_bounce(p: float) -> float:
    if p < 0.5:
        return ease_in_bounce(p * 2) * 0.5
    return ease_out_bounce(p * 2 - 1) * 0.5 + 0.5


EASINGS: Dict[str, EasingFunction] = {
    "linear": linear,
    "smooth": smooth,
    "swing": smooth,
    "ease_in_quad": ease_in_quad,
    "ease_out_quad": ease_out_quad,
    "ease_in_out_quad": ease_in_out_quad,
    "ease_in_cubic": ease_in_cubic,
    "ease_out_cubic": ease_out_cubic,
    "ease_in_out_cubic": ease_in_out_cubic,
    "ease_in_quart": ease_in_quart,
    "ease_out_quart": ease_out_quart,
    "ease_in_out_quart": ease_in_out_quart,
    "ease_in_quint": ease_in_quint,
    "ease_out_quint": ease_out_quint,
    "ease_in_out_quint": ease_in_out_quint,
    "ease_in_sine": ease_in_sine,
    "ease_out_sine": ease_out_sine,
    "ease_in_out_sine": ease_in_out_sine,
    "ease_in_expo": ease_in_expo,
    "ease_out_expo": ease_out_expo,
    "ease_in_out_expo": ease_in_out_expo,
    "ease_in_circ": ease_in_circ,
    "ease_out_circ": ease_out_circ,
    "ease_in_out_circ": ease_in_out_circ,
    "ease_in_elastic": ease_in_elastic,
    "ease_out_elastic": ease_out_elastic,
    "ease_in_out_elastic": ease_in_out_elastic,
    "ease_in_back": ease_in_back,
    "ease_out_back": ease_out_back,
    "ease_in_out_back": ease_in_out_back,
    "ease_in_bounce": ease_in_bounce,
    "ease_out_bounce": ease_out_bounce,
    "ease_in_out_bounce": ease_in_out_bounce,
}


def get_easing(easing: Optional[Union[str, EasingFunction]]) -> EasingFunction:
    """Resolve an easing by catalog name.

    Args:
        easing: A catalog name, a callable (returned as-is), or None.

    Returns:
        The easing function. Unknown names and None resolve to ``linear``.
    """
    if easing is None:
        return linear
    if callable(easing):
        return easing
    fn = EASINGS.get(easing)
    if fn is None:
        log.warning("Unknown easing %r, falling back to linear", easing)
        return linear
    return fn
