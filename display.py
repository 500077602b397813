"""
Display settings and string rendering for the algebra types.

A `ComplexFormat` is an immutable bundle of the options the renderers read:
the imaginary-unit glyph, the angle unit of the polar form, the decimal
precision, and an optional replacement renderer. Formats are passed
explicitly; there is no module-level mutable state.

>>> format_cartesian(2, 4)
'2 + 4i'
>>> format_cartesian(3, -1)
'3 - i'
>>> format_cartesian(0, 0)
'0'
>>> format_cartesian(0.5, 0, ComplexFormat(precision=0))
'1'
>>> format_polar(2.0, 0.0, set_complex(DEFAULT_FORMAT, angle_unit='deg'))
'(2,0°)'
>>> format_quaternion(0.3, 0.0, -1.0, 0.6)
'0.300 - j + 0.600k'
"""
from __future__ import annotations

import logging
import math
from collections import namedtuple
from typing import Callable, Iterable, Optional, Tuple

import msgpack

logger = logging.getLogger(__name__)

# --- Configuration ---
ComplexFormat = namedtuple(
    'ComplexFormat', 'symbol angle_unit precision render',
    defaults=("i", "rad", 2, None))

DEFAULT_FORMAT = ComplexFormat()

# angle unit -> (factor applied to arg/π, glyph)
ANGLE_UNITS = {
    "rad": (1, "π"),
    "deg": (180, "°"),
}

# Keys used by the preference store the settings are read from.
PREF_SYMBOL = "Complex Symbol"
PREF_ANGLE = "Complex Angle"
PREF_PRECISION = "Complex Precision"


def set_complex(fmt: ComplexFormat = DEFAULT_FORMAT, **changes) -> ComplexFormat:
    """Return `fmt` with the given options overridden.

    Accepts `symbol`, `angle_unit`, `precision` and `render`; `render` is a
    callable `(z, fmt) -> str` replacing the cartesian renderer.
    """
    unknown = set(changes) - set(ComplexFormat._fields)
    if unknown:
        raise TypeError(f"unknown format options: {sorted(unknown)}")
    new = fmt._replace(**changes)
    if new.angle_unit not in ANGLE_UNITS:
        raise ValueError(f"angle_unit must be one of {sorted(ANGLE_UNITS)}, got {new.angle_unit!r}")
    if isinstance(new.precision, bool) or not isinstance(new.precision, int) or new.precision < 0:
        raise ValueError(f"precision must be a non-negative integer, got {new.precision!r}")
    return new


def load_preferences(blob: Optional[bytes]) -> ComplexFormat:
    """Read display settings from a msgpack-encoded preference map.

    Missing, corrupt or wrongly typed entries fall back to the defaults; the
    store is only read, never written.
    """
    if not blob:
        return DEFAULT_FORMAT
    prefs = None
    try:
        prefs = msgpack.unpackb(blob, raw=False)
    except (msgpack.ExtraData, msgpack.FormatError, msgpack.UnpackValueError, ValueError):
        logger.warning("Display preferences are corrupt; using defaults.")
        return DEFAULT_FORMAT
    if not isinstance(prefs, dict):
        logger.warning(f"Display preferences have type {type(prefs).__name__}, expected a map; using defaults.")
        return DEFAULT_FORMAT

    symbol = prefs.get(PREF_SYMBOL, DEFAULT_FORMAT.symbol)
    if not isinstance(symbol, str):
        logger.warning(f"Ignoring non-string {PREF_SYMBOL!r}: {symbol!r}")
        symbol = DEFAULT_FORMAT.symbol
    angle_unit = prefs.get(PREF_ANGLE, DEFAULT_FORMAT.angle_unit)
    if angle_unit not in ANGLE_UNITS:
        logger.warning(f"Ignoring unknown {PREF_ANGLE!r}: {angle_unit!r}")
        angle_unit = DEFAULT_FORMAT.angle_unit
    precision = prefs.get(PREF_PRECISION, DEFAULT_FORMAT.precision)
    if isinstance(precision, bool) or not isinstance(precision, int) or precision < 0:
        logger.warning(f"Ignoring invalid {PREF_PRECISION!r}: {precision!r}")
        precision = DEFAULT_FORMAT.precision
    return ComplexFormat(symbol=symbol, angle_unit=angle_unit, precision=precision)


# --- Number rendering ---

def round_to(value: float, precision: int) -> float:
    """Round half up to `precision` decimals."""
    scale = 10 ** precision
    return math.floor(value * scale + 0.5) / scale


def render_number(value: float, precision: int) -> str:
    """Shortest decimal text for an already rounded value ('2', '4.47', '-12')."""
    if not math.isfinite(value):
        return str(value)
    text = f"{value:.{precision}f}"
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    if text in ('-0', ''):
        text = '0'
    return text


def join_terms(terms: Iterable[Tuple[float, str]], number: Callable[[float], str]) -> str:
    """Render `a + bi + ...` style sums.

    `terms` pairs each coefficient with its unit glyph ("" for the real part).
    Zero terms are dropped and unit coefficients of imaginary units are elided.
    """
    s = None
    for value, unit in terms:
        if value == 0:
            continue
        if not unit:
            s = number(value) if s is None else f"{s} + {number(value)}"
            continue
        if s is None:
            if value == 1:
                s = unit
            elif value == -1:
                s = "-" + unit
            else:
                s = number(value) + unit
        elif value > 0:
            s += " + " + (unit if value == 1 else number(value) + unit)
        else:
            s += " - " + (unit if value == -1 else number(-value) + unit)
    return "0" if s is None else s


def format_cartesian(re: float, im: float, fmt: ComplexFormat = DEFAULT_FORMAT) -> str:
    p = fmt.precision
    x, y = round_to(re, p), round_to(im, p)
    return join_terms(((x, ""), (y, fmt.symbol)), lambda v: render_number(v, p))


def format_polar(r: float, theta: float, fmt: ComplexFormat = DEFAULT_FORMAT) -> str:
    """`(r,tπ)` in radians (t the multiple of π) or `(r,t°)` in degrees."""
    factor, glyph = ANGLE_UNITS[fmt.angle_unit]
    p = fmt.precision
    t = round_to(factor * theta / math.pi, p)
    return f"({render_number(round_to(r, p), p)},{render_number(t, p)}{glyph})"


def format_complex(z, fmt: ComplexFormat = DEFAULT_FORMAT) -> str:
    """Render `z` with the format's renderer, cartesian by default."""
    if fmt.render is not None:
        return fmt.render(z, fmt)
    return format_cartesian(z.re, z.im, fmt)


def format_quaternion(w: float, x: float, y: float, z: float) -> str:
    return join_terms(((w, ""), (x, "i"), (y, "j"), (z, "k")), lambda v: f"{v:.3f}")
