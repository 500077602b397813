import argparse
import logging
import math
import sys

import numpy as np

import complexes
from complexes import Complex
from display import ANGLE_UNITS, DEFAULT_FORMAT, set_complex
from quaternion import Quaternion
from rotation import from_angle_axis
from vec3 import Vec3
from vector import Vector

logger = logging.getLogger(__name__)

TOLERANCE = 1e-6


# --- Rotation self-check ---

def rotation_fixtures():
    """(label, computed, expected) triples covering the quaternion and rotation API."""
    q1 = Quaternion(1, 2, 3, 4)
    q2 = Quaternion(.5, .5, -.5, -.5)
    i, j, k = Quaternion(0, 1, 0, 0), Quaternion(0, 0, 1, 0), Quaternion(0, 0, 0, 1)
    s = 1 / math.sqrt(2)
    q3 = Quaternion(s, 0, 0, s)
    v1, v2, v3 = Vec3(1, 0, 0), Vec3(0, 1, 0), Vec3(1, -1, 2)
    m = np.array([
        [10, 10, 5, 1],
        [4, 6, 4, 1],
        [1, 3, 3, 1],
        [0, 1, 2, 1],
    ], dtype=float)
    return [
        ("q1 * q2", q1 * q2, Quaternion(3, 2, 4, -1)),
        ("q1 + q2", q1 + q2, Quaternion(1.5, 2.5, 2.5, 3.5)),
        ("q1 - q2", q1 - q2, Quaternion(.5, 1.5, 3.5, 4.5)),
        ("q1 / q2", q1 / q2, Quaternion(-2, 0, -1, 5)),
        ("q1 ** q2", q1 ** q2, Quaternion(1, -4, -2, 3)),
        ("q1.conjugate_via('')", q1.conjugate_via(''), Quaternion(1, -2, -3, -4)),
        ("i * j", i * j, k),
        ("j * k", j * k, i),
        ("k * i", k * i, j),
        ("v1.apply_quaternion(q3)", v1.apply_quaternion(q3), v2),
        ("v1.apply_matrix_left(q3.to_matrix_left())", v1.apply_matrix_left(q3.to_matrix_left()), v2),
        ("v1.rotate(q3)", v1.rotate(q3), v2),
        ("v2.apply_quaternion(q3)", v2.apply_quaternion(q3), Vec3(-1, 0, 0)),
        ("v2.apply_matrix_left(q3.to_matrix_left())", v2.apply_matrix_left(q3.to_matrix_left()), Vec3(-1, 0, 0)),
        ("v2.rotate(q3)", v2.rotate(q3), Vec3(-1, 0, 0)),
        ("from_angle_axis(pi/2, 0, 0, 1)", from_angle_axis(math.pi / 2, 0, 0, 1), q3),
        ("v1.rotate_to(v2)", v1.rotate_to(v2), q3),
        ("v3.apply_matrix_right(m)", v3.apply_matrix_right(m), Vec3(8, 11, 9) / 3),
        ("v3.apply_matrix_left(m)", v3.apply_matrix_left(m), Vec3(11, 7, 5) / 4),
    ]


def check_rotations(tolerance=TOLERANCE):
    """Print one line per fixture; returns (passed, total)."""
    print("Rotation tests:")
    passed = 0
    fixtures = rotation_fixtures()
    for label, value, expected in fixtures:
        if value == expected:
            verdict = "OK"
        elif value.dist(expected) < tolerance:
            verdict = f"OK ({value.dist(expected):.3g})"
        else:
            verdict = f"not OK (expected {expected})"
        if verdict.startswith("OK"):
            passed += 1
        print(f"{label} = {value} : {verdict}")
    print(f"{passed} tests passed out of {len(fixtures)}")
    return passed, len(fixtures)


# --- Complex showcase ---

def complex_showcase(fmt=DEFAULT_FORMAT):
    z = Complex(2, 4)
    w = Complex(-1, 1)
    return [
        ("z", z),
        ("w", w),
        ("Multiplication", z * w),
        ("Scaling left", 2 * z),
        ("Scaling right", z * 2),
        ("Addition", z + w),
        ("Addition left", 3 + w),
        ("Addition right", w + 3),
        ("Subtraction", z - w),
        ("Subtraction left", 3 - w),
        ("Subtraction right", w - 3),
        ("Division", z / w),
        ("Division left", 2 / z),
        ("Division right", z / 2),
        ("Reciprocal", 1 / z),
        ("Negation", -z),
        ("Powers", z ** 2),
        ("Roots", z ** .5),
        ("Complex powers", z ** w),
        ("Conjugation", w.conjugate_via("")),
        ("Polar form", z.to_polar_string(fmt)),
        ("Length", z.len()),
        ("Absolute value", complexes.absolute(z)),
        ("Square root", complexes.sqrt(z)),
        ("Cosine", complexes.cos(z)),
        ("Sine", complexes.sin(z)),
        ("Tangent", complexes.tan(z)),
        ("Hyperbolic cosine", complexes.cosh(z)),
        ("Hyperbolic sine", complexes.sinh(z)),
        ("Hyperbolic tangent", complexes.tanh(z)),
        ("Logarithm", complexes.log(z, 1)),
    ]


def show_complex(fmt=DEFAULT_FORMAT):
    print("Complex tests:")
    for label, value in complex_showcase(fmt):
        text = value.format(fmt) if isinstance(value, Complex) else value
        print(f"{label}: {text}")


# --- FFT ---

def show_fft(values, fmt=DEFAULT_FORMAT):
    v = Vector(values)
    f = v.fft()
    back = f.fft(inverse=True) / f.size
    print(f"input:   {v.format(fmt)}")
    print(f"fft:     {f.format(fmt)}")
    print(f"inverse: {back.format(fmt)}  (divided by {f.size})")
    return f


# --- Main CLI ---

def build_parser():
    parser = argparse.ArgumentParser(
        description="loopmath: complex, quaternion and vector algebra self-checks",
        formatter_class=argparse.RawTextHelpFormatter
    )
    parser.add_argument('--precision', '-p', type=int, default=DEFAULT_FORMAT.precision,
                        help='Decimals shown for complex numbers (default: 2).')
    parser.add_argument('--angle', choices=sorted(ANGLE_UNITS), default=DEFAULT_FORMAT.angle_unit,
                        help='Angle unit of the polar form (default: rad, shown as a multiple of π).')
    parser.add_argument('--symbol', default=DEFAULT_FORMAT.symbol,
                        help='Glyph for the imaginary unit (default: i).')
    parser.add_argument('--verbose', '-v', action='store_true', help='Log degenerate-case fallbacks.')
    subparsers = parser.add_subparsers(dest='command')

    parser_rot = subparsers.add_parser('rotations', help='Run the quaternion and rotation fixtures.')
    parser_rot.add_argument('--tolerance', '-t', type=float, default=TOLERANCE,
                            help='Distance below which a result still passes (default: 1e-6).')

    subparsers.add_parser('complex', help='Show complex arithmetic and elementary functions.')

    parser_fft = subparsers.add_parser('fft', help='Transform a vector of reals and back.')
    parser_fft.add_argument('values', nargs='*', type=float, default=[1, 2, 3, 4, 5],
                            help='Entries; padded with zeros to a power of two (default: 1 2 3 4 5).')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s")
    try:
        fmt = set_complex(DEFAULT_FORMAT, symbol=args.symbol, angle_unit=args.angle,
                          precision=args.precision)
    except ValueError as e:
        logger.error(f"Bad display option: {e}")
        return 2

    if args.command is None or args.command == 'rotations':
        passed, total = check_rotations(getattr(args, 'tolerance', TOLERANCE))
        return 0 if passed == total else 1
    if args.command == 'complex':
        show_complex(fmt)
    elif args.command == 'fft':
        show_fft(args.values, fmt)
    return 0


if __name__ == '__main__':
    sys.exit(main())
