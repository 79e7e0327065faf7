import math
import numbers

import numpy as np

eps = 1e-10  # tolerance for is_close
precision = 8  # digits after the decimal point when rendering


def is_close(a, b) -> bool:
    """
    Tolerance based equality.
    :param a: A scalar, Vector3, Matrix3 or Quaternion
    :param b: A value of the same kind as a
    :return: True if a and b agree within eps
    """
    if isinstance(a, numbers.Real):
        assert isinstance(b, numbers.Real)
        return abs(a - b) <= eps
    return a.is_close(b)


def divide(a, b) -> float:
    """IEEE-754 division, a zero divisor gives inf or nan instead of raising"""
    with np.errstate(divide='ignore', invalid='ignore'):
        return float(np.float64(a) / np.float64(b))


def safe_sqrt(x) -> float:
    # round off can push a radicand that is zero in exact arithmetic below zero
    return math.sqrt(max(x, 0.0))


def clip_unit(x) -> float:
    """Clips x into [-1, 1], the domain of acos."""
    return min(max(x, -1.0), 1.0)


def format_elements(elements):
    """
    Renders numbers with a common column width.

    The width grows with the largest finite magnitude and reserves a sign
    column when any element is negative.
    :param elements: The numbers to render
    :return: A list of strings, all of the same length
    """
    magnitudes = [abs(e) for e in elements if math.isfinite(e) and e != 0]
    n_digits = 1
    if magnitudes:
        n_digits = max(int(math.log10(max(magnitudes))) + 1, 1)
    width = (1 if any(e < 0 for e in elements) else 0) + n_digits + 1 + precision
    strings = ['{:{}.{}f}'.format(e, width, precision) for e in elements]
    max_length = max(len(s) for s in strings)
    return [s.ljust(max_length) for s in strings]
