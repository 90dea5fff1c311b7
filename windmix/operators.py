"""Array reductions used to post-process volumetric fields.

Both helpers operate on 3-D arrays indexed as ``(x, y, z)`` and never modify
their input.
"""

import enum
import numbers

import numpy as np


class InvalidArgument(ValueError):
    """Raised when an array or axis selector is not acceptable."""


class Axis(enum.IntEnum):
    x = 0
    y = 1
    z = 2


VALID_AXES = tuple(int(a) for a in Axis)


def _check_axis(axis):
    if isinstance(axis, bool) or not isinstance(axis, numbers.Integral) or int(axis) not in VALID_AXES:
        raise InvalidArgument(f"invalid axis selector {axis!r} (must be one of {VALID_AXES})")

    return int(axis)


def _check_volume(arr):
    arr = np.asarray(arr)

    if arr.ndim != 3:
        raise InvalidArgument(f"expected a 3-dimensional array (got shape {arr.shape})")

    return arr


def axis_difference(arr, axis):
    """Forward difference of a 3-D array along one axis.

    Element ``i`` of the result is ``arr[i + 1] - arr[i]`` along ``axis``.
    The result is one element shorter than ``arr`` along ``axis`` (empty if
    ``arr`` has fewer than two elements there) and has the same extent along
    the other two axes.

    Arguments:
        arr: Array of shape ``(nx, ny, nz)``.
        axis: Axis selector, one of ``0``, ``1``, ``2`` or an :class:`Axis` member.

    Raises:
        InvalidArgument: If ``arr`` is not 3-dimensional or ``axis`` is invalid.

    Example:
        >>> a = np.array([1.0, 4.0]).reshape(2, 1, 1)
        >>> axis_difference(a, Axis.x).ravel()
        array([3.])
    """
    axis = _check_axis(axis)
    arr = _check_volume(arr)

    upper = [slice(None)] * 3
    lower = [slice(None)] * 3
    upper[axis] = slice(1, None)
    lower[axis] = slice(None, -1)

    # for an empty axis both slices are empty as well
    return arr[tuple(upper)] - arr[tuple(lower)]


def horizontal_mean(arr, axis=Axis.z):
    """Mean of a 3-D array over the two axes orthogonal to ``axis``.

    Returns a 1-D array with one value per index along ``axis``, e.g. a
    vertical profile for ``axis=Axis.z``.

    Raises:
        InvalidArgument: If ``arr`` is not 3-dimensional, ``axis`` is invalid,
            or one of the averaged axes is empty (the mean would be undefined).
    """
    axis = _check_axis(axis)
    arr = _check_volume(arr)

    reduced_axes = tuple(a for a in VALID_AXES if a != axis)

    for a in reduced_axes:
        if arr.shape[a] == 0:
            raise InvalidArgument(f"cannot average over empty axis {a} (array shape {arr.shape})")

    return arr.mean(axis=reduced_axes)
