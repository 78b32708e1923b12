# Copyright 2024, m3shware
#
# Permission is hereby granted, free of charge, to any person obtaining a
# copy of this software and associated documentation files (the "Software"),
# to deal in the Software without restriction, including without limitation
# the rights to use, copy, modify, merge, publish, distribute, sublicense,
# and/or sell copies of the Software, and to permit persons to whom the
# Software is furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in
# all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING
# FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS
# IN THE SOFTWARE.


""" Basic vector math.

For the small vectors handled during subdivision, specialized non-vectorized
functions offer better performance than some NumPy functions. This seems to
be the case for :func:`numpy.cross`, at least in some older releases.
"""

import math
import numpy as np


def lerp(a, b, t):
    r""" Linear interpolation.

    Evaluates :math:`(1 - t) \mathbf{a} + t \mathbf{b}`.

    Parameters
    ----------
    a : array_like
        Value at :math:`t = 0`.
    b : array_like
        Value at :math:`t = 1`.
    t : float
        Interpolation parameter.

    Returns
    -------
    ~numpy.ndarray
        Interpolated value.
    """
    return (1.0 - t) * np.asarray(a, dtype=float) + t * np.asarray(b, dtype=float)


def cross(u, v):
    """ Cross product.

    Alternative to NumPy's vectorized function :func:`numpy.cross` of the
    same name.

    Parameters
    ----------
    u : array_like, shape (3, )
        Vector in :math:`\\mathbb{R}^3`.
    v : array_like, shape (3, )
        Vector in :math:`\\mathbb{R}^3`.

    Returns
    -------
    ~numpy.ndarray, shape (3, )
        Cross product of vectors `u` and `v`.
    """
    return np.array([u[1]*v[2] - u[2]*v[1],
                     u[2]*v[0] - u[0]*v[2],
                     u[0]*v[1] - u[1]*v[0]])


def dot(u, v):
    r""" Dot product.

    Inner product of vectors. Alternative to :func:`numpy.dot` for
    3-dimensional vectors.

    Parameters
    ----------
    u : array_like, shape (3, )
        Vector in :math:`\mathbb{R}^3`.
    v : array_like, shape (3, )
        Vector in :math:`\mathbb{R}^3`.

    Returns
    -------
    float
        Inner product :math:`\mathbf{u}^T \mathbf{v}`.
    """
    return u[0]*v[0] + u[1]*v[1] + u[2]*v[2]


def norm(u):
    """ Length of vector.

    Note
    ----
    The length of the input vector is not checked. Passing vectors with
    more than three entries will produce a **wrong** result without any
    warning.
    """
    return math.sqrt(u[0]*u[0] + u[1]*u[1] + u[2]*u[2])


def unit(u):
    """ In-place vector normalization.

    Convenience function to normalize a vector. Modifies the input
    argument!

    Parameters
    ----------
    u : ~numpy.ndarray, shape (3, )
        Vector in :math:`\\mathbb{R}^3`.

    Returns
    -------
    ~numpy.ndarray, shape (3, )
        The normalized input vector (not a normalized copy).

    Note
    ----
    No error checking (division by zero, input vector shape) is
    performed.
    """
    u /= norm(u)
    return u
