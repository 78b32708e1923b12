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


""" Geometric mesh traits.

Convenience functions to compute geometric and topological traits of a
:class:`~dsmesh.poly.Polyhedron`.
"""

import numpy as np

import dsmesh.math as dmath


def bounds(points):
    r""" Bounding box vertices.

    Corner vertices of the axis-aligned bounding box.

    Parameters
    ----------
    points : array_like, shape (n, k)
        Coordinates of :math:`n` points in :math:`\mathbb{R}^k`,
        one point per row.

    Returns
    -------
    a : ~numpy.ndarray
        Holds the minimum value for each dimension.
    b : ~numpy.ndarray
        Holds the maximum value for each dimension.
    """
    return np.min(points, axis=0), np.max(points, axis=0)


def face_normal(mesh, face):
    """ Face normal.

    Newell's method, robust for non-planar and non-convex polygons.

    Parameters
    ----------
    mesh : Polyhedron
        Mesh the face belongs to.
    face : Face or int
        Face of the mesh.

    Returns
    -------
    ~numpy.ndarray, shape (3, )
        Unit normal vector. The normal points to the side from which the
        face appears counter-clockwise.
    """
    P = mesh.points[mesh.faces[face].v_indices]
    Q = np.roll(P, -1, axis=0)

    vector = np.zeros(3, dtype=float)

    for p, q in zip(P, Q):
        vector += dmath.cross(p, q)

    return dmath.unit(vector)


def face_normals(mesh):
    """ Face normals.

    Returns
    -------
    ~numpy.ndarray
        Array of face normal vectors, one row per face.
    """
    return np.array([face_normal(mesh, f) for f in mesh.faces])


def volume(mesh):
    """ Signed volume.

    Sum of signed tetrahedra spanned by the origin and a triangle fan of
    each face. Positive for a closed mesh whose faces appear
    counter-clockwise from the outside.

    Returns
    -------
    float
        Enclosed volume, negative for inward facing orientation.
    """
    total = 0.0

    for f in mesh.faces:
        P = mesh.points[f.v_indices]

        for p, q in zip(P[1:-1], P[2:]):
            total += dmath.dot(P[0], dmath.cross(p, q))

    return total / 6.0


def euler_characteristic(mesh):
    """ Euler characteristic.

    Equals two for a closed mesh of genus zero and zero for a torus.

    Returns
    -------
    int
        The value :math:`V - E + F`.
    """
    v, e, f = mesh.size
    return v - e + f
