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


""" Closed polyhedra.

Small closed 2-manifold meshes that serve as initial control meshes for
subdivision. All faces are oriented counter-clockwise when viewed from
outside the solid.
"""

import math
import numpy as np

from dsmesh.poly import Polyhedron


def cube():
    """ Cube.

    Axis aligned cube with corners at :math:`(\\pm 1, \\pm 1, \\pm 1)`.
    Every vertex is incident to three quadrilaterals.

    Returns
    -------
    Polyhedron
        8 vertices, 12 edges, 6 faces.
    """
    points = [[-1.0, -1.0, -1.0],
              [ 1.0, -1.0, -1.0],
              [ 1.0,  1.0, -1.0],
              [-1.0,  1.0, -1.0],
              [-1.0, -1.0,  1.0],
              [ 1.0, -1.0,  1.0],
              [ 1.0,  1.0,  1.0],
              [-1.0,  1.0,  1.0]]

    faces = [[0, 3, 2, 1],          # bottom
             [4, 5, 6, 7],          # top
             [0, 1, 5, 4],          # front
             [2, 3, 7, 6],          # back
             [1, 2, 6, 5],          # right
             [3, 0, 4, 7]]          # left

    return Polyhedron(points, faces, name='cube')


def tetrahedron():
    """ Regular tetrahedron.

    Returns
    -------
    Polyhedron
        4 vertices, 6 edges, 4 faces.
    """
    points = [[ 1.0,  1.0,  1.0],
              [ 1.0, -1.0, -1.0],
              [-1.0,  1.0, -1.0],
              [-1.0, -1.0,  1.0]]

    faces = [[0, 1, 2], [0, 3, 1], [0, 2, 3], [1, 3, 2]]

    return Polyhedron(points, faces, name='tetrahedron')


def octahedron():
    """ Regular octahedron.

    Vertices are placed on the coordinate axes. Every vertex has
    valence four.

    Returns
    -------
    Polyhedron
        6 vertices, 12 edges, 8 faces.
    """
    points = [[ 1.0,  0.0,  0.0],
              [-1.0,  0.0,  0.0],
              [ 0.0,  1.0,  0.0],
              [ 0.0, -1.0,  0.0],
              [ 0.0,  0.0,  1.0],
              [ 0.0,  0.0, -1.0]]

    faces = []

    # One face per octant. Mirroring the first octant's face flips its
    # orientation for an odd number of sign changes.
    for sx in (1, -1):
        for sy in (1, -1):
            for sz in (1, -1):
                x = 0 if sx > 0 else 1
                y = 2 if sy > 0 else 3
                z = 4 if sz > 0 else 5

                faces.append([x, y, z] if sx * sy * sz > 0 else [x, z, y])

    return Polyhedron(points, faces, name='octahedron')


def prism(n, height=2.0):
    """ Regular n-gonal prism.

    Parameters
    ----------
    n : int
        Number of vertices of the base polygon.
    height : float, optional
        Distance of base and top polygon.

    Raises
    ------
    ValueError
        If `n` is less than three.

    Returns
    -------
    Polyhedron
        :math:`2n` vertices, :math:`3n` edges, :math:`n + 2` faces.
    """
    if n < 3:
        raise ValueError(f'prism requires n >= 3, got {n}')

    phi = 2.0 * math.pi * np.arange(n) / n
    ring = np.column_stack((np.cos(phi), np.sin(phi), np.zeros(n)))

    bottom = ring - [0.0, 0.0, 0.5 * height]
    top = ring + [0.0, 0.0, 0.5 * height]

    faces = [list(range(n - 1, -1, -1)), list(range(n, 2 * n))]
    faces += [[k, (k + 1) % n, n + (k + 1) % n, n + k] for k in range(n)]

    return Polyhedron(np.vstack((bottom, top)), faces, name=f'prism{n}')


def torus(m, n, R=2.0, r=0.5):
    """ Quadrilateral torus.

    Parameters
    ----------
    m : int
        Number of subdivisions along the central circle.
    n : int
        Number of subdivisions of the tube cross section.
    R : float, optional
        Radius of the central circle.
    r : float, optional
        Radius of the tube.

    Raises
    ------
    ValueError
        If `m` or `n` is less than three.

    Returns
    -------
    Polyhedron
        :math:`mn` vertices, :math:`2mn` edges, :math:`mn` faces.
    """
    if m < 3 or n < 3:
        raise ValueError(f'torus requires m, n >= 3, got {m}, {n}')

    theta = 2.0 * math.pi * np.arange(m) / m
    phi = 2.0 * math.pi * np.arange(n) / n

    points = [[(R + r * math.cos(p)) * math.cos(t),
               (R + r * math.cos(p)) * math.sin(t),
               r * math.sin(p)] for t in theta for p in phi]

    idx = lambda i, j: (i % m) * n + (j % n)

    faces = [[idx(i, j), idx(i + 1, j), idx(i + 1, j + 1), idx(i, j + 1)]
             for i in range(m) for j in range(n)]

    return Polyhedron(points, faces, name='torus')
