import numpy as np
import pytest

import dsmesh.shapes as shapes
import dsmesh.traits as traits

from dsmesh.poly import Polyhedron

from conftest import mesh_centroid


@pytest.mark.parametrize('build, size, chi', [
    (shapes.cube, (8, 12, 6), 2),
    (shapes.tetrahedron, (4, 6, 4), 2),
    (shapes.octahedron, (6, 12, 8), 2),
    (lambda: shapes.prism(5), (10, 15, 7), 2),
    (lambda: shapes.torus(6, 4), (24, 48, 24), 0),
])
def test_size(build, size, chi):
    P = build()

    assert P.size == size
    assert traits.euler_characteristic(P) == chi
    assert P.closed
    assert P.oriented


@pytest.mark.parametrize('build', [shapes.cube, shapes.tetrahedron,
                                   shapes.octahedron,
                                   lambda: shapes.prism(6)])
def test_outward_normals(build):
    P = build()
    center = mesh_centroid(P)

    for f, n in zip(P.faces, traits.face_normals(P)):
        assert np.dot(n, P.face_centroid(f) - center) > 0.0


def test_face_normal(cube):
    assert np.allclose(traits.face_normal(cube, 1), [0.0, 0.0, 1.0])
    assert np.allclose(traits.face_normal(cube, cube.faces[0]),
                       [0.0, 0.0, -1.0])


def test_volume(cube):
    assert traits.volume(cube) == pytest.approx(8.0)

    flipped = Polyhedron(cube.points, [f.v_indices[::-1] for f in cube])
    assert traits.volume(flipped) == pytest.approx(-8.0)


def test_volume_tetrahedron():
    P = shapes.tetrahedron()
    a, b, c, d = P.points

    expected = abs(np.dot(b - a, np.cross(c - a, d - a))) / 6.0
    assert traits.volume(P) == pytest.approx(expected)


def test_bounds(cube):
    a, b = traits.bounds(cube.points)

    assert np.array_equal(a, [-1.0, -1.0, -1.0])
    assert np.array_equal(b, [1.0, 1.0, 1.0])


def test_invalid_arguments():
    with pytest.raises(ValueError):
        shapes.prism(2)

    with pytest.raises(ValueError):
        shapes.torus(2, 5)
