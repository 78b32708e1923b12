import pytest

import dsmesh.shapes as shapes

from dsmesh.doosabin import doo_sabin
from dsmesh.doosabin import order_faces_around
from dsmesh.poly import NonManifoldError


def test_cycle():
    pairs = {(0, 1), (1, 2), (2, 3), (3, 0)}
    assert order_faces_around({0, 1, 2, 3}, pairs) == [0, 1, 2, 3]


def test_seed_direction():
    # The smallest pair (0, 3) seeds the chain in its stored direction.
    pairs = {(1, 0), (2, 1), (3, 2), (0, 3)}
    assert order_faces_around([3, 2, 1, 0], pairs) == [0, 3, 2, 1]


def test_arbitrary_indices():
    pairs = {(5, 2), (2, 9), (9, 5)}
    assert order_faces_around({2, 5, 9}, pairs) == [2, 9, 5]


def test_valence_two():
    assert order_faces_around({0, 1}, {(0, 1), (1, 0)}) == [0, 1]


def test_no_faces():
    assert order_faces_around(set(), set()) == []


def test_missing_pair():
    with pytest.raises(NonManifoldError):
        order_faces_around({0, 1, 2, 3}, {(0, 1), (1, 2), (2, 3)})


def test_foreign_face():
    with pytest.raises(NonManifoldError):
        order_faces_around({0, 1, 2}, {(0, 1), (1, 2), (2, 7)})


def test_branching():
    # Face 0 is linked to three faces, face 3 to a single one.
    with pytest.raises(NonManifoldError):
        order_faces_around({0, 1, 2, 3}, {(0, 1), (0, 2), (0, 3), (1, 2)})


def test_two_cycles():
    # Two fans meeting at a single vertex, like the tips of two cones.
    pairs = {(0, 1), (1, 2), (2, 0), (3, 4), (4, 5), (5, 3)}

    with pytest.raises(NonManifoldError):
        order_faces_around(range(6), pairs)


@pytest.mark.parametrize('build', [shapes.cube, shapes.octahedron,
                                   lambda: shapes.prism(7),
                                   lambda: shapes.torus(5, 3)])
def test_follows_crossings(build):
    P = build()
    doo_sabin(P)

    for v in P.vertices:
        order = order_faces_around(v.adj_faces, v.crossings)

        assert sorted(order) == sorted(v.adj_faces)

        for k in range(len(order)):
            assert (order[k], order[(k + 1) % len(order)]) in v.crossings
