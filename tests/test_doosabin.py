import numpy as np
import pytest

import dsmesh.doosabin as doosabin
import dsmesh.shapes as shapes
import dsmesh.traits as traits

from dsmesh.doosabin import doo_sabin
from dsmesh.doosabin import subdivide
from dsmesh.flags import FaceFlag
from dsmesh.poly import NonManifoldError
from dsmesh.poly import Polyhedron

from conftest import mesh_centroid
from conftest import sources


def family(S, flag):
    return [f for f in S.faces if f.flags == flag]


class TestCube:

    def test_counts(self, cube):
        S = doo_sabin(cube)

        assert len(S.vertices) == 24
        assert len(S.faces) == 6 + 8 + 12
        assert S.size == (24, 48, 26)

    def test_face_families(self, cube):
        S = doo_sabin(cube)

        F, E, V = (family(S, flag) for flag in FaceFlag)

        assert len(F) == 6 and all(len(f) == 4 for f in F)
        assert len(E) == 12 and all(len(f) == 4 for f in E)
        assert len(V) == 8 and all(len(f) == 3 for f in V)

        # Families are generated pass by pass.
        assert S.faces[:6] == F
        assert S.faces[6:18] == E
        assert S.faces[18:] == V

    def test_face_contraction(self, cube):
        S = doo_sabin(cube)
        top = S.faces[cube.faces[1].new_face_idx]

        assert top.v_indices_old == [4, 5, 6, 7]
        assert np.allclose(S.points[top.v_indices], [[-0.5, -0.5, 1.0],
                                                     [ 0.5, -0.5, 1.0],
                                                     [ 0.5,  0.5, 1.0],
                                                     [-0.5,  0.5, 1.0]])

    def test_blend_factor(self, cube):
        S = doo_sabin(cube, t=0.25)
        top = S.faces[cube.faces[1].new_face_idx]

        assert np.allclose(S.points[top.v_indices[2]], [0.25, 0.25, 1.0])

    @pytest.mark.parametrize('t', [0.0, 1.0, -0.5, 1.5])
    def test_blend_factor_range(self, cube, t):
        with pytest.raises(ValueError):
            doo_sabin(cube, t=t)

    def test_second_level(self, cube):
        S = subdivide(cube, levels=2)

        assert S.size == (96, 192, 98)

    def test_vertex_face_winding(self, cube):
        S = doo_sabin(cube)
        V = family(S, FaceFlag.V)

        # The V-face of corner (1, 1, 1) follows top, right and back face.
        corner = V[6]
        assert np.allclose(S.points[corner.v_indices], [[0.5, 0.5, 1.0],
                                                        [1.0, 0.5, 0.5],
                                                        [0.5, 1.0, 0.5]])


class TestInvariants:

    def test_count_invariant(self, solid):
        v, e, f = solid.size
        S = doo_sabin(solid)

        assert len(S.vertices) == 2 * e
        assert len(S.faces) == f + v + e
        assert solid.adjacency.num_edges == e

    def test_repeated_subdivision(self, solid):
        S1 = doo_sabin(solid)
        v, e, f = S1.size
        S2 = doo_sabin(S1)

        assert S2.size[0] == 2 * e
        assert S2.size[2] == f + v + e
        assert traits.euler_characteristic(S2) == \
            traits.euler_characteristic(solid)

    def test_closed_and_oriented(self, solid):
        S = subdivide(solid, levels=2)

        assert S.closed
        assert S.oriented

    def test_vertex_incidence(self, solid):
        S = doo_sabin(solid)

        for v in S.vertices:
            flags = sorted(S.faces[fi].flags.value for fi in v.adj_faces)

            assert flags == sorted([FaceFlag.F.value, FaceFlag.E.value,
                                    FaceFlag.E.value, FaceFlag.V.value])

    def test_face_valences(self, solid):
        S = doo_sabin(solid)
        V = family(S, FaceFlag.V)

        assert [len(f) for f in family(S, FaceFlag.F)] == \
            [len(f) for f in solid.faces]
        assert [len(f) for f in V] == [v.valence for v in solid.vertices]

    def test_edge_symmetry(self, solid):
        S = doo_sabin(solid)
        src = sources(solid, S)
        E = family(S, FaceFlag.E)

        adjacent_faces = solid.adjacency.adjacent_faces
        assert len(E) == len(adjacent_faces) == solid.size[1]

        seen = set()

        for f in E:
            verts = {src[vi][0] for vi in f}
            faces = {src[vi][1] for vi in f}

            assert len(verts) == 2 and len(faces) == 2

            key = tuple(sorted(verts))
            assert key not in seen
            assert set(adjacent_faces[key]) == faces

            seen.add(key)

    def test_vertex_faces_surround_source(self, solid):
        S = doo_sabin(solid)
        src = sources(solid, S)

        for v, f in zip(solid.vertices, family(S, FaceFlag.V)):
            assert {src[vi][0] for vi in f} == {v.index}
            assert {src[vi][1] for vi in f} == v.adj_faces

    def test_input_not_modified(self, solid):
        points = solid.points.copy()
        faces = [list(f.v_indices) for f in solid.faces]

        S = doo_sabin(solid)

        assert np.array_equal(solid.points, points)
        assert [f.v_indices for f in solid.faces] == faces

        for f in solid.faces:
            assert S.faces[f.new_face_idx].flags == FaceFlag.F


@pytest.mark.parametrize('build', [shapes.cube, shapes.tetrahedron,
                                   shapes.octahedron])
def test_outward_normals(build):
    P = build()

    for S in (doo_sabin(P), subdivide(P, levels=2)):
        center = mesh_centroid(S)
        normals = traits.face_normals(S)

        for f, n in zip(S.faces, normals):
            assert np.dot(n, S.face_centroid(f) - center) > 0.0


def test_volume_sign(solid):
    V = traits.volume(solid)
    S = doo_sabin(solid)

    assert V != pytest.approx(0.0)
    assert np.sign(traits.volume(S)) == np.sign(V)


@pytest.mark.parametrize('build', [shapes.cube, shapes.tetrahedron,
                                   shapes.octahedron])
def test_corner_cutting_shrinks(build):
    P = build()
    S1 = doo_sabin(P)
    S2 = doo_sabin(S1)

    assert 0.0 < traits.volume(S2) < traits.volume(S1) < traits.volume(P)


def test_fresh_bookkeeping(cube):
    S1 = doo_sabin(cube)
    adjacency = cube.adjacency

    S2 = doo_sabin(cube)

    assert cube.adjacency is not adjacency
    assert cube.adjacency.num_edges == 12
    assert np.array_equal(S1.points, S2.points)
    assert [f.v_indices for f in S1] == [f.v_indices for f in S2]


def test_crossings_recorded(cube):
    doo_sabin(cube)

    assert cube.vertices[6].crossings == {(1, 4), (4, 3), (3, 1)}
    assert all(len(v.crossings) == 3 for v in cube.vertices)


def test_subdivide_levels(cube):
    assert subdivide(cube, levels=0) is cube
    assert subdivide(cube, levels=1).size == (24, 48, 26)

    with pytest.raises(ValueError):
        subdivide(cube, levels=-1)


def test_open_mesh(cube):
    P = Polyhedron(cube.points, [f.v_indices for f in cube.faces[1:]])

    with pytest.raises(NonManifoldError):
        doo_sabin(P)


def test_non_manifold_edge():
    points = np.eye(5, 3)
    P = Polyhedron(points, [[0, 1, 2], [1, 0, 3], [0, 1, 4]])

    with pytest.raises(NonManifoldError):
        doo_sabin(P)


def test_post_condition(cube, monkeypatch):
    monkeypatch.setattr(doosabin, '_close_vertices', lambda P, S: None)

    with pytest.raises(RuntimeError):
        doo_sabin(cube)


def test_console_output(cube, capsys):
    doo_sabin(cube, quiet=False)
    out = capsys.readouterr().out

    assert 'doo-sabin' in out
    assert '12 edges processed' in out
    assert '24 vertices' in out
    assert '26 faces' in out


def test_quiet(cube, capsys):
    doo_sabin(cube)
    assert capsys.readouterr().out == ''
