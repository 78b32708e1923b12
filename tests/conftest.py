import numpy as np
import pytest

import dsmesh.shapes as shapes


SOLIDS = {
    'cube': shapes.cube,
    'tetrahedron': shapes.tetrahedron,
    'octahedron': shapes.octahedron,
    'prism5': lambda: shapes.prism(5),
    'torus': lambda: shapes.torus(6, 4),
}


@pytest.fixture
def cube():
    return shapes.cube()


@pytest.fixture(params=sorted(SOLIDS))
def solid(request):
    """ Every closed test solid, one at a time. """
    return SOLIDS[request.param]()


def sources(P, S):
    """ Map each vertex of S to the (old vertex, old face) it came from.
    """
    src = dict()

    for f in P.faces:
        nf = S.faces[f.new_face_idx]

        for vi, old in zip(nf.v_indices, nf.v_indices_old):
            src[vi] = (old, f.index)

    return src


def mesh_centroid(mesh):
    return np.mean(mesh.points, axis=0)
