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


""" Doo-Sabin subdivision.

One subdivision step maps a closed polygonal mesh :math:`P` with
:math:`V` vertices, :math:`E` edges and :math:`F` faces to a mesh
:math:`S` with :math:`2E` vertices and :math:`F + V + E` faces. The new
faces come in three families, see :class:`~dsmesh.flags.FaceFlag`:

    - an F-face for every face of :math:`P`, obtained by moving its
      vertices towards the face centroid,
    - an E-face for every edge of :math:`P`, a quadrilateral that bridges
      the F-faces of the two faces sharing the edge,
    - a V-face for every vertex of :math:`P`, connecting the new vertices
      derived from that vertex.

The input mesh only provides face definitions. Edges and the rotational
order of faces around a vertex are discovered while the faces are
traversed and stored in the :attr:`~dsmesh.poly.Polyhedron.adjacency`
attribute of the input mesh.


Meshes can be subdivided repeatedly:

.. code-block:: python
   :linenos:

    import dsmesh.shapes as shapes
    from dsmesh.doosabin import subdivide

    S = subdivide(shapes.cube(), levels=3)
"""

from collections import deque
from time import time

import numpy as np

from dsmesh.flags import FaceFlag
from dsmesh.math import lerp
from dsmesh.poly import Adjacency
from dsmesh.poly import NonManifoldError
from dsmesh.poly import Polyhedron


def doo_sabin(mesh, t=0.5, *, quiet=True):
    """ Doo-Sabin subdivision step.

    Parameters
    ----------
    mesh : Polyhedron
        Closed 2-manifold input mesh. Vertex coordinates and face
        definitions are not modified.
    t : float, optional
        Blend factor in the open interval (0, 1). A new vertex is placed
        at ``lerp(centroid, corner, t)``. The default value 0.5 is the
        classical Doo-Sabin midpoint scheme.
    quiet : bool, optional
        Suppress console output.

    Raises
    ------
    ValueError
        If `t` is out of range.
    NonManifoldError
        If the input is not a closed 2-manifold mesh.
    RuntimeError
        If the size of the result does not match the size of the input.

    Returns
    -------
    Polyhedron
        The subdivided mesh.

    Note
    ----
    The :attr:`~Face.new_face_idx` attribute of every input face is set
    and the input's :attr:`~Polyhedron.adjacency` is replaced by the edge
    bookkeeping of this step.
    """
    CBOLD = '\33[1m'                    # bold text, white on black
    CEND = '\33[0m'

    if not 0.0 < t < 1.0:
        raise ValueError(f'blend factor t={t} not in open interval (0, 1)')

    if not quiet:
        start = time()
        print(f'doo-sabin {CBOLD}{mesh.name}{CEND} ({t=})', end=' ...')

    # Fresh bookkeeping for every step. Using a mesh as input more than
    # once does not accumulate stale edges.
    mesh.adjacency = Adjacency()

    S = _contract_faces(mesh, t)
    _bridge_edges(mesh, S)
    _close_vertices(mesh, S)

    # Post-conditions. Any violation is a bug, not a problem of the input.
    E = mesh.adjacency.num_edges

    if len(S.vertices) != 2 * E:
        raise RuntimeError(f'{len(S.vertices)} vertices generated, ' +
                           f'expected {2 * E}')

    if len(S.faces) != len(mesh.faces) + len(mesh.vertices) + E:
        raise RuntimeError(f'{len(S.faces)} faces generated, expected ' +
                           f'{len(mesh.faces) + len(mesh.vertices) + E}')

    if not quiet:
        print(f' done ({time()-start:.3f} sec)')
        print(f'\t├─ {E} edges processed')
        print(f'\t├─ {len(S.vertices)} vertices')
        print(f'\t└─ {len(S.faces)} faces')

    return S


def subdivide(mesh, levels=1, t=0.5, *, quiet=True):
    """ Repeated Doo-Sabin subdivision.

    Parameters
    ----------
    mesh : Polyhedron
        Closed 2-manifold input mesh.
    levels : int, optional
        Number of subdivision steps.
    t : float, optional
        Blend factor, see :func:`doo_sabin`.
    quiet : bool, optional
        Suppress console output.

    Raises
    ------
    ValueError
        If `levels` is negative.

    Returns
    -------
    Polyhedron
        The mesh after `levels` subdivision steps. This is the input
        mesh itself for ``levels=0``.
    """
    if levels < 0:
        raise ValueError(f'number of levels has to be >= 0, got {levels}')

    for _ in range(levels):
        mesh = doo_sabin(mesh, t, quiet=quiet)

    return mesh


def order_faces_around(faces, pairs):
    """ Rotational order of faces around a vertex.

    The pairs form a cycle graph on the face indices. Starting with the
    first pair in sorted order, taken in its stored direction, the chain
    of faces is grown at either end by an unused pair that shares a face
    with the end of the chain.

    Parameters
    ----------
    faces : iterable[int]
        Indices of the faces incident to the vertex.
    pairs : iterable[(int, int)]
        Directed pairs ``(a, b)`` of angularly adjacent faces where ``b``
        follows ``a``.

    Raises
    ------
    NonManifoldError
        If the pairs do not form a single cycle through all faces.

    Returns
    -------
    list[int]
        Face indices in rotational order.
    """
    faces = set(faces)
    pairs = sorted(pairs)

    if not faces:
        return []

    if len(pairs) != len(faces):
        raise NonManifoldError(f'{len(pairs)} face pairs cannot link ' +
                               f'{len(faces)} faces to a cycle')

    # Adjacency lists of the cycle graph, each face refers to the pairs
    # it belongs to.
    links = {f: [] for f in faces}

    for k, (a, b) in enumerate(pairs):
        if a not in links or b not in links:
            raise NonManifoldError(f'pair ({a}, {b}) refers to a ' +
                                   'non-incident face')

        links[a].append(k)
        links[b].append(k)

    if any(len(ks) != 2 for ks in links.values()):
        raise NonManifoldError('faces do not form a cycle')

    used = {0}
    chain = deque(pairs[0])

    while len(chain) < len(faces):
        for end in (-1, 0):
            f = chain[end]
            k = next((k for k in links[f] if k not in used), None)

            if k is None:
                continue

            a, b = pairs[k]
            other = b if a == f else a

            # The pair that closes the cycle may only be used once all
            # faces are placed.
            if other in chain:
                continue

            used.add(k)

            if end == -1:
                chain.append(other)
            else:
                chain.appendleft(other)

            break
        else:
            raise NonManifoldError('faces form more than one cycle')

    return list(chain)


def _contract_faces(P, t):
    """ First pass, generates F-faces and all vertices of the new mesh.
    """
    points = np.empty((sum(len(f) for f in P.faces), 3))
    faces = []

    k = 0

    for f in P.faces:
        centroid = P.face_centroid(f)
        faces.append(list(range(k, k + len(f))))

        for vi in f:
            points[k] = lerp(centroid, P.position(vi), t)
            k += 1

    S = Polyhedron(points, faces, name=P.name)

    for f, nf in zip(P.faces, S.faces):
        nf.v_indices_old = list(f.v_indices)
        nf.flags = FaceFlag.F
        f.new_face_idx = nf.index

    return S


def _opposite_face(P, f, vi0, vi1):
    """ The face other than `f` that shares edge (vi0, vi1).
    """
    candidates = [P.faces[fi] for fi in sorted(P.vertices[vi0].adj_faces)
                  if fi != f.index and P.face_has_edge(fi, vi0, vi1)]

    if len(candidates) != 1:
        raise NonManifoldError(f'edge ({vi0}, {vi1}) is shared by ' +
                               f'{len(candidates) + 1} faces')

    return candidates[0]


def _bridge_edges(P, S):
    """ Second pass, generates E-faces.

    Every edge is visited twice, once from each of its faces. It is
    processed on the first visit only.
    """
    for f in P.faces:
        # Take each edge in the direction the neighboring face traverses
        # it. The E-face then runs against both F-faces.
        for vi1, vi0 in f.edges():
            if P.is_edge_processed(vi0, vi1):
                continue

            cf = _opposite_face(P, f, vi0, vi1)

            nf0 = S.faces[f.new_face_idx]
            nf1 = S.faces[cf.new_face_idx]

            S.add_face([nf0.new_vertex_index(vi0),
                        nf0.new_vertex_index(vi1),
                        nf1.new_vertex_index(vi1),
                        nf1.new_vertex_index(vi0)], flags=FaceFlag.E)

            P.record_adjacent_faces(vi0, vi1, f, cf)

            # Face f enters vi0 and leaves vi1. Around vi0 the neighbor
            # cf follows f, around vi1 it is the other way around.
            P.adjacency.record_crossing(vi0, f, cf)
            P.adjacency.record_crossing(vi1, cf, f)


def _close_vertices(P, S):
    """ Third pass, generates V-faces.
    """
    for v in P.vertices:
        order = order_faces_around(v.adj_faces, v.crossings)

        if len(order) < 3:
            raise NonManifoldError(f'vertex #{v.index} has valence ' +
                                   f'{len(order)}')

        # Each face incident to v contributed exactly one new vertex
        # derived from v to its F-face.
        nfs = (S.faces[P.faces[fi].new_face_idx] for fi in order)
        S.add_face([nf.new_vertex_index(v.index) for nf in nfs],
                   flags=FaceFlag.V)
