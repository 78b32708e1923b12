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


""" Face/vertex polyhedron representation.

A closed polygonal mesh is described by two containers:

    - a list of :class:`Vertex` objects backed by an array of vertex
      coordinates,
    - a list of :class:`Face` objects, each an ordered list of vertex
      indices.

There are no explicit edge or halfedge objects. Edges are discovered on
demand and stored in an :class:`Adjacency` bookkeeping object attached to
the :class:`Polyhedron`. All cross references between mesh items are plain
integer indices into the containers of the owning mesh.
"""

from pathlib import Path
from time import time

import numpy as np

import dsmesh.obj as obj
from dsmesh.flags import FaceFlag


def edge_key(vi0, vi1):
    """ Undirected edge identifier.

    Parameters
    ----------
    vi0 : int
        Vertex index.
    vi1 : int
        Vertex index.

    Raises
    ------
    ValueError
        If both indices are equal.

    Returns
    -------
    (int, int)
        The pair ``(min(vi0, vi1), max(vi0, vi1))``.
    """
    vi0, vi1 = int(vi0), int(vi1)

    if vi0 == vi1:
        raise ValueError(f'degenerate edge ({vi0}, {vi1})')

    return (vi0, vi1) if vi0 < vi1 else (vi1, vi0)


class Polyhedron:
    """ Polyhedral mesh.

    Parameters
    ----------
    points : array_like, optional
        Vertex coordinates, one point per row. Converted to an equivalent
        :obj:`~numpy.ndarray` of floats.
    faces : list[list[int]], optional
        Face definitions, 0-based vertex indexing.
    name : str, optional
        Name tag.

    Raises
    ------
    ValueError
        If a face has less than three or repeated vertices.
    IndexError
        If a face refers to a vertex that does not exist.


    The incident faces of every vertex are derived from the face
    definitions:

    >>> P = Polyhedron(points, [[0, 1, 2], [0, 2, 3], ...])
    >>> P.vertices[0].adj_faces
    {0, 1, ...}
    """

    def __init__(self, points=None, faces=None, *, name=None):
        CWHITERED = '\33[41m'               # white on red background
        CEND = '\33[0m'

        if points is None and faces is not None:
            msg = "face definitions require 'points' argument != None"
            raise ValueError(msg)

        if points is not None:
            self._points = np.array(points, dtype=float)
        else:
            self._points = np.empty((0, 3))

        if self._points.ndim != 2:
            raise ValueError('points have to be given as 2-dimensional array')

        self._verts = [Vertex(i, parent=self)
                       for i in range(len(self._points))]
        self._faces = []

        # Edge bookkeeping. Filled in when the mesh is consumed by a
        # subdivision step, empty otherwise.
        self._adjacency = Adjacency()

        if faces is not None:
            for face in faces:
                self.add_face(face)

        # Typically one does not expect isolated vertices in a mesh.
        if any(not v.adj_faces for v in self._verts):
            print(f'{CWHITERED}there are isolated vertices{CEND}')

        self.name = name

    def __repr__(self):
        v, e, f = self.size
        return f'Polyhedron(V={v}, E={e}, F={f})'

    def __iter__(self):
        """ Face iterator.

        Yields
        ------
        Face
            Next face in insertion order traversal.
        """
        return iter(self._faces)

    def __getitem__(self, index):
        # Treat a mesh like a tuple consisting of an array of vertex
        # coordinates and a list of face definitions.
        if index == 0:
            return self._points
        elif index == 1:
            return self._faces

        raise IndexError(f'index must be 0 or 1, got {index}')

    @property
    def points(self):
        """ Vertex coordinate array.

        Direct read and write access to vertex coordinates. Changing the
        size of the coordinate array breaks the mesh.

        :type: ~numpy.ndarray
        """
        return self._points

    @property
    def vertices(self):
        """ Vertex list.

        :type: list[Vertex]
        """
        return self._verts

    @property
    def faces(self):
        """ Face list.

        Read access to the face list. This list should not be modified
        directly, use :meth:`add_face` instead.

        :type: list[Face]
        """
        return self._faces

    @property
    def adjacency(self):
        """ Edge bookkeeping.

        Discovered edges, the face pairs that share them and the face
        pairs crossing at each vertex. A subdivision step replaces this
        object by a fresh one every time the mesh is used as input.

        :type: Adjacency
        """
        return self._adjacency

    @adjacency.setter
    def adjacency(self, value):
        self._adjacency = value

    @property
    def size(self):
        """ Mesh size.

        The attribute value :math:`(v, e, f)` holds the number of
        vertices, the number of edges, and the number of faces. Edges
        are counted from the face definitions and do not depend on the
        state of :attr:`adjacency`.

        :type: (int, int, int)
        """
        edges = {edge_key(vi0, vi1) for f in self._faces
                 for vi0, vi1 in f.edges()}

        return len(self._verts), len(edges), len(self._faces)

    @property
    def closed(self):
        """ Topological state.

        A mesh is closed if every edge is shared by exactly two faces.

        :type: bool
        """
        count = dict()

        for f in self._faces:
            for vi0, vi1 in f.edges():
                key = edge_key(vi0, vi1)
                count[key] = count.get(key, 0) + 1

        return all(n == 2 for n in count.values())

    @property
    def oriented(self):
        """ Orientation state.

        Faces are consistently oriented if each directed edge ``(v, w)``
        used by one face is matched by the directed edge ``(w, v)`` of
        exactly one other face.

        :type: bool
        """
        directed = set()

        for f in self._faces:
            for vi0, vi1 in f.edges():
                if (vi0, vi1) in directed:
                    return False

                directed.add((vi0, vi1))

        return all((vi1, vi0) in directed for vi0, vi1 in directed)

    @property
    def name(self):
        """ Name property.

        :type: str

        Note
        ----
        The returned string does not include a type suffix!
        """
        return self._name

    @name.setter
    def name(self, value):
        self._name = value if value is None else Path(value).stem

    @classmethod
    def read(cls, filename, *, quiet=True):
        """ Read mesh from file.

        Read face definitions and vertex coordinates from an OBJ file.
        Comment lines are ignored.

        Parameters
        ----------
        filename : str
            Name of an OBJ file.
        quiet : bool, optional
            Suppress console output.

        Raises
        ------
        ValueError
            If the file holds no vertex definitions.

        Returns
        -------
        Polyhedron
            Mesh object.
        """
        CBOLD = '\33[1m'                    # bold text, white on black
        CEND = '\33[0m'

        if not quiet:
            start = time()
            print(f'reading {CBOLD}{Path(filename).name}{CEND}', end=' ...')

        verts, faces = obj.read(filename, 'v', 'f')

        if verts is None:
            raise ValueError(f'{filename}: no vertex definitions')

        if not quiet:
            print(f' done ({time()-start:.3f} sec)')
            print(f'\t├─ {len(verts)} vertices')
            print(f'\t└─ {len(faces)} faces')

        return cls(verts, faces or None, name=filename)

    def write(self, filename, *, comments=False, quiet=True):
        """ Write mesh to file.

        Parameters
        ----------
        filename : str
            Name of an OBJ file.
        comments : bool, optional
            Add the incident faces and the crossing face pairs of each
            vertex as comment lines.
        quiet : bool, optional
            Suppress console output.


        The comment block is purely diagnostic. It is skipped by
        :meth:`read` and does not affect the stored geometry:

        >>> mesh.write('level-1.obj', comments=True)
        """
        CBOLD = '\33[1m'                    # bold text, white on black
        CEND = '\33[0m'

        lines = None

        if comments:
            lines = []

            for v in self._verts:
                lines.append(f'vertex {v.index} adj_faces ' +
                             ' '.join(str(i) for i in sorted(v.adj_faces)))

                if v.crossings:
                    lines.append(f'vertex {v.index} crossings ' +
                                 ' '.join(f'{a}:{b}' for a, b
                                          in sorted(v.crossings)))

        if not quiet:
            start = time()
            print(f'writing {CBOLD}{Path(filename).name}{CEND}', end=' ...')

        obj.write(filename, v=self._points, f=self._faces, comments=lines)

        if not quiet:
            print(f' done ({time()-start:.3} sec)')

    def copy(self):
        """ Copy mesh.

        Duplicates vertex coordinates and face definitions including face
        flags. Edge bookkeeping is not copied.

        Returns
        -------
        Polyhedron
            Copy of the mesh.
        """
        # The constructor copies the coordinate array.
        other = Polyhedron(self._points, [f.v_indices for f in self._faces],
                           name=self._name)

        for f, g in zip(self._faces, other._faces):
            g.v_indices_old = list(f.v_indices_old)
            g.flags = f.flags

        return other

    def add_face(self, face, *, v_indices_old=None, flags=None):
        """ Create and add new face.

        Parameters
        ----------
        face : list[int]
            Combinatorial face definition.
        v_indices_old : list[int], optional
            Vertex indices of the mesh the face was derived from, parallel
            to `face`.
        flags : FaceFlag, optional
            Face family.

        Raises
        ------
        ValueError
            If the given arguments do not define a valid face.
        IndexError
            If the given vertex indices are out of bounds.

        Returns
        -------
        Face
            The newly created :class:`Face` instance.
        """
        face = [int(vi) for vi in face]
        n = len(face)

        # All vertices have to be topologically different. If this test is
        # passed there still need to be at least three vertices.
        if len(set(face)) != n:
            raise ValueError('face contains duplicate vertices')

        if n < 3:
            raise ValueError('face has less than three vertices')

        if v_indices_old is not None and len(v_indices_old) != n:
            raise ValueError('v_indices_old does not match face definition')

        for vi in face:
            if not 0 <= vi < len(self._verts):
                raise IndexError(f'vertex index {vi} out of range')

        f = Face(len(self._faces), face, v_indices_old, flags)

        for vi in face:
            self._verts[vi].adj_faces.add(f.index)

        self._faces.append(f)

        return f

    def position(self, vi):
        """ Vertex coordinates.

        Parameters
        ----------
        vi : int
            Vertex index.

        Returns
        -------
        ~numpy.ndarray, shape (3, )
            View of the corresponding row of :attr:`points`.
        """
        return self._points[self._verts[vi].index]

    def face_has_edge(self, face, vi0, vi1):
        """ Edge membership test.

        Parameters
        ----------
        face : Face or int
            Face of the mesh.
        vi0 : int
            Vertex index.
        vi1 : int
            Vertex index.

        Returns
        -------
        bool
            :obj:`True` if `vi0` and `vi1` are consecutive vertices of
            the face, in either direction.
        """
        return self._faces[face].has_edge(vi0, vi1)

    def face_centroid(self, face):
        """ Face centroid.

        Arithmetic mean of vertex coordinates.

        Parameters
        ----------
        face : Face or int
            Face of the mesh.

        Returns
        -------
        ~numpy.ndarray, shape (3, )
            Centroid of the face's vertices.
        """
        f = self._faces[face]
        return np.mean(self._points[f.v_indices], axis=0)

    def is_edge_processed(self, vi0, vi1):
        """ Shorthand for :meth:`Adjacency.is_edge_processed`. """
        return self._adjacency.is_edge_processed(vi0, vi1)

    def record_adjacent_faces(self, vi0, vi1, f0, f1):
        """ Shorthand for :meth:`Adjacency.record_adjacent_faces`. """
        return self._adjacency.record_adjacent_faces(vi0, vi1, f0, f1)


class Adjacency:
    """ Edge bookkeeping.

    Collects the edges discovered while a mesh is traversed face by face.
    Each undirected edge is stored once together with the two faces that
    share it. Additionally, for every vertex the pairs of faces that are
    angularly adjacent around it are collected as directed pairs.
    """

    def __init__(self):
        self._adjacent_faces = dict()
        self._crossings = dict()

    def __len__(self):
        return len(self._adjacent_faces)

    def __contains__(self, edge):
        return edge_key(*edge) in self._adjacent_faces

    @property
    def adjacent_faces(self):
        """ Edge to face pair mapping.

        Maps canonical edge keys, see :func:`edge_key`, to the pair of
        face indices that share the edge.

        :type: dict[(int, int), (int, int)]
        """
        return self._adjacent_faces

    @property
    def crossings(self):
        """ Vertex to crossing pairs mapping.

        :type: dict[int, set[(int, int)]]
        """
        return self._crossings

    @property
    def num_edges(self):
        """ Number of discovered edges.

        :type: int
        """
        return len(self._adjacent_faces)

    def is_edge_processed(self, vi0, vi1):
        """ Edge state.

        Parameters
        ----------
        vi0 : int
            Vertex index.
        vi1 : int
            Vertex index.

        Returns
        -------
        bool
            :obj:`True` if the undirected edge has been recorded.
        """
        return edge_key(vi0, vi1) in self._adjacent_faces

    def record_adjacent_faces(self, vi0, vi1, f0, f1):
        """ Record edge.

        Recording an edge a second time has no effect, the face pair
        stored first is kept.

        Parameters
        ----------
        vi0 : int
            Vertex index.
        vi1 : int
            Vertex index.
        f0 : int
            Index of the first face incident to the edge.
        f1 : int
            Index of the second face incident to the edge.

        Returns
        -------
        (int, int)
            The face pair stored for the edge.
        """
        return self._adjacent_faces.setdefault(edge_key(vi0, vi1),
                                               (int(f0), int(f1)))

    def record_crossing(self, vi, f0, f1):
        """ Record that face `f1` follows face `f0` around vertex `vi`.
        """
        self._crossings.setdefault(int(vi), set()).add((int(f0), int(f1)))


class Vertex:
    """ Vertex base class.

    Parameters
    ----------
    index : int
        Vertex index.
    parent : Polyhedron, optional
        The parent mesh object.

    Note
    ----
    In addition to :attr:`index`, implementations of the special functions
    :meth:`~object.__int__` and :meth:`~object.__index__` are provided.
    The latter makes it possible to use vertex instances as list indices.
    """

    def __init__(self, index, parent=None):
        self._idx = index
        self._mesh = parent

        # Indices of incident faces. Maintained by Polyhedron.add_face().
        self.adj_faces = set()

    def __repr__(self):
        return f'Vertex({self._idx})'

    def __str__(self):
        return f'v {self._idx} {self.point}'

    def __index__(self):
        return self._idx

    def __int__(self):
        return self._idx

    @property
    def index(self):
        """ Vertex index.

        Position of the vertex in the list :attr:`~Polyhedron.vertices`.

        :type: int
        """
        return self._idx

    @property
    def point(self):
        """ Vertex coordinates.

        View of the corresponding row of the parent mesh's coordinate
        array.

        :type: ~numpy.ndarray
        """
        return self._mesh._points[self._idx, ...]

    @point.setter
    def point(self, value):
        self._mesh._points[self._idx, ...] = value

    @property
    def valence(self):
        """ Number of incident faces.

        :type: int
        """
        return len(self.adj_faces)

    @property
    def crossings(self):
        """ Crossing face pairs.

        Directed pairs ``(f0, f1)`` of incident faces where ``f1`` follows
        ``f0`` in the rotational order around the vertex. Empty until the
        parent mesh has been consumed by a subdivision step.

        :type: set[(int, int)]
        """
        return self._mesh._adjacency.crossings.get(self._idx, set())


class Face:
    """ Face base class.

    Parameters
    ----------
    index : int
        Face index.
    v_indices : list[int]
        Vertex indices in traversal order.
    v_indices_old : list[int], optional
        Source vertices, parallel to `v_indices`.
    flags : FaceFlag, optional
        Face family.


    Iterating a face yields its vertex indices:

    .. code-block:: python
       :linenos:

        for vi in f:
            print(mesh.position(vi))
    """

    def __init__(self, index, v_indices, v_indices_old=None, flags=None):
        self._idx = index
        self.v_indices = list(v_indices)
        self.v_indices_old = [] if v_indices_old is None else list(v_indices_old)

        # Index of the face generated from this face in the next
        # subdivision level. Set by the subdivision engine.
        self.new_face_idx = None

        self._flags = flags if flags is not None else FaceFlag(0)

    def __repr__(self):
        return f'Face({self._idx})'

    def __str__(self):
        if self._flags:
            return f'f {self._idx} {self.v_indices} {self._flags}'

        return f'f {self._idx} {self.v_indices}'

    def __index__(self):
        """ Face index.

        Faces can be used directly as list and array indices.
        """
        return self._idx

    def __int__(self):
        return self._idx

    def __len__(self):
        """ Face valence.

        Returns
        -------
        int
            Number of vertices.
        """
        return len(self.v_indices)

    def __iter__(self):
        return iter(self.v_indices)

    def __contains__(self, vi):
        return int(vi) in self.v_indices

    @property
    def index(self):
        """ Face index.

        :type: int
        """
        return self._idx

    @property
    def flags(self):
        """ Face flags.

        Read and write access to face flags.

        :type: FaceFlag
        """
        return self._flags

    @flags.setter
    def flags(self, value):
        self._flags = value

    def edges(self):
        """ Edge iterator.

        Yields
        ------
        (int, int)
            Consecutive vertex index pairs in traversal order, closing
            with the pair (last, first).
        """
        n = len(self.v_indices)

        for k in range(n):
            yield self.v_indices[k], self.v_indices[(k + 1) % n]

    def has_edge(self, vi0, vi1):
        """ Edge membership test.

        Both vertices have to occur in the face at cyclic distance one.

        Returns
        -------
        bool
            :obj:`True` if ``(vi0, vi1)`` or ``(vi1, vi0)`` is an edge
            of the face.
        """
        try:
            i = self.v_indices.index(vi0)
            j = self.v_indices.index(vi1)
        except ValueError:
            return False

        n = len(self.v_indices)
        return (i - j) % n in (1, n - 1)

    def new_vertex_index(self, old):
        """ Old to new vertex lookup.

        Parameters
        ----------
        old : int
            Index of a vertex listed in :attr:`v_indices_old`.

        Raises
        ------
        KeyError
            If `old` is not a source vertex of this face.

        Returns
        -------
        int
            Index of the vertex derived from `old`.
        """
        try:
            k = self.v_indices_old.index(old)
        except ValueError:
            raise KeyError(f'vertex #{old} is not a source of ' +
                           f'face #{self._idx}') from None

        return self.v_indices[k]


class NonManifoldError(Exception):
    """ Manifold exception base class.

    Raised if an operation encounters a topological configuration that
    violates the closed manifold condition.
    """

    pass
