import numpy as np
import pytest

import dsmesh.obj as obj

from dsmesh.doosabin import doo_sabin
from dsmesh.poly import Polyhedron


def test_write_read(cube, tmp_path):
    filename = tmp_path / 'cube.obj'
    cube.write(filename)

    lines = filename.read_text().splitlines()

    assert lines[0] == 'v -1.0 -1.0 -1.0'
    assert lines[8] == 'f 1 4 3 2'
    assert len(lines) == 8 + 6

    P = Polyhedron.read(filename)

    assert P.name == 'cube'
    assert np.array_equal(P.points, cube.points)
    assert [f.v_indices for f in P] == [f.v_indices for f in cube]


def test_subdivided_round_trip(cube, tmp_path):
    filename = tmp_path / 'level1.obj'

    S = doo_sabin(cube)
    S.write(filename)
    P = Polyhedron.read(filename)

    assert P.size == S.size
    assert np.allclose(P.points, S.points)
    assert [f.v_indices for f in P] == [f.v_indices for f in S]


def test_comments(cube, tmp_path):
    filename = tmp_path / 'cube.obj'

    doo_sabin(cube)
    cube.write(filename, comments=True)

    text = filename.read_text()

    assert '# vertex 6 adj_faces 1 3 4' in text
    assert '# vertex 6 crossings 1:4 3:1 4:3' in text

    # Comments do not affect the geometry.
    P = Polyhedron.read(filename)

    assert P.size == cube.size
    assert [f.v_indices for f in P] == [f.v_indices for f in cube]


def test_read_vertex_references(tmp_path):
    filename = tmp_path / 'refs.obj'
    filename.write_text('# a triangle and a quad\n'
                        'v 0 0 0\n'
                        'v 1 0 0\n'
                        'v 1 1 0\n'
                        'v 0 1 0\n'
                        'vn 0 0 1\n'
                        '\n'
                        'f 1/1/1 2/2/1 3/3/1\n'
                        'f -4//1 -3//1 -2//1 -1//1\n')

    v, f = obj.read(filename, 'v', 'f')

    assert v.shape == (4, 3)
    assert f == [[0, 1, 2], [0, 1, 2, 3]]
    assert obj.read(filename, 'vn').shape == (1, 3)
    assert obj.read(filename, 'vt') is None


def test_read_arguments(tmp_path):
    filename = tmp_path / 'empty.obj'
    filename.write_text('')

    assert obj.read(filename) is None

    with pytest.raises(ValueError):
        obj.read(filename, 'v', 1)


def test_read_without_faces(tmp_path, capsys):
    filename = tmp_path / 'points.obj'
    filename.write_text('v 0 0 0\nv 1 0 0\nv 0 1 0\n')

    P = Polyhedron.read(filename)

    assert P.size == (3, 0, 0)
    assert 'isolated' in capsys.readouterr().out


def test_read_without_vertices(tmp_path):
    filename = tmp_path / 'empty.obj'
    filename.write_text('# nothing here\n')

    with pytest.raises(ValueError, match='no vertex definitions'):
        Polyhedron.read(filename)


def test_invalid_reference(tmp_path):
    filename = tmp_path / 'broken.obj'
    filename.write_text('v 0 0 0\nf 1/2/3/4 1 1\n')

    with pytest.raises(ValueError):
        obj.read(filename, 'f')


def test_console_output(cube, tmp_path, capsys):
    filename = tmp_path / 'cube.obj'

    cube.write(filename, quiet=False)
    Polyhedron.read(filename, quiet=False)

    out = capsys.readouterr().out

    assert 'writing' in out
    assert 'reading' in out
    assert '8 vertices' in out
