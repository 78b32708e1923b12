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


""" OBJ file I/O.

Low-level functions to read and write polygon meshes as OBJ files. Only
vertex coordinates ('v' lines), face definitions ('f' lines) and comments
are supported. Complete specifications can be found in the `Advanced
Visualizer Manual`.
"""

import numpy as np


def _array_append(array, item):
    """ Resize and append to array.

    Parameters
    ----------
    array : ~numpy.ndarray or None
        Array object to be augmented. A new array of shape
        ``(1, *item.shape)`` will be created if :obj:`None`.
    item : array_like
        Item to be added as new element of the first axis. The
        shapes ``array.shape[1:]`` and ``item.shape`` have to agree.

    Raises
    ------
    ValueError
        In case of dimension mismatch.

    Returns
    -------
    ~numpy.ndarray
        Reference to the enlarged array. This is a new array if the
        input array argument was :obj:`None`.
    """
    if isinstance(array, np.ndarray):
        if array[-1].shape != np.shape(item):
            msg = f'cannot add item with shape {np.shape(item)}'
            raise ValueError(msg)

        arr_shape = list(array.shape)
        arr_shape[0] += 1

        array.resize(arr_shape, refcheck=False)
    else:
        array = np.empty((1, *np.shape(item)))

    array[-1, ...] = item

    return array


def _parse(block):
    """ Parse vertex reference of a face definition.

    Only the vertex index is used, texture and normal indices of v/vt/vn,
    v//vn and v/vt references are dropped.

    Parameters
    ----------
    block : str
        A v/vt/vn string as encountered when reading 'f' statements.

    Raises
    ------
    ValueError
        If the string could not be parsed.

    Returns
    -------
    int
        Vertex index as found in the file, 1-based or negative.
    """
    bits = block.split('/')

    if len(bits) > 3 or not bits[0]:
        raise ValueError('invalid vertex reference: ' + block)

    return int(bits[0])


def read(filename, *args):
    """ Read from file.

    Assumes an OBJ-like file structure, i.e., a text file where each
    line starts with a tag. Lines whose tag is contained in `args` are
    read. Comment lines (tag '#') are never returned.

    Parameters
    ----------
    filename : str
        Name of an OBJ file.
    *args
        Variable number of arguments of type :class:`str`.

    Raises
    ------
    ValueError
        If any argument is not of type :class:`str`.

    Returns
    -------
    object or tuple(object, ...)
        Data blocks corresponding to line tags given in `args`.


    To read vertices and faces from an OBJ file do

    >>> v, f = read('input-file.obj', 'v', 'f')

    Data blocks are returned as objects of type :class:`~numpy.ndarray`,
    the exception being the 'f' tag returning ``list[list[int]]`` with
    0-based vertex indices. A data block without matching lines in the
    file is returned as :obj:`None`.
    """
    if not args:
        return None

    if any((not isinstance(arg, str) for arg in args)):
        raise ValueError("arguments have to be of type 'str'")

    args_arr = {arg: [] if arg == 'f' else None for arg in args}

    # The number of encountered vertex coordinates. Needed to resolve
    # negative (relative) vertex indices.
    vcnt = 0

    with open(filename, 'r') as file:
        for line in file:
            blocks = line.split()

            if not blocks or blocks[0].startswith('#'):
                continue

            if blocks[0] == 'v':
                vcnt += 1

            if blocks[0] not in args:
                continue

            if blocks[0] == 'f':
                face = [_parse(block) for block in blocks[1:]]

                # Negative indices are relative to the number of vertices
                # read up to this point.
                face = [vcnt + vi if vi < 0 else vi - 1 for vi in face]
                args_arr['f'].append(face)
            else:
                data = [float(block) for block in blocks[1:]]
                arr = args_arr[blocks[0]]
                args_arr[blocks[0]] = _array_append(arr, data)

    if len(args) == 1:
        return args_arr[args[0]]

    return tuple(args_arr.values())


def write(filename, *, f=None, comments=None, **data):
    """ Write to file.

    Parameters
    ----------
    filename : str
        Name of output file.
    f : iterable, optional
        Face definitions, each an iterable of 0-based vertex indices.
    comments : list[str], optional
        Lines written as comments at the top of the file.
    **data
        Keyword arguments.


    Data blocks to be stored in the file are passed via keyword arguments:

    >>> write('output-file.obj', v=points, f=faces)

    This assumes that each data block can be interpreted as a
    2-dimensional array. The contents of each row are written to a line
    that starts with the given tag. Face indices are written 1-based.
    """
    faces = [] if f is None else f

    with open(filename, 'w') as file:
        if comments is not None:
            for line in comments:
                file.write(f'# {line}\n')

        for key, value in data.items():
            for row in value:
                file.write(key)

                for element in row:
                    file.write(f' {element}')

                file.write('\n')

        for face in faces:
            file.write('f')

            for vi in face:
                file.write(f' {int(vi) + 1}')

            file.write('\n')
