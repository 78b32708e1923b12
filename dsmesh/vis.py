# Copyright 2024, m3shware
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in
# all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.


""" Visualization using VTK.

Wrapper functions for `VTK <https://vtk.org/doc/nightly/html>`_ functionality
to display polyhedra with a single flat color per mesh.

This module can also be used as a stand-alone subdivision viewer:

>>> python -m dsmesh.vis file.obj --levels 2 --edges

subdivides the contents of `file.obj` twice and opens a graphics window to
display the result. Without a file argument the cube is used.
"""

import numpy as np
import vtk

from vtk.util import colors
from vtk.util.numpy_support import numpy_to_vtk


# Main render window. Created by show().
_renwin = None

# The current renderer of the main window.
_renderer = None

# All renderers of the main window.
_renderers = []


def canvas(color=None, color2=None):
    """ Create viewport.

    Create a new viewport that spans the main render window. The new
    viewport becomes the current one.

    Parameters
    ----------
    color : array_like, shape (3, ), optional
        Background color.
    color2 : array_like, shape (3, ), optional
        Top background color.

    Returns
    -------
    vtkRenderer
        Active viewport. All subsequent plotting happen in this viewport.
    """
    global _renderer

    _renderer = vtk.vtkRenderer()
    _renderer.SetUseFXAA(1)
    _renderer.SetBackground(colors.white if color is None else color)

    if color2 is not None:
        _renderer.SetBackground2(color2)
        _renderer.SetGradientBackground(True)

    # Default camera orientation, z-axis pointing up.
    cam = _renderer.GetActiveCamera()
    cam.SetPosition(1.0, 1.0, 0.3)
    cam.SetViewUp(0.0, 0.0, 1.0)

    if _renwin is not None:
        _renwin.AddRenderer(_renderer)
    else:
        _renderers.append(_renderer)

    return _renderer


def add(obj, renderer=None):
    """ Queue object for display.

    Parameters
    ----------
    obj : Prop or vtkActor
        Instance of a render object.
    renderer : vtkRenderer, optional
        The viewport to display the object. Defaults to the current
        viewport, one is created if necessary.

    Returns
    -------
    vtkRenderer
        The renderer instance used for display.
    """
    if renderer is None:
        if _renderer is None:
            canvas()

        renderer = _renderer

    prop = obj.prop if isinstance(obj, Prop) else obj
    renderer.AddViewProp(prop)

    return renderer


def mesh(mesh, color=colors.snow):
    """ Mesh visualization.

    Visualization of a polygonal mesh represented as a :class:`Polyhedron`
    instance or a 2-tuple holding an `array_like` vertex coordinate
    representation and a list of face definitions.

    Parameters
    ----------
    mesh : Polyhedron or tuple
        Polygonal mesh representation.
    color : array_like, shape (3, ), optional
        RGB color triple.

    Returns
    -------
    PolyMesh
        Polygonal mesh instance.
    """
    renmesh = PolyMesh(mesh)
    renmesh.color = color

    add(renmesh)
    return renmesh


def screenshot(filename, scale=1.0, window=None):
    """ Save the current framebuffer contents.

    Parameters
    ----------
    filename : str
        Name of PNG target file.
    scale : float, optional
        Scale factor.
    window : vtkRenderWindow, optional
        Window to grab.
    """
    window = _renwin if window is None else window
    width, height = window.GetSize()

    filter = vtk.vtkResizingWindowToImageFilter()
    filter.SetInput(window)
    filter.SetInputBufferTypeToRGBA()
    filter.SetSize(int(scale*width), int(scale*height))
    filter.Update()

    writer = vtk.vtkPNGWriter()
    writer.SetFileName(filename)
    writer.SetInputConnection(filter.GetOutputPort())
    writer.Write()


def show(width=1200, height=600, title=None):
    """ Start the VTK event loop.

    Open window for rendering and start the VTK event loop. This is a
    blocking function, a script will not advance beyond it until the
    window is closed.

    Parameters
    ----------
    width : int, optional
        Window width in pixels.
    height : int, optional
        Window height in pixels.
    title : str, optional
        Window title.
    """
    global _renderer, _renwin

    if _renderer is None:
        canvas()

    for renderer in _renderers:
        renderer.ResetCamera()

    _renwin = vtk.vtkRenderWindow()
    _renwin.SetSize(width, height)

    if title is not None:
        _renwin.SetWindowName(str(title))

    for renderer in _renderers:
        _renwin.AddRenderer(renderer)

    iren = vtk.vtkRenderWindowInteractor()
    iren.SetRenderWindow(_renwin)
    iren.SetInteractorStyle(vtk.vtkInteractorStyleTrackballCamera())

    _renwin.Render()
    iren.Start()

    # Allows us to call show() more than once in a script.
    _renderers.clear()

    _renwin = None
    _renderer = None


def _main():
    import argparse

    import dsmesh.shapes as shapes

    from dsmesh.doosabin import subdivide
    from dsmesh.poly import Polyhedron

    CWHITERED = '\33[41m'               # white on red background
    CEND = '\33[0m'

    parser = argparse.ArgumentParser()
    parser.add_argument('file', nargs='?', type=str, help='OBJ input file')
    parser.add_argument('--levels', type=int, default=1,
                        help='number of subdivision steps')
    parser.add_argument('-t', type=float, default=0.5, help='blend factor')
    parser.add_argument('--edges', action='store_true', help='show edges')
    parser.add_argument('--export', type=str, help='OBJ output file')
    parser.add_argument('--comments', action='store_true',
                        help='write adjacency comments when exporting')
    parser.add_argument('--quiet', action='store_true',
                        help='suppress console output')

    args = parser.parse_args()

    if args.file is not None:
        P = Polyhedron.read(args.file, quiet=args.quiet)
    else:
        P = shapes.cube()

    if not P.closed:
        print(f'{CWHITERED}input mesh is not closed{CEND}')

    S = subdivide(P, args.levels, args.t, quiet=args.quiet)

    if args.export is not None:
        S.write(args.export, comments=args.comments, quiet=args.quiet)

    canvas(color2=colors.black)

    renmesh = mesh(S)

    if args.edges:
        renmesh.edges(width=1, color=colors.ivory_black)

    show(title=f'{P.name} - level {args.levels}')


class Prop:
    """ Render object.

    Base class for all VTK wrappers.

    Parameters
    ----------
    prop : vtkProp
        Instance of a render object.
    """

    def __init__(self, prop):
        self._vtk_prop = prop
        self._vtk_prop.SetPickable(False)

    @property
    def prop(self):
        """ Wrapped VTK instance.

        :type: vtkProp
        """
        return self._vtk_prop


class PolyMesh(Prop):
    """ Polygonal mesh shape.

    Wrapper class managing the visual properties of a mesh. Instances of
    this class are typically generated using the :func:`mesh` function.

    Parameters
    ----------
    mesh : Polyhedron or tuple
        Polygonal mesh representation.

    Note
    ----
    The generated :class:`PolyMesh` instance and `mesh` share their
    vertex coordinate data buffers.
    """

    def __init__(self, mesh):
        # We rely on the __getitem__ method of the Polyhedron class to get
        # the array of point coordinates and an iterable that can be
        # treated as list[list[int]] to specify mesh connectivity.
        self._mesh = mesh
        self._points = np.ascontiguousarray(mesh[0], dtype=float)

        points = vtk.vtkPoints()
        points.SetData(numpy_to_vtk(self._points))

        cells = vtk.vtkCellArray()

        for f in mesh[1]:
            face = vtk.vtkIdList()

            for vi in f:
                face.InsertNextId(int(vi))

            cells.InsertNextCell(face)

        self._vtk_polydata = vtk.vtkPolyData()
        self._vtk_polydata.SetPoints(points)
        self._vtk_polydata.SetPolys(cells)

        mapper = vtk.vtkPolyDataMapper()
        mapper.SetInputData(self._vtk_polydata)
        mapper.SetScalarVisibility(False)

        actor = vtk.vtkActor()
        actor.SetMapper(mapper)
        actor.GetProperty().SetInterpolationToFlat()

        super().__init__(actor)

    @property
    def mesh(self):
        """ Mesh access.

        :type: Polyhedron
        """
        return self._mesh

    @property
    def points(self):
        """ Point coordinate array.

        :type: ~numpy.ndarray
        """
        return self._points

    @property
    def polydata(self):
        """ Wrapped poly data.

        :type: vtkPolyData
        """
        return self._vtk_polydata

    @property
    def color(self):
        """ Face color.

        :type: tuple(float, float, float)
        """
        return self._vtk_prop.GetProperty().GetColor()

    @color.setter
    def color(self, value):
        self._vtk_prop.GetProperty().SetColor(value)

    def edges(self, style=None, width=None, color=None):
        """ Edge display.

        Set visual properties of edges.

        Parameters
        ----------
        style : str, optional
            Either 'lines' or 'tubes'. :obj:`False` to disable.
        width : int, optional
            Edge width in pixels.
        color : array_like, shape (3, ), optional
            Edge color.

        Note
        ----
        Parameters with a :obj:`None` value do not affect the corresponding
        edge display property.
        """
        if style == 'lines':
            self.prop.GetProperty().SetRenderLinesAsTubes(False)
            self.prop.GetProperty().SetEdgeVisibility(True)
        elif style == 'tubes':
            self.prop.GetProperty().SetRenderLinesAsTubes(True)
            self.prop.GetProperty().SetEdgeVisibility(True)
        elif style == '' or style is False:
            self.prop.GetProperty().SetEdgeVisibility(False)
        else:
            self.prop.GetProperty().SetEdgeVisibility(True)

        if width is not None:
            self.prop.GetProperty().SetLineWidth(width)

        if color is not None:
            self.prop.GetProperty().SetEdgeColor(color)


if __name__ == '__main__':
    _main()
