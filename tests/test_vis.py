import pytest

vtk = pytest.importorskip('vtk')

import dsmesh.vis as vis

from dsmesh.doosabin import doo_sabin


def test_polymesh(cube):
    S = doo_sabin(cube)
    renmesh = vis.PolyMesh(S)

    assert renmesh.mesh is S
    assert renmesh.polydata.GetNumberOfPoints() == 24
    assert renmesh.polydata.GetNumberOfPolys() == 26


def test_polymesh_tuple(cube):
    renmesh = vis.PolyMesh((cube.points, [[0, 3, 2, 1], [4, 5, 6, 7]]))
    assert renmesh.polydata.GetNumberOfPolys() == 2


def test_color_and_edges(cube):
    renmesh = vis.PolyMesh(cube)
    renmesh.color = (1.0, 0.0, 0.0)
    renmesh.edges(width=2, color=(0.0, 0.0, 0.0))

    prop = renmesh.prop.GetProperty()

    assert renmesh.color == pytest.approx((1.0, 0.0, 0.0))
    assert prop.GetEdgeVisibility()
    assert prop.GetLineWidth() == 2

    renmesh.edges(style=False)
    assert not prop.GetEdgeVisibility()


class _Window:

    def __init__(self):
        self.names = []
        self.renderers = []

    def SetSize(self, width, height):
        self.size = (width, height)

    def SetWindowName(self, name):
        self.names.append(name)

    def AddRenderer(self, renderer):
        self.renderers.append(renderer)

    def Render(self):
        pass


class _Interactor:

    def SetRenderWindow(self, window):
        self.window = window

    def SetInteractorStyle(self, style):
        pass

    def Start(self):
        pass


@pytest.mark.parametrize('title, names', [(None, []), ('cube', ['cube'])])
def test_show_title(monkeypatch, cube, title, names):
    windows = []

    def window():
        windows.append(_Window())
        return windows[-1]

    monkeypatch.setattr(vtk, 'vtkRenderWindow', window)
    monkeypatch.setattr(vtk, 'vtkRenderWindowInteractor', _Interactor)

    vis.mesh(cube)
    vis.show(title=title)

    assert windows[0].names == names
    assert len(windows[0].renderers) == 1
