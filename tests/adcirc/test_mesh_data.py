"""Tests for mesh_data.py."""

# 1. Standard python modules
import io

# 2. Third party modules
import numpy as np
import pytest

# 3. Aquaveo modules

# 4. Local modules
from fort14mesh import BoundaryKind, BoundarySegment, Element, Mesh, Node, NullGeometry, parse_mesh
from fort14mesh.mesh_data import GEOGRAPHIC_WKT, LOCAL_METERS_WKT
from tests.mesh_text import square_mesh_text


__copyright__ = "(C) Copyright Aquaveo 2024"
__license__ = "All rights reserved"


@pytest.fixture
def mesh() -> Mesh:
    """
    Returns the unit square mesh with one elevation and one external barrier segment.

    Returns:
        The mesh.
    """
    boundary_text = '1 2\n2\n1\n2\n1 2\n2 3\n3 1.5 0.8\n4 1.6 0.9\n'
    yield parse_mesh(io.StringIO(square_mesh_text(boundary_text)), geometry=NullGeometry())


def test_points_and_connectivity(mesh):
    """Array views of the nodes and elements."""
    points = mesh.points()
    assert points.shape == (4, 3)
    np.testing.assert_allclose(points[2], [1.0, 1.0, 5.0])
    np.testing.assert_array_equal(mesh.connectivity(), [[1, 2, 3], [1, 3, 4]])


def test_boundary_table(mesh):
    """One table row per segment with a categorical type."""
    table = mesh.boundary_table()
    assert list(table.columns) == ['Type', 'Nodes', 'Data']
    assert table['Type'].tolist() == ['Elevation', 'NormalFluxType3']
    assert str(table['Type'].dtype) == 'category'
    assert table['Nodes'][1] == [3, 4]
    assert table['Data'][0] == []
    assert table['Data'][1] == [(1.5, 0.8), (1.6, 0.9)]


def test_boundary_dataset(mesh):
    """Segments flattened into nodestring arrays."""
    dataset = mesh.boundary_dataset()
    assert dataset['ib_type'].values.tolist() == [-1, 3]
    assert dataset['node_count'].values.tolist() == [2, 2]
    assert dataset['nodes_start_idx'].values.tolist() == [0, 2]
    assert dataset['node_id'].values.tolist() == [1, 2, 3, 4]
    assert dataset.attrs['mesh_id'] == 'TestMesh'


def test_empty_boundary_views():
    """A mesh without boundary segments still produces empty views."""
    mesh = Mesh('empty', [Node(1, 0.0, 0.0, 0.0)], [])
    assert len(mesh.boundary_table()) == 0
    assert mesh.boundary_dataset()['node_id'].size == 0
    assert mesh.connectivity().shape == (0, 3)


def test_wkt():
    """Geographic when every node could be a lon/lat location."""
    nodes = [Node(1, -80.0, 30.0, 1.0), Node(2, -79.0, 31.0, 1.0)]
    assert Mesh('geo', nodes, []).wkt() == GEOGRAPHIC_WKT
    nodes.append(Node(3, 350000.0, 30.0, 1.0))
    assert Mesh('local', nodes, []).wkt() == LOCAL_METERS_WKT


def test_extents():
    """Min and max of x, y and z."""
    nodes = [Node(1, 0.0, 5.0, -2.0), Node(2, 3.0, 1.0, 4.0)]
    assert Mesh('m', nodes, [Element(1, (1, 2, 2))]).extents() == ((0.0, 1.0, -2.0), (3.0, 5.0, 4.0))


def test_boundary_kind_labels():
    """Kind labels follow the Elevation / NormalFluxType<code> convention."""
    assert BoundaryKind.elevation().label == 'Elevation'
    assert BoundaryKind.normal_flux(52).label == 'NormalFluxType52'
    assert BoundaryKind.elevation().is_elevation
    assert not BoundaryKind.normal_flux(0).is_elevation


def test_segment_equality():
    """Segments compare by kind, nodes and data."""
    segment = BoundarySegment(BoundaryKind.normal_flux(3), [1], [(1.0, 2.0)])
    assert segment == BoundarySegment(BoundaryKind.normal_flux(3), [1], [(1.0, 2.0)])
    assert segment != BoundarySegment(BoundaryKind.normal_flux(13), [1], [(1.0, 2.0)])
    assert len(segment) == 1
