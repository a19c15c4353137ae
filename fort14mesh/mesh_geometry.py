"""Geometry collaborators that derive a triangulation and a boundary outline from parsed nodes and elements."""

# 1. Standard python modules
import logging
from typing import Any, Optional, Sequence

# 2. Third party modules
import matplotlib.tri as tri
import numpy as np
from shapely.geometry import LineString, Point, Polygon
from shapely.ops import polygonize, unary_union

# 3. Aquaveo modules

# 4. Local modules
from fort14mesh.mesh_data import Element, Node


class MeshGeometry:
    """Interface for building derived geometry. The base class builds nothing."""

    def build(self, nodes: Sequence[Node], elements: Sequence[Element]) -> tuple[Any, Any]:
        """Build the triangulation and boundary outline.

        Args:
            nodes: The parsed nodes.
            elements: The parsed elements. Every vertex id is present in nodes.

        Returns:
            (triangulation, outline)
        """
        return None, None


NullGeometry = MeshGeometry


def boundary_edges(triangles: np.ndarray) -> np.ndarray:
    """Find the edges that belong to exactly one triangle.

    Args:
        triangles: (E, 3) array of point indices.

    Returns:
        (B, 2) array of point index pairs, smaller index first.
    """
    edges = np.concatenate([triangles[:, [0, 1]], triangles[:, [1, 2]], triangles[:, [2, 0]]])
    edges = np.sort(edges, axis=1)
    unique_edges, counts = np.unique(edges, axis=0, return_counts=True)
    return unique_edges[counts == 1]


class TriangulationBuilder(MeshGeometry):
    """Builds a matplotlib triangulation and a shapely outline polygon of the meshed area."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """Initializes the builder.

        Args:
            logger: the logger instance.
        """
        if logger is None:
            self.logger = logging.getLogger(__name__)
        else:
            self.logger = logger

    def build(self, nodes: Sequence[Node], elements: Sequence[Element]) -> tuple[Optional[tri.Triangulation], Any]:
        """Build the triangulation and boundary outline.

        Node ids in the elements are remapped to point indices, so gaps in the node numbering are fine.

        Args:
            nodes: The parsed nodes.
            elements: The parsed elements.

        Returns:
            (matplotlib.tri.Triangulation, shapely Polygon or MultiPolygon). The triangulation is None and the outline
            is empty when there are no elements.
        """
        if not elements:
            return None, Polygon()
        self.logger.info('Building the triangulation...')
        pt_map = {node.id: index for index, node in enumerate(nodes)}
        x = np.array([node.x for node in nodes], dtype=np.float64)
        y = np.array([node.y for node in nodes], dtype=np.float64)
        triangles = np.array([[pt_map[vertex] for vertex in element.vertices] for element in elements], dtype=np.int32)
        triangulation = tri.Triangulation(x, y, triangles=triangles)
        outline = self._build_outline(triangulation)
        return triangulation, outline

    def _build_outline(self, triangulation: tri.Triangulation):
        """Build the polygon covering the meshed area.

        Boundary edges are polygonized into faces. Faces that are not covered by any triangle (unmeshed islands) are
        dropped and the rest are merged, so islands end up as holes.

        Args:
            triangulation: The mesh triangulation.

        Returns:
            A shapely Polygon or MultiPolygon.
        """
        self.logger.info('Building the mesh boundary outline...')
        x = triangulation.x
        y = triangulation.y
        lines = [
            LineString([(x[pt1], y[pt1]), (x[pt2], y[pt2])]) for pt1, pt2 in boundary_edges(triangulation.triangles)
        ]
        trifinder = triangulation.get_trifinder()
        faces = []
        for face in polygonize(lines):
            inside_pt: Point = face.representative_point()
            if int(trifinder(inside_pt.x, inside_pt.y)) >= 0:
                faces.append(face)
        if not faces:
            return Polygon()
        return unary_union(faces)
