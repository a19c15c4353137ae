"""In-memory representation of an ADCIRC fort.14 mesh."""

# 1. Standard python modules
from typing import Any, NamedTuple, Optional

# 2. Third party modules
import numpy as np
import pandas as pd
import xarray as xr

# 3. Aquaveo modules

# 4. Local modules


GEOGRAPHIC_WKT = 'GEOGCS["NAD83",DATUM["North_American_Datum_1983",SPHEROID["GRS 1980",6378137,298.257222101,' \
                 'AUTHORITY["EPSG","7019"]],TOWGS84[0,0,0,0,0,0,0],AUTHORITY["EPSG","6269"]],PRIMEM["Greenwich",0,' \
                 'AUTHORITY["EPSG","8901"]],UNIT["degree",0.0174532925199433,AUTHORITY["EPSG","9122"]],' \
                 'AUTHORITY["EPSG","4269"]]'
LOCAL_METERS_WKT = 'LOCAL_CS["None",LOCAL_DATUM["None",0],UNIT["Meter",1],AXIS["None",OTHER]]'

MAX_MESH_ID_LENGTH = 24
ELEVATION = 'Elevation'
NORMAL_FLUX = 'NormalFlux'
ELEVATION_IB_TYPE = -1  # ib_type written for elevation segments in the boundary dataset


class Node(NamedTuple):
    """A mesh node: file id, plane coordinates and the scalar attribute (depth)."""
    id: int
    x: float
    y: float
    z: float


class Element(NamedTuple):
    """A triangular element. Vertex order defines orientation."""
    id: int
    vertices: tuple[int, int, int]


class BoundaryKind(NamedTuple):
    """Boundary segment type: elevation specified, or normal flux with an IBTYPE code."""
    name: str
    code: Optional[int] = None

    @classmethod
    def elevation(cls) -> 'BoundaryKind':
        """The elevation-specified (open ocean) boundary kind."""
        return cls(ELEVATION)

    @classmethod
    def normal_flux(cls, code: int) -> 'BoundaryKind':
        """A normal-flux boundary kind.

        Args:
            code: The IBTYPE code.
        """
        return cls(NORMAL_FLUX, code)

    @property
    def is_elevation(self) -> bool:
        """True for elevation-specified boundaries."""
        return self.name == ELEVATION

    @property
    def label(self) -> str:
        """Category label, 'Elevation' or 'NormalFluxType<code>'."""
        return ELEVATION if self.is_elevation else f'{NORMAL_FLUX}Type{self.code}'


class BoundarySegment:
    """An ordered run of boundary node ids plus any per-node data its type carries."""

    def __init__(self, kind: BoundaryKind, nodes: list[int], data: Optional[list[tuple[float, ...]]] = None):
        """Initializes the segment.

        Args:
            kind: The boundary kind.
            nodes: Node ids, in file order.
            data: One tuple of floats per node. Empty for types without auxiliary data.
        """
        self.kind = kind
        self.nodes = nodes
        self.data = data if data is not None else []

    def __len__(self) -> int:
        """Number of nodes in the segment."""
        return len(self.nodes)

    def __eq__(self, other: Any) -> bool:
        """Segments are equal when kind, nodes and data all match."""
        if not isinstance(other, BoundarySegment):
            return NotImplemented
        return self.kind == other.kind and self.nodes == other.nodes and self.data == other.data

    def __repr__(self) -> str:
        """Debug representation."""
        return f'BoundarySegment({self.kind.label}, nodes={self.nodes}, data={self.data})'


class Mesh:
    """A parsed fort.14 mesh.

    The triangulation and outline are derived by a geometry collaborator and attached after parsing. They are None
    until then.
    """

    def __init__(self, mesh_id: str, nodes: list[Node], elements: list[Element],
                 boundary_segments: Optional[list[BoundarySegment]] = None):
        """Initializes the mesh.

        Args:
            mesh_id: The mesh identification line.
            nodes: The nodes, in file order.
            elements: The elements, in file order.
            boundary_segments: The boundary segments, elevation segments first.
        """
        self.mesh_id = mesh_id
        self.nodes = nodes
        self.elements = elements
        self.boundary_segments = boundary_segments if boundary_segments is not None else []
        self.triangulation = None
        self.outline = None

    @property
    def id_exceeds_limit(self) -> bool:
        """True if the mesh id is longer than ADCIRC's 24 character limit."""
        return len(self.mesh_id) > MAX_MESH_ID_LENGTH

    def node_index_map(self) -> dict[int, int]:
        """Get a mapping of node id to position in the node list. Ids may have gaps."""
        return {node.id: index for index, node in enumerate(self.nodes)}

    def points(self) -> np.ndarray:
        """Get the node locations as an (N, 3) array of x, y, z."""
        return np.array([(node.x, node.y, node.z) for node in self.nodes], dtype=np.float64).reshape(-1, 3)

    def connectivity(self) -> np.ndarray:
        """Get the element vertex node ids as an (E, 3) array."""
        return np.array([element.vertices for element in self.elements], dtype=np.int64).reshape(-1, 3)

    def elevation_segments(self) -> list[BoundarySegment]:
        """Get the elevation-specified boundary segments."""
        return [segment for segment in self.boundary_segments if segment.kind.is_elevation]

    def flux_segments(self) -> list[BoundarySegment]:
        """Get the normal-flux boundary segments."""
        return [segment for segment in self.boundary_segments if not segment.kind.is_elevation]

    def extents(self) -> tuple[tuple[float, float, float], tuple[float, float, float]]:
        """Get the (min, max) x, y, z extents of the nodes."""
        points = self.points()
        if points.size == 0:
            return (0.0, 0.0, 0.0), (0.0, 0.0, 0.0)
        ex_min = points.min(axis=0)
        ex_max = points.max(axis=0)
        return tuple(float(val) for val in ex_min), tuple(float(val) for val in ex_max)

    def wkt(self) -> str:
        """Guess the projection from the extents. Geographic if every node could be a lon/lat location."""
        (min_lon, min_lat, _), (max_lon, max_lat, _) = self.extents()
        if min_lon >= -180.0 and min_lat >= -90.0 and max_lon <= 180.0 and max_lat <= 90.0:
            return GEOGRAPHIC_WKT
        return LOCAL_METERS_WKT

    def boundary_table(self) -> pd.DataFrame:
        """Get the boundary segments as a table with one row per segment.

        Returns:
            DataFrame with a categorical 'Type' column and object columns 'Nodes' and 'Data'.
        """
        table = pd.DataFrame({
            'Type': pd.Categorical([segment.kind.label for segment in self.boundary_segments]),
            'Nodes': pd.Series([list(segment.nodes) for segment in self.boundary_segments], dtype=object),
            'Data': pd.Series([list(segment.data) for segment in self.boundary_segments], dtype=object),
        })
        table.attrs['description'] = 'Boundary Segment Data'
        return table

    def boundary_dataset(self) -> xr.Dataset:
        """Get the boundary segments as flat nodestring arrays.

        Returns:
            Dataset with per-segment 'ib_type', 'node_count' and 'nodes_start_idx' variables and a flat 'node_id'
            variable holding the nodes of every segment back to back.
        """
        ib_type_data = []
        node_count_data = []
        nodes_start_idx_data = []
        nodes = []
        for segment in self.boundary_segments:
            ib_type_data.append(ELEVATION_IB_TYPE if segment.kind.is_elevation else segment.kind.code)
            node_count_data.append(len(segment.nodes))
            nodes_start_idx_data.append(len(nodes))
            nodes.extend(segment.nodes)
        data_dict = {
            'ib_type': ('segment', np.array(ib_type_data, dtype=np.int32)),
            'node_count': ('segment', np.array(node_count_data, dtype=np.int32)),
            'nodes_start_idx': ('segment', np.array(nodes_start_idx_data, dtype=np.int32)),
            'node_id': ('boundary_node', np.array(nodes, dtype=np.int32)),
        }
        dataset = xr.Dataset(data_vars=data_dict)
        dataset.attrs['mesh_id'] = self.mesh_id
        return dataset
