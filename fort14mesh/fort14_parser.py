"""Stage-by-stage parser for the contents of an ADCIRC fort.14 mesh file."""

# 1. Standard python modules
import logging
from typing import IO, Callable, Optional, Union

# 2. Third party modules

# 3. Aquaveo modules

# 4. Local modules
from fort14mesh.boundary_types import get_record_shape
from fort14mesh.errors import (
    BoundaryCountMismatchError, CursorError, InvalidNodeReferenceError, MalformedHeaderError,
    SegmentLengthMismatchError, TruncatedElementListError, TruncatedNodeListError, UnknownBoundaryTypeError
)
from fort14mesh.mesh_data import BoundaryKind, BoundarySegment, Element, MAX_MESH_ID_LENGTH, Mesh, Node
from fort14mesh.mesh_geometry import MeshGeometry, TriangulationBuilder
from fort14mesh.progress import (
    as_progress_reporter, PHASE_BOUNDARIES, PHASE_ELEMENTS, PHASE_FRACTIONS, PHASE_GEOMETRY, PHASE_NODES,
    ProgressReporter
)
from fort14mesh.token_cursor import TokenCursor

ELEVATION_STAGE = 'elevation boundaries'
FLUX_STAGE = 'flux boundaries'


class Fort14Parser:
    """Reads the sections of a fort.14 in order: header, nodes, elements, then the optional boundary section.

    Each stage consumes exactly the tokens it declares, so the stages must be called in file order.
    """

    def __init__(self, cursor: TokenCursor, logger: Optional[logging.Logger] = None):
        """Initializes the parser.

        Args:
            cursor: Token cursor positioned at the start of the file.
            logger: the logger instance.
        """
        self.cursor = cursor
        if logger is None:
            self.logger = logging.getLogger(__name__)
        else:
            self.logger = logger
        self.mesh_id = ''
        self.num_elements = 0
        self.num_nodes = 0

    def read_header(self) -> tuple[str, int, int]:
        """Read the mesh id line and the element and node counts.

        Returns:
            (mesh_id, number_of_elements, number_of_nodes)
        """
        try:
            self.mesh_id = self.cursor.next_line().strip()  # grid name
        except CursorError as error:
            raise MalformedHeaderError('missing mesh id line') from error
        if len(self.mesh_id) > MAX_MESH_ID_LENGTH:
            self.logger.warning(
                f'Mesh id "{self.mesh_id}" is longer than {MAX_MESH_ID_LENGTH} characters '
                f'("{self.mesh_id[:MAX_MESH_ID_LENGTH]}" would be kept by ADCIRC).'
            )
        try:
            self.num_elements = self.cursor.next_int()
            self.num_nodes = self.cursor.next_int(True)
        except CursorError as error:
            raise MalformedHeaderError(f'invalid element/node counts: {error.message}') from error
        self.cursor.skip_line()
        if self.num_elements < 0 or self.num_nodes < 0:
            raise MalformedHeaderError(f'negative element/node counts: {self.num_elements} {self.num_nodes}')
        return self.mesh_id, self.num_elements, self.num_nodes

    def read_nodes(self) -> list[Node]:
        """Read the node locations - one per line: point_id pt_x pt_y pt_z."""
        self.logger.info('Parsing mesh node locations...')
        nodes = [None] * self.num_nodes
        cursor = self.cursor
        for i in range(self.num_nodes):
            try:
                nodes[i] = Node(
                    cursor.next_int(), cursor.next_float(True), cursor.next_float(True), cursor.next_float(True)
                )
            except CursorError as error:
                raise TruncatedNodeListError(
                    f'expected {self.num_nodes} nodes but read {i}: {error.message}', index=i
                ) from error
            cursor.skip_line()
        return nodes

    def read_elements(self) -> list[Element]:
        """Read the connectivity - one per line: elem_id num_nodes pt1 pt2 pt3."""
        self.logger.info('Parsing mesh element definitions...')
        elements = [None] * self.num_elements
        cursor = self.cursor
        for i in range(self.num_elements):
            try:
                elem_id = cursor.next_int()
                cursor.next_int(True)  # Vertex count, always 3
                vertices = (cursor.next_int(True), cursor.next_int(True), cursor.next_int(True))
                elements[i] = Element(elem_id, vertices)
            except CursorError as error:
                raise TruncatedElementListError(
                    f'expected {self.num_elements} elements but read {i}: {error.message}', index=i
                ) from error
            cursor.skip_line()
        return elements

    def read_boundaries(self) -> list[BoundarySegment]:
        """Read the elevation-specified then the normal-flux boundary sections.

        Returns:
            The segments, elevation segments first.
        """
        self.logger.info('Parsing boundary conditions data...')
        segments = self._read_elevation_section()
        segments.extend(self._read_flux_section())
        return segments

    def _read_section_header(self, stage: str) -> tuple[int, Optional[int]]:
        """Read the segment count and the declared total node count of a boundary section.

        Accepts both "count total" on one line and ADCIRC's usual layout of the count and the total on consecutive
        lines, each followed by a comment.

        Args:
            stage: Name of the section being read.

        Returns:
            (segment_count, total_nodes). (0, None) if the file ends before the section.
        """
        cursor = self.cursor
        if cursor.peek_is_eof():
            return 0, None
        try:
            num_segments = cursor.next_int()
            next_token = cursor.peek_token()
            if next_token is None or not _is_integer(next_token):
                cursor.skip_line()  # Total is on the next line
                if cursor.peek_is_eof():
                    return num_segments, None
            total_nodes = cursor.next_int()
        except CursorError as error:
            raise SegmentLengthMismatchError(f'invalid section header: {error.message}', stage, 0, 0) from error
        cursor.skip_line()
        return num_segments, total_nodes

    def _read_elevation_section(self) -> list[BoundarySegment]:
        """Read the elevation-specified (ocean) boundary segments."""
        num_segments, total_nodes = self._read_section_header(ELEVATION_STAGE)
        segments = [None] * num_segments
        for seg_idx in range(num_segments):
            num_seg_nodes = self._read_segment_length(ELEVATION_STAGE, seg_idx)
            self.cursor.skip_line()
            nodes = self._read_node_ids(num_seg_nodes, ELEVATION_STAGE, seg_idx)
            segments[seg_idx] = BoundarySegment(BoundaryKind.elevation(), nodes, [])
        _check_total(ELEVATION_STAGE, total_nodes, segments)
        return segments

    def _read_flux_section(self) -> list[BoundarySegment]:
        """Read the normal-flux (land) boundary segments, dispatching each on its type code."""
        num_segments, total_nodes = self._read_section_header(FLUX_STAGE)
        segments = [None] * num_segments
        for seg_idx in range(num_segments):
            num_seg_nodes = self._read_segment_length(FLUX_STAGE, seg_idx)
            try:
                ib_type = self.cursor.next_int()
            except CursorError as error:
                raise SegmentLengthMismatchError(f'missing boundary type: {error.message}', FLUX_STAGE, seg_idx,
                                                 0) from error
            self.cursor.skip_line()
            try:
                shape = get_record_shape(ib_type)
            except UnknownBoundaryTypeError:
                raise UnknownBoundaryTypeError(ib_type, seg_idx) from None
            if shape.field_count == 0:
                nodes = self._read_node_ids(num_seg_nodes, FLUX_STAGE, seg_idx)
                data = []
            else:
                nodes, data = self._read_node_records(num_seg_nodes, shape.field_count, seg_idx)
            segments[seg_idx] = BoundarySegment(BoundaryKind.normal_flux(ib_type), nodes, data)
        _check_total(FLUX_STAGE, total_nodes, segments)
        return segments

    def _read_segment_length(self, stage: str, seg_idx: int) -> int:
        """Read the number of nodes declared for a boundary segment."""
        try:
            num_seg_nodes = self.cursor.next_int()
        except CursorError as error:
            raise SegmentLengthMismatchError(f'missing segment length: {error.message}', stage, seg_idx,
                                             0) from error
        if num_seg_nodes < 0:
            raise SegmentLengthMismatchError(f'negative segment length {num_seg_nodes}', stage, seg_idx, 0)
        return num_seg_nodes

    def _read_node_ids(self, num_seg_nodes: int, stage: str, seg_idx: int) -> list[int]:
        """Read a segment's node ids, one token per node."""
        nodes = [0] * num_seg_nodes
        for i in range(num_seg_nodes):
            try:
                nodes[i] = self.cursor.next_int()
            except CursorError as error:
                raise SegmentLengthMismatchError(
                    f'expected {num_seg_nodes} nodes but read {i}: {error.message}', stage, seg_idx, i
                ) from error
        return nodes

    def _read_node_records(self, num_seg_nodes: int, field_count: int,
                           seg_idx: int) -> tuple[list[int], list[tuple[float, ...]]]:
        """Read a segment's records, one per line: node_id followed by field_count values."""
        nodes = [0] * num_seg_nodes
        data = [()] * num_seg_nodes
        cursor = self.cursor
        for i in range(num_seg_nodes):
            try:
                nodes[i] = cursor.next_int()
                data[i] = tuple(cursor.next_float(True) for _ in range(field_count))
            except CursorError as error:
                raise SegmentLengthMismatchError(
                    f'expected {num_seg_nodes} records but read {i}: {error.message}', FLUX_STAGE, seg_idx, i
                ) from error
            cursor.skip_line()
        return nodes, data


def _is_integer(token: str) -> bool:
    """Returns True if the token is an integer literal."""
    try:
        int(token)
    except ValueError:
        return False
    return True


def _check_total(stage: str, total_nodes: Optional[int], segments: list[BoundarySegment]):
    """Verify a section's declared node total.

    ADCIRC counts both nodes of each internal barrier pair in the flux total, so that convention is accepted too.

    Args:
        stage: Name of the section.
        total_nodes: The declared total, None if the section was absent.
        segments: The segments read for the section.
    """
    if total_nodes is None:
        return
    num_read = sum(len(segment) for segment in segments)
    num_paired = sum(
        len(segment) for segment in segments
        if not segment.kind.is_elevation and get_record_shape(segment.kind.code).paired
    )
    if total_nodes not in (num_read, num_read + num_paired):
        raise BoundaryCountMismatchError(stage, total_nodes, num_read)


def assemble_mesh(mesh_id: str, nodes: list[Node], elements: list[Element], boundary_segments: list[BoundarySegment],
                  geometry: Optional[MeshGeometry] = None) -> Mesh:
    """Build the Mesh and attach its derived triangulation and outline.

    Args:
        mesh_id: The mesh id line.
        nodes: The parsed nodes.
        elements: The parsed elements.
        boundary_segments: The parsed boundary segments, empty if they were not read.
        geometry: Builds the triangulation and outline. Defaults to a TriangulationBuilder.

    Returns:
        The mesh.
    """
    node_ids = {node.id for node in nodes}
    for index, element in enumerate(elements):
        for vertex in element.vertices:
            if vertex not in node_ids:
                raise InvalidNodeReferenceError(element.id, vertex, index)
    mesh = Mesh(mesh_id, nodes, elements, boundary_segments)
    if geometry is None:
        geometry = TriangulationBuilder()
    mesh.triangulation, mesh.outline = geometry.build(nodes, elements)
    return mesh


def _report(progress: ProgressReporter, phase: str):
    """Send a checkpoint to the progress reporter."""
    progress.report(phase, PHASE_FRACTIONS[phase])


def parse_mesh(stream: IO[Union[str, bytes]], include_boundary_data: bool = True,
               progress: Union[ProgressReporter, Callable[[str, float], None], None] = None,
               geometry: Optional[MeshGeometry] = None, logger: Optional[logging.Logger] = None) -> Mesh:
    """Parse a fort.14 from an open stream.

    The stream is not closed. When include_boundary_data is False nothing past the element list is read.

    Args:
        stream: Open text or binary stream positioned at the start of the fort.14.
        include_boundary_data: Whether to read the boundary section.
        progress: ProgressReporter or callable taking (phase, fraction).
        geometry: Builds the triangulation and outline. Defaults to a TriangulationBuilder.
        logger: the logger instance.

    Returns:
        The mesh.
    """
    progress = as_progress_reporter(progress)
    parser = Fort14Parser(TokenCursor(stream), logger)
    mesh_id, _, _ = parser.read_header()
    nodes = parser.read_nodes()
    _report(progress, PHASE_NODES)
    elements = parser.read_elements()
    _report(progress, PHASE_ELEMENTS)
    boundary_segments = []
    if include_boundary_data:
        boundary_segments = parser.read_boundaries()
        _report(progress, PHASE_BOUNDARIES)
    if geometry is None:
        geometry = TriangulationBuilder(parser.logger)
    mesh = assemble_mesh(mesh_id, nodes, elements, boundary_segments, geometry)
    _report(progress, PHASE_GEOMETRY)
    return mesh
