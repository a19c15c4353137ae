"""Initialize the package."""
from .boundary_types import BOUNDARY_TYPE_TABLE, get_record_shape, RecordShape
from .errors import (
    BoundaryCountMismatchError, Fort14Error, InvalidNodeReferenceError, MalformedHeaderError,
    SegmentLengthMismatchError, TruncatedElementListError, TruncatedNodeListError, UnexpectedEndOfLineError,
    UnexpectedEofError, UnknownBoundaryTypeError
)
from .fort14_parser import assemble_mesh, Fort14Parser, parse_mesh
from .fort14_reader import Fort14Reader
from .mesh_data import BoundaryKind, BoundarySegment, Element, Mesh, Node
from .mesh_geometry import MeshGeometry, NullGeometry, TriangulationBuilder
from .progress import CallbackProgressReporter, LoggingProgressReporter, ProgressReporter

__all__ = [
    'assemble_mesh', 'BOUNDARY_TYPE_TABLE', 'BoundaryCountMismatchError', 'BoundaryKind', 'BoundarySegment',
    'CallbackProgressReporter', 'Element', 'Fort14Error', 'Fort14Parser', 'Fort14Reader', 'get_record_shape',
    'InvalidNodeReferenceError', 'LoggingProgressReporter', 'MalformedHeaderError', 'Mesh', 'MeshGeometry', 'Node',
    'NullGeometry', 'parse_mesh', 'ProgressReporter', 'RecordShape', 'SegmentLengthMismatchError',
    'TriangulationBuilder', 'TruncatedElementListError', 'TruncatedNodeListError', 'UnexpectedEndOfLineError',
    'UnexpectedEofError', 'UnknownBoundaryTypeError'
]
