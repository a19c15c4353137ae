"""Exceptions raised while reading an ADCIRC fort.14 file."""

# 1. Standard python modules
from typing import Optional

# 2. Third party modules

# 3. Aquaveo modules

# 4. Local modules


class Fort14Error(ValueError):
    """Base class for all fort.14 parse errors.

    Every error is terminal for the current parse. The stage that failed and, where available, the index of the record
    being read are kept on the exception for diagnosis.
    """

    def __init__(self, message: str, stage: str = '', index: Optional[int] = None):
        """Initializes the error.

        Args:
            message: Description of the problem.
            stage: Name of the parse stage that failed.
            index: 0-based index of the record being read when the error occurred, if known.
        """
        self.message = message
        self.stage = stage
        self.index = index
        super().__init__(self._format())

    def _format(self) -> str:
        """Build the full error message."""
        text = self.message
        if self.stage:
            location = f'{self.stage}'
            if self.index is not None:
                location += f', record {self.index + 1}'
            text = f'Error reading fort.14 ({location}): {text}'
        return text


class CursorError(Fort14Error):
    """Low level token error. Always wrapped by the stage that encountered it."""

    def __init__(self, message: str, line_number: int = 0):
        """Initializes the error.

        Args:
            message: Description of the problem.
            line_number: 1-based line number of the offending token, 0 if unknown.
        """
        self.line_number = line_number
        if line_number:
            message = f'{message} (line {line_number})'
        super().__init__(message)


class UnexpectedEofError(CursorError):
    """A token was requested beyond the end of the stream."""
    pass


class UnexpectedEndOfLineError(CursorError):
    """A record ended before all of its fields were read."""
    pass


class InvalidTokenError(CursorError):
    """A token could not be converted to the requested numeric type."""
    pass


class MalformedHeaderError(Fort14Error):
    """The element and node counts are missing or not unsigned integers."""

    def __init__(self, message: str):
        """Initializes the error.

        Args:
            message: Description of the problem.
        """
        super().__init__(message, stage='header')


class TruncatedNodeListError(Fort14Error):
    """Fewer well-formed node records than declared in the header."""

    def __init__(self, message: str, index: int):
        """Initializes the error.

        Args:
            message: Description of the problem.
            index: 0-based index of the node record that could not be read.
        """
        super().__init__(message, stage='nodes', index=index)


class TruncatedElementListError(Fort14Error):
    """Fewer well-formed element records than declared in the header."""

    def __init__(self, message: str, index: int):
        """Initializes the error.

        Args:
            message: Description of the problem.
            index: 0-based index of the element record that could not be read.
        """
        super().__init__(message, stage='elements', index=index)


class InvalidNodeReferenceError(Fort14Error):
    """An element references a node id that is not in the node list."""

    def __init__(self, element_id: int, node_id: int, index: int):
        """Initializes the error.

        Args:
            element_id: Id of the offending element.
            node_id: The missing node id.
            index: 0-based index of the element record.
        """
        self.element_id = element_id
        self.node_id = node_id
        super().__init__(f'element {element_id} references undefined node {node_id}', stage='elements', index=index)


class SegmentLengthMismatchError(Fort14Error):
    """A boundary segment has fewer parseable records than its declared length."""

    def __init__(self, message: str, stage: str, segment: int, index: int):
        """Initializes the error.

        Args:
            message: Description of the problem.
            stage: 'elevation boundaries' or 'flux boundaries'.
            segment: 0-based index of the segment within its section.
            index: 0-based index of the record within the segment.
        """
        self.segment = segment
        super().__init__(f'segment {segment + 1}: {message}', stage=stage, index=index)


class UnknownBoundaryTypeError(Fort14Error):
    """A normal-flux boundary segment uses a type code that is not in the boundary type table."""

    def __init__(self, code: int, segment: Optional[int] = None):
        """Initializes the error.

        Args:
            code: The unrecognized boundary type code.
            segment: 0-based index of the segment within the flux section, if known.
        """
        self.code = code
        self.segment = segment
        message = f'unknown boundary type {code}'
        if segment is not None:
            message = f'segment {segment + 1}: {message}'
        super().__init__(message, stage='flux boundaries')


class BoundaryCountMismatchError(Fort14Error):
    """The nodes read in a boundary section do not add up to the section's declared total."""

    def __init__(self, stage: str, declared: int, actual: int):
        """Initializes the error.

        Args:
            stage: 'elevation boundaries' or 'flux boundaries'.
            declared: Total number of boundary nodes declared in the section header.
            actual: Number of boundary nodes actually read.
        """
        self.declared = declared
        self.actual = actual
        super().__init__(f'declared {declared} boundary nodes but read {actual}', stage=stage)
