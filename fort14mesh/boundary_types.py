"""Record shapes of the normal-flux boundary types (IBTYPE) that can appear in a fort.14."""

# 1. Standard python modules
from typing import NamedTuple

# 2. Third party modules

# 3. Aquaveo modules

# 4. Local modules
from fort14mesh.errors import UnknownBoundaryTypeError


class RecordShape(NamedTuple):
    """Layout of one node record in a normal-flux boundary segment.

    Each record is a node id followed by one float per entry in `field_labels`.
    """
    name: str
    field_labels: tuple[str, ...] = ()
    paired: bool = False  # Internal barriers list a back node with every front node

    @property
    def field_count(self) -> int:
        """Number of floats following the node id on each record."""
        return len(self.field_labels)


NO_NORMAL_FLOW = RecordShape('no-normal-flow')
NON_ZERO_NORMAL_FLOW = RecordShape('non-zero normal-flow')
EXTERNAL_BARRIER = RecordShape('external barrier', ('barrier_height', 'supercritical_coefficient'))
SPECIAL_BARRIER = RecordShape('special barrier', ('barrier_parameter',))
INTERNAL_BARRIER = RecordShape(
    'internal barrier',
    ('back_node', 'barrier_height', 'subcritical_coefficient', 'supercritical_coefficient'),
    paired=True
)
INTERNAL_BARRIER_WITH_PIPE = RecordShape(
    'internal barrier with pipe',
    INTERNAL_BARRIER.field_labels + ('pipe_height', 'pipe_coefficient', 'pipe_diameter'),
    paired=True
)


def _expand(groups: dict[tuple[int, ...], RecordShape]) -> dict[int, RecordShape]:
    """Flatten {(codes...): shape} into {code: shape}."""
    return {code: shape for codes, shape in groups.items() for code in codes}


BOUNDARY_TYPE_TABLE = _expand({
    (0, 1, 10, 11, 20, 21, 30): NO_NORMAL_FLOW,
    (2, 102, 12, 112, 22, 122, 52): NON_ZERO_NORMAL_FLOW,
    (3, 13, 23): EXTERNAL_BARRIER,
    (18,): SPECIAL_BARRIER,
    (4, 24): INTERNAL_BARRIER,
    (5, 25): INTERNAL_BARRIER_WITH_PIPE,
})


def get_record_shape(code: int) -> RecordShape:
    """Look up the record shape of a normal-flux boundary type.

    Args:
        code: The boundary type code as it appears in the fort.14.

    Returns:
        The record shape.

    Raises:
        UnknownBoundaryTypeError: If the code is not in the table.
    """
    try:
        return BOUNDARY_TYPE_TABLE[code]
    except KeyError:
        raise UnknownBoundaryTypeError(code) from None
