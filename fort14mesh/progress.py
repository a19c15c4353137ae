"""Progress reporting collaborators used while reading a mesh."""

# 1. Standard python modules
import logging
from typing import Callable, Optional, Union

# 2. Third party modules

# 3. Aquaveo modules

# 4. Local modules


PHASE_NODES = 'nodes'
PHASE_ELEMENTS = 'elements'
PHASE_BOUNDARIES = 'boundaries'
PHASE_GEOMETRY = 'geometry'

PHASE_FRACTIONS = {
    PHASE_NODES: 0.25,
    PHASE_ELEMENTS: 0.5,
    PHASE_BOUNDARIES: 0.75,
    PHASE_GEOMETRY: 1.0,
}

PHASE_MESSAGES = {
    PHASE_NODES: 'Read the mesh point list',
    PHASE_ELEMENTS: 'Read the mesh connectivity list',
    PHASE_BOUNDARIES: 'Read the mesh boundary data',
    PHASE_GEOMETRY: 'Built the mesh triangulation and outline',
}


class ProgressReporter:
    """Receives a notification after each parse checkpoint. The base class ignores them."""

    def report(self, phase: str, fraction: float):
        """Called when a checkpoint is reached.

        Args:
            phase: Name of the phase that just finished.
            fraction: Overall progress, 0.0 to 1.0.
        """
        pass


class CallbackProgressReporter(ProgressReporter):
    """Forwards checkpoints to a plain callable taking (phase, fraction)."""

    def __init__(self, callback: Callable[[str, float], None]):
        """Initializes the reporter.

        Args:
            callback: Called with the phase name and fraction.
        """
        self._callback = callback

    def report(self, phase: str, fraction: float):
        """Forward the checkpoint to the callback."""
        self._callback(phase, fraction)


class LoggingProgressReporter(ProgressReporter):
    """Writes each checkpoint to a logger."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """Initializes the reporter.

        Args:
            logger: The logger instance.
        """
        if logger is None:
            self.logger = logging.getLogger(__name__)
        else:
            self.logger = logger

    def report(self, phase: str, fraction: float):
        """Log the checkpoint."""
        message = PHASE_MESSAGES.get(phase, phase)
        self.logger.info(f'{message} ({fraction:.0%})')


def as_progress_reporter(progress: Union[ProgressReporter, Callable[[str, float], None], None]) -> ProgressReporter:
    """Normalize the progress argument accepted by the readers.

    Args:
        progress: A ProgressReporter, a callable taking (phase, fraction), or None.

    Returns:
        A ProgressReporter. A silent one if progress is None.
    """
    if progress is None:
        return ProgressReporter()
    if isinstance(progress, ProgressReporter):
        return progress
    if callable(progress):
        return CallbackProgressReporter(progress)
    raise TypeError(f'Unsupported progress reporter: {progress!r}')
