"""Reader for ADCIRC fort.14 geometry files."""

# 1. Standard python modules
import logging
import os
from typing import Callable, Optional, Union

# 2. Third party modules

# 3. Aquaveo modules

# 4. Local modules
from fort14mesh.fort14_parser import parse_mesh
from fort14mesh.mesh_data import Mesh
from fort14mesh.mesh_geometry import MeshGeometry
from fort14mesh.progress import ProgressReporter


class Fort14Reader:
    """Reads an ADCIRC fort.14 file. Mesh geometry and, optionally, boundary segments."""

    def __init__(self, filename: str, read_boundaries: bool = True,
                 progress: Union[ProgressReporter, Callable[[str, float], None], None] = None,
                 geometry: Optional[MeshGeometry] = None, logger: Optional[logging.Logger] = None):
        """Initializes the reader.

        Args:
            filename: Full path and filename of the fort.14 file.
            read_boundaries: Whether to read the boundary segments after the element list.
            progress: ProgressReporter or callable taking (phase, fraction).
            geometry: Builds the triangulation and outline. Defaults to a TriangulationBuilder.
            logger: the logger instance.
        """
        self.filename = filename
        self.read_boundaries = read_boundaries
        self.progress = progress
        self.geometry = geometry
        if logger is None:
            self.logger = logging.getLogger(__name__)
        else:
            self.logger = logger
        self.mesh = None

    def _parse_file(self):
        """Parse the fort.14."""
        self.logger.info('Loading fort.14 from ASCII file...')
        with open(self.filename, 'rb') as f:
            self.mesh = parse_mesh(f, include_boundary_data=self.read_boundaries, progress=self.progress,
                                   geometry=self.geometry, logger=self.logger)

    def read(self) -> Mesh:
        """Top-level function that reads an ADCIRC fort.14 file."""
        if not os.path.isfile(self.filename) or os.path.getsize(self.filename) == 0:
            raise ValueError(f'Error reading fort.14: File not found - {self.filename}')

        self._parse_file()
        self.logger.info(f'Successfully read "{self.filename}".')
        return self.mesh
