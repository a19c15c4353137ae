"""Command line entry point that reads a fort.14 and prints a summary of the mesh."""
# 1. Standard python modules
import argparse
from collections import Counter
import logging
import sys
from typing import List, Optional

# 2. Third party modules
import orjson

# 3. Aquaveo modules

# 4. Local modules
from fort14mesh import environment
from fort14mesh.fort14_reader import Fort14Reader
from fort14mesh.mesh_data import GEOGRAPHIC_WKT, Mesh
from fort14mesh.mesh_geometry import NullGeometry
from fort14mesh.progress import LoggingProgressReporter

EXIT_OK = 0
EXIT_READ_ERROR = 1
EXIT_INTERNAL_ERROR = 2


def parse_arguments(args: List[str]) -> argparse.Namespace:
    """Parse the command line arguments.

    Args:
        args (List[str]): The arguments.

    Returns:
        (argparse.Namespace): The parsed arguments.
    """
    arguments = argparse.ArgumentParser(prog='fort14-info', description='Summarize an ADCIRC fort.14 mesh file.')
    arguments.add_argument(dest='fort14_file', type=str, help='fort.14 file to read')
    arguments.add_argument('--boundaries', dest='read_boundaries', action=argparse.BooleanOptionalAction,
                           default=environment.environ_read_boundaries(), help='read the boundary segments')
    arguments.add_argument('--no-geometry', dest='build_geometry', action='store_false',
                           help='skip building the triangulation and outline')
    arguments.add_argument('--json', dest='as_json', action='store_true', help='print the summary as JSON')
    arguments.add_argument('--log-level', dest='log_level', type=str, default=environment.environ_log_level(),
                           choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'], help='logging level')
    parsed_args = arguments.parse_args(args)
    return parsed_args


def mesh_summary(mesh: Mesh) -> dict:
    """Get a JSON serializable summary of a mesh.

    Args:
        mesh: The mesh.

    Returns:
        The summary.
    """
    ex_min, ex_max = mesh.extents()
    summary = {
        'mesh_id': mesh.mesh_id,
        'num_nodes': len(mesh.nodes),
        'num_elements': len(mesh.elements),
        'num_boundary_segments': len(mesh.boundary_segments),
        'boundary_types': dict(Counter(segment.kind.label for segment in mesh.boundary_segments)),
        'extents': {'min': list(ex_min), 'max': list(ex_max)},
        'projection': 'geographic' if mesh.wkt() == GEOGRAPHIC_WKT else 'local meters',
    }
    if mesh.outline is not None:
        summary['outline_area'] = float(mesh.outline.area)
    return summary


def _format_summary(summary: dict) -> str:
    """Format a mesh summary as plain text lines."""
    lines = [
        f'Mesh id: {summary["mesh_id"]}',
        f'Nodes: {summary["num_nodes"]}',
        f'Elements: {summary["num_elements"]}',
        f'Boundary segments: {summary["num_boundary_segments"]}',
    ]
    lines.extend(f'  {label}: {count}' for label, count in summary['boundary_types'].items())
    lines.append(f'Extents: {summary["extents"]["min"]} - {summary["extents"]["max"]}')
    lines.append(f'Projection: {summary["projection"]}')
    if 'outline_area' in summary:
        lines.append(f'Outline area: {summary["outline_area"]}')
    return '\n'.join(lines)


def main(args: Optional[List[str]] = None) -> int:
    """Read the fort.14 given on the command line and print its summary.

    Returns:
        The process exit code.
    """
    parsed_args = parse_arguments(sys.argv[1:] if args is None else args)
    logging.basicConfig(level=parsed_args.log_level, format='%(levelname)s: %(message)s')
    logger = logging.getLogger('fort14mesh')

    geometry = None if parsed_args.build_geometry else NullGeometry()
    reader = Fort14Reader(parsed_args.fort14_file, read_boundaries=parsed_args.read_boundaries,
                          progress=LoggingProgressReporter(logger), geometry=geometry, logger=logger)
    try:
        mesh = reader.read()
    except ValueError as error:
        logger.error(str(error))
        return EXIT_READ_ERROR
    except Exception as error:
        debug_file = environment.report_error(error)
        logger.error(f'An unexpected internal error occurred. Details written to "{debug_file}".')
        return EXIT_INTERNAL_ERROR

    summary = mesh_summary(mesh)
    if parsed_args.as_json:
        print(orjson.dumps(summary, option=orjson.OPT_INDENT_2).decode())
    else:
        print(_format_summary(summary))
    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
