"""Tests for the fort14-info command line runner."""

# 1. Standard python modules
import os

# 2. Third party modules
import orjson
import pytest

# 3. Aquaveo modules

# 4. Local modules
from fort14mesh import runner
from fort14mesh.runner import EXIT_INTERNAL_ERROR, EXIT_OK, EXIT_READ_ERROR, main, parse_arguments


__copyright__ = "(C) Copyright Aquaveo 2024"
__license__ = "All rights reserved"


@pytest.fixture
def fort14_file(test_files_path) -> str:
    """
    Returns the path to the fort.14 with every boundary record shape.

    Returns:
        The file path.
    """
    yield os.path.join(test_files_path, 'adcirc', 'test_fort_14_reader', 'test_import', 'fort.14')


def test_parse_arguments(monkeypatch):
    """Defaults come from the environment."""
    monkeypatch.setenv('FORT14MESH_READ_BOUNDARIES', 'no')
    monkeypatch.setenv('FORT14MESH_LOG_LEVEL', 'warning')
    parsed_args = parse_arguments(['fort.14'])
    assert parsed_args.fort14_file == 'fort.14'
    assert parsed_args.read_boundaries is False
    assert parsed_args.log_level == 'WARNING'
    assert parsed_args.build_geometry is True
    assert parse_arguments(['fort.14', '--boundaries']).read_boundaries is True


def test_json_summary(fort14_file, capsys):
    """The summary printed as JSON."""
    assert main([fort14_file, '--json']) == EXIT_OK
    summary = orjson.loads(capsys.readouterr().out)
    assert summary['mesh_id'] == '3x3 test grid'
    assert summary['num_nodes'] == 9
    assert summary['num_elements'] == 8
    assert summary['num_boundary_segments'] == 6
    assert summary['boundary_types'] == {
        'Elevation': 1,
        'NormalFluxType0': 1,
        'NormalFluxType3': 1,
        'NormalFluxType4': 1,
        'NormalFluxType5': 1,
        'NormalFluxType18': 1,
    }
    assert summary['extents']['min'] == [500000.0, 4000000.0, 1.0]
    assert summary['projection'] == 'local meters'
    assert summary['outline_area'] == pytest.approx(40000.0)


def test_text_summary_without_boundaries(fort14_file, capsys):
    """Plain text summary, boundary data and geometry skipped."""
    assert main([fort14_file, '--no-boundaries', '--no-geometry']) == EXIT_OK
    out = capsys.readouterr().out
    assert 'Mesh id: 3x3 test grid' in out
    assert 'Boundary segments: 0' in out
    assert 'Outline area' not in out


def test_missing_file(tmp_path):
    """A missing file is a read error."""
    assert main([str(tmp_path / 'fort.14')]) == EXIT_READ_ERROR


def test_malformed_file(tmp_path):
    """A parse error is a read error."""
    bad_file = tmp_path / 'fort.14'
    bad_file.write_text('bad mesh\nnot numbers\n')
    assert main([str(bad_file)]) == EXIT_READ_ERROR


def test_unexpected_error(fort14_file, tmp_path, monkeypatch):
    """Unexpected exceptions are written to the error file."""
    error_file = tmp_path / 'errors.log'
    monkeypatch.setenv('FORT14MESH_STD_ERR_FILE', str(error_file))

    def _explode(self):
        raise RuntimeError('boom')

    monkeypatch.setattr(runner.Fort14Reader, 'read', _explode)
    assert main([fort14_file]) == EXIT_INTERNAL_ERROR
    assert 'RuntimeError: boom' in error_file.read_text()
