"""Settings read from environment variables, plus error reporting for scripts without other feedback."""
# 1. Standard python modules
import os
import tempfile
import traceback
from typing import Optional, Union

# 2. Third party modules

# 3. Aquaveo modules

# 4. Local modules

# Environment variables
ENVIRON_TEMP_FOLDER = 'FORT14MESH_TEMP_DIRECTORY'
ENVIRON_STD_ERR_FILE = 'FORT14MESH_STD_ERR_FILE'
ENVIRON_READ_BOUNDARIES = 'FORT14MESH_READ_BOUNDARIES'
ENVIRON_LOG_LEVEL = 'FORT14MESH_LOG_LEVEL'

DEBUG_FILE = 'fort14mesh_debug.log'
FALSE_VALUES = ('0', 'false', 'no', 'off')


def environ_temp_directory() -> str:
    """Returns the temp directory or system temp if not set. Creates it if it doesn't exist."""
    temp_dir = os.environ.get(ENVIRON_TEMP_FOLDER, tempfile.gettempdir())
    os.makedirs(temp_dir, exist_ok=True)  # Ensure the folder exists
    return temp_dir


def environ_std_err_file() -> str:
    """Returns the file errors are reported to."""
    return os.environ.get(ENVIRON_STD_ERR_FILE, os.path.join(environ_temp_directory(), DEBUG_FILE))


def environ_read_boundaries() -> bool:
    """Returns whether boundary data should be read by default. True unless set to 0/false/no/off."""
    return os.environ.get(ENVIRON_READ_BOUNDARIES, '1').strip().lower() not in FALSE_VALUES


def environ_log_level() -> str:
    """Returns the default log level name."""
    return os.environ.get(ENVIRON_LOG_LEVEL, 'INFO').strip().upper()


def report_error(error: Union[str, Exception], log_file: Optional[str] = None) -> str:
    """Append an error message or an exception's stack trace to the error file.

    Args:
        error: The error message or exception to report.
        log_file: Path to the log file. By default, the file from environ_std_err_file().

    Returns:
        Path of the file that was written.
    """
    log_file = log_file if log_file else environ_std_err_file()
    with open(log_file, 'a') as f:
        if isinstance(error, Exception):
            traceback.print_exception(type(error), error, error.__traceback__, file=f)
            f.write('\n')
        else:
            f.write(f'{error}\n')
    return log_file
