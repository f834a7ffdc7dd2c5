# src/jsonds/engine/selector.py
"""File selection: resolve data store parameters into an ordered file list.

Rules:
- ``files`` (comma-separated) wins when non-blank. Each entry is kept only
  if it is a regular file with an accepted suffix. Input order is kept.
- otherwise ``directories`` (comma-separated) is scanned non-recursively.
  Each directory contributes its accepted files sorted oldest-first by
  modification time; contributions are appended in argument order.
- both blank is a ConfigurationError.

Missing or filtered entries are logged as warnings and skipped.
"""

import logging
from collections.abc import Sequence
from pathlib import Path

from jsonds.contracts import (
    DEFAULT_FILE_ENCODING,
    DEFAULT_FILE_SUFFIXES,
    DIRS_PARAM,
    FILE_ENCODING_PARAM,
    FILES_PARAM,
    ConfigurationError,
    DataStoreParams,
    FileAccessWarning,
)

logger = logging.getLogger(__name__)


def is_desired_file(filename: str, suffixes: Sequence[str]) -> bool:
    """Whether the lowercased file name ends with one of the suffixes.

    Suffixes are matched verbatim against the lowercased name; no dot is
    inserted, so "json" would also accept "datajson".
    """
    name = filename.lower()
    return any(name.endswith(suffix) for suffix in suffixes)


def resolve_file_encoding(params: DataStoreParams) -> str:
    """Text encoding for input files; utf-8 unless fileEncoding is set."""
    value = params.get_as_string(FILE_ENCODING_PARAM)
    if value is None or not value.strip():
        return DEFAULT_FILE_ENCODING
    return value.strip()


def _split_paths(value: str) -> list[str]:
    return [p.strip() for p in value.split(",") if p.strip()]


def _skip(path: str, reason: str) -> None:
    logger.warning("%s %s.", path, reason, extra={"category": FileAccessWarning.__name__})


def select_files(
    params: DataStoreParams,
    suffixes: Sequence[str] = DEFAULT_FILE_SUFFIXES,
) -> list[Path]:
    """Return the files to process, in processing order.

    Raises:
        ConfigurationError: If both files and directories are blank.
    """
    files_value = (params.get_as_string(FILES_PARAM) or "").strip()
    selected: list[Path] = []

    if files_value:
        logger.info("%s=%s", FILES_PARAM, files_value)
        for entry in _split_paths(files_value):
            path = Path(entry)
            if path.is_file() and is_desired_file(path.name, suffixes):
                selected.append(path)
            else:
                _skip(entry, "is not found")
        value = files_value
    else:
        dirs_value = (params.get_as_string(DIRS_PARAM) or "").strip()
        if not dirs_value:
            raise ConfigurationError(f"{FILES_PARAM} and {DIRS_PARAM} are blank.")
        logger.info("%s=%s", DIRS_PARAM, dirs_value)
        for entry in _split_paths(dirs_value):
            directory = Path(entry)
            if not directory.is_dir():
                _skip(entry, "is not a directory")
                continue
            selected.extend(list_directory(directory, suffixes))
        value = dirs_value

    if not selected:
        logger.debug("No files in %s", value)
    return selected


def list_directory(directory: Path, suffixes: Sequence[str]) -> list[Path]:
    """Accepted regular files directly inside directory, oldest first.

    Files with identical modification times are ordered by name so the
    result does not depend on directory listing order.
    """
    candidates = []
    for child in directory.iterdir():
        if not (child.is_file() and is_desired_file(child.name, suffixes)):
            continue
        try:
            mtime = child.stat().st_mtime
        except OSError:
            # Removed between listing and stat.
            _skip(str(child), "is not found")
            continue
        candidates.append((mtime, child.name, child))
    candidates.sort(key=lambda c: (c[0], c[1]))
    return [path for _, _, path in candidates]
