import logging
import pathlib
import typing

from . import annotations
from . import exceptions

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = '.sql'


def has_extension(filename: str, ext: str) -> bool:
    """Case-insensitive check, a file named exactly ``.sql`` matches."""
    return filename.lower().endswith(ext.lower())


def find_files_with_ext(
        root: annotations.PathOrStr, ext: str = DEFAULT_EXTENSION,
) -> typing.List[pathlib.Path]:
    """Recursively find files with extension ``ext`` under ``root``. ::

     |- root/
       |- riders.sql
       |- users/
         |- users.sql

    Extension is compared case-insensitively.

    :returns: list of paths sorted by their path relative to ``root`` so
              that the result does not depend on file system order.
    :raises LoadError: ``root`` does not exist or is not a directory.
    """
    root = pathlib.Path(root)
    if not root.is_dir():
        raise exceptions.LoadError(root, 'not a directory')
    logger.debug('Looking up for %s files at %s', ext, root)
    try:
        files = [
            path
            for path in root.rglob('*')
            if has_extension(path.name, ext) and path.is_file()
        ]
    except OSError as exc:
        raise exceptions.LoadError(root, str(exc)) from exc
    return sorted(files, key=lambda path: path.relative_to(root).parts)
