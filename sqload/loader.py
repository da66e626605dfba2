"""Load tagged query dataclasses from strings, files and directories.

Example:

.. code-block:: python

    @dataclasses.dataclass
    class Queries:
        find_user_by_id: str = sqload.query_field('FindUserById')
        delete_user_by_id: str = sqload.query_field('DeleteUserById')

    Q = loader.must_load_from_dir(Queries, 'sql')

Directory and package loaders concatenate files in lexical path order
before extracting queries, so when the same query is declared in several
files the last file wins.
"""

import importlib.resources
import logging
import pathlib
import typing

from . import annotations
from . import binder
from . import discover
from . import exceptions
from . import segmenter

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = 'utf-8'


def read_text(
        path: annotations.PathOrStr, encoding: str = DEFAULT_ENCODING,
) -> str:
    path = pathlib.Path(path)
    try:
        with path.open('r', encoding=encoding, newline='') as fp:
            return fp.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise exceptions.LoadError(path, str(exc)) from exc


def cat(texts: typing.Iterable[str]) -> str:
    return '\n'.join(texts)


def merge_query_maps(
        maps: typing.Iterable[annotations.QueryMap], *, strict: bool = False,
) -> annotations.QueryMap:
    """Merge query maps in order, later maps override earlier ones."""
    result: annotations.QueryMap = {}
    for queries in maps:
        if strict:
            for name in queries.keys() & result.keys():
                raise exceptions.DuplicateQueryError(name)
        result.update(queries)
    return result


def extract_query_map_from_files(
        paths: typing.Iterable[annotations.PathOrStr],
        *,
        marker: str = segmenter.DEFAULT_MARKER,
        strict: bool = False,
        encoding: str = DEFAULT_ENCODING,
) -> annotations.QueryMap:
    """Extract queries from every file separately and merge the results.

    Unlike directory loaders errors name the offending file.
    """
    maps = []
    for path in paths:
        try:
            maps.append(
                segmenter.extract_query_map(
                    read_text(path, encoding),
                    marker=marker,
                    strict=strict,
                ),
            )
        except exceptions.InvalidQueryNameError as exc:
            raise exceptions.InvalidQueryNameError(
                exc.name, source=path,
            ) from exc
    return merge_query_maps(maps, strict=strict)


def load_from_string(
        cls: typing.Type[annotations.T],
        text: str,
        *,
        marker: str = segmenter.DEFAULT_MARKER,
        strict: bool = False,
) -> annotations.T:
    """Create ``cls`` instance with queries loaded from ``text``."""
    queries = segmenter.extract_query_map(text, marker=marker, strict=strict)
    return binder.build_queries(cls, queries)


def load_from_file(
        cls: typing.Type[annotations.T],
        filename: annotations.PathOrStr,
        *,
        marker: str = segmenter.DEFAULT_MARKER,
        strict: bool = False,
        encoding: str = DEFAULT_ENCODING,
) -> annotations.T:
    """Create ``cls`` instance with queries loaded from file ``filename``."""
    logger.debug('Loading queries from %s', filename)
    return load_from_string(
        cls, read_text(filename, encoding), marker=marker, strict=strict,
    )


def load_from_dir(
        cls: typing.Type[annotations.T],
        dirname: annotations.PathOrStr,
        *,
        ext: str = discover.DEFAULT_EXTENSION,
        marker: str = segmenter.DEFAULT_MARKER,
        strict: bool = False,
        encoding: str = DEFAULT_ENCODING,
) -> annotations.T:
    """Create ``cls`` instance with queries from ``ext`` files in ``dirname``.

    Subdirectories are scanned recursively.
    """
    files = discover.find_files_with_ext(dirname, ext)
    logger.debug('Loading queries from %d files at %s', len(files), dirname)
    text = cat(read_text(path, encoding) for path in files)
    return load_from_string(cls, text, marker=marker, strict=strict)


def load_from_package(
        cls: typing.Type[annotations.T],
        package: str,
        resource_dir: str = '',
        *,
        ext: str = discover.DEFAULT_EXTENSION,
        marker: str = segmenter.DEFAULT_MARKER,
        strict: bool = False,
        encoding: str = DEFAULT_ENCODING,
) -> annotations.T:
    """Create ``cls`` instance with queries from resources of ``package``.

    .. code-block:: python

        Q = loader.load_from_package(Queries, 'myapp', 'sql')
    """
    source = f'{package}:{resource_dir}'
    try:
        root = importlib.resources.files(package)
    except ModuleNotFoundError as exc:
        raise exceptions.LoadError(source, str(exc)) from exc
    if resource_dir:
        root = root.joinpath(resource_dir)
    if not root.is_dir():
        raise exceptions.LoadError(source, 'not a directory')
    try:
        texts = [
            resource.read_text(encoding=encoding)
            for resource in _find_resources(root, ext)
        ]
    except (OSError, UnicodeDecodeError) as exc:
        raise exceptions.LoadError(source, str(exc)) from exc
    return load_from_string(cls, cat(texts), marker=marker, strict=strict)


def must_load_from_string(cls, text, **kwargs):
    """Like :func:`load_from_string` but raises :class:`MustLoadError`.

    Simplifies module level initialization of query holders.
    """
    return _must(load_from_string, cls, text, **kwargs)


def must_load_from_file(cls, filename, **kwargs):
    return _must(load_from_file, cls, filename, **kwargs)


def must_load_from_dir(cls, dirname, **kwargs):
    return _must(load_from_dir, cls, dirname, **kwargs)


def must_load_from_package(cls, package, resource_dir='', **kwargs):
    return _must(load_from_package, cls, package, resource_dir, **kwargs)


def _must(func, *args, **kwargs):
    try:
        return func(*args, **kwargs)
    except exceptions.BaseError as exc:
        raise exceptions.MustLoadError(str(exc)) from exc


def _find_resources(root, ext: str) -> typing.Iterator:
    for entry in sorted(root.iterdir(), key=lambda entry: entry.name):
        if entry.is_dir():
            yield from _find_resources(entry, ext)
        elif entry.is_file() and discover.has_extension(entry.name, ext):
            yield entry
