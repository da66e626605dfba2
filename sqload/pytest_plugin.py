"""Pytest fixtures giving tests access to project queries.

Enable the plugin in ``conftest.py``:

.. code-block:: python

    pytest_plugins = ['sqload.pytest_plugin']

and point it to SQL directories in ``pytest.ini``::

    [pytest]
    sqload-dirs = sql
"""

import pathlib
import typing

import pytest

from . import annotations
from . import binder
from . import discover
from . import loader

_DIRS_INI_KEY = 'sqload-dirs'
_STRICT_INI_KEY = 'sqload-strict'


def pytest_addoption(parser):
    """
    :param parser: pytest's argument parser
    """
    group = parser.getgroup('sqload')
    group.addoption(
        '--sqload-dir',
        action='append',
        default=[],
        type=pathlib.Path,
        help='Directory with .sql query files, may be given multiple times',
    )
    group.addoption(
        '--sqload-strict',
        action='store_true',
        help='Fail when the same query is declared more than once',
    )
    parser.addini(
        _DIRS_INI_KEY,
        type='pathlist',
        help='directories with .sql query files',
    )
    parser.addini(
        _STRICT_INI_KEY,
        type='bool',
        default=False,
        help='fail when the same query is declared more than once',
    )


@pytest.fixture(scope='session')
def sqload_dirs(pytestconfig) -> typing.Tuple[pathlib.Path, ...]:
    """Directories scanned for queries, ini paths go first."""
    return (
        *(pathlib.Path(path) for path in pytestconfig.getini(_DIRS_INI_KEY)),
        *pytestconfig.option.sqload_dir,
    )


@pytest.fixture(scope='session')
def sqload_strict(pytestconfig) -> bool:
    return bool(
        pytestconfig.option.sqload_strict
        or pytestconfig.getini(_STRICT_INI_KEY),
    )


@pytest.fixture(scope='session')
def sqload_query_map(
        sqload_dirs: typing.Tuple[pathlib.Path, ...], sqload_strict: bool,
) -> annotations.QueryMap:
    """Queries from all ``sqload_dirs``, later directories win."""
    files: typing.List[pathlib.Path] = []
    for path in sqload_dirs:
        if not path.is_dir():
            continue
        files.extend(discover.find_files_with_ext(path))
    return loader.extract_query_map_from_files(files, strict=sqload_strict)


@pytest.fixture
def load_queries(sqload_query_map: annotations.QueryMap):
    """Build query dataclass from ``sqload_query_map``.

    .. code-block:: python

        def test_queries(load_queries):
            queries = load_queries(Queries)
            assert queries.find_user_by_id.startswith('SELECT')
    """

    def _load_queries(cls):
        return binder.build_queries(cls, sqload_query_map)

    return _load_queries
