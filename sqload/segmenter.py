"""Split SQL text into named statements.

Statements are introduced by a marker comment::

    -- query: FindUserById
    -- Finds a user by its id.
    SELECT * FROM user WHERE id = :id;

Text before the first marker is ignored. Comment lines inside a statement
are dropped from its body.
"""

import functools
import logging
import re
import typing

from . import annotations
from . import exceptions

logger = logging.getLogger(__name__)

DEFAULT_MARKER = '-- query:'

QUERY_NAME_RE = re.compile(r'^[a-zA-Z0-9_]+$')
COMMENT_LINE_RE = re.compile(r'^[ \t\n\r\f\v]*--')
NEWLINE_RE = re.compile(r'\r?\n')


@functools.lru_cache(maxsize=None)
def marker_pattern(marker: str = DEFAULT_MARKER) -> re.Pattern:
    """Return compiled splitter for ``marker``.

    Whitespace before the marker stays in the previous piece, which is
    stripped or discarded anyway.
    """
    if not marker:
        raise ValueError('Query marker must not be empty')
    return re.compile(re.escape(marker))


def is_valid_query_name(name: str) -> bool:
    return QUERY_NAME_RE.fullmatch(name) is not None


def is_comment_line(line: str) -> bool:
    return COMMENT_LINE_RE.match(line) is not None


def extract_sql(lines: typing.Iterable[str]) -> str:
    """Join ``lines`` with newlines skipping SQL comment lines."""
    return '\n'.join(line for line in lines if not is_comment_line(line))


def extract_query_map(
        text: str,
        *,
        marker: str = DEFAULT_MARKER,
        strict: bool = False,
) -> annotations.QueryMap:
    """Extract named queries from ``text``.

    :param text: SQL source with ``-- query: Name`` markers.
    :param marker: statement marker, ``-- query:`` by default.
    :param strict: raise :py:class:`DuplicateQueryError` when a name is
        declared more than once instead of keeping the last declaration.
    :returns: dictionary mapping query name to its SQL code.
    :raises InvalidQueryNameError: some marker is followed by a name that
        is empty or contains characters other than ``[a-zA-Z0-9_]``.
    """
    queries: annotations.QueryMap = {}
    raw_queries = marker_pattern(marker).split(text)
    if len(raw_queries) <= 1:
        return queries
    for raw_query in raw_queries[1:]:
        # First line is the rest of the marker line.
        lines = NEWLINE_RE.split(raw_query.rstrip())
        name = lines[0].strip()
        if not is_valid_query_name(name):
            raise exceptions.InvalidQueryNameError(name)
        if strict and name in queries:
            raise exceptions.DuplicateQueryError(name)
        queries[name] = extract_sql(lines[1:])
    logger.debug('Extracted %d queries', len(queries))
    return queries
