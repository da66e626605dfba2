"""Copy extracted queries into tagged dataclass fields.

.. code-block:: python

    @dataclasses.dataclass
    class Queries:
        find_user_by_id: str = binder.query_field('FindUserById')

    queries = Queries()
    binder.load_queries_into(query_map, queries)
"""

import dataclasses
import logging
import typing

from . import annotations
from . import exceptions

logger = logging.getLogger(__name__)

QUERY_TAG = 'query'


def query_field(name: str, **kwargs) -> typing.Any:
    """Declare dataclass field receiving query ``name``."""
    metadata = dict(kwargs.pop('metadata', None) or {})
    metadata[QUERY_TAG] = name
    kwargs.setdefault('default', '')
    return dataclasses.field(metadata=metadata, **kwargs)


def tagged_fields(target) -> typing.List[typing.Tuple[str, str]]:
    """Return ``(field_name, query_name)`` pairs of ``target``.

    Fields without query tag are skipped. When several fields share the
    same tag only the last one is kept.
    """
    fields_by_tag: typing.Dict[str, str] = {}
    for field in dataclasses.fields(target):
        tag = field.metadata.get(QUERY_TAG)
        if tag:
            fields_by_tag.pop(tag, None)
            fields_by_tag[tag] = field.name
    return [(field_name, tag) for tag, field_name in fields_by_tag.items()]


def load_queries_into(queries: annotations.QueryMap, target) -> None:
    """Assign queries to fields of dataclass instance ``target``.

    On failure ``target`` may be left partially populated.

    :raises NotAStructError: ``target`` is not a dataclass instance.
    :raises QueryNotFoundError: tagged query is missing in ``queries``.
    :raises FieldNotAssignableError: tagged field is not a mutable ``str``.
    """
    if not _is_dataclass_instance(target):
        raise exceptions.NotAStructError(
            f'{target!r} is not a dataclass instance',
        )
    frozen = target.__dataclass_params__.frozen
    hints = _field_types(type(target))
    for field_name, query_name in tagged_fields(target):
        try:
            sql = queries[query_name]
        except KeyError:
            raise exceptions.QueryNotFoundError(query_name) from None
        if frozen or hints.get(field_name) not in (str, 'str'):
            raise exceptions.FieldNotAssignableError(field_name)
        setattr(target, field_name, sql)
    logger.debug('Loaded queries into %s', type(target).__name__)


def bind_setters(
        queries: annotations.QueryMap,
        setters: typing.Iterable[typing.Tuple[str, annotations.Setter]],
) -> None:
    """Pass queries to explicitly registered setters.

    .. code-block:: python

        binder.bind_setters(query_map, [
            ('FindUserById', repo.set_find_user_sql),
        ])
    """
    for query_name, setter in setters:
        try:
            sql = queries[query_name]
        except KeyError:
            raise exceptions.QueryNotFoundError(query_name) from None
        setter(sql)


def build_queries(
        cls: typing.Type[annotations.T], queries: annotations.QueryMap,
) -> annotations.T:
    """Create ``cls`` instance and load ``queries`` into it."""
    if not isinstance(cls, type) or not dataclasses.is_dataclass(cls):
        raise exceptions.NotAStructError(f'{cls!r} is not a dataclass')
    required = _required_fields(cls)
    if required:
        raise exceptions.NotAStructError(
            f'{cls.__name__} cannot be created without arguments, '
            f'fields without defaults: {", ".join(required)}',
        )
    target = cls()
    load_queries_into(queries, target)
    return target


def _is_dataclass_instance(value) -> bool:
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def _field_types(cls) -> typing.Dict[str, typing.Any]:
    try:
        return typing.get_type_hints(cls)
    except NameError:
        # Unresolvable forward reference, fall back to raw annotations.
        return {field.name: field.type for field in dataclasses.fields(cls)}


def _required_fields(cls) -> typing.List[str]:
    return [
        field.name
        for field in dataclasses.fields(cls)
        if field.init
        and field.default is dataclasses.MISSING
        and field.default_factory is dataclasses.MISSING
    ]
