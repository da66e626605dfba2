import dataclasses
import typing

import pytest

from sqload import binder
from sqload import exceptions


@dataclasses.dataclass
class UserQueries:
    find_user_by_id: str = binder.query_field('FindUserById')
    delete_user_by_id: str = binder.query_field('DeleteUserById')
    comment: str = 'untagged'


@dataclasses.dataclass(frozen=True)
class FrozenQueries:
    find_user_by_id: str = binder.query_field('FindUserById')


@dataclasses.dataclass
class WrongTypeQueries:
    find_user_by_id: str = binder.query_field('FindUserById')
    limit: int = binder.query_field('Limit', default=0)


@dataclasses.dataclass
class DuplicateTagQueries:
    first: str = binder.query_field('A')
    second: str = binder.query_field('A')


QUERIES = {
    'FindUserById': 'SELECT *\n  FROM user\n WHERE id = :id;',
    'DeleteUserById': 'DELETE FROM user WHERE id = :id;',
    'Limit': 'LIMIT 10',
}


def test_query_field_metadata():
    field = dataclasses.fields(UserQueries)[0]
    assert field.metadata['query'] == 'FindUserById'
    assert field.default == ''


def test_query_field_keeps_metadata():
    field = binder.query_field('A', metadata={'doc': 'x'})
    assert dict(field.metadata) == {'doc': 'x', 'query': 'A'}


def test_tagged_fields():
    assert binder.tagged_fields(UserQueries()) == [
        ('find_user_by_id', 'FindUserById'),
        ('delete_user_by_id', 'DeleteUserById'),
    ]


def test_load_queries_into():
    queries = UserQueries()
    binder.load_queries_into(QUERIES, queries)
    assert queries.find_user_by_id == QUERIES['FindUserById']
    assert queries.delete_user_by_id == QUERIES['DeleteUserById']
    assert queries.comment == 'untagged'


def test_body_is_copied_verbatim():
    body = '\n\n  SELECT 1;\n\n'
    queries = UserQueries()
    binder.load_queries_into(
        {'FindUserById': body, 'DeleteUserById': ''}, queries,
    )
    assert queries.find_user_by_id == body
    assert queries.delete_user_by_id == ''


def test_query_not_found():
    with pytest.raises(exceptions.QueryNotFoundError) as exc:
        binder.load_queries_into({'FindUserById': 'X'}, UserQueries())
    assert exc.value.name == 'DeleteUserById'


def test_query_not_found_single_field():
    @dataclasses.dataclass
    class Queries:
        b: str = binder.query_field('B')

    with pytest.raises(exceptions.QueryNotFoundError) as exc:
        binder.load_queries_into({'A': 'X'}, Queries())
    assert exc.value.name == 'B'
    assert "'B'" in str(exc.value)


@pytest.mark.parametrize(
    'target',
    [None, UserQueries, {'FindUserById': ''}, 'text', object()],
)
def test_not_a_struct(target):
    with pytest.raises(exceptions.NotAStructError):
        binder.load_queries_into(QUERIES, target)


def test_frozen_dataclass():
    with pytest.raises(exceptions.FieldNotAssignableError) as exc:
        binder.load_queries_into(QUERIES, FrozenQueries())
    assert exc.value.field_name == 'find_user_by_id'


def test_wrong_field_type_leaves_partial_result():
    queries = WrongTypeQueries()
    with pytest.raises(exceptions.FieldNotAssignableError) as exc:
        binder.load_queries_into(QUERIES, queries)
    assert exc.value.field_name == 'limit'
    assert queries.find_user_by_id == QUERIES['FindUserById']
    assert queries.limit == 0


def test_optional_str_is_not_assignable():
    @dataclasses.dataclass
    class Queries:
        a: typing.Optional[str] = binder.query_field('A', default=None)

    with pytest.raises(exceptions.FieldNotAssignableError):
        binder.load_queries_into({'A': 'X'}, Queries())


def test_duplicate_tags_last_field_wins():
    queries = DuplicateTagQueries()
    binder.load_queries_into({'A': 'X'}, queries)
    assert queries.first == ''
    assert queries.second == 'X'


def test_no_tagged_fields():
    @dataclasses.dataclass
    class Plain:
        name: str = ''

    plain = Plain()
    binder.load_queries_into({}, plain)
    assert plain.name == ''


def test_bind_setters():
    received = []
    binder.bind_setters(
        QUERIES,
        [
            ('DeleteUserById', received.append),
            ('FindUserById', received.append),
        ],
    )
    assert received == [QUERIES['DeleteUserById'], QUERIES['FindUserById']]


def test_bind_setters_not_found():
    received = []
    with pytest.raises(exceptions.QueryNotFoundError) as exc:
        binder.bind_setters(
            QUERIES, [('Limit', received.append), ('Missing', received.append)],
        )
    assert exc.value.name == 'Missing'
    assert received == ['LIMIT 10']


def test_build_queries():
    queries = binder.build_queries(UserQueries, QUERIES)
    assert isinstance(queries, UserQueries)
    assert queries.delete_user_by_id == QUERIES['DeleteUserById']


@pytest.mark.parametrize('cls', [dict, UserQueries(), None])
def test_build_queries_not_a_dataclass(cls):
    with pytest.raises(exceptions.NotAStructError):
        binder.build_queries(cls, QUERIES)


def test_build_queries_required_fields():
    @dataclasses.dataclass
    class Queries:
        conn: str
        find_user_by_id: str = dataclasses.field(
            metadata={'query': 'FindUserById'},
        )
        delete_user_by_id: str = binder.query_field('DeleteUserById')

    with pytest.raises(exceptions.NotAStructError) as exc:
        binder.build_queries(Queries, QUERIES)
    assert 'conn, find_user_by_id' in str(exc.value)


def test_build_queries_default_factory_and_no_init():
    @dataclasses.dataclass
    class Queries:
        find_user_by_id: str = binder.query_field('FindUserById')
        cache: dict = dataclasses.field(default_factory=dict)
        computed: str = dataclasses.field(init=False, default='')

    queries = binder.build_queries(Queries, QUERIES)
    assert queries.find_user_by_id == QUERIES['FindUserById']
    assert queries.cache == {}
