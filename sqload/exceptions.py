class BaseError(Exception):
    """Base class for errors from this package."""


class InvalidQueryNameError(BaseError):
    def __init__(self, name: str, source=None):
        self.name = name
        self.source = source
        message = f'invalid query name {name!r}'
        if source is not None:
            message += f' in {source}'
        super().__init__(message)


class DuplicateQueryError(BaseError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f'query {name!r} is declared twice')


class QueryNotFoundError(BaseError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f'could not find query {name!r}')


class NotAStructError(BaseError):
    pass


class FieldNotAssignableError(BaseError):
    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(
            f'field {field_name!r} cannot be changed or is not a string',
        )


class LoadError(BaseError):
    """Reading queries from the file system failed."""

    def __init__(self, path, reason: str):
        self.path = path
        super().__init__(f'cannot load queries from {path}: {reason}')


class MustLoadError(RuntimeError):
    """Raised by ``must_load_*`` helpers instead of returning an error."""


def __tracebackhide__(excinfo):
    return excinfo.errisinstance(BaseError)
