import pathlib
import typing

PathOrStr = typing.Union[str, pathlib.Path]

QueryMap = typing.Dict[str, str]

Setter = typing.Callable[[str], None]

T = typing.TypeVar('T')
