import pathlib

import pytest

pytest_plugins = [
    'pytester',
    'sqload.pytest_plugin',
]


@pytest.fixture(scope='session')
def static_dir() -> pathlib.Path:
    return pathlib.Path(__file__).parent / 'static'


@pytest.fixture
def write_sql(tmp_path):
    def _write_sql(relpath, content, *, newline=None):
        path = tmp_path / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open('w', encoding='utf-8', newline=newline) as fp:
            fp.write(content)
        return path

    return _write_sql
