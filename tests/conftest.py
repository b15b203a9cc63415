import pytest

from loganalyze.config import Config


@pytest.fixture
def config():
    return Config(environ={})


@pytest.fixture
def write_yaml(tmp_path):
    """Write text to a temp YAML file and return its path."""
    def _write(text, name="config.yml"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)
    return _write
