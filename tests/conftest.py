import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.services.automaton import Automaton
from app.services.filter_registry import FilterRegistry
from app.services.sensitive_filter import SensitiveFilter


@pytest.fixture
def make_filter():
    def _make(*keywords, **kwargs):
        return SensitiveFilter(Automaton.from_keywords(keywords), **kwargs)
    return _make


@pytest.fixture
def keyword_file(tmp_path):
    path = tmp_path / "sensitive-words.txt"
    path.write_text("赌博\n  开发票  \n\nabc\n", encoding="utf-8")
    return path


@pytest.fixture
def client(keyword_file):
    original = app.state.registry
    app.state.registry = FilterRegistry(keyword_file)
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.state.registry = original
