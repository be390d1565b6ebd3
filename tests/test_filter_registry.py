import logging

import pytest

from app.errors import KeywordLoadError
from app.services.filter_registry import FilterRegistry


def test_current_loads_lazily_and_is_cached(keyword_file):
    registry = FilterRegistry(keyword_file)

    first = registry.current()
    assert first is registry.current()
    assert first.filter("我要开-发-票") == "我要***"


def test_missing_source_falls_back_to_identity(tmp_path, caplog):
    registry = FilterRegistry(tmp_path / "missing.txt")

    with caplog.at_level(logging.ERROR):
        assert registry.filter_content("赌博") == "赌博"
    assert "Keyword load failed" in caplog.text
    assert registry.current().automaton.is_empty


def test_reload_swaps_in_new_keywords(keyword_file):
    registry = FilterRegistry(keyword_file)
    old = registry.current()

    keyword_file.write_text("hello\n", encoding="utf-8")
    new = registry.reload()

    assert new is not old
    assert registry.current() is new
    assert registry.filter_content("hello 赌博") == "*** 赌博"
    # a filter already handed out keeps its own automaton
    assert old.filter("hello 赌博") == "hello ***"


def test_failed_reload_keeps_previous_filter(keyword_file):
    registry = FilterRegistry(keyword_file)
    old = registry.current()

    keyword_file.unlink()
    with pytest.raises(KeywordLoadError):
        registry.reload()

    assert registry.current() is old


def test_replace_with_in_memory_keywords(keyword_file):
    registry = FilterRegistry(keyword_file, mask="#")

    registry.replace(["foo", ""])

    assert registry.filter_content("foo abc") == "# abc"
    assert len(registry.current().automaton) == 1


def test_failed_first_load_marks_registry_degraded(tmp_path):
    path = tmp_path / "words.txt"
    registry = FilterRegistry(path)

    registry.current()
    assert registry.degraded
    assert "words.txt" in registry.load_error

    path.write_text("赌博\n", encoding="utf-8")
    registry.reload()

    assert not registry.degraded
    assert registry.load_error is None
    assert registry.filter_content("赌博") == "***"


def test_reload_builds_while_holding_reload_lock(keyword_file, monkeypatch):
    import app.services.filter_registry as filter_registry

    registry = FilterRegistry(keyword_file)
    real_build = filter_registry.build_automaton
    held = []

    def build(path):
        held.append(registry._reload_lock.locked())
        return real_build(path)

    monkeypatch.setattr(filter_registry, "build_automaton", build)

    registry.reload()
    assert held == [True]
    assert not registry._reload_lock.locked()


def test_concurrent_reloads_install_in_build_order(keyword_file, monkeypatch):
    import threading

    import app.services.filter_registry as filter_registry

    registry = FilterRegistry(keyword_file)
    real_build = filter_registry.build_automaton
    first_started = threading.Event()
    release_first = threading.Event()

    def build(path):
        automaton = real_build(path)
        if not first_started.is_set():
            # stall the first reload after it has read the old file
            first_started.set()
            release_first.wait(timeout=5)
        return automaton

    monkeypatch.setattr(filter_registry, "build_automaton", build)

    worker = threading.Thread(target=registry.reload)
    worker.start()
    assert first_started.wait(timeout=5)

    keyword_file.write_text("newer\n", encoding="utf-8")
    second = threading.Thread(target=registry.reload)
    second.start()
    release_first.set()
    worker.join(timeout=5)
    second.join(timeout=5)

    assert registry.filter_content("newer") == "***"
