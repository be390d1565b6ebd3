import pytest

from app.errors import KeywordLoadError
from app.services.keyword_loader import build_automaton, iter_keywords, load_keywords


def test_iter_keywords_trims_and_skips_blanks():
    lines = ["  赌博 \n", "\n", "   ", "\tabc\r\n"]
    assert list(iter_keywords(lines)) == ["赌博", "abc"]


def test_load_txt(keyword_file):
    assert load_keywords(keyword_file) == ["赌博", "开发票", "abc"]


def test_load_csv_first_column(tmp_path):
    path = tmp_path / "words.csv"
    path.write_text("赌博,gambling\n  abc ,x\n,\n六合彩,\n", encoding="utf-8")

    assert load_keywords(path) == ["赌博", "abc", "六合彩"]


def test_load_empty_csv(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("", encoding="utf-8")

    assert load_keywords(path) == []


def test_missing_file_raises_load_error(tmp_path):
    with pytest.raises(KeywordLoadError) as exc_info:
        load_keywords(tmp_path / "missing.txt")
    assert exc_info.value.path.endswith("missing.txt")


def test_invalid_utf8_raises_load_error(tmp_path):
    path = tmp_path / "bad.txt"
    path.write_bytes(b"abc\n\xff\xfe\n")

    with pytest.raises(KeywordLoadError):
        load_keywords(path)


def test_unsupported_extension(tmp_path):
    path = tmp_path / "words.json"
    path.write_text("[]", encoding="utf-8")

    with pytest.raises(KeywordLoadError, match="unsupported extension"):
        load_keywords(path)


def test_build_automaton(keyword_file):
    automaton = build_automaton(keyword_file)

    assert len(automaton) == 3
    assert automaton.transition(automaton.root, "开") is not None


def test_csv_keeps_words_pandas_would_read_as_missing(tmp_path):
    path = tmp_path / "words.csv"
    path.write_text("NA\nnull\nnan\nN/A\nNone\nabc\n", encoding="utf-8")

    assert load_keywords(path) == ["NA", "null", "nan", "N/A", "None", "abc"]
