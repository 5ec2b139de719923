from __future__ import annotations

import json
from pathlib import Path

import pytest

from vocabduel.engine.match import MatchConfig
from vocabduel.paths import get_paths
from vocabduel.services.content import ContentError, ContentService


def _content() -> ContentService:
    paths = get_paths()
    return ContentService(paths.data_dir, paths.schema_dir)


def _write(path: Path, obj: object) -> Path:
    path.write_text(json.dumps(obj, ensure_ascii=False), encoding="utf-8")
    return path


def test_content_schemas_validate() -> None:
    _content().validate_all()


def test_builtin_lists_parse() -> None:
    lists = _content().load_builtin_lists()
    assert {"fruits", "animals", "school"} <= set(lists)
    school = lists["school"]
    assert school.name == "At School"
    assert len(school.words) == 4
    assert school.words[0].word == "book"


def test_bundled_rules_match_defaults() -> None:
    assert _content().load_rules() == MatchConfig()


def test_user_list_loads(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "list.json",
        {
            "id": "colors",
            "name": "Colors",
            "created_at": 1700000000000,
            "words": [{"id": "red", "word": "red", "meaning": "红色"}],
        },
    )
    vl = _content().load_vocab_list(path)
    assert vl.id == "colors"
    assert vl.created_at == 1700000000000
    assert vl.words[0].meaning == "红色"


def test_empty_word_rejected(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "bad.json",
        {"id": "x", "name": "X", "words": [{"id": "a", "word": "", "meaning": "b"}]},
    )
    with pytest.raises(ContentError, match="Schema validation failed"):
        _content().load_vocab_list(path)


def test_empty_list_rejected(tmp_path: Path) -> None:
    path = _write(tmp_path / "empty.json", {"id": "x", "name": "X", "words": []})
    with pytest.raises(ContentError):
        _content().load_vocab_list(path)


def test_duplicate_word_ids_rejected(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "dup.json",
        {
            "id": "x",
            "name": "X",
            "words": [
                {"id": "a", "word": "one", "meaning": "1"},
                {"id": "a", "word": "two", "meaning": "2"},
            ],
        },
    )
    with pytest.raises(ContentError, match="Duplicate word id"):
        _content().load_vocab_list(path)


def test_missing_and_broken_files(tmp_path: Path) -> None:
    with pytest.raises(ContentError, match="Missing content file"):
        _content().load_vocab_list(tmp_path / "nope.json")
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(ContentError, match="Invalid JSON"):
        _content().load_vocab_list(broken)
