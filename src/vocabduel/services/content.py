from __future__ import annotations

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Mapping

from jsonschema import Draft202012Validator

from vocabduel.engine.state import MatchConfig
from vocabduel.engine.types import VocabularyPair


class ContentError(RuntimeError):
    pass


def _load_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ContentError(f"Missing content file: {path}") from e
    except json.JSONDecodeError as e:
        raise ContentError(f"Invalid JSON in {path}: {e}") from e


def _load_schema(path: Path) -> object:
    return _load_json(path)


def validate_json(instance: object, schema: object, *, context: str) -> None:
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(instance), key=lambda e: [str(p) for p in e.path])
    if errors:
        lines = [f"Schema validation failed for {context}:"]
        for err in errors[:10]:
            loc = "/".join(str(p) for p in err.absolute_path)
            lines.append(f"- {loc}: {err.message}")
        raise ContentError("\n".join(lines))


def _require_str(obj: Mapping[str, object], key: str) -> str:
    v = obj.get(key)
    if not isinstance(v, str):
        raise ContentError(f"Expected string for {key}")
    return v


def _require_list(obj: Mapping[str, object], key: str) -> list[object]:
    v = obj.get(key)
    if not isinstance(v, list):
        raise ContentError(f"Expected list for {key}")
    return v


@dataclass(frozen=True)
class VocabList:
    id: str
    name: str
    words: tuple[VocabularyPair, ...]
    created_at: int | None = None


def _parse_vocab_list(raw: Mapping[str, object]) -> VocabList:
    list_id = _require_str(raw, "id")
    words: list[VocabularyPair] = []
    seen: set[str] = set()
    for item in _require_list(raw, "words"):
        if not isinstance(item, dict):
            continue
        pair = VocabularyPair(
            id=_require_str(item, "id"),
            word=_require_str(item, "word"),
            meaning=_require_str(item, "meaning"),
        )
        # Schemas can't express "unique by key", so check it here.
        if pair.id in seen:
            raise ContentError(f"Duplicate word id {pair.id!r} in list {list_id!r}")
        seen.add(pair.id)
        words.append(pair)
    created_at = raw.get("created_at")
    return VocabList(
        id=list_id,
        name=_require_str(raw, "name"),
        words=tuple(words),
        created_at=created_at if isinstance(created_at, int) else None,
    )


class ContentService:
    def __init__(self, data_dir: Path, schema_dir: Path) -> None:
        self._data_dir = data_dir
        self._schema_dir = schema_dir

    def load_vocab_list(self, path: Path) -> VocabList:
        """Load a single user-supplied vocabulary list."""
        raw = _load_json(path)
        schema = _load_schema(self._schema_dir / "vocab_list.schema.json")
        validate_json(raw, schema, context=str(path))
        if not isinstance(raw, dict):
            raise ContentError(f"{path} must be an object")
        return _parse_vocab_list(raw)

    def load_builtin_lists(self) -> dict[str, VocabList]:
        path = self._data_dir / "vocab_lists.json"
        raw = _load_json(path)
        schema = _load_schema(self._schema_dir / "vocab_lists.schema.json")
        validate_json(raw, schema, context=str(path))
        if not isinstance(raw, dict):
            raise ContentError("vocab_lists.json must be an object")

        out: dict[str, VocabList] = {}
        for item in _require_list(raw, "lists"):
            if not isinstance(item, dict):
                continue
            vl = _parse_vocab_list(item)
            if vl.id in out:
                raise ContentError(f"Duplicate list id {vl.id!r}")
            out[vl.id] = vl
        return out

    def load_rules(self) -> MatchConfig:
        path = self._data_dir / "rules.json"
        raw = _load_json(path)
        schema = _load_schema(self._schema_dir / "rules.schema.json")
        validate_json(raw, schema, context=str(path))
        if not isinstance(raw, dict):
            raise ContentError("rules.json must be an object")
        known = {f.name for f in fields(MatchConfig)}
        # Missing keys keep the dataclass defaults.
        return MatchConfig(**{k: v for k, v in raw.items() if k in known})

    def validate_all(self) -> None:
        # Load is validation (schema + parse)
        _ = self.load_builtin_lists()
        _ = self.load_rules()
