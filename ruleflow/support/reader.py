"""Readers turning YAML and JSON descriptors into RuleDefinition records."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, TextIO, Union

import yaml
from pydantic import ValidationError

from ruleflow.core.errors import RuleDefinitionError

from .schemas import RuleDefinition

DescriptorSource = Union[str, Path, TextIO]


class RuleDefinitionReader:
    """Base reader.

    ``read`` accepts descriptor text, a ``Path`` to a descriptor file, or an
    open text stream, and returns the definitions in document order.
    """

    def read(self, source: DescriptorSource) -> list[RuleDefinition]:
        text = self._text(source)
        if not text.strip():
            return []

        definitions = []
        for document in self._load(text):
            if document is None:
                continue
            items = document if isinstance(document, list) else [document]
            definitions.extend(self.create_definition(item) for item in items)
        return definitions

    def read_file(self, path: str | Path) -> list[RuleDefinition]:
        """Read definitions from a descriptor file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Rule descriptor not found: {path}")
        return self.read(path)

    def create_definition(self, data: Any) -> RuleDefinition:
        """Validate one raw descriptor mapping."""
        if not isinstance(data, dict):
            raise RuleDefinitionError(f"Rule descriptor must be a mapping, got {type(data).__name__}")
        try:
            return RuleDefinition.model_validate(data)
        except ValidationError as e:
            messages = "; ".join(error["msg"].removeprefix("Value error, ") for error in e.errors())
            raise RuleDefinitionError(messages) from e

    def _load(self, text: str) -> Iterable[Any]:
        raise NotImplementedError

    def _text(self, source: DescriptorSource) -> str:
        if isinstance(source, Path):
            return source.read_text(encoding="utf-8")
        if isinstance(source, str):
            return source
        return source.read()


class YamlRuleDefinitionReader(RuleDefinitionReader):
    """Reads YAML descriptors; documents are separated by ``---``."""

    def _load(self, text: str) -> Iterable[Any]:
        try:
            return list(yaml.safe_load_all(text))
        except yaml.YAMLError as e:
            raise RuleDefinitionError(f"Invalid YAML rule descriptor: {e}") from e


class JsonRuleDefinitionReader(RuleDefinitionReader):
    """Reads JSON descriptors holding one rule object or an array of rules."""

    def _load(self, text: str) -> Iterable[Any]:
        try:
            return [json.loads(text)]
        except json.JSONDecodeError as e:
            raise RuleDefinitionError(f"Invalid JSON rule descriptor: {e}") from e


def reader_for(path: str | Path) -> RuleDefinitionReader:
    """Pick a reader from a descriptor file extension."""
    suffix = Path(path).suffix.lower()
    if suffix in (".yaml", ".yml"):
        return YamlRuleDefinitionReader()
    if suffix == ".json":
        return JsonRuleDefinitionReader()
    raise RuleDefinitionError(f"Unsupported rule descriptor format: {path}")
