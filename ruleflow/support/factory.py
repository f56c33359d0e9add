"""
Rule factory building rules from YAML or JSON descriptors.

Descriptors look like::

    name: adult rule
    description: when age is greater than 18, then mark as adult
    priority: 1
    condition: "age > 18"
    actions:
      - "adult = true"

Composite rules declare ``compositeRuleType`` (one of UnitRuleGroup,
ConditionalRuleGroup, ActivationRuleGroup) and nested ``composingRules``.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ruleflow.core.config import get_settings
from ruleflow.core.errors import CompositeRuleError, RuleDefinitionError, RuleflowError
from ruleflow.rules import CompositeKind, CompositeRule, DefaultRule, Rule, RuleSet

from .conditions import SpecAction, SpecCondition
from .reader import DescriptorSource, RuleDefinitionReader, YamlRuleDefinitionReader, reader_for
from .schemas import RuleDefinition

logger = logging.getLogger(__name__)

RULE_FILE_SUFFIXES = (".yaml", ".yml", ".json")


class RuleFactory:
    """Creates rules from descriptors read by a RuleDefinitionReader."""

    def __init__(self, reader: RuleDefinitionReader | None = None):
        self.reader = reader or YamlRuleDefinitionReader()

    def create_rule(self, source: DescriptorSource) -> Rule:
        """Create a single rule from a descriptor holding exactly one rule."""
        definitions = self.reader.read(source)
        if len(definitions) != 1:
            raise RuleDefinitionError(
                f"Expected exactly one rule definition, got {len(definitions)}"
            )
        return self.build(definitions[0])

    def create_rules(self, source: DescriptorSource) -> RuleSet:
        """Create a RuleSet from a descriptor holding any number of rules."""
        return RuleSet(self.build(definition) for definition in self.reader.read(source))

    def build(self, definition: RuleDefinition) -> Rule:
        """Turn a validated definition into a rule."""
        if definition.is_composite():
            return self._build_composite(definition)
        if definition.composing_rules:
            raise RuleDefinitionError("Non-composite rules cannot have composing rules")

        return DefaultRule(
            name=definition.name,
            description=definition.description,
            priority=definition.priority,
            condition=SpecCondition(definition.condition),
            actions=[SpecAction(action) for action in definition.actions],
        )

    def _build_composite(self, definition: RuleDefinition) -> CompositeRule:
        if not definition.composing_rules:
            raise RuleDefinitionError("Composite rules must have composing rules specified")
        try:
            kind = CompositeKind.parse(definition.composite_rule_type)
            return CompositeRule(
                kind,
                name=definition.name,
                description=definition.description,
                # Undeclared priority falls back to the composing rules
                priority=definition.priority if "priority" in definition.model_fields_set else None,
                composing_rules=[self.build(child) for child in definition.composing_rules],
            )
        except CompositeRuleError as e:
            raise RuleDefinitionError(str(e)) from e

    def load_directory(self, path: str | Path | None = None) -> RuleSet:
        """Load every descriptor file in a directory.

        Args:
            path: Directory to scan. Defaults to ``Settings.rules_dir``.

        Returns:
            A RuleSet with the rules of every readable file. Files that fail
            to load are logged and skipped.
        """
        if path is None:
            path = get_settings().rules_dir
        if path is None:
            raise RuleDefinitionError("No rules directory given and RULEFLOW_RULES_DIR is not set")

        directory = Path(path)
        if not directory.is_dir():
            raise FileNotFoundError(f"Rules directory not found: {directory}")

        rules = RuleSet()
        for file in sorted(directory.iterdir()):
            if file.suffix.lower() not in RULE_FILE_SUFFIXES:
                continue
            try:
                definitions = reader_for(file).read_file(file)
                rules.register(*(self.build(definition) for definition in definitions))
            except (RuleflowError, OSError) as e:
                logger.warning("Failed to load rules from %s: %s", file, e)
                continue
            logger.debug("Loaded %d rule(s) from %s", len(definitions), file)
        return rules
