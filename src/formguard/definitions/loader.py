"""Load form definitions from YAML files."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from formguard.errors import FormDefinitionError, RuleDefinitionError
from formguard.registry import register_builtin_rules
from formguard.rules import FieldRules

logger = logging.getLogger(__name__)


@dataclass
class FormFieldDefinition:
    name: str
    label: str
    initial: str = ""
    rules: FieldRules = field(default_factory=FieldRules)
    validation: dict[str, Any] = field(default_factory=dict)  # raw descriptor, as written


@dataclass
class FormDefinition:
    name: str
    display_name: str
    fields: list[FormFieldDefinition]
    source: Path | None = None

    @property
    def rules(self) -> dict[str, FieldRules]:
        return {f.name: f.rules for f in self.fields}

    @property
    def initial_values(self) -> dict[str, str]:
        return {f.name: f.initial for f in self.fields if f.initial}

    def get_field(self, name: str) -> FormFieldDefinition | None:
        for f in self.fields:
            if f.name == name:
                return f
        return None


class FormLoader:
    """Loads form definitions from ``*.yaml`` files in one directory.

    Built-in custom rules are registered on construction; application rules
    must be registered before ``load_all()``.
    """

    def __init__(self, forms_path: Path):
        self.forms_path = forms_path
        self.forms: dict[str, FormDefinition] = {}
        register_builtin_rules()

    def load_all(self) -> None:
        """Load every form definition under ``forms_path``.

        Raises:
            FormDefinitionError: If a file is malformed or two files declare the same form
        """
        if not self.forms_path.exists():
            logger.warning("Forms directory does not exist: %s", self.forms_path)
            return

        for yaml_file in sorted(self.forms_path.glob("*.yaml")):
            form = self.load_file(yaml_file)
            if form.name in self.forms:
                raise FormDefinitionError(
                    f"Duplicate form '{form.name}' declared in both "
                    f"'{self.forms[form.name].source}' and '{yaml_file}'"
                )
            self.forms[form.name] = form

        logger.debug("Loaded %d form definition(s) from %s", len(self.forms), self.forms_path)

    def load_file(self, yaml_file: Path) -> FormDefinition:
        """Parse and resolve a single definition file without registering it."""
        try:
            with open(yaml_file) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise FormDefinitionError(f"{yaml_file}: YAML parse error: {e}") from e

        if not isinstance(data, dict) or "form" not in data:
            raise FormDefinitionError(f"{yaml_file}: missing top-level 'form' key")

        form = self._resolve_form(data, yaml_file)
        form.source = yaml_file
        return form

    def _resolve_form(self, data: dict, yaml_file: Path) -> FormDefinition:
        """Resolve a form definition into typed fields and parsed rules."""
        name = data["form"]
        raw_fields = data.get("fields") or []
        if not isinstance(raw_fields, list):
            raise FormDefinitionError(f"{yaml_file}: form '{name}' 'fields' must be a list")

        fields: list[FormFieldDefinition] = []
        seen: set[str] = set()
        for raw in raw_fields:
            form_field = self._resolve_field(raw, name, yaml_file)
            if form_field.name in seen:
                raise FormDefinitionError(
                    f"{yaml_file}: form '{name}' declares field '{form_field.name}' twice"
                )
            seen.add(form_field.name)
            fields.append(form_field)

        return FormDefinition(
            name=name,
            display_name=data.get("displayName", self._to_display_name(name)),
            fields=fields,
        )

    def _resolve_field(self, data: Any, form_name: str, yaml_file: Path) -> FormFieldDefinition:
        """Convert a field dict to FormFieldDefinition."""
        if not isinstance(data, dict) or not data.get("name"):
            raise FormDefinitionError(
                f"{yaml_file}: every field of form '{form_name}' needs a 'name'"
            )
        name = data["name"]

        validation = data.get("validation") or {}
        try:
            rules = FieldRules.from_dict(validation)
        except RuleDefinitionError as e:
            raise FormDefinitionError(
                f"{yaml_file}: form '{form_name}', field '{name}': {e}"
            ) from e

        initial = data.get("initial")
        return FormFieldDefinition(
            name=name,
            label=data.get("label", self._to_display_name(name)),
            initial="" if initial is None else str(initial),
            rules=rules,
            validation=dict(validation),
        )

    def _to_display_name(self, name: str) -> str:
        """Convert camelCase to Title Case."""
        result = []
        for i, char in enumerate(name):
            if char.isupper() and i > 0:
                result.append(" ")
            result.append(char)
        return "".join(result).title()

    def get_form(self, name: str) -> FormDefinition | None:
        """Get a loaded form by name."""
        return self.forms.get(name)

    def list_forms(self) -> list[str]:
        """List all form names."""
        return list(self.forms.keys())
