"""YAML form definitions: loading and schema validation."""

from formguard.definitions.loader import FormDefinition, FormFieldDefinition, FormLoader
from formguard.definitions.validator import (
    ValidationIssue,
    validate_forms_dir,
    validate_yaml_file,
)

__all__ = [
    "FormDefinition",
    "FormFieldDefinition",
    "FormLoader",
    "ValidationIssue",
    "validate_forms_dir",
    "validate_yaml_file",
]
