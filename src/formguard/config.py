"""Configuration for locating form definitions."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass
class FormsConfig:
    """Where YAML form definitions are read from."""

    forms_path: Path

    @classmethod
    def from_env(cls, base_path: Path | None = None) -> FormsConfig:
        """Create config from environment variables.

        Resolution order:
        1. FORMGUARD_FORMS_PATH env var
        2. {base_path}/forms
        3. Default: ./forms relative to the current working directory
        """
        forms_path = os.environ.get("FORMGUARD_FORMS_PATH")
        if forms_path:
            return cls(forms_path=Path(forms_path))

        if base_path:
            return cls(forms_path=base_path / "forms")

        return cls(forms_path=Path.cwd() / "forms")
