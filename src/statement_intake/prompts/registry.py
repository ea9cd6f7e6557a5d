"""Prompt template registry with variable injection and versioning."""
from __future__ import annotations
from pathlib import Path
import hashlib
import re

TEMPLATES_DIR = Path(__file__).parent / "templates"

_PLACEHOLDER = re.compile(r"\{\{\s*(\w+)\s*\}\}")


class PromptRegistry:
    """Loads Markdown prompt templates and renders ``{{placeholder}}`` variables."""

    def __init__(self, templates_dir: Path = TEMPLATES_DIR):
        self._templates_dir = templates_dir
        self._cache: dict[str, str] = {}

    def load_template(self, name: str) -> str:
        """Load a prompt template by name (e.g., 'banking_extraction')."""
        if name not in self._cache:
            path = self._templates_dir / f"{name}.md"
            if not path.exists():
                raise FileNotFoundError(f"Prompt template not found: {path}")
            self._cache[name] = path.read_text(encoding="utf-8")
        return self._cache[name]

    def render(self, template_name: str, variables: dict | None = None) -> str:
        """Render a template. Placeholders without a value are left in place."""
        template = self.load_template(template_name)
        values = {k: str(v) for k, v in (variables or {}).items()}
        return _PLACEHOLDER.sub(lambda m: values.get(m.group(1), m.group(0)), template)

    def get_version_hash(self, template_name: str) -> str:
        """Short content hash, logged alongside extractions to track prompt changes."""
        return hashlib.sha256(self.load_template(template_name).encode("utf-8")).hexdigest()[:12]
