"""Prompt templates for recipe and image generation.

Templates live in ``generation_prompts.json`` next to this module as a flat
``{name: template}`` object. Placeholders use ``str.format`` syntax.
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

PROMPTS_FILE = "generation_prompts.json"


class PromptLoader:
    """Reads and caches the generation prompt templates."""

    def __init__(self, prompts_dir: Optional[str] = None):
        """Create a loader.

        Args:
            prompts_dir: Directory holding the templates file. Defaults to
                this package's directory.
        """
        base = Path(prompts_dir) if prompts_dir else Path(__file__).parent
        self.prompts_file = base / PROMPTS_FILE
        self._templates: Optional[Dict[str, str]] = None

    def load_generation_prompts(self) -> Dict[str, str]:
        """Return all templates, reading the file on first use.

        Raises:
            FileNotFoundError: If the templates file is missing.
        """
        if self._templates is None:
            if not self.prompts_file.is_file():
                raise FileNotFoundError(
                    f"Generation prompts file not found: {self.prompts_file}"
                )
            self._templates = json.loads(
                self.prompts_file.read_text(encoding="utf-8")
            )
            logger.debug(
                f"Loaded {len(self._templates)} prompt templates "
                f"from {self.prompts_file}"
            )
        return self._templates

    def template_names(self) -> List[str]:
        return sorted(self.load_generation_prompts())

    def render(self, name: str, **values: str) -> str:
        """Fill in a named template.

        Raises:
            KeyError: If no template with that name exists.
        """
        templates = self.load_generation_prompts()
        try:
            template = templates[name]
        except KeyError:
            raise KeyError(f"Unknown prompt template: {name}") from None
        return template.format(**values)

    def reload_prompts(self) -> None:
        """Drop the cache so the next access re-reads the file."""
        self._templates = None


prompt_loader = PromptLoader()
