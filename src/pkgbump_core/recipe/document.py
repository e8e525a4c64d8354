from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from ..errors import RecipeError
from .base import Recipe, RecipeLoader, recipe_from_dict


@dataclass
class DocumentRecipeLoader(RecipeLoader):
    """Loads the explicit recipe schema from YAML (or JSON, which YAML accepts)."""

    def load(self, text: str) -> Recipe:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise RecipeError(f"Invalid recipe document: {e}") from e
        if data is None:
            data = {}
        return recipe_from_dict(data)


def load_recipe_file(path: Path) -> Recipe:
    with path.open("r", encoding="utf-8") as f:
        return DocumentRecipeLoader().load(f.read())
