from .base import Recipe, RecipeLoader, recipe_from_dict
from .bash import BashRecipeLoader
from .document import DocumentRecipeLoader, load_recipe_file

__all__ = [
    "Recipe",
    "RecipeLoader",
    "recipe_from_dict",
    "BashRecipeLoader",
    "DocumentRecipeLoader",
    "load_recipe_file",
]
