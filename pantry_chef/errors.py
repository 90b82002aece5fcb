class PantryChefError(Exception):
    """Base class for errors raised by pantry_chef."""


class NoIngredientsError(PantryChefError, ValueError):
    def __init__(self, message: str = "Please provide at least one ingredient"):
        super().__init__(message)


class DuplicateRecipeError(PantryChefError):
    def __init__(self, name: str):
        super().__init__(f"Recipe with name {name!r} already exists")
        self.name = name


class FavoriteExistsError(PantryChefError):
    def __init__(self, user_id: str, recipe_id: str):
        super().__init__(f"Recipe {recipe_id} is already a favorite of {user_id}")
        self.user_id = user_id
        self.recipe_id = recipe_id
