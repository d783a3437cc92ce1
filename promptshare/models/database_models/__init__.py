from promptshare.models.database_models.user import User
from promptshare.models.database_models.category import Category
from promptshare.models.database_models.prompt import Prompt, PromptVisibility
from promptshare.models.database_models.vote import Vote

__all__ = [
    "User",
    "Category",
    "Prompt",
    "PromptVisibility",
    "Vote",
]
