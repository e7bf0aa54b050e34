from .user_model import User, UserFavorite

__all__ = ["User", "UserFavorite"]
