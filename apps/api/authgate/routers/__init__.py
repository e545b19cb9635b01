from . import auth, health  # noqa: F401

__all__ = ["auth", "health"]
