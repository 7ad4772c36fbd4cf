from .decorator import cached

__all__ = [
    "cached",
]
