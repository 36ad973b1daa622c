from .identity import AccountModel

__all__ = [
    "AccountModel",
]
