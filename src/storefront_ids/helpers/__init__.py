from .store import store_access

__all__ = ["store_access"]
