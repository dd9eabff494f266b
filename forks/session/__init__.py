from .core import LifeSession

__all__ = ["LifeSession"]
