"""Forks — personality-driven branching life simulation."""

from forks.personality.traits import TraitEngine
from forks.simulation.engine import LifeSimEngine

__all__ = ["TraitEngine", "LifeSimEngine"]
