"""Personality engine — OCEAN trait vector with MBTI/Enneagram overlays."""

from .traits import TraitEngine

__all__ = ["TraitEngine"]
