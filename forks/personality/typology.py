"""
Categorical overlays derived from the continuous OCEAN vector.

Pure functions over a trait mapping (O, C, E, A, N on a 0-100 scale).
Nothing here claims psychometric validity; these are narrative labels.
"""

from __future__ import annotations

from typing import Mapping

from forks.config.constants import (
    ENNEAGRAM_DESCRIPTIONS,
    MBTI_DESCRIPTIONS,
    MBTI_FALLBACK,
    TRAIT_MIDPOINT,
)


def derive_mbti(ocean: Mapping[str, float]) -> str:
    """Threshold four dimensions at the midpoint. A value exactly at 50 picks the first letter."""
    e_i = "E" if ocean["E"] >= TRAIT_MIDPOINT else "I"
    s_n = "N" if ocean["O"] >= TRAIT_MIDPOINT else "S"
    t_f = "F" if ocean["A"] >= TRAIT_MIDPOINT else "T"
    j_p = "J" if ocean["C"] >= TRAIT_MIDPOINT else "P"
    return e_i + s_n + t_f + j_p


def describe_mbti(code: str) -> str:
    return MBTI_DESCRIPTIONS.get(code, MBTI_FALLBACK)


def enneagram_scores(ocean: Mapping[str, float]) -> dict[int, float]:
    """Nine linear blends of the trait vector, keyed by type number 1-9."""
    o, c, e, a, n = ocean["O"], ocean["C"], ocean["E"], ocean["A"], ocean["N"]
    return {
        1: c * 1.5 + (100 - a) * 0.5 - o * 0.3,          # Perfectionist
        2: a * 1.5 + e * 0.5 + n * 0.3,                   # Helper
        3: c * 1.0 + e * 1.0 + (100 - a) * 0.5,           # Achiever
        4: o * 1.0 + n * 1.0 + (100 - e) * 0.5,           # Individualist
        5: o * 1.0 + (100 - e) * 1.0 + (100 - a) * 0.5,   # Investigator
        6: n * 1.0 + a * 0.5 + c * 0.5,                   # Loyalist
        7: o * 1.0 + e * 1.0 + (100 - n) * 0.5,           # Enthusiast
        8: e * 1.0 + (100 - a) * 1.0 + (100 - n) * 0.5,   # Challenger
        9: a * 1.0 + (100 - n) * 1.0 + (100 - c) * 0.3,   # Peacemaker
    }


def derive_enneagram(ocean: Mapping[str, float]) -> int:
    """Highest-scoring type; on a tie the lowest type number wins."""
    best_type, best_score = 0, float("-inf")
    for type_id, score in sorted(enneagram_scores(ocean).items()):
        if score > best_score:
            best_type, best_score = type_id, score
    return best_type


def describe_enneagram(type_id: int) -> str:
    return ENNEAGRAM_DESCRIPTIONS.get(type_id, f"Type {type_id}")


def trait_level(value: float) -> str:
    if value < 25: return "Very Low"
    if value < 40: return "Low"
    if value < 60: return "Moderate"
    if value < 75: return "High"
    return "Very High"
