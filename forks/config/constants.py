"""System-wide constants — trait model, life stages, and narrative label tables."""

# ── App ───────────────────────────────────────────────────────────
APP_NAME = "Forks"
APP_VERSION = "0.1.0"

# ── Trait model (OCEAN) ───────────────────────────────────────────
TRAIT_KEYS = ["O", "C", "E", "A", "N"]

TRAIT_NAMES: dict[str, str] = {
    "O": "Openness",
    "C": "Conscientiousness",
    "E": "Extraversion",
    "A": "Agreeableness",
    "N": "Neuroticism",
}

TRAIT_MIN = 0
TRAIT_MAX = 100
TRAIT_MIDPOINT = 50
DEFAULT_TRAIT_VALUE = 50

CONFIDENCE_FLOOR = 5
DEFAULT_CONFIDENCE = 30
CONFIDENCE_STEP = 2             # Band narrows by this much per observation

STRESS_MIN = 0
STRESS_MAX = 100
DEFAULT_STRESS = 30

HIGH_TRAIT_THRESHOLD = 65
LOW_TRAIT_THRESHOLD = 35
DEFAULT_TRAJECTORY_COUNT = 5

# ── Choice probability ────────────────────────────────────────────
NEUTRAL_PROBABILITY = 0.5       # Returned for choices without weights
ALIGNMENT_BASE = 50
WEIGHT_DIVISOR = 20
STRESS_RELIEF_FACTOR = 0.2      # Stressed actors favor relief
STRESS_STRAIN_FACTOR = 0.15     # ...and avoid further strain
STRESS_STRAIN_THRESHOLD = 10
PROBABILITY_FLOOR = 10
PROBABILITY_CEILING = 90

# Checked in order, first match wins; anything else is "neutral"
ALIGNMENT_STRONG = 70
ALIGNMENT_SOMEWHAT = 55
ALIGNMENT_AGAINST = 30
ALIGNMENT_STRETCH = 45

# ── Life simulation ───────────────────────────────────────────────
START_AGE = 18
END_AGE = 75
MIN_EVENTS_BEFORE_EXHAUSTION = 5
TRAJECTORY_BIAS_TAGS = 3        # Dominant tags consulted when weighting
TRAJECTORY_MATCH_BONUS = 0.5
SELECTION_JITTER = 0.5
SHORTLIST_SIZE = 3
ANY_STAGE = "any"

# stage → (min age, max age, display label)
STAGE_TABLE: dict[str, tuple[int, int, str]] = {
    "early": (15, 25, "Early Life"),
    "mid": (26, 50, "Mid Life"),
    "later": (51, 80, "Later Life"),
}

AGE_ADVANCE: dict[str, int] = {"early": 2, "mid": 3, "later": 4}
DEFAULT_AGE_ADVANCE = 2

# ── Typology tables ───────────────────────────────────────────────
MBTI_DESCRIPTIONS: dict[str, str] = {
    "INTJ": "The Architect - Strategic and independent",
    "INTP": "The Logician - Analytical and inventive",
    "ENTJ": "The Commander - Bold and strategic",
    "ENTP": "The Debater - Clever and curious",
    "INFJ": "The Advocate - Insightful and principled",
    "INFP": "The Mediator - Empathetic and idealistic",
    "ENFJ": "The Protagonist - Charismatic and inspiring",
    "ENFP": "The Campaigner - Enthusiastic and creative",
    "ISTJ": "The Logistician - Practical and reliable",
    "ISFJ": "The Defender - Dedicated and warm",
    "ESTJ": "The Executive - Organized and logical",
    "ESFJ": "The Consul - Caring and social",
    "ISTP": "The Virtuoso - Observant and practical",
    "ISFP": "The Adventurer - Flexible and charming",
    "ESTP": "The Entrepreneur - Smart and perceptive",
    "ESFP": "The Entertainer - Spontaneous and energetic",
}
MBTI_FALLBACK = "Unique blend"

ENNEAGRAM_DESCRIPTIONS: dict[int, str] = {
    1: "Type 1: The Perfectionist - Principled, purposeful, self-controlled",
    2: "Type 2: The Helper - Generous, demonstrative, people-pleasing",
    3: "Type 3: The Achiever - Adaptable, excelling, driven",
    4: "Type 4: The Individualist - Expressive, dramatic, self-absorbed",
    5: "Type 5: The Investigator - Perceptive, innovative, isolated",
    6: "Type 6: The Loyalist - Engaging, responsible, anxious",
    7: "Type 7: The Enthusiast - Spontaneous, versatile, scattered",
    8: "Type 8: The Challenger - Self-confident, decisive, confrontational",
    9: "Type 9: The Peacemaker - Receptive, reassuring, complacent",
}

# ── Storage ───────────────────────────────────────────────────────
DB_SCHEMA_VERSION = 1
DEFAULT_SAVE_SLOT = "forks-save"

# ── CLI Colors ────────────────────────────────────────────────────
COLOR_USER = "bright_cyan"
COLOR_AGENT = "bright_green"
COLOR_SYSTEM = "bright_yellow"
COLOR_ERROR = "bright_red"
COLOR_DIM = "grey50"
COLOR_ACCENT = "magenta"
