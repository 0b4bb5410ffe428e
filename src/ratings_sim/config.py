"""Static development configuration constants."""

# Bootstrap trials per potential estimate. Higher is more accurate, but slower.
NUM_SIMULATIONS = 20
POTENTIAL_PERCENTILE = 0.75

# No further growth is modeled past this age.
POTENTIAL_CEILING_AGE = 29

WEIGHT_STEP_LIMIT = 10

NUM_TEAMS = 30
DEFAULT_COACHING_RANK = (NUM_TEAMS + 1) / 2

UNDRAFTED_TID = -2
FREE_AGENT_TID = -1

# Return specialists are never a player's main position.
BANNED_PRIMARY_POSITIONS: frozenset[str] = frozenset({"KR", "PR"})

PLAYER_BIRTH_ORIGINS: tuple[tuple[str, float], ...] = (
    ("USA", 0.62),
    ("Canada", 0.07),
    ("Australia", 0.04),
    ("France", 0.04),
    ("Serbia", 0.03),
    ("Spain", 0.03),
    ("Germany", 0.03),
    ("Nigeria", 0.03),
    ("Brazil", 0.02),
    ("Lithuania", 0.02),
    ("Greece", 0.02),
    ("Slovenia", 0.02),
    ("Croatia", 0.01),
    ("Mexico", 0.01),
    ("Japan", 0.01),
)
