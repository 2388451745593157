# policies.py
TIER_FREE = "free"
TIER_UNLIMITED = "unlimited"
TIERS = (TIER_FREE, TIER_UNLIMITED)

UNLIMITED = "unlimited"

# overridable per app through FREE_DAILY_LIMIT
DAILY_LIMIT = 5

MAX_INPUT_CHARS = 10000
MAX_TARGETS = 10

# sized to the generations.tone column
MAX_ID_CHARS = 64


def is_unlimited(tier: str) -> bool:
    return (tier or TIER_FREE) == TIER_UNLIMITED
