"""Constants for datepoll.

This module centralizes all magic numbers and default values used throughout the parser.
"""

# Tier escalation thresholds
LOCAL_CONFIDENCE_THRESHOLD = 0.85
LLM_CONFIDENCE_THRESHOLD = 0.7

# Heuristic confidence assigned to local parse results
LOCAL_CONFIDENCE_FULL = 0.9  # well-formed title and at least one date
LOCAL_CONFIDENCE_DATES_ONLY = 0.7
LOCAL_CONFIDENCE_NONE = 0.0

# Title bounds
MIN_TITLE_LENGTH = 3
MAX_TITLE_LENGTH = 100
FALLBACK_TITLE_WORDS = 5

# Date option bounds
MAX_DATES = 50

# Fallback tier input limit
MAX_LLM_INPUT_LENGTH = 200
