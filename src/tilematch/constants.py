# ============================================================================
# BOARD GEOMETRY
# ============================================================================
MAIN_BOARD_WIDTH = 9
MAIN_BOARD_HEIGHT = 7
# Reduced board used by the training flow.
TRAINING_BOARD_WIDTH = 5
TRAINING_BOARD_HEIGHT = 6


# ============================================================================
# MATCHING & SCORING
# ============================================================================
MIN_MATCH_LENGTH = 3
MIN_ALPHABET_SIZE = 3

# Points per match, keyed by run length (runs of 5+ use the 5 entry).
MATCH_POINTS = {
    3: 10,
    4: 20,
    5: 30,
}

# Level progress: a match fills numerator/denominator of the level bar.
MATCH_PROGRESS_NUMERATORS = {
    3: 1,
    4: 2,
    5: 3,
}
LEVEL_DENOMINATORS = {
    1: 5,
    2: 8,
    3: 10,
    4: 12,
    5: 15,
    6: 20,
    7: 25,
    8: 30,
    9: 40,
    10: 50,
}


# ============================================================================
# SAMPLING
# ============================================================================
PRIVILEGED_SYMBOL_PROBABILITY = 0.4
DOUBLE_POWERUP_PROBABILITY = 0.3


# ============================================================================
# GENERATION
# ============================================================================
GUARANTEED_MATCH_ATTEMPTS = 100
# Random cell pair swaps per scramble round.
SCRAMBLE_SWAP_COUNT = 5
# Scramble rounds before falling back to a striped stalemate layout.
NO_MATCH_SCRAMBLE_ROUNDS = 200
# Resample passes allowed when cleaning up a forced layout.
FORCED_REPAIR_PASSES = 200


# ============================================================================
# POWER-UPS
# ============================================================================
CLEAR_RADIUS = 1
