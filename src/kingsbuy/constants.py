# src/kingsbuy/constants.py
# Rule constants shared by the model and engine layers.

# Each piece type (Jack, Queen, King) has four instances.
PIECES_PER_TYPE = 4

# Cost reported once every instance of a piece type has been bought.
UNATTAINABLE_COST = 1000

# The Joker never appears among the first SAFE_DRAWS draws of a fresh deck.
SAFE_DRAWS = 14

SUITS = 4

MAX_BUDGET = 10

# Percentiles printed by the search loop.
REPORT_PERCENTILES = (25.0, 50.0, 75.0, 80.0, 90.0, 92.5, 95.0, 97.5, 99.0, 100.0)
