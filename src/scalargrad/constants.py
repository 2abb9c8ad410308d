# Gradient seeded at the output node: d(output)/d(output) = 1.
SEED_GRADIENT = 1.0

# Graph listing format.
INDENT = "  "
NUMBER_FORMAT = ".2f"

# ? computation types offered by the demo harness
MULTIPLY_ADD_RECTIFY = 1
MULTIPLY_ONLY = 2
ADD_ONLY = 3
DEFAULT_COMPUTATION = MULTIPLY_ONLY

MENU = (
    "\nSelect computation type:\n"
    "1. Multiplication + Addition + ReLU\n"
    "2. Only Multiplication\n"
    "3. Only Addition"
)
