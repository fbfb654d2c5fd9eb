"""
Central configuration constants for station simulation.

Defines default values, thresholds, and configuration parameters
used across multiple modules. The data pack overrides the generation
and timing values per world.
"""

# ============================================================================
# Station Generation
# ============================================================================

# Default station footprint (tiles)
STATION_WIDTH_DEFAULT = 21
STATION_HEIGHT_DEFAULT = 13

# Probability that a cell starts as floor before smoothing
FLOOR_PROBABILITY_DEFAULT = 0.70

# Cellular smoothing passes applied after the random fill
SMOOTHING_PASSES_DEFAULT = 2

# A tile with fewer neighbors than this is removed during smoothing
SMOOTHING_MIN_NEIGHBORS = 2

# An empty cell with exactly this many neighbors gains a floor during smoothing
SMOOTHING_BIRTH_NEIGHBORS = 3

# World units per tile edge
TILE_WIDTH_DEFAULT = 30.0


# ============================================================================
# Pathfinding
# ============================================================================

# Integer cost multiplier per tile step (keeps the heap on integers)
PATH_COST_SCALE = 1000

# Reconstruction steps before a path is treated as unreachable
PATH_SEARCH_LIMIT = 10000


# ============================================================================
# Inhabitant Needs
# ============================================================================

NEED_MAX = 100          # hunger / thirst ceiling
HEALTH_MAX = 100        # starting and maximum health
NEED_THRESHOLD = 0.5    # wants_* at or above this triggers eat / drink
NEED_PER_TILE = 1       # hunger and thirst added per tile walked
STARVATION_DAMAGE = 1   # health lost when a need is maxed out


# ============================================================================
# Movement
# ============================================================================

# Seconds to ease from one tile to the next
SECONDS_PER_TILE_DEFAULT = 2.0


# ============================================================================
# Item Defaults
# ============================================================================

# Fallback item stats when the data pack catalog has no entry for a variant
ITEM_DEFAULTS = {
    'energy_bar': {'energy': 10, 'hydration': 0},
    'meal_ready_to_eat': {'energy': 50, 'hydration': 0},
    'water': {'energy': 0, 'hydration': 10},
    'coffee': {'energy': 3, 'hydration': 8},
    'fridge': {'capacity': 10, 'stock': ['energy_bar', 'water']},
    'locker': {'capacity': 10},
}

CONTAINER_CAPACITY_DEFAULT = 10


# ============================================================================
# Crew
# ============================================================================

CREW_COUNT_DEFAULT = 3


# ============================================================================
# Simulation Timing
# ============================================================================

# Fixed step (seconds), matches a 60 Hz update loop
TICK_DELTA_SECONDS_DEFAULT = 1.0 / 60.0

# Tick timing window for rolling average
TICK_TIME_WINDOW = 100  # Number of ticks to average

# Default tick summary interval (print every N ticks)
TICK_SUMMARY_INTERVAL = 600

# Inhabitant events kept in memory
EVENT_LOG_LIMIT = 1000


# ============================================================================
# Persistence
# ============================================================================

SAVE_FORMAT_VERSION = 1
SAVE_NAME_FORMAT = "%Y-%m-%d %H-%M-%S.%f"
