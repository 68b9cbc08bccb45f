# Ball colors in the order new levels introduce them.
PALETTE = ('red', 'blue', 'green', 'yellow', 'purple', 'orange')

# Every level keeps this many empty tubes for shuffling balls around.
WORKING_TUBES = 2

MIN_LEVEL = 1
BASE_TUBE_CAPACITY = 4
MAX_TUBE_CAPACITY = 6
MAX_COLORS = len(PALETTE)

# Levels 1..EARLY_LEVEL_CAP add a color per level; later levels grow tube capacity instead.
EARLY_LEVEL_CAP = 3
CAPACITY_LEVEL_CAP = 6

# Completion rating thresholds, expressed as moves allowed above par (colors * capacity).
RATING_THRESHOLDS = (
    (5, 'PERFECT!'),
    (15, 'EXCELLENT!'),
    (30, 'GOOD!'),
)
RATING_FALLBACK = 'COMPLETED!'

# Upper bound on boards explored by the solver before giving up.
SOLVER_MAX_STATES = 200_000
