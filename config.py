"""
Simulation tuning knobs.
"""

# World
WORLD_W, WORLD_H = 240, 160
MAX_FOOD = 800
OBSTACLE_DENSITY = 300  # one obstacle seed per this many cells

# Population controls
START_POP = 80
MIN_POP = 30

# Energy + life
START_ENERGY = 200
ENERGY_DECAY = 1
CULL_CHANCE = 0.0005
HIT_SENTINEL = -1000

# Food field
BLOB_CHANCE = 1 / 20
BLOB_RADIUS = 8
EAT_BITE = 100

# Action cooldowns (ticks)
WAIT_MOVE = 5
WAIT_TURN = 3
WAIT_EAT = 5
WAIT_HIT = 3
WAIT_FORK = 10

# Reproduction
FORK_TAX = 0.90
FORK_MIN_PCT, FORK_MAX_PCT = 3, 97
COLOR_DRIFT = 10

# Mutation
MUT_P_PROGRAM = 0.35
MUT_P_SPRITE = 0.35
SPRITE_MUTATION_ATTEMPTS = 30
SPRITE_GENERATION_ATTEMPTS = 100
SPRITE_DENSITY = 0.4

# Rendering
CELL_PX = 5
FPS = 60
HUD_HEIGHT = 28

# Headless runs
REPORT_EVERY = 500
