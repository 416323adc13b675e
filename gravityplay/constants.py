"""Physical and tuning constants for the gravity sandbox.

All quantities are in sandbox units: ``G`` defaults to 1, masses are in
multiples of an asteroid and distances in scene units.
"""

# --- body kinds ---
BODY_TYPES = {
    "star": {
        "base_mass": 800.0,
        "base_radius": 2.5,
        "color": (1.0, 0.95, 0.7),
    },
    "planet": {
        "base_mass": 40.0,
        "base_radius": 1.2,
        "color": (0.4, 0.7, 1.0),
    },
    "blackhole": {
        "base_mass": 5000.0,
        "base_radius": 2.0,
        "color": (0.05, 0.0, 0.1),
    },
    "asteroid": {
        "base_mass": 2.0,
        "base_radius": 0.3,
        "color": (0.6, 0.55, 0.5),
    },
    # fragments from tidal breakup scale like asteroids
    "debris": {
        "base_mass": 2.0,
        "base_radius": 0.3,
        "color": (0.6, 0.55, 0.5),
    },
    "gas": {
        "base_mass": 1.0,
        "base_radius": 0.25,
        "color": (1.0, 0.5, 0.7),
    },
}

PLANET_COLORS = [
    (0.3, 0.6, 1.0),
    (0.9, 0.4, 0.2),
    (0.2, 0.8, 0.5),
    (0.8, 0.7, 0.3),
    (0.7, 0.3, 0.8),
    (0.3, 0.9, 0.9),
    (1.0, 0.6, 0.7),
]

MIN_RADIUS = 0.15
MAX_RADIUS = 12.0

# --- simulation defaults ---
G_DEFAULT = 1.0
TIME_STEP_BASE = 0.15
TIME_SCALE = 1.0
THETA = 0.7  # Barnes-Hut opening angle
DIRECT_SUM_THRESHOLD = 500
MAX_BODIES = 1200
SOFTENING_LENGTH = 2.0
SOFTENING_FACTOR_SQ = SOFTENING_LENGTH**2
ROCHE_FACTOR = 2.5

# --- trails ---
TRAIL_LENGTH = 200
MIN_TRAIL_LENGTH = 2
MAX_TRAIL_LENGTH = 2000

# --- tidal breakup ---
MIN_BREAKUP_MASS = 5.0
DISRUPTOR_MASS_RATIO = 10.0
MIN_FRAGMENTS = 3
MAX_FRAGMENTS = 8
FRAGMENT_MASS_UNIT = 5.0
FRAGMENT_SPREAD = 3.0  # in units of the parent radius
FRAGMENT_KICK = 1.5

# --- orbit prediction ---
ORBIT_PREDICTION_STEPS = 300
ORBIT_PREDICTION_DT_FACTOR = 0.5

# --- octree ---
TREE_MIN_HALF_SIZE = 100.0
TREE_PADDING = 1.5
TREE_MAX_DEPTH = 48

# --- event colours ---
COLLISION_FLASH_COLOR = (1.0, 0.8, 0.3)
COLLISION_FLASH_BLEND = 0.5
DISRUPTION_COLOR = (1.0, 0.6, 0.3)

# --- gravity well height map ---
WELL_SOFTENING_SQ = 10.0
WELL_DEPTH_SCALE = 20.0
WELL_MAX_DEPTH = 50.0
