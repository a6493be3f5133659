"""Central place for signalflow default settings."""

# Canvas / grid (1 canvas unit = 1 cm)
DEFAULT_CANVAS_SIZE: tuple[int, int] = (800, 600)  # (width, height)
DEFAULT_GRID_SIZE: int = 4

# Physics
SPEED_OF_LIGHT: float = 299792458.0  # m/s
SUPPORTED_FREQUENCIES_GHZ: tuple[float, ...] = (2.4, 5.0)
SINGULARITY_RADIUS: float = 1.0  # Cells closer than this to a source ignore it
UNITS_PER_METER: float = 100.0
DEFAULT_ANIMATION_RATE: float = 0.1  # Radians of phase advance per animation tick

# Walls
REFERENCE_WALL_THICKNESS_MM: float = 200.0
DEFAULT_WALL_THICKNESS_MM: float = 200.0
MIN_WALL_THICKNESS_MM: float = 10.0
MAX_WALL_THICKNESS_MM: float = 500.0
MIN_WALL_LENGTH: float = 10.0
PARALLEL_EPSILON: float = 0.001  # |det| below this = parallel segments

# Knife-edge diffraction
STRONG_SHADOW_THRESHOLD: float = 1.0  # Fresnel parameter above this = deep shadow
PARTIAL_SHADOW_FLOOR: float = 0.1
MIN_DIFFRACTION_FACTOR: float = 0.01

# Sources
DEFAULT_SOURCE_FREQUENCY_GHZ: float = 2.4
DEFAULT_SOURCE_POWER_MW: float = 20.0
MIN_SOURCE_POWER_MW: float = 1.0
MAX_SOURCE_POWER_MW: float = 100.0
DEFAULT_SOURCE_PHASE_DEG: float = 0.0

# Signal metrics (dBm)
DBM_FLOOR_OFFSET: float = 0.001
DBM_REFERENCE: float = -30.0
STRONG_SIGNAL_DBM: float = -60.0
DEAD_ZONE_DBM: float = -85.0
HEATMAP_DBM_MIN: float = -90.0
HEATMAP_DBM_SPAN: float = 60.0
HEATMAP_VISIBLE_THRESHOLD: float = 0.1
CONSTRUCTIVE_THRESHOLD: float = 1.1
DESTRUCTIVE_THRESHOLD: float = 0.9

# Flow networks
STORAGE_KEY: str = "savedGraph"
DEFAULT_STORE_FILENAME: str = "signalflow_store.json"
DEFAULT_EDGE_CAPACITY: int = 10

# Discrete math tools
MAX_PASCAL_ROWS: int = 15
MIN_GROUP_PARAMETER: int = 2
MAX_GROUP_PARAMETER: int = 8
MAX_SYMMETRIC_DEGREE: int = 4
