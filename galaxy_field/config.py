"""Configuration constants for the galaxy field generator and animator."""

# Catalog layout
LAYOUT_RADIUS = 55.0  # Radius of the ring the galaxies are placed on
LAYOUT_VERTICAL_AMPLITUDE = 2.0  # Peak vertical offset, applied as sin(2 * angle)
EDGE_ON_GALAXY_ID = "sombrero"  # Catalog entry viewed almost edge-on

# Rotation speeds (radians per second around the disk axis)
ROTATION_SPEED_DEFAULT = 0.32
ROTATION_SPEED_EDGE_ON = 0.18
ROTATION_SPEED_ELLIPTICAL = 0.12

# Primary particle counts per morphology
PARTICLE_COUNTS = {
    "ring": 1400,
    "irregular": 1200,
    "peculiar": 1500,
    "elliptical": 1600,
    "spiral": 1600,
}

# Generation radius: cbrt(size_light_years) * RADIUS_SCALE + RADIUS_OFFSET
RADIUS_SCALE = 0.085
RADIUS_OFFSET = 4.6

# Seed derivation: index * multiplier + offset, one pair per layer
PRIMARY_SEED = (97, 13)
BULGE_SEED = (211, 5)
DUST_SEED = (131, 17)

# Bulge and dust layer sizing
BULGE_FRACTION = 0.14
BULGE_MIN_COUNT = 240
DUST_FRACTION = 0.32
DUST_MAX_COUNT = 900

# Spiral arm shape
SPIRAL_ARM_GAP_CHANCE = 0.18  # Fraction of spiral particles pushed between arms
PECULIAR_TIDAL_CHANCE = 0.3  # Fraction of peculiar particles given tidal lift

# Color tints
FALLBACK_SECONDARY_COLOR = "#ffffff"
BULGE_TINT = "#ffe2c0"  # Warm core tint for the primary field
ARM_HIGHLIGHT_TINT = "#a9d8ff"  # Cool tint for dense arm particles
BULGE_CORE_COLOR = "#ffe8c4"
BULGE_CORE_HIGHLIGHT = "#fff7df"
BRIGHTNESS_MIN = 0.45
BRIGHTNESS_MAX = 1.55

# Smoothing factors (fraction of the remaining distance covered per tick)
SMOOTH_SCALE = 0.08
SMOOTH_RING = 0.08
SMOOTH_GLOW = 0.08
SMOOTH_HALO = 0.08
SMOOTH_OUTER_HALO = 0.05
SMOOTH_BULGE_EMISSIVE = 0.12
SMOOTH_BULGE_POINTS = 0.1
SMOOTH_TILT = 0.08
RING_SPIN_SPEED = 0.16

# Twinkle of the primary points
TWINKLE_SIZE_RANGE = (0.28, 0.58)
TWINKLE_SIZE_FREQUENCY = 1.4
TWINKLE_OPACITY_BASE = 0.78
TWINKLE_OPACITY_AMPLITUDE = 0.14
TWINKLE_OPACITY_FREQUENCY = 1.8

# Camera follow
CAMERA_START_POSITION = (0.0, 30.0, 80.0)
CAMERA_SIZE_SCALE = 0.05  # Applied to cbrt(size_light_years)
CAMERA_OFFSET_SLOPE = (0.6, 0.5, 1.8)
CAMERA_OFFSET_BASE = (4.0, 12.0, 25.0)
CAMERA_POSITION_SMOOTHING = 0.08
CAMERA_TARGET_SMOOTHING = 0.12
CAMERA_FOV = 50.0

# Visualization parameters
POINT_SIZE_SCALE = 10.0  # Screen pixels per unit of animated point size
BACKGROUND_COLOR = "#050510"

# File paths
EXPORT_DIRECTORY = "exports"

# Help text (used in both CLI --help and in-app H key overlay)
HELP_CONTENT = (
    "--- Controls ---\n"
    "Mouse over: Highlight galaxy\n"
    "Scroll wheel: Zoom in/out\n"
    "Left-click: Select galaxy\n"
    "N / Right arrow: Next galaxy\n"
    "B / Left arrow: Previous galaxy\n"
    "S: Export particle buffers\n"
    "F: Toggle fullscreen\n"
    "H: Toggle this help\n"
    "Q: Quit"
)
