"""
constants.py: Centralized configuration for the game world, physics and storage.
"""

# -------- Game World Config --------
GAME_WIDTH = 360                # Logical resolution, narrow and mobile-first
GAME_HEIGHT = 640               # 9:16 aspect
GROUND_HEIGHT = 72
FLOOR_Y = GAME_HEIGHT - GROUND_HEIGHT

BIRD_X = 80                     # Fixed strawberry X position
RESPAWN_Y = GAME_HEIGHT / 2
BIRD_RADIUS = 18                # Collision and visual radius

# -------- Physics Config (Pixels / Second / Second) --------
GRAVITY_ACCEL = 1800.0          # Downward acceleration (pixels/s^2)
JUMP_IMPULSE = -420.0           # Velocity set by a flap (pixels/s)
TERMINAL_VEL_DOWN = 600.0       # Clamp downward speed
TERMINAL_VEL_UP = -700.0        # Clamp upward speed

# Tilt follows velocity, eased toward the target each tick
ROTATION_VELOCITY_SCALE = 600.0
ROTATION_MIN = -0.6
ROTATION_MAX = 0.45
ROTATION_EASE = 10.0

# -------- Pipe Config --------
PIPE_WIDTH = 56
PIPE_GAP = 160                  # Vertical gap between top and bottom segments
PIPE_SPACING = 240              # Distance between pipes on the x axis
PIPE_SPEED_PPS = 125.0          # Horizontal speed (pixels/second)
PIPE_MARGIN = 40                # Minimum segment height
PIPE_FIRST_OFFSET = 120         # First pipe spawns this far past the right edge
INITIAL_PIPES = 4
RETIRE_MARGIN = 10              # Pipes retire once fully past -RETIRE_MARGIN

STYLE_TOP = "copilot"
STYLE_BOTTOM = "sonnet"

# -------- Parallax Config (pixels/second) --------
PARALLAX_SPEEDS = {
    "stars": 10.0,
    "hills": 20.0,
    "clouds": 35.0,
    "bushes": 60.0,
}

# -------- Timing --------
RENDER_FPS = 60
MAX_FRAME_MS = 32.0             # Largest dt a single tick will integrate

# -------- Storage --------
DB_FILE = "flappy_strawberry.db"
BEST_SCORE_KEY = "flappy_strawberry_best"
