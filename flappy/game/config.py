# --- Display ---
DEFAULT_WIDTH = 480
DEFAULT_HEIGHT = 720
MIN_WIDTH = 320             # viewport floors (px)
MIN_HEIGHT = 480
FPS = 60
MAX_STEP_S = 0.05           # clamp frame hitches (sec)

# --- Layout ratios (fraction of viewport, with px floors) ---
GROUND_MIN_H = 48
GROUND_RATIO = 0.11
GAP_MIN = 180
GAP_RATIO = 0.32
OBSTACLE_MIN_W = 44
OBSTACLE_W_RATIO = 0.09
OBSTACLE_MIN_SPEED = 200.0
OBSTACLE_SPEED_RATIO = 0.34
SPAWN_INTERVAL_S = 1.4
FIRST_SPAWN_S = 0.35        # delay before the first obstacle of a run

# --- Obstacle randomisation ---
GAP_JITTER = (0.86, 1.12)
GAP_CLAMP = (0.26, 0.44)    # gap height bounds, fraction of H
GAP_TOP_MARGIN = 0.08
GAP_BOTTOM_MARGIN = 0.09    # space kept above the ground line
WIDTH_JITTER = (0.92, 1.06)
WIDTH_CLAMP = (0.85, 1.12)

# --- Actor ---
ACTOR_MIN_H = 28
ACTOR_H_RATIO = 0.06
ACTOR_ASPECT = 1.25         # width / height
ACTOR_X_RATIO = 0.25        # centre line of the actor
READY_Y_RATIO = 0.40
START_Y_RATIO = 0.45
FLOAT_AMPLITUDE = 0.015
FLOAT_SPEED = 3.0
FLOAT_TILT = 0.12
FLOAT_TILT_SPEED = 2.6

# --- Physics (scaled by viewport height) ---
GRAVITY_RATIO = 5.6         # px/s^2 per px of height
JUMP_RATIO = 1.95           # upward px/s per px of height
MAX_FALL_RATIO = 3.3
ROTATION_UP = -0.5          # radians
ROTATION_DOWN = 0.85
DYING_TILT_OFFSET = 0.35    # cosmetic
DYING_TILT_RATE = 6.0       # per sec
DYING_MIN_FALL = 0.35       # fraction of max fall speed on death
GRACE_S = 0.45

# --- Impact shake (strength px, duration s) ---
SHAKE_OBSTACLE = (14.0, 0.4)
SHAKE_GROUND_HIT = (18.0, 0.45)
SHAKE_LANDING = (20.0, 0.3)

# --- Background ---
PARALLAX_FAR = 0.12
PARALLAX_MID = 0.22
CLOUD_SPACING_PX = 140
MIN_CLOUDS = 8

# --- Persistence ---
BEST_SCORE_FILE = "flappy_best.txt"
SEED_DEFAULT = None         # None = random each launch

# --- Colors (RGB) ---
COLOR_FG = (255, 255, 255)
COLOR_SHADOW = (40, 48, 64)
COLOR_OBSTACLE = (126, 217, 87)
COLOR_OBSTACLE_LIP = (106, 196, 79)
COLOR_OBSTACLE_SHADE = (88, 168, 62)
COLOR_GROUND_TOP = (233, 209, 143)
COLOR_GROUND_BOT = (203, 160, 101)
COLOR_ACTOR = (255, 217, 61)
COLOR_ACTOR_WING = (255, 197, 61)
COLOR_ACTOR_BEAK = (255, 145, 77)
COLOR_EYE = (59, 59, 59)
COLOR_PANEL = (20, 32, 52)
COLOR_PANEL_EDGE = (90, 130, 180)
