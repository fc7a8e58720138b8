# --- Display ---
BOARD_WIDTH = 560
BOARD_HEIGHT = 640
FPS = 60
TICK_MS = 1000.0 / FPS      # one simulation frame (ms)

# --- Physics (units per tick) ---
GRAVITY = 1                 # added to vy every tick
FLAP_VELOCITY = -9          # vy after a flap (replaces, not added)

# --- Player ---
PLAYER_X = BOARD_WIDTH // 8         # player's fixed x (pipes scroll left)
PLAYER_START_Y = BOARD_HEIGHT // 2
PLAYER_W = 34
PLAYER_H = 24

# --- Pipes ---
PIPE_W = 64
PIPE_H = 512
PIPE_VX = -4                        # leftward scroll (px per tick)
PIPE_SPAWN_MS = 1500
OPENING_SPACE = BOARD_HEIGHT // 4   # vertical gap between a top/bottom pair

# --- Scoring ---
SCORE_PER_PIPE = 0.5        # per single pipe, so a pair is worth 1.0
WIN_SCORE = 10.0

# --- Seeding ---
SEED_DEFAULT = 12345

# --- Colors (RGB) ---
COLOR_BG = (112, 197, 206)
COLOR_FG = (20, 20, 20)
COLOR_PLAYER = (250, 214, 64)
COLOR_PIPE = (84, 178, 62)
COLOR_PIPE_EDGE = (40, 98, 30)
COLOR_DANGER = (255, 86, 110)
