FRAME_WIDTH = 256
FRAME_HEIGHT = 240
FRAME_CHANNELS = 3  # RGB
FRAME_BUFFER_SIZE = FRAME_WIDTH * FRAME_HEIGHT * FRAME_CHANNELS

# Two seconds at 60 fps is usually enough for a game to reach its title screen.
TITLE_SCREEN_FRAMES = 120

SETTINGS_VERSION = 1

SCALING_FACTORS = (1, 2, 3, 4)
SCALING_MODES = ("pixelated", "blurry")
