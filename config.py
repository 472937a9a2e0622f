# config.py
BOARD_SIZE = 5

# pause between the human's move and the computer's reply
BOT_DELAY_MS = 500

# bot weights
CAPTURE_BONUS = 10.0
VACATE_BONUS = 20.0
JITTER = 3.0

WINDOW_SIZE = (800, 800)
FPS = 60
HUD_H = 110
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
