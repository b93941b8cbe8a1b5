"""Static metadata describing Geocraft."""

APP_NAME = "Geocraft"
APP_VERSION = "2.0"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "Geocraft is a geography quiz. Identify countries from their maps, "
    "unlock flags and hints when you are stuck, and climb the high score board."
)

TUTORIAL_TEXT = (
    "Pick a game mode, then a game type.\n\n"
    "Global: countries from every continent.\n"
    "Continental: one continent at a time (unlocks at 25 points).\n"
    "Micro Nations: the world's smallest states (unlocks at 100 points).\n\n"
    "Marathon: keep going until you run out of countries or lose all three lives.\n"
    "Timed: answer as many as you can in 60 seconds.\n"
    "Exploration: browse at your own pace, nothing is scored.\n\n"
    "A correct answer is worth 5 points, a wrong one costs 5. "
    "Showing the flag or the hints costs 2 points each."
)
