"""Qt UI constants used across widgets."""

WINDOW_TITLE: str = "Geocraft"
MIN_WINDOW_WIDTH: int = 1024
MIN_WINDOW_HEIGHT: int = 720

USERNAME_PLACEHOLDER: str = "Enter Username"
PASSWORD_PLACEHOLDER: str = "Enter Password"

MENU_NEW_GAME: str = "New Game"
MENU_CONTINUE: str = "Continue"
MENU_TUTORIAL: str = "Tutorial"
MENU_HIGH_SCORES: str = "High Scores"
MENU_STATS: str = "Stats"
MENU_CHANGE_PASSWORD: str = "Change Password"
MENU_LOG_OUT: str = "Log Out"

SETUP_MODE_PROMPT: str = "Choose a game mode"
SETUP_CONTINENT_PROMPT: str = "Select a continent to explore!"
SETUP_TYPE_PROMPT: str = "What game type will you play today!"

SHOW_FLAG_BUTTON: str = "Show Flag"
SHOW_HINT_BUTTON: str = "Show Hints"
EXIT_EXPLORATION_BUTTON: str = "Exit Exploration"
QUIT_GAME_BUTTON: str = "Save && Quit"

HIGH_SCORE_TEMPLATE: str = "High Score: {score}"
TIME_LEFT_TEMPLATE: str = "Time left: {seconds}s"
LIVES_TEMPLATE: str = "Lives: {hearts}"
FULL_HEART: str = "♥"
EMPTY_HEART: str = "♡"
SCORE_FLASH_MS: int = 2000

LOGIN_FAILED_MESSAGE: str = (
    "You have entered an incorrect username or password, please try again or register an account"
)
NO_SAVED_GAME_MESSAGE: str = "You have no saved game available"
SAVED_GAME_CORRUPT_MESSAGE: str = "Your saved game could not be restored and has been discarded."
EMPTY_POOL_MESSAGE: str = "There are not enough countries available for this selection."
CONTINENTAL_LOCKED_MESSAGE: str = (
    "You need a high score of {score} to play this gamemode, gain more score to unlock this mode!"
)
PASSWORD_CHANGED_MESSAGE: str = "Password Changed"
PASSWORD_CHANGE_FAILED_MESSAGE: str = "Incorrect username/password"
PASSWORD_FORMAT_MESSAGE: str = "password and username must be between 4-16 characters"
ACCOUNT_CREATED_MESSAGE: str = "Account created. You can now log in."
