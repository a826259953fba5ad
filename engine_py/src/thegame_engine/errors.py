# engine_py/src/thegame_engine/errors.py

class GameError(Exception):
    """Base exception for game-related errors."""
    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")

# Capacity / phase
ROOM_FULL = "ROOM_FULL"
GAME_ALREADY_STARTED = "GAME_ALREADY_STARTED"
NOT_ENOUGH_PLAYERS = "NOT_ENOUGH_PLAYERS"
PLAYERS_NOT_READY = "PLAYERS_NOT_READY"
GAME_NOT_IN_PROGRESS = "GAME_NOT_IN_PROGRESS"
ALREADY_JOINED = "ALREADY_JOINED"
# Turn
NOT_YOUR_TURN = "NOT_YOUR_TURN"
# Legality
CARD_NOT_IN_HAND = "CARD_NOT_IN_HAND"
ILLEGAL_PLACEMENT = "ILLEGAL_PLACEMENT"
MIN_CARDS_NOT_MET = "MIN_CARDS_NOT_MET"
INVALID_PILE = "INVALID_PILE"
# Lookup
PLAYER_NOT_FOUND = "PLAYER_NOT_FOUND"
ROOM_NOT_FOUND = "ROOM_NOT_FOUND"
NOT_IN_ROOM = "NOT_IN_ROOM"

# Helper function to raise common errors
def raise_error(code: str, message: str):
    raise GameError(code, message)
