"""Command results returned by GameRoom.

Every command returns one of these instead of raising. ``success`` tells the
caller whether state changed; on failure ``error_code`` and ``message`` say why
and nothing should be broadcast.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class CommandResult:
    success: bool
    error_code: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def error(cls, error_code: str, message: str, **kwargs):
        """Create a rejected result."""
        return cls(success=False, error_code=error_code, message=message, **kwargs)


@dataclass
class JoinResult(CommandResult):
    pass


@dataclass
class ReadyResult(CommandResult):
    ready: bool = False


@dataclass
class StartResult(CommandResult):
    is_defeated: bool = False


@dataclass
class PlayResult(CommandResult):
    card: Optional[int] = None
    pile_type: Optional[str] = None
    previous_card: Optional[int] = None
    is_poop_move: bool = False
    is_defeated: bool = False
    cards_played_this_turn: int = 0


@dataclass
class EndTurnResult(CommandResult):
    is_defeated: bool = False
    cards_drawn: int = 0
    previous_player_id: Optional[str] = None
    current_player_id: Optional[str] = None


@dataclass
class SignalResult(CommandResult):
    player_id: Optional[str] = None
    player_name: Optional[str] = None
    pile_type: Optional[str] = None
    is_active: bool = False


@dataclass
class CurrentPlayerInfo:
    id: str
    name: str


@dataclass
class LeaveResult:
    player_removed: bool
    was_current_player: bool = False
    new_current_player: Optional[CurrentPlayerInfo] = None
    is_defeated: bool = False
    cards_returned: int = 0
