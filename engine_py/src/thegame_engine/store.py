"""Room registry: create on first join, drop when the last player leaves."""

import logging
import threading
from collections import defaultdict
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional

from .engine import GameRoom
from .errors import ROOM_NOT_FOUND, raise_error
from .rules import RuleConfig

logger = logging.getLogger(__name__)


class RoomStore:
    def __init__(self, rules: Optional[RuleConfig] = None):
        self.rules = rules
        self.rooms: Dict[str, GameRoom] = {}
        self.room_locks = defaultdict(threading.Lock)

    @contextmanager
    def lock(self, room_id: str) -> Iterator[None]:
        """Hold the room's lock for a whole validate/mutate/check sequence."""
        with self.room_locks[room_id]:
            yield

    def get_or_create(self, room_id: str) -> GameRoom:
        with self.room_locks[room_id]:
            if room_id not in self.rooms:
                self.rooms[room_id] = GameRoom(room_id, rules=self.rules)
                logger.info(f"Created room {room_id}")
            return self.rooms[room_id]

    def get(self, room_id: str) -> Optional[GameRoom]:
        return self.rooms.get(room_id)

    def require(self, room_id: str) -> GameRoom:
        room = self.get(room_id)
        if room is None:
            raise_error(ROOM_NOT_FOUND, f"Room {room_id} not found")
        return room

    def discard_if_empty(self, room_id: str) -> bool:
        """Delete the room once nobody is seated. Returns True if deleted."""
        room = self.rooms.get(room_id)
        if room is None or not room.is_empty:
            return False
        del self.rooms[room_id]
        self.room_locks.pop(room_id, None)
        logger.info(f"Deleted empty room {room_id}")
        return True

    def list_rooms(self) -> List[GameRoom]:
        return list(self.rooms.values())

    def __len__(self) -> int:
        return len(self.rooms)

    def __contains__(self, room_id: str) -> bool:
        return room_id in self.rooms
