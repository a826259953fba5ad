"""
Advisory per-pile markers: warnings ("don't play here") and intentions
("I want this pile"). They have no effect on legality or turn order.
"""

from typing import Dict, List

from .constants import PILE_TYPES, SIGNAL_INTENTION, SIGNAL_WARNING
from .models import SignalMarker


class SignalBoard:
    def __init__(self):
        self.markers: Dict[str, Dict[str, List[SignalMarker]]] = {
            SIGNAL_WARNING: {pile_type: [] for pile_type in PILE_TYPES},
            SIGNAL_INTENTION: {pile_type: [] for pile_type in PILE_TYPES},
        }

    def toggle(self, kind: str, pile_type: str, player_id: str, player_name: str) -> bool:
        """
        Raise the marker if absent, drop it if present.

        Returns:
            True if the player's marker is present after the toggle
        """
        pile_markers = self.markers[kind][pile_type]
        for index, marker in enumerate(pile_markers):
            if marker.player_id == player_id:
                del pile_markers[index]
                return False
        pile_markers.append(SignalMarker(player_id=player_id, player_name=player_name))
        return True

    def toggle_warning(self, pile_type: str, player_id: str, player_name: str) -> bool:
        return self.toggle(SIGNAL_WARNING, pile_type, player_id, player_name)

    def toggle_intention(self, pile_type: str, player_id: str, player_name: str) -> bool:
        return self.toggle(SIGNAL_INTENTION, pile_type, player_id, player_name)

    def is_active(self, kind: str, pile_type: str) -> bool:
        """Whether anyone has raised this kind of marker on the pile."""
        return bool(self.markers[kind][pile_type])

    def has_marker(self, kind: str, pile_type: str, player_id: str) -> bool:
        return any(m.player_id == player_id for m in self.markers[kind][pile_type])

    def remove_player(self, player_id: str):
        """Clear every marker raised by a player."""
        for by_pile in self.markers.values():
            for pile_type, pile_markers in by_pile.items():
                by_pile[pile_type] = [m for m in pile_markers if m.player_id != player_id]

    def snapshot(self, kind: str) -> Dict[str, List[dict]]:
        return {
            pile_type: [
                {"player_id": m.player_id, "player_name": m.player_name}
                for m in pile_markers
            ]
            for pile_type, pile_markers in self.markers[kind].items()
        }
