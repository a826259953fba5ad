"""
Game rule configuration and validation.
"""

from pydantic import BaseModel, Field, field_validator

from .constants import (
    MIN_CARDS_EMPTY_DECK, MIN_CARDS_WITH_DECK,
)


class RuleConfig(BaseModel):
    """Configuration for game rules and settings."""

    min_players: int = Field(
        default=2,
        ge=1,
        le=6,
        description="Minimum number of players required to start"
    )
    max_players: int = Field(
        default=6,
        ge=2,
        le=6,
        description="Maximum number of players allowed"
    )
    two_player_hand_size: int = Field(
        default=7,
        ge=1,
        le=10,
        description="Cards dealt to each player when exactly two play"
    )
    hand_size: int = Field(
        default=6,
        ge=1,
        le=10,
        description="Cards dealt to each player in games of three or more"
    )
    require_all_ready: bool = Field(
        default=True,
        description="Every seated player must be ready before the game starts"
    )
    return_hand_on_leave: bool = Field(
        default=True,
        description="Return a departing player's hand to the deck and reshuffle"
    )

    @field_validator('max_players')
    @classmethod
    def validate_max_players(cls, v, info):
        """Validate maximum players doesn't drop below minimum."""
        min_players = info.data.get('min_players', 2)
        if v < min_players:
            raise ValueError(f'max_players ({v}) must be >= min_players ({min_players})')
        return v

    def validate_player_count(self, player_count: int) -> bool:
        """Check if a player count is valid for this configuration."""
        return self.min_players <= player_count <= self.max_players

    def get_hand_size(self, player_count: int) -> int:
        """Cards dealt per player for a given table size."""
        if player_count == 2:
            return self.two_player_hand_size
        return self.hand_size

    @staticmethod
    def get_min_cards_required(deck_size: int) -> int:
        """Cards that must be placed before a turn may end."""
        return MIN_CARDS_EMPTY_DECK if deck_size == 0 else MIN_CARDS_WITH_DECK


# Default configuration instance
default_rules = RuleConfig()


def create_rules(**overrides) -> RuleConfig:
    """Create a RuleConfig with optional overrides."""
    config_dict = default_rules.model_dump()
    config_dict.update(overrides)
    return RuleConfig(**config_dict)
