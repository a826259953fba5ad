"""
WebSocket server and event handling for The Game.
"""

from .events import *
from .server import router

__all__ = ["router"]
