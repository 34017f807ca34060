"""
Session Module - Owns live games.

A session holds exactly one game at a time:
- Created by Init (game starts immediately)
- Applies Turn / GiveUp / Restart one at a time
- Destroyed when the host ends it

Sessions are EPHEMERAL: nothing is persisted.
"""

from .manager import SessionManager, GameSession, SessionState

__all__ = [
    "SessionManager",
    "GameSession",
    "SessionState",
]
