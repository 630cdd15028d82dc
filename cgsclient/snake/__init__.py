from .api import SnakeClient, SnakeGame
from .game import Arena, Move, Wall

__all__ = ["Arena", "Move", "SnakeClient", "SnakeGame", "Wall"]
