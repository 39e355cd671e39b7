from quantum_maze.engine.gamestate.history import MoveLog, MoveRecord, StateHistory
from quantum_maze.engine.gamestate.state import GameState, GameStatus, JointState

__all__ = ["GameState", "GameStatus", "JointState", "MoveLog", "MoveRecord", "StateHistory"]
