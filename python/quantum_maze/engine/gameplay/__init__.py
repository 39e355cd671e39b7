from quantum_maze.engine.gameplay.game import GamePlay, GameStats, MoveOutcome, MoveStatus

__all__ = ["GamePlay", "GameStats", "MoveOutcome", "MoveStatus"]
