from quantum_maze.engine.mechanics.index import MechanicsIndex
from quantum_maze.engine.mechanics.movement import JointStep, can_enter, enter, joint_step

__all__ = ["JointStep", "MechanicsIndex", "can_enter", "enter", "joint_step"]
