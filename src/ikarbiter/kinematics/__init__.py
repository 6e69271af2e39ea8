"""
Kinematics module - collaborator interfaces and library-backed adapters.

This module provides:
- Protocols for the analytic solver, chain evaluator, frame lookup and
  collision backend
- Forward kinematics over a compas_robots model (CompasChainEvaluator)
- A static named-frame tree (FrameTree)
- An adapter for ikfast-style closed-form bindings (IkFastSolver)
"""

from ikarbiter.kinematics.chain import CompasChainEvaluator
from ikarbiter.kinematics.frames import FrameTree
from ikarbiter.kinematics.interfaces import (
    AnalyticSolver,
    ChainEvaluator,
    CollisionOracle,
    FrameTransformer,
)
from ikarbiter.kinematics.solver import IkFastSolver, frame_to_ikfast

__all__ = [
    "AnalyticSolver",
    "ChainEvaluator",
    "CollisionOracle",
    "FrameTransformer",
    "CompasChainEvaluator",
    "FrameTree",
    "IkFastSolver",
    "frame_to_ikfast",
]
