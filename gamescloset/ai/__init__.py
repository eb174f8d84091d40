"""
gamescloset.ai - Automated opponent for Connect Four

This package provides the heuristic position evaluator and the AI player
that picks moves with it.
"""

from gamescloset.ai.evaluator import Evaluator, EvaluatorWeights
from gamescloset.ai.player import AIPlayer

__all__ = ['Evaluator', 'EvaluatorWeights', 'AIPlayer']
