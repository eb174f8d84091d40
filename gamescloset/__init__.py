"""
gamescloset - Connect Four game engine with an automated opponent

This package provides the board representation, turn and lifecycle
management, a heuristic win-probability evaluator and an AI player built on
top of it, plus a small command-line front end and a Gymnasium environment.
"""

# Version number
__version__ = '0.2.0'
