#!/usr/bin/env python3
"""
run.py - Main entry point for the Game Closet Connect Four engine

Examples:

    # Play against the AI (you are X and move first)
    python run.py play

    # Two human players sharing the keyboard
    python run.py play --humans 2

    # Watch the AI play itself with debug logging
    python run.py --debug play --humans 0

    # Show the AI's win probability for every column after 3, 3, 4
    python run.py analyze --moves 3,3,4

    # Time 50 AI-vs-AI games
    python run.py benchmark --games 50
"""

import os
import sys

# Add the project root to Python path to ensure imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from gamescloset.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
