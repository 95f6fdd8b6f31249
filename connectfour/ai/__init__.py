"""
connectfour/ai/__init__.py - Computer opponents for Connect Four

This package provides the static evaluator, the minimax search engine
and a random baseline opponent.
"""

from connectfour.ai.evaluator import evaluate, score_lines, score_segment
from connectfour.ai.minimax import MinimaxPlayer, SearchResult, best_move
from connectfour.ai.random_player import RandomPlayer

__all__ = ['evaluate', 'score_lines', 'score_segment', 'MinimaxPlayer',
           'SearchResult', 'best_move', 'RandomPlayer']
