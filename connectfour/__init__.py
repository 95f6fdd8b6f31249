"""
connectfour - Connect Four against a minimax computer opponent

This package provides an immutable board model, a minimax search engine
with alpha-beta pruning and a static evaluator, and a terminal interface
for playing against it.
"""

# Version number
__version__ = '0.1.0'
