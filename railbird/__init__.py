"""
Railbird: Hold'em hand evaluation and equity engine

The computational core of a poker trainer. It evaluates 5-7 card hands
into a single comparable score, finds the nuts on a board, and estimates
hand-vs-hand and hand-vs-range equity by Monte Carlo simulation.
"""

__version__ = "0.1.0"
