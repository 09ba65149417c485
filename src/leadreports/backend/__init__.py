"""Backend module for leadreports.

Boundary:
- Answers bounded range queries against named collections
- Forbidden: pagination loops, aggregation, response shaping
"""
