"""Pagination module.

Boundary:
- Loops over bounded backend pages and accumulates rows
- Forbidden: aggregation, response shaping
"""
