"""Aggregation module for lead reports.

Boundary:
- Pure projections over fetched rows (agent stats, tag counts, sources)
- Forbidden: backend calls, pagination
"""
