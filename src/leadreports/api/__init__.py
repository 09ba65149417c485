"""API module for leadreports.

API layer boundary:
- Resolves the session user and the channel
- Returns the report payload for the UI
- Forbidden: pagination loops, aggregation
"""
