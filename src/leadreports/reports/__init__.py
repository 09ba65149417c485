"""Reports module.

Boundary:
- Orchestrates fetches and aggregations for one page load
- Forbidden: HTTP concerns, backend query details
"""
