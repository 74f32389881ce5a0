"""
fruitbar.auth

Authentication/authorization package.

Responsibilities:
- Role hierarchy and the authenticated `Principal`.
- JWT helpers and FastAPI auth dependencies.
"""

# Package marker.
