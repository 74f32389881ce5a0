"""
fruitbar.api

HTTP API package.

Responsibilities:
- Expose the FastAPI app factory and its routers.
"""

# Package marker.
