"""
fruitbar.services

Service layer.

Responsibilities:
- Own transactions and call the policy/validation/pagination core before storage.
"""

# Package marker.
