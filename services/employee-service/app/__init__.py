"""
Employee Service.

CRUD over departments and employees with a Redis cache-aside layer
in front of PostgreSQL reads.
"""

__version__ = "1.0.0"
