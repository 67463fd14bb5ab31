"""
Domain layer - Core business entities and domain logic.

This layer contains the department and employee records and the
exceptions raised by the service, independent of HTTP, database
or cache concerns.
"""
