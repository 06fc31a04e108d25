"""
usergraph
GraphQL CRUD service for a single User entity
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
