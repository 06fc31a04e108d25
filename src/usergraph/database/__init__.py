"""
Database module for usergraph
"""

from .connection import Database, describe_connection_error

__all__ = ["Database", "describe_connection_error"]
