"""
Configuration for the command line layer
"""

from .settings import SolverSettings, get_settings

__all__ = ["SolverSettings", "get_settings"]
