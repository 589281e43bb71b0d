"""Cabinetry MCP server package.

Provides an MCP (Model Context Protocol) server exposing cabinet skeleton
construction and export to agent hosts.
"""

from .server import main as server_main
from .tools import SkeletonSession

__version__ = "0.1.0"
__all__ = ["server_main", "SkeletonSession"]
