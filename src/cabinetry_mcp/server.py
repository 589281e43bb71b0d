"""Cabinetry MCP server implementation.

Provides a stdio-based MCP server exposing skeleton construction and
export to agent hosts.
"""

from __future__ import annotations

import sys
from typing import Any, Dict, Optional

import structlog
from mcp.server.fastmcp import FastMCP

from cabinetry.logging_setup import configure_for

from .tools import (
    tool_build_box_skeleton,
    tool_describe_skeleton,
    tool_export_skeleton,
    tool_session_info,
)

logger = structlog.get_logger(__name__)

app = FastMCP("cabinetry")


@app.tool()
def build_box_skeleton(
    width: float = 36.0,
    depth: float = 24.0,
    height: float = 36.0,
    thickness: float = 0.75,
    skeleton_id: Optional[str] = None,
) -> Dict[str, Any]:
    """Build a box-shaped cabinet skeleton and store it in the session.

    Args:
        width: Outer width
        depth: Outer depth
        height: Outer height
        thickness: Panel thickness
        skeleton_id: Optional id to store the skeleton under

    Returns:
        Dictionary with the skeleton id and its manifest
    """
    try:
        logger.info("MCP tool: build_box_skeleton", width=width, depth=depth, height=height)
        return tool_build_box_skeleton({
            "width": width,
            "depth": depth,
            "height": height,
            "thickness": thickness,
            "skeleton_id": skeleton_id,
        })
    except Exception as e:
        logger.error("MCP tool: build_box_skeleton failed", error=str(e))
        return {"success": False, "error": f"Tool execution failed: {e}", "skeleton_id": None}


@app.tool()
def describe_skeleton(skeleton_id: str) -> Dict[str, Any]:
    """Return the manifest of a stored skeleton."""
    try:
        logger.info("MCP tool: describe_skeleton", skeleton_id=skeleton_id)
        return tool_describe_skeleton({"skeleton_id": skeleton_id})
    except Exception as e:
        logger.error("MCP tool: describe_skeleton failed", skeleton_id=skeleton_id, error=str(e))
        return {"success": False, "error": f"Tool execution failed: {e}", "skeleton_id": skeleton_id}


@app.tool()
def export_skeleton(skeleton_id: str, out_dir: Optional[str] = None) -> Dict[str, Any]:
    """Write a stored skeleton's combined solid to a STEP file.

    Args:
        skeleton_id: Identifier of the stored skeleton
        out_dir: Output directory (defaults to temp directory)
    """
    try:
        logger.info("MCP tool: export_skeleton", skeleton_id=skeleton_id, out_dir=out_dir)
        return tool_export_skeleton({"skeleton_id": skeleton_id, "out_dir": out_dir})
    except Exception as e:
        logger.error("MCP tool: export_skeleton failed", skeleton_id=skeleton_id, error=str(e))
        return {"success": False, "error": f"Tool execution failed: {e}", "skeleton_id": skeleton_id}


@app.tool()
def session_info() -> Dict[str, Any]:
    """Get information about the current session and stored skeletons."""
    try:
        return tool_session_info()
    except Exception as e:
        logger.error("MCP tool: session_info failed", error=str(e))
        return {"success": False, "error": f"Tool execution failed: {e}", "session_stats": {}, "skeletons": []}


def main() -> None:
    """Main entry point for the MCP server, running in stdio mode."""
    # stdout carries the protocol, so logs go to stderr
    configure_for("server", stream=sys.stderr)

    try:
        logger.info("Cabinetry MCP server ready")
        app.run()
    except KeyboardInterrupt:
        logger.info("MCP server shutting down (keyboard interrupt)")
        sys.exit(0)
    except Exception as e:
        logger.error("MCP server startup failed", error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
