from __future__ import annotations

import logging
import os
import uuid
from typing import Dict, Tuple

from mcp.server.fastmcp import FastMCP

from .errors import AlreadyOptimal, SimplexError, Unbounded
from .lp.simplex import Simplex, describe, simplex_from_text, solve_text
from .schemas import StepOptions

logger = logging.getLogger(__name__)

mcp = FastMCP("Simplex Stepper")

_sessions: Dict[str, Tuple[Simplex, StepOptions]] = {}


def _state(session: str) -> dict:
    simplex, opts = _sessions[session]
    return describe(simplex, opts.use_bland_rule).model_dump()


@mcp.tool()
def open_program(objective: str, constraints: str, options: StepOptions | None = None) -> dict:
    """
    Compile a linear program and start a step-by-step simplex session.

    Args:
        objective: Command and function, e.g. "max x + 6y + 13z".
        constraints: One constraint per line, e.g. "x + y + z <= 400".
        options: Optional stepping options (pivot rule, iteration limit).

    Returns:
        Dictionary with the new 'session' id and the initial 'state', or an
        'error' message when the input could not be parsed.
    """
    opts = options or StepOptions()
    try:
        simplex = simplex_from_text(objective, constraints)
    except SimplexError as exc:
        return {"error": f"Failed to parse program: {exc}", "session": None, "state": None}

    session = uuid.uuid4().hex
    _sessions[session] = (simplex, opts)
    logger.info("opened session %s with %d rows", session, len(simplex.current().constraints))
    return {"session": session, "state": _state(session)}


@mcp.tool()
def next_step(session: str) -> dict:
    """Advance the session by one pivot; 'status' tells whether it moved."""
    if session not in _sessions:
        return {"error": f"Unknown session '{session}'", "state": None}
    simplex, opts = _sessions[session]
    try:
        simplex.advance(opts.use_bland_rule)
        status = "stepped"
    except AlreadyOptimal:
        status = "optimal"
    except Unbounded:
        status = "unbounded"
    return {"session": session, "status": status, "state": _state(session)}


@mcp.tool()
def previous_step(session: str) -> dict:
    """Move the session back one step (no-op at the first step)."""
    if session not in _sessions:
        return {"error": f"Unknown session '{session}'", "state": None}
    _sessions[session][0].retreat()
    return {"session": session, "state": _state(session)}


@mcp.tool()
def current_step(session: str) -> dict:
    """Return the dictionary under the session cursor."""
    if session not in _sessions:
        return {"error": f"Unknown session '{session}'", "state": None}
    return {"session": session, "state": _state(session)}


@mcp.tool()
def close_program(session: str) -> dict:
    """Forget a session and its history."""
    closed = _sessions.pop(session, None) is not None
    return {"session": session, "closed": closed}


@mcp.tool()
def solve_linear_program(objective: str, constraints: str, options: StepOptions | None = None) -> dict:
    """Run the simplex to completion and return the solution as JSON."""
    opts = options or StepOptions()
    try:
        solution = solve_text(objective, constraints, opts)
    except SimplexError as exc:
        return {"error": f"Failed to parse program: {exc}", "solution": None}
    return {"solution": solution.model_dump()}


if __name__ == "__main__":
    import sys

    logging.basicConfig(
        level=os.environ.get("SIMPLEX_LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    transport = os.environ.get("MCP_TRANSPORT", "stdio")
    if transport == "stdio" or "--stdio" in sys.argv:
        mcp.run(transport="stdio")
    else:
        mcp.settings.host = "0.0.0.0"
        mcp.settings.port = int(os.environ.get("PORT", "8081"))
        mcp.settings.streamable_http_path = "/mcp"
        mcp.run(transport="streamable-http")
