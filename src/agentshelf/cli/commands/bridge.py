"""
agentshelf bridge - Serve the request protocol on stdin/stdout.

Each input line is one JSON request; each output line is one JSON response.
Logs go to stderr.
"""

import asyncio
import sys

import typer

from agentshelf.bridge import JsonLinesTransport, RequestRouter
from agentshelf.cli.state import get_state


def bridge(ctx: typer.Context) -> None:
    """Serve JSON-lines requests until stdin closes."""
    state = get_state(ctx)
    router = RequestRouter(
        state.catalog,
        max_concurrent_requests=state.config.bridge.max_concurrent_requests,
    )
    transport = JsonLinesTransport(sys.stdin, sys.stdout)

    try:
        asyncio.run(router.serve(transport))
    except KeyboardInterrupt:
        raise typer.Exit(130)
