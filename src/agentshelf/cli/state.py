"""Per-invocation CLI state shared by all command groups."""

from dataclasses import dataclass

import typer

from agentshelf.catalog import Catalog
from agentshelf.config.schema import Config


@dataclass
class CliState:
    config: Config
    catalog: Catalog


def get_state(ctx: typer.Context) -> CliState:
    """Get the state built by the root callback."""
    state = ctx.obj
    if not isinstance(state, CliState):
        raise RuntimeError("CLI state not initialized")
    return state
