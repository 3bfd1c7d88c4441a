"""Use cases orchestrating the ports: routing, level filters, prompts, shutdown."""

from __future__ import annotations

from .emit import Emitter
from .prompts import Prompter
from .route_output import OutputRouter, create_route_output
from .shutdown import create_shutdown

__all__ = ["Emitter", "OutputRouter", "Prompter", "create_route_output", "create_shutdown"]
