"""Request/response bridge between the indexes and a UI surface."""

from agentshelf.bridge.jsonl import JsonLinesTransport
from agentshelf.bridge.models import REQUEST_TYPES, Request, Response
from agentshelf.bridge.protocol import Transport
from agentshelf.bridge.router import RequestRouter

__all__ = [
    "JsonLinesTransport",
    "REQUEST_TYPES",
    "Request",
    "RequestRouter",
    "Response",
    "Transport",
]
