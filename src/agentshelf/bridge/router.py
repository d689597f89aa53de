"""Request router: maps each bridge request to one index operation."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, Optional

from agentshelf.bridge.models import (
    REQUEST_ADAPTER,
    REQUEST_TYPES,
    AgentDetailsResponse,
    AgentsDataResponse,
    CommandDetailsResponse,
    CommandsDataResponse,
    DisablePluginRequest,
    EnablePluginRequest,
    ErrorPayload,
    ErrorResponse,
    GetAgentDetailsRequest,
    GetAgentsRequest,
    GetCommandDetailsRequest,
    GetCommandsRequest,
    GetPluginsRequest,
    GetPluginStatusRequest,
    GetSkillDetailsRequest,
    GetSkillsRequest,
    PluginDisabledResponse,
    PluginEnabledResponse,
    PluginsDataResponse,
    PluginStatusResponse,
    PluginStatusResult,
    PluginToggleResult,
    Request,
    Response,
    SearchSkillsRequest,
    SkillDetailsResponse,
    SkillsDataResponse,
    SkillsSearchResultsResponse,
)
from agentshelf.bridge.protocol import Transport
from agentshelf.catalog import Catalog

logger = logging.getLogger(__name__)


class RequestRouter:
    """Routes bridge requests to the catalog's indexes.

    The router:
    1. Drops requests with an unknown type (logged, no response)
    2. Validates the request and runs exactly one index operation
    3. Turns any failure into an error response with the same requestId
    4. When serving a transport, handles each request as its own task, so
       responses may go out in a different order than requests came in
    """

    def __init__(self, catalog: Catalog, max_concurrent_requests: int = 100) -> None:
        """Initialize the request router.

        Args:
            catalog: The indexes to serve.
            max_concurrent_requests: Maximum number of requests handled at once
        """
        self.catalog = catalog
        self._max_concurrent_requests = max_concurrent_requests
        self._semaphore: Optional[asyncio.Semaphore] = None
        self._tasks: set[asyncio.Task] = set()
        self._receiver: Optional[asyncio.Task] = None
        self._running = False
        self._handlers: dict[type, Callable[[Any], Awaitable[Response]]] = {
            GetSkillsRequest: self._get_skills,
            GetSkillDetailsRequest: self._get_skill_details,
            SearchSkillsRequest: self._search_skills,
            GetCommandsRequest: self._get_commands,
            GetCommandDetailsRequest: self._get_command_details,
            GetAgentsRequest: self._get_agents,
            GetAgentDetailsRequest: self._get_agent_details,
            GetPluginsRequest: self._get_plugins,
            EnablePluginRequest: self._enable_plugin,
            DisablePluginRequest: self._disable_plugin,
            GetPluginStatusRequest: self._get_plugin_status,
        }

    async def dispatch(self, request: Request) -> Response:
        """Run the index operation for a validated request."""
        handler = self._handlers[type(request)]
        return await handler(request)

    async def handle(self, raw: dict[str, Any]) -> dict[str, Any] | None:
        """Handle one raw request object.

        Args:
            raw: Decoded JSON request.

        Returns:
            The raw response object, or None for an unknown request type.
        """
        request_type = raw.get("type")
        request_id = raw.get("requestId")

        if not isinstance(request_type, str) or request_type not in REQUEST_TYPES:
            logger.warning(f"Unknown request type: {request_type!r}")
            return None

        try:
            request = REQUEST_ADAPTER.validate_python(raw)
            response = await self.dispatch(request)
        except Exception as e:
            logger.error(f"Error handling {request_type} request: {e}", exc_info=True)
            response = ErrorResponse(request_id=request_id, data=ErrorPayload(message=str(e)))

        return response.to_wire()

    # ===== Skills =====

    async def _get_skills(self, request: GetSkillsRequest) -> Response:
        skills = await self.catalog.skills.load(False)
        return SkillsDataResponse(request_id=request.request_id, data=skills)

    async def _get_skill_details(self, request: GetSkillDetailsRequest) -> Response:
        details = await self.catalog.skills.get_details(request.name, request.location)
        return SkillDetailsResponse(request_id=request.request_id, data=details)

    async def _search_skills(self, request: SearchSkillsRequest) -> Response:
        skills = await self.catalog.skills.search(request.query, request.location)
        return SkillsSearchResultsResponse(request_id=request.request_id, data=skills)

    # ===== Commands =====

    async def _get_commands(self, request: GetCommandsRequest) -> Response:
        commands = await self.catalog.commands.load(False)
        return CommandsDataResponse(request_id=request.request_id, data=commands)

    async def _get_command_details(self, request: GetCommandDetailsRequest) -> Response:
        details = await self.catalog.commands.get_details(request.name)
        return CommandDetailsResponse(request_id=request.request_id, data=details)

    # ===== Agents =====

    async def _get_agents(self, request: GetAgentsRequest) -> Response:
        agents = await self.catalog.agents.load(False)
        return AgentsDataResponse(request_id=request.request_id, data=agents)

    async def _get_agent_details(self, request: GetAgentDetailsRequest) -> Response:
        details = await self.catalog.agents.get_details(request.name)
        return AgentDetailsResponse(request_id=request.request_id, data=details)

    # ===== Plugins =====

    async def _get_plugins(self, request: GetPluginsRequest) -> Response:
        plugins = await self.catalog.plugins.list_with_status(False)
        return PluginsDataResponse(request_id=request.request_id, data=plugins)

    async def _enable_plugin(self, request: EnablePluginRequest) -> Response:
        success = await self.catalog.plugins.enable(request.plugin_id)
        return PluginEnabledResponse(
            request_id=request.request_id,
            data=PluginToggleResult(plugin_id=request.plugin_id, success=success),
        )

    async def _disable_plugin(self, request: DisablePluginRequest) -> Response:
        success = await self.catalog.plugins.disable(request.plugin_id)
        return PluginDisabledResponse(
            request_id=request.request_id,
            data=PluginToggleResult(plugin_id=request.plugin_id, success=success),
        )

    async def _get_plugin_status(self, request: GetPluginStatusRequest) -> Response:
        enabled = self.catalog.plugins.is_enabled(request.plugin_id)
        return PluginStatusResponse(
            request_id=request.request_id,
            data=PluginStatusResult(plugin_id=request.plugin_id, enabled=enabled),
        )

    # ===== Transport loop =====

    async def serve(self, transport: Transport) -> None:
        """Handle requests from a transport until it closes or stop() is called.

        Each request runs as an independent task. In-flight requests are
        drained before returning, including when the transport fails.

        Args:
            transport: The channel to read requests from and reply on

        Raises:
            Exception: Whatever the transport raised while receiving
        """
        if self._running:
            logger.warning("Router is already running")
            return

        self._running = True
        self._semaphore = asyncio.Semaphore(self._max_concurrent_requests)
        self._receiver = asyncio.create_task(self._receive(transport), name="request-receiver")
        logger.info("Request router started")

        try:
            await self._receiver
        except asyncio.CancelledError:
            # stop() cancels the receiver and clears _running first
            if self._running:
                raise
        finally:
            self._receiver = None
            if self._tasks:
                await asyncio.gather(*list(self._tasks), return_exceptions=True)
            self._running = False
            logger.info("Request router stopped")

    async def _receive(self, transport: Transport) -> None:
        async for raw in transport.receive_requests():
            if not self._running:
                break

            task = asyncio.create_task(
                self._handle_and_reply(transport, raw),
                name=f"request-{raw.get('type')}-{raw.get('requestId')}",
            )
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)

    async def _handle_and_reply(self, transport: Transport, raw: dict[str, Any]) -> None:
        if self._semaphore:
            async with self._semaphore:
                response = await self.handle(raw)
        else:
            response = await self.handle(raw)

        if response is None:
            return

        try:
            await transport.send_response(response)
        except Exception as e:
            logger.error(f"Failed to send response: {e}", exc_info=True)

    async def stop(self) -> None:
        """Stop serving and cancel in-flight requests."""
        self._running = False

        if self._receiver is not None:
            self._receiver.cancel()

        for task in list(self._tasks):
            task.cancel()

        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    @property
    def is_running(self) -> bool:
        """Check if the router is serving a transport."""
        return self._running
