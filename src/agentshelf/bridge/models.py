"""Request and response messages exchanged with the UI surface.

Every message is a JSON object tagged by ``type``. Requests carry a
free-form ``requestId`` that the matching response echoes verbatim.
"""

from typing import Annotated, Any, Literal, Union, get_args

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

from agentshelf.resources.models import (
    AgentDetails,
    AgentEntry,
    CommandDetails,
    CommandEntry,
    PluginStatusEntry,
    SkillDetails,
    SkillEntry,
    SkillLocation,
)


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class BridgeMessage(CamelModel):
    """Base for all requests and responses."""

    request_id: Any = None


# =============================================================================
# Requests
# =============================================================================


class GetSkillsRequest(BridgeMessage):
    type: Literal["get-skills"] = "get-skills"


class GetSkillDetailsRequest(BridgeMessage):
    type: Literal["get-skill-details"] = "get-skill-details"
    name: str
    location: SkillLocation


class SearchSkillsRequest(BridgeMessage):
    type: Literal["search-skills"] = "search-skills"
    query: str = ""
    location: SkillLocation | None = None


class GetCommandsRequest(BridgeMessage):
    type: Literal["get-commands"] = "get-commands"


class GetCommandDetailsRequest(BridgeMessage):
    type: Literal["get-command-details"] = "get-command-details"
    name: str


class GetAgentsRequest(BridgeMessage):
    type: Literal["get-agents"] = "get-agents"


class GetAgentDetailsRequest(BridgeMessage):
    type: Literal["get-agent-details"] = "get-agent-details"
    name: str


class GetPluginsRequest(BridgeMessage):
    type: Literal["get-plugins"] = "get-plugins"


class EnablePluginRequest(BridgeMessage):
    type: Literal["enable-plugin"] = "enable-plugin"
    plugin_id: str


class DisablePluginRequest(BridgeMessage):
    type: Literal["disable-plugin"] = "disable-plugin"
    plugin_id: str


class GetPluginStatusRequest(BridgeMessage):
    type: Literal["get-plugin-status"] = "get-plugin-status"
    plugin_id: str


REQUEST_CLASSES = (
    GetSkillsRequest,
    GetSkillDetailsRequest,
    SearchSkillsRequest,
    GetCommandsRequest,
    GetCommandDetailsRequest,
    GetAgentsRequest,
    GetAgentDetailsRequest,
    GetPluginsRequest,
    EnablePluginRequest,
    DisablePluginRequest,
    GetPluginStatusRequest,
)

Request = Annotated[Union[REQUEST_CLASSES], Field(discriminator="type")]

REQUEST_ADAPTER: TypeAdapter[Request] = TypeAdapter(Request)

REQUEST_TYPES: frozenset[str] = frozenset(
    get_args(cls.model_fields["type"].annotation)[0] for cls in REQUEST_CLASSES
)


# =============================================================================
# Responses
# =============================================================================


class PluginToggleResult(CamelModel):
    plugin_id: str
    success: bool


class PluginStatusResult(CamelModel):
    plugin_id: str
    enabled: bool


class ErrorPayload(CamelModel):
    message: str


class SkillsDataResponse(BridgeMessage):
    type: Literal["skills-data"] = "skills-data"
    data: list[SkillEntry]


class SkillDetailsResponse(BridgeMessage):
    type: Literal["skill-details"] = "skill-details"
    data: SkillDetails | None


class SkillsSearchResultsResponse(BridgeMessage):
    type: Literal["skills-search-results"] = "skills-search-results"
    data: list[SkillEntry]


class CommandsDataResponse(BridgeMessage):
    type: Literal["commands-data"] = "commands-data"
    data: list[CommandEntry]


class CommandDetailsResponse(BridgeMessage):
    type: Literal["command-details"] = "command-details"
    data: CommandDetails | None


class AgentsDataResponse(BridgeMessage):
    type: Literal["agents-data"] = "agents-data"
    data: list[AgentEntry]


class AgentDetailsResponse(BridgeMessage):
    type: Literal["agent-details"] = "agent-details"
    data: AgentDetails | None


class PluginsDataResponse(BridgeMessage):
    type: Literal["plugins-data"] = "plugins-data"
    data: list[PluginStatusEntry]


class PluginEnabledResponse(BridgeMessage):
    type: Literal["plugin-enabled"] = "plugin-enabled"
    data: PluginToggleResult


class PluginDisabledResponse(BridgeMessage):
    type: Literal["plugin-disabled"] = "plugin-disabled"
    data: PluginToggleResult


class PluginStatusResponse(BridgeMessage):
    type: Literal["plugin-status"] = "plugin-status"
    data: PluginStatusResult


class ErrorResponse(BridgeMessage):
    type: Literal["error"] = "error"
    data: ErrorPayload


Response = Union[
    SkillsDataResponse,
    SkillDetailsResponse,
    SkillsSearchResultsResponse,
    CommandsDataResponse,
    CommandDetailsResponse,
    AgentsDataResponse,
    AgentDetailsResponse,
    PluginsDataResponse,
    PluginEnabledResponse,
    PluginDisabledResponse,
    PluginStatusResponse,
    ErrorResponse,
]
