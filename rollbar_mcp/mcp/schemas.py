"""Argument models for tool calls.

Each tool's argument bag is validated against one of these models before
any upstream call. Field names match the tool input schemas in `tools.py`.
"""

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from .tools import DEFAULT_LIMIT, DEFAULT_PAGE


class ToolInput(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")


class PaginatedInput(ToolInput):
    limit: StrictInt = Field(default=DEFAULT_LIMIT, ge=1)
    page: StrictInt = Field(default=DEFAULT_PAGE, ge=1)


class EmptyInput(ToolInput):
    """Input for tools that take no arguments."""


class ListItemsInput(PaginatedInput):
    status: str | None = None
    level: str | None = None
    environment: str | None = None


class GetItemInput(ToolInput):
    id: StrictInt


class GetItemByCounterInput(ToolInput):
    counter: StrictInt


class ListOccurrencesInput(PaginatedInput):
    itemId: StrictInt | None = None


class GetOccurrenceInput(ToolInput):
    # Occurrence IDs exceed 53 bits, so clients may send them as numbers or digit strings
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str = Field(..., pattern=r"^\d+$")


class GetProjectInput(ToolInput):
    id: StrictInt | None = None


class ListEnvironmentsInput(ToolInput):
    projectId: StrictInt | None = None


class GetUserInput(ToolInput):
    id: StrictInt


class ListDeploysInput(PaginatedInput):
    projectId: StrictInt | None = None
    environment: str | None = None


class GetDeployInput(ToolInput):
    deployId: StrictInt
