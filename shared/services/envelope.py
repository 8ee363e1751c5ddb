"""
The uniform result envelope returned by every provider service.

A result is either a ServiceSuccess carrying `data` or a ServiceFailure carrying
`error` and an optional `details` diagnostic. `model_dump()` produces the
`{success, data | error, details}` shape that tools serialize for the caller.
"""

import json
from typing import Any, Callable, Literal, Optional, Union

from pydantic import BaseModel

UNKNOWN_ERROR_DETAILS = "Unknown error occurred"


class ServiceSuccess(BaseModel):
    success: Literal[True] = True
    data: Any = None


class ServiceFailure(BaseModel):
    success: Literal[False] = False
    error: str
    details: Optional[str] = None


ServiceResult = Union[ServiceSuccess, ServiceFailure]


def to_tool_text(result: ServiceResult) -> str:
    """Formats a service result as the single text block returned by a tool."""
    if isinstance(result, ServiceSuccess):
        return json.dumps(result.model_dump(mode="json")["data"], indent=2, ensure_ascii=False)
    return f"{result.error}. Details: {result.details or 'No additional details'}"


def text_formatter(render: Callable[[Any], str]) -> Callable[[ServiceResult], str]:
    """Builds a tool formatter that renders success data as a message and failures as usual."""
    def format_result(result: ServiceResult) -> str:
        if isinstance(result, ServiceSuccess):
            return render(result.data)
        return to_tool_text(result)
    return format_result
