"""
Common body of every MCP tool.

A tool resolves its credentials into a provider service, runs one service
operation and turns the ServiceResult into the text block sent to the caller.
Auth and parameter errors are returned as text as well, so nothing raised here
ever reaches the MCP transport.
"""

import inspect
import logging
from typing import Any, Awaitable, Callable

from pydantic import ValidationError

from shared.errors import ToolError
from shared.services.envelope import ServiceResult, to_tool_text
from shared.services.provider_service import ProviderService

logger = logging.getLogger(__name__)


async def run_tool(
    name: str,
    create_service: Callable[[], Any],
    operation: Callable[[ProviderService], Awaitable[ServiceResult]],
    format_result: Callable[[ServiceResult], str] = to_tool_text,
) -> str:
    logger.info(f"🔧 TOOL CALL: {name}")
    try:
        service = create_service()
        if inspect.isawaitable(service):
            service = await service
    except ToolError as e:
        logger.warning(f"🔒 TOOL REJECTED [{name}]: {e.message}")
        return e.message

    async with service:
        try:
            result = await operation(service)
        except ValidationError as e:
            logger.warning(f"Invalid parameters for {name}: {e}")
            return f"Invalid parameters for {name}: {e}"

    logger.info(f"✅ TOOL COMPLETED: {name} (success={result.success})")
    return format_result(result)
