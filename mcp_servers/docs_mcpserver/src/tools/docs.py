"""
Google Docs tools for the MCP server, using DocsService.
"""

import logging
from typing import Optional

from shared.services.tool_runner import run_tool
from ..mcp_builder import mcp_builder
from ..dependencies import get_docs_config
from ..services.docs_service import DocsService
from ..types.docs_models import (
    AppendTextRequest,
    CopyDocumentRequest,
    CreateDocumentRequest,
    GetDocumentContentRequest,
    ReplaceTextRequest,
    ShareDocumentRequest,
    ShareRole,
)

logger = logging.getLogger(__name__)


def _docs_service() -> DocsService:
    return DocsService(get_docs_config().access_token)


@mcp_builder.tool()
async def create_document(title: str, content: Optional[str] = None, folder_id: Optional[str] = None) -> str:
    """
    Creates a new Google Docs document, with optional initial content.
    When folder_id is given the document is moved into that Drive folder.
    """
    logger.debug(f"📥 TOOL PARAMS [create_document]: title={title!r}, folder_id={folder_id}")
    return await run_tool(
        "create_document",
        _docs_service,
        lambda service: service.create_document(
            CreateDocumentRequest(title=title, content=content, folder_id=folder_id)
        ),
    )

@mcp_builder.tool()
async def get_document_content(document_id: str, range: Optional[str] = None) -> str:
    """
    Reads the text of a document, including text inside tables.
    `range` takes the form 'start:end' (character indices) to return only part of it.
    """
    return await run_tool(
        "get_document_content",
        _docs_service,
        lambda service: service.get_document_content(
            GetDocumentContentRequest(document_id=document_id, range=range)
        ),
    )

@mcp_builder.tool()
async def append_text(document_id: str, text: str, location: Optional[int] = None) -> str:
    """Inserts text at a character index of a document. Defaults to the end of the document."""
    return await run_tool(
        "append_text",
        _docs_service,
        lambda service: service.append_text(
            AppendTextRequest(document_id=document_id, text=text, location=location)
        ),
    )

@mcp_builder.tool()
async def replace_text(document_id: str, find_text: str, replace_text: str) -> str:
    """Replaces every occurrence of find_text (case-insensitive) and reports how many were changed."""
    return await run_tool(
        "replace_text",
        _docs_service,
        lambda service: service.replace_text(
            ReplaceTextRequest(document_id=document_id, find_text=find_text, replace_text=replace_text)
        ),
    )

@mcp_builder.tool()
async def copy_document(source_document_id: str, new_title: str, folder_id: Optional[str] = None) -> str:
    """Creates a copy of a document under a new title, optionally in another folder."""
    return await run_tool(
        "copy_document",
        _docs_service,
        lambda service: service.copy_document(
            CopyDocumentRequest(source_document_id=source_document_id, new_title=new_title, folder_id=folder_id)
        ),
    )

@mcp_builder.tool()
async def share_document(document_id: str, role: ShareRole, email: Optional[str] = None) -> str:
    """
    Shares a document. With an email the person is invited and notified;
    without one, anyone with the link gets access.
    """
    return await run_tool(
        "share_document",
        _docs_service,
        lambda service: service.share_document(
            ShareDocumentRequest(document_id=document_id, role=role, email=email)
        ),
    )
