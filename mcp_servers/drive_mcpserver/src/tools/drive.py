"""
Google Drive tools for the MCP server, using DriveService.
"""

import json
import logging
from typing import Literal, Optional

from shared.services.envelope import text_formatter
from shared.services.tool_runner import run_tool
from ..mcp_builder import mcp_builder
from ..dependencies import get_drive_config
from ..services.drive_service import DriveService
from ..types.drive_models import (
    CopyFileRequest,
    CreateFolderRequest,
    ListFilesRequest,
    ShareFileRequest,
    UpdateFileRequest,
    UploadFileRequest,
)

logger = logging.getLogger(__name__)


def _drive_service() -> DriveService:
    return DriveService(get_drive_config().access_token)


def _as_json(data) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)

# --- Tool Implementations ---

@mcp_builder.tool()
async def upload_file(
    name: str,
    mime_type: str,
    source: Literal["url", "base64"],
    content: str,
    folder_id: Optional[str] = None,
    description: Optional[str] = None,
) -> str:
    """
    Uploads a file to Google Drive, either downloaded from a URL (source='url')
    or given as base64 encoded content (source='base64').
    """
    logger.debug(f"📥 TOOL PARAMS [upload_file]: name={name!r}, mime_type={mime_type}, source={source}, folder_id={folder_id}")
    return await run_tool(
        "upload_file",
        _drive_service,
        lambda service: service.upload_file(UploadFileRequest(
            name=name,
            mime_type=mime_type,
            source=source,
            content=content,
            folder_id=folder_id,
            description=description,
        )),
        format_result=text_formatter(
            lambda data: f"File uploaded successfully!\nFile ID: {data['file_id']}\nView: {data['web_view_link']}"
        ),
    )

@mcp_builder.tool()
async def list_files(
    page_size: int = 10,
    page_token: Optional[str] = None,
    folder_id: Optional[str] = None,
    query: Optional[str] = None,
    order_by: str = "modifiedTime desc",
) -> str:
    """
    Lists files in Google Drive. Trashed files are never included.
    `query` is a Drive search expression, e.g. "name contains 'report'". At most 100 files per page.
    """
    return await run_tool(
        "list_files",
        _drive_service,
        lambda service: service.list_files(ListFilesRequest(
            page_size=page_size,
            page_token=page_token,
            folder_id=folder_id,
            query=query,
            order_by=order_by,
        )),
        format_result=text_formatter(_as_json),
    )

@mcp_builder.tool()
async def create_folder(
    name: str,
    parent_folder_id: Optional[str] = None,
    description: Optional[str] = None,
) -> str:
    """Creates a new folder in Google Drive."""
    return await run_tool(
        "create_folder",
        _drive_service,
        lambda service: service.create_folder(CreateFolderRequest(
            name=name,
            parent_folder_id=parent_folder_id,
            description=description,
        )),
        format_result=text_formatter(
            lambda data: f"Folder created successfully!\nFolder ID: {data['file_id']}\nView: {data['web_view_link']}"
        ),
    )

@mcp_builder.tool()
async def delete_file(file_id: str) -> str:
    """Deletes a file or folder from Google Drive."""
    return await run_tool(
        "delete_file",
        _drive_service,
        lambda service: service.delete_file(file_id),
        format_result=text_formatter(lambda data: "File deleted successfully!"),
    )

@mcp_builder.tool()
async def get_file_metadata(file_id: str) -> str:
    """Gets detailed metadata for a file or folder."""
    return await run_tool(
        "get_file_metadata",
        _drive_service,
        lambda service: service.get_file_metadata(file_id),
        format_result=text_formatter(_as_json),
    )

@mcp_builder.tool()
async def download_file(file_id: str) -> str:
    """Downloads a file from Google Drive. The content is returned base64 encoded."""
    return await run_tool(
        "download_file",
        _drive_service,
        lambda service: service.download_file(file_id),
        format_result=text_formatter(_as_json),
    )

@mcp_builder.tool()
async def update_file(
    file_id: str,
    name: Optional[str] = None,
    description: Optional[str] = None,
    content: Optional[str] = None,
    mime_type: Optional[str] = None,
) -> str:
    """
    Updates a file's metadata or content. New content must be base64 encoded
    and is only applied when mime_type is given as well.
    """
    return await run_tool(
        "update_file",
        _drive_service,
        lambda service: service.update_file(UpdateFileRequest(
            file_id=file_id,
            name=name,
            description=description,
            content=content,
            mime_type=mime_type,
        )),
        format_result=text_formatter(
            lambda data: f"File updated successfully!\nFile ID: {data['file_id']}\nView: {data['web_view_link']}"
        ),
    )

@mcp_builder.tool()
async def copy_file(file_id: str, name: Optional[str] = None, folder_id: Optional[str] = None) -> str:
    """Creates a copy of a file, optionally renamed and placed in another folder."""
    return await run_tool(
        "copy_file",
        _drive_service,
        lambda service: service.copy_file(CopyFileRequest(file_id=file_id, name=name, folder_id=folder_id)),
        format_result=text_formatter(
            lambda data: f"File copied successfully!\nNew File ID: {data['file_id']}\nView: {data['web_view_link']}"
        ),
    )

@mcp_builder.tool()
async def share_file(
    file_id: str,
    role: Literal["reader", "writer", "commenter", "owner"],
    type: Literal["user", "group", "domain", "anyone"],
    email_address: Optional[str] = None,
    domain: Optional[str] = None,
    send_notification_email: bool = True,
) -> str:
    """
    Shares a file or folder. 'user' and 'group' permissions need an email_address,
    'domain' permissions need a domain, and 'anyone' makes the file public.
    """
    logger.debug(f"📥 TOOL PARAMS [share_file]: file_id={file_id}, role={role}, type={type}")
    return await run_tool(
        "share_file",
        _drive_service,
        lambda service: service.share_file(ShareFileRequest(
            file_id=file_id,
            role=role,
            type=type,
            email_address=email_address,
            domain=domain,
            send_notification_email=send_notification_email,
        )),
        format_result=text_formatter(
            lambda data: f"File shared successfully! Permission ID: {data['permission_id']}"
        ),
    )
