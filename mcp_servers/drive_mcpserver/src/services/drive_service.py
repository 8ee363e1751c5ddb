"""
Service for interacting with the Google Drive v3 REST API using HTTPx.

Uploads and content updates use the multipart/related upload endpoint so that
metadata and media travel in a single request. Downloads are returned as
base64 so they fit in a text tool reply.
"""

import base64
import logging
from typing import Any, Dict, Optional

import httpx

from shared.errors import InvalidInputError
from shared.services.envelope import ServiceFailure, ServiceResult, ServiceSuccess
from shared.services.provider_service import GoogleService, provider_call
from ..types.drive_models import (
    FILE_FIELDS,
    FOLDER_MIME_TYPE,
    CopyFileRequest,
    CreateFolderRequest,
    DownloadedFile,
    FileReference,
    ListFilesRequest,
    ShareFileRequest,
    UpdateFileRequest,
    UploadFileRequest,
)
from ..utils.multipart import build_related_body

logger = logging.getLogger(__name__)

UPLOAD_TIMEOUT = 60.0
MAX_PAGE_SIZE = 100
REFERENCE_FIELDS = "id, name, webViewLink"


class DriveService(GoogleService):
    """A service for making direct API calls to Google Drive."""

    def __init__(self, access_token: str, http_client: Optional[httpx.AsyncClient] = None):
        super().__init__(access_token, http_client)
        self.base_url = "https://www.googleapis.com/drive/v3"
        self.upload_url = "https://www.googleapis.com/upload/drive/v3"

    def _reference(self, data: Dict[str, Any], action: str) -> ServiceResult:
        if not data.get("id"):
            return ServiceFailure(error=f"Failed to {action}", details="Drive API did not return file information")
        return ServiceSuccess(data=FileReference(file_id=data["id"], web_view_link=data.get("webViewLink")).model_dump())

    async def _upload(self, method: str, url: str, metadata: Dict[str, Any], content: bytes, mime_type: str) -> httpx.Response:
        body, content_type = build_related_body(metadata, content, mime_type)
        return await self._request(
            method,
            url,
            params={"uploadType": "multipart", "fields": REFERENCE_FIELDS},
            content=body,
            headers={"Content-Type": content_type},
            timeout=UPLOAD_TIMEOUT,
        )

    @provider_call("upload file")
    async def upload_file(self, request: UploadFileRequest) -> ServiceResult:
        if request.source == "url":
            logger.info(f"Downloading file from URL: {request.content}")
            download = await self.http_client.get(request.content, follow_redirects=True)
            if not download.is_success:
                return ServiceFailure(
                    error="Failed to download file from URL",
                    details=f"HTTP {download.status_code}: {download.reason_phrase}",
                )
            content = download.content
        else:
            content = base64.b64decode(request.content)

        metadata: Dict[str, Any] = {"name": request.name, "mimeType": request.mime_type}
        if request.description:
            metadata["description"] = request.description
        if request.folder_id:
            metadata["parents"] = [request.folder_id]

        response = await self._upload("POST", f"{self.upload_url}/files", metadata, content, request.mime_type)
        logger.info(f"📤 Uploaded '{request.name}' ({len(content)} bytes)")
        return self._reference(response.json(), "upload file")

    @provider_call("list files")
    async def list_files(self, request: ListFilesRequest) -> ServiceResult:
        query = "trashed = false"
        if request.folder_id:
            query += f" and '{request.folder_id}' in parents"
        if request.query:
            query += f" and {request.query}"

        params: Dict[str, Any] = {
            "pageSize": min(request.page_size, MAX_PAGE_SIZE),
            "q": query,
            "orderBy": request.order_by,
            "fields": f"nextPageToken, files({FILE_FIELDS})",
        }
        if request.page_token:
            params["pageToken"] = request.page_token

        response = await self._request("GET", f"{self.base_url}/files", params=params)
        body = response.json()
        return ServiceSuccess(data={"files": body.get("files") or [], "next_page_token": body.get("nextPageToken")})

    @provider_call("create folder")
    async def create_folder(self, request: CreateFolderRequest) -> ServiceResult:
        metadata: Dict[str, Any] = {"name": request.name, "mimeType": FOLDER_MIME_TYPE}
        if request.description:
            metadata["description"] = request.description
        if request.parent_folder_id:
            metadata["parents"] = [request.parent_folder_id]

        response = await self._request(
            "POST", f"{self.base_url}/files", params={"fields": REFERENCE_FIELDS}, json=metadata
        )
        return self._reference(response.json(), "create folder")

    @provider_call("delete file")
    async def delete_file(self, file_id: str) -> ServiceResult:
        await self._request("DELETE", f"{self.base_url}/files/{file_id}")
        return ServiceSuccess(data={"file_id": file_id, "deleted": True})

    @provider_call("get file metadata")
    async def get_file_metadata(self, file_id: str) -> ServiceResult:
        response = await self._request("GET", f"{self.base_url}/files/{file_id}", params={"fields": FILE_FIELDS})
        metadata = response.json()
        if not metadata:
            return ServiceFailure(error="File not found")
        return ServiceSuccess(data=metadata)

    @provider_call("download file")
    async def download_file(self, file_id: str) -> ServiceResult:
        metadata = await self._request(
            "GET", f"{self.base_url}/files/{file_id}", params={"fields": "name, mimeType"}
        )
        info = metadata.json()
        media = await self._request("GET", f"{self.base_url}/files/{file_id}", params={"alt": "media"})

        downloaded = DownloadedFile(
            content=base64.b64encode(media.content).decode("ascii"),
            mime_type=info.get("mimeType"),
            file_name=info.get("name"),
        )
        return ServiceSuccess(data=downloaded.model_dump())

    @provider_call("update file")
    async def update_file(self, request: UpdateFileRequest) -> ServiceResult:
        """Updates metadata, and the content as well when both content and mime_type are given."""
        metadata: Dict[str, Any] = {}
        if request.name:
            metadata["name"] = request.name
        if request.description:
            metadata["description"] = request.description

        if request.content and request.mime_type:
            response = await self._upload(
                "PATCH",
                f"{self.upload_url}/files/{request.file_id}",
                metadata,
                base64.b64decode(request.content),
                request.mime_type,
            )
        else:
            response = await self._request(
                "PATCH", f"{self.base_url}/files/{request.file_id}", params={"fields": REFERENCE_FIELDS}, json=metadata
            )
        return self._reference(response.json(), "update file")

    @provider_call("copy file")
    async def copy_file(self, request: CopyFileRequest) -> ServiceResult:
        metadata: Dict[str, Any] = {}
        if request.name:
            metadata["name"] = request.name
        if request.folder_id:
            metadata["parents"] = [request.folder_id]

        response = await self._request(
            "POST", f"{self.base_url}/files/{request.file_id}/copy", params={"fields": REFERENCE_FIELDS}, json=metadata
        )
        return self._reference(response.json(), "copy file")

    @provider_call("share file")
    async def share_file(self, request: ShareFileRequest) -> ServiceResult:
        permission: Dict[str, Any] = {"role": request.role, "type": request.type}
        params: Dict[str, Any] = {"fields": "id"}

        if request.type in ("user", "group"):
            if not request.email_address:
                raise InvalidInputError("Email address is required for user or group permissions")
            permission["emailAddress"] = request.email_address
            # Drive rejects the notification flag for domain and anyone grants
            params["sendNotificationEmail"] = "true" if request.send_notification_email else "false"
        elif request.type == "domain":
            if not request.domain:
                raise InvalidInputError("Domain is required for domain permissions")
            permission["domain"] = request.domain

        response = await self._request(
            "POST", f"{self.base_url}/files/{request.file_id}/permissions", params=params, json=permission
        )
        permission_id = response.json().get("id")
        if not permission_id:
            return ServiceFailure(error="Failed to share file", details="Drive API did not return permission information")
        return ServiceSuccess(data={"permission_id": permission_id})
