from typing import Literal, Optional

from pydantic import BaseModel

FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"

FILE_FIELDS = (
    "id, name, mimeType, size, createdTime, modifiedTime, webViewLink, webContentLink, "
    "thumbnailLink, owners, parents, shared, trashed"
)


class UploadFileRequest(BaseModel):
    name: str
    mime_type: str
    # 'url': content is a URL to download from; 'base64': content is the encoded file
    source: Literal["url", "base64"]
    content: str
    folder_id: Optional[str] = None
    description: Optional[str] = None


class ListFilesRequest(BaseModel):
    page_size: int = 10
    page_token: Optional[str] = None
    folder_id: Optional[str] = None
    query: Optional[str] = None
    order_by: str = "modifiedTime desc"


class CreateFolderRequest(BaseModel):
    name: str
    parent_folder_id: Optional[str] = None
    description: Optional[str] = None


class UpdateFileRequest(BaseModel):
    file_id: str
    name: Optional[str] = None
    description: Optional[str] = None
    content: Optional[str] = None
    mime_type: Optional[str] = None


class CopyFileRequest(BaseModel):
    file_id: str
    name: Optional[str] = None
    folder_id: Optional[str] = None


class ShareFileRequest(BaseModel):
    file_id: str
    role: Literal["reader", "writer", "commenter", "owner"]
    type: Literal["user", "group", "domain", "anyone"]
    email_address: Optional[str] = None
    domain: Optional[str] = None
    send_notification_email: bool = True


class FileReference(BaseModel):
    file_id: str
    web_view_link: Optional[str] = None


class DownloadedFile(BaseModel):
    content: str
    mime_type: Optional[str] = None
    file_name: Optional[str] = None
