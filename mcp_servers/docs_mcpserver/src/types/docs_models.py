from typing import Literal, Optional

from pydantic import BaseModel


class CreateDocumentRequest(BaseModel):
    title: str
    content: Optional[str] = None
    folder_id: Optional[str] = None


class GetDocumentContentRequest(BaseModel):
    document_id: str
    # "start:end" character indices into the extracted text
    range: Optional[str] = None


class AppendTextRequest(BaseModel):
    document_id: str
    text: str
    location: Optional[int] = None


class ReplaceTextRequest(BaseModel):
    document_id: str
    find_text: str
    replace_text: str


class CopyDocumentRequest(BaseModel):
    source_document_id: str
    new_title: str
    folder_id: Optional[str] = None


ShareRole = Literal["viewer", "commenter", "writer", "editor"]


class ShareDocumentRequest(BaseModel):
    document_id: str
    role: ShareRole
    email: Optional[str] = None


class CreatedDocument(BaseModel):
    document_id: str
    title: str
    url: str


class ReplaceResult(BaseModel):
    updated: bool
    replacements_count: int


class CopiedDocument(BaseModel):
    new_document_id: str
    url: str


class SharedDocument(BaseModel):
    share_link: str
    permission_id: Optional[str] = None
