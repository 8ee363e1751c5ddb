"""
Service for the Google Docs v1 REST API using HTTPx.

Copying, moving and sharing documents is done through Drive v3, since the Docs
API only covers document content.
"""

import logging
import re
from typing import Any, Dict, Iterable, List, Optional

import httpx

from shared.services.envelope import ServiceFailure, ServiceResult, ServiceSuccess
from shared.services.provider_service import GoogleService, provider_call
from ..types.docs_models import (
    AppendTextRequest,
    CopiedDocument,
    CopyDocumentRequest,
    CreatedDocument,
    CreateDocumentRequest,
    GetDocumentContentRequest,
    ReplaceResult,
    ReplaceTextRequest,
    SharedDocument,
    ShareDocumentRequest,
)

logger = logging.getLogger(__name__)

DRIVE_ROLES = {"editor": "writer", "viewer": "reader"}

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def document_url(document_id: str) -> str:
    return f"https://docs.google.com/document/d/{document_id}/edit"


def _paragraph_text(paragraph: Dict[str, Any]) -> str:
    return "".join(
        element["textRun"]["content"]
        for element in paragraph.get("elements") or []
        if (element.get("textRun") or {}).get("content")
    )


def extract_text(content: Iterable[Dict[str, Any]]) -> str:
    """Concatenates the text of every paragraph and table cell of a document body."""
    parts: List[str] = []
    for element in content:
        if element.get("paragraph"):
            parts.append(_paragraph_text(element["paragraph"]))
        elif element.get("table"):
            for row in element["table"].get("tableRows") or []:
                for cell in row.get("tableCells") or []:
                    for cell_element in cell.get("content") or []:
                        if cell_element.get("paragraph"):
                            parts.append(_paragraph_text(cell_element["paragraph"]))
    return "".join(parts)


def _parse_index(value: str) -> Optional[int]:
    match = _LEADING_INT.match(value)
    return int(match.group(1)) if match else None


def apply_range(text: str, text_range: Optional[str]) -> str:
    """
    Slices `text` by a "start:end" range. A missing or unparsable start means 0,
    a missing, unparsable or zero end means the end of the text. Anything that
    is not exactly two fields leaves the text untouched.
    """
    if not text_range or not text_range.strip():
        return text
    parts = text_range.split(":")
    if len(parts) != 2:
        return text

    start = _parse_index(parts[0]) or 0
    end = _parse_index(parts[1]) or len(text)
    start = min(max(start, 0), len(text))
    end = min(max(end, 0), len(text))
    if start > end:
        start, end = end, start
    return text[start:end]


def end_of_body_index(content: Iterable[Dict[str, Any]]) -> int:
    """Index just before the body's final newline, where appended text goes."""
    last_index = 1
    for element in content:
        if element.get("endIndex"):
            last_index = element["endIndex"]
    return max(1, last_index - 1)


class DocsService(GoogleService):
    """A service for making direct API calls to Google Docs, with Drive for file operations."""

    def __init__(self, access_token: str, http_client: Optional[httpx.AsyncClient] = None):
        super().__init__(access_token, http_client)
        self.base_url = "https://docs.googleapis.com/v1/documents"
        self.drive_url = "https://www.googleapis.com/drive/v3"

    async def _batch_update(self, document_id: str, requests: List[Dict[str, Any]]) -> Dict[str, Any]:
        response = await self._request(
            "POST", f"{self.base_url}/{document_id}:batchUpdate", json={"requests": requests}
        )
        return response.json()

    async def _insert_text(self, document_id: str, text: str, index: int) -> Dict[str, Any]:
        return await self._batch_update(
            document_id, [{"insertText": {"location": {"index": index}, "text": text}}]
        )

    async def _get_document(self, document_id: str) -> Dict[str, Any]:
        response = await self._request("GET", f"{self.base_url}/{document_id}")
        return response.json()

    @provider_call("create document")
    async def create_document(self, request: CreateDocumentRequest) -> ServiceResult:
        """
        Creates the document, then inserts the initial content and moves it into
        the folder. The document already exists once the first call succeeds, so
        a failing follow-up step is only logged.
        """
        response = await self._request("POST", self.base_url, json={"title": request.title})
        created = response.json()
        document_id = created.get("documentId")
        if not document_id:
            return ServiceFailure(error="Failed to create document", details="Docs API did not return document information")
        logger.info(f"📄 Created document {document_id}")

        if request.content and request.content.strip():
            try:
                await self._insert_text(document_id, request.content, 1)
            except httpx.HTTPError as e:
                logger.error(f"Error adding initial content to document {document_id}: {e}")

        if request.folder_id and request.folder_id.strip():
            try:
                await self._request(
                    "PATCH",
                    f"{self.drive_url}/files/{document_id}",
                    params={"addParents": request.folder_id, "removeParents": "root", "fields": "id, parents"},
                    json={},
                )
            except httpx.HTTPError as e:
                logger.error(f"Error moving document {document_id} to folder {request.folder_id}: {e}")

        document = CreatedDocument(
            document_id=document_id,
            title=created.get("title") or request.title,
            url=document_url(document_id),
        )
        return ServiceSuccess(data=document.model_dump())

    @provider_call("get document content")
    async def get_document_content(self, request: GetDocumentContentRequest) -> ServiceResult:
        document = await self._get_document(request.document_id)
        body = document.get("body")
        if not body:
            return ServiceFailure(error="Failed to retrieve document", details="Document body not found")

        text = apply_range(extract_text(body.get("content") or []), request.range)
        return ServiceSuccess(data={"text_content": text})

    @provider_call("append text")
    async def append_text(self, request: AppendTextRequest) -> ServiceResult:
        index = request.location
        if index is None:
            document = await self._get_document(request.document_id)
            content = (document.get("body") or {}).get("content")
            if not content:
                return ServiceFailure(error="Failed to retrieve document for append", details="Document body not found")
            index = end_of_body_index(content)

        logger.debug(f"Inserting text into {request.document_id} at index {index}")
        await self._insert_text(request.document_id, request.text, index)
        return ServiceSuccess(data={"updated": True})

    @provider_call("replace text")
    async def replace_text(self, request: ReplaceTextRequest) -> ServiceResult:
        reply = await self._batch_update(request.document_id, [{
            "replaceAllText": {
                "containsText": {"text": request.find_text, "matchCase": False},
                "replaceText": request.replace_text,
            }
        }])
        count = sum(
            (r.get("replaceAllText") or {}).get("occurrencesChanged") or 0
            for r in reply.get("replies") or []
        )
        return ServiceSuccess(data=ReplaceResult(updated=count > 0, replacements_count=count).model_dump())

    @provider_call("copy document")
    async def copy_document(self, request: CopyDocumentRequest) -> ServiceResult:
        metadata: Dict[str, Any] = {"name": request.new_title}
        if request.folder_id:
            metadata["parents"] = [request.folder_id]

        response = await self._request(
            "POST", f"{self.drive_url}/files/{request.source_document_id}/copy", json=metadata
        )
        new_id = response.json().get("id")
        if not new_id:
            return ServiceFailure(
                error="Failed to copy document", details="Drive API did not return new document information"
            )
        return ServiceSuccess(data=CopiedDocument(new_document_id=new_id, url=document_url(new_id)).model_dump())

    @provider_call("share document")
    async def share_document(self, request: ShareDocumentRequest) -> ServiceResult:
        role = DRIVE_ROLES.get(request.role, request.role)
        params: Dict[str, Any] = {"fields": "id"}
        if request.email:
            permission = {"type": "user", "role": role, "emailAddress": request.email}
            params["sendNotificationEmail"] = "true"
        else:
            permission = {"type": "anyone", "role": role}

        response = await self._request(
            "POST", f"{self.drive_url}/files/{request.document_id}/permissions", params=params, json=permission
        )
        permission_id = response.json().get("id")

        file_response = await self._request(
            "GET", f"{self.drive_url}/files/{request.document_id}", params={"fields": "webViewLink"}
        )
        share_link = file_response.json().get("webViewLink") or document_url(request.document_id)
        return ServiceSuccess(data=SharedDocument(share_link=share_link, permission_id=permission_id).model_dump())
