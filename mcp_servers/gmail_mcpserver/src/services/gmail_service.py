"""
Service for interacting with the Gmail and People APIs using HTTPx.

This service abstracts away the direct REST calls, handling authentication,
request construction and response parsing. Every public method returns a
ServiceResult envelope instead of raising.
"""

import base64
import logging
from typing import Any, Dict, List, Optional, Tuple

import httpx

from shared.errors import InvalidInputError
from shared.services.envelope import ServiceFailure, ServiceResult, ServiceSuccess
from shared.services.provider_service import GoogleService, provider_call
from ..types.gmail_models import (
    EmailAttachment,
    EmailContent,
    EmailRequest,
    EmailSearchResult,
    ModifyEmailRequest,
    PEOPLE_READ_MASK,
    SearchEmailsRequest,
    SearchPeopleRequest,
    SentEmail,
)
from ..utils.mime_builder import build_message, encode_message

logger = logging.getLogger(__name__)

MAX_PEOPLE_PAGE_SIZE = 30
REAUTHORIZE_CONTACTS_MESSAGE = (
    "You need to re-authorize with contacts permissions. Please visit the authorization URL again "
    "to grant access to your Google contacts."
)


def _decode_body(data: str) -> str:
    padded = data + "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(padded).decode("utf-8", errors="replace")


def _header(headers: List[Dict[str, str]], name: str) -> str:
    for header in headers:
        if (header.get("name") or "").lower() == name.lower():
            return header.get("value") or ""
    return ""


def extract_content(part: Dict[str, Any]) -> Tuple[str, str]:
    """Recursively collects the text/plain and text/html bodies of a message payload."""
    text, html = "", ""
    data = (part.get("body") or {}).get("data")
    if data:
        content = _decode_body(data)
        if part.get("mimeType") == "text/plain":
            text = content
        elif part.get("mimeType") == "text/html":
            html = content

    for sub_part in part.get("parts") or []:
        sub_text, sub_html = extract_content(sub_part)
        text += sub_text
        html += sub_html
    return text, html


def extract_attachments(part: Dict[str, Any]) -> List[EmailAttachment]:
    attachments = []
    body = part.get("body") or {}
    if body.get("attachmentId"):
        attachments.append(EmailAttachment(
            id=body["attachmentId"],
            filename=part.get("filename") or f"attachment-{body['attachmentId']}",
            mime_type=part.get("mimeType") or "application/octet-stream",
            size=body.get("size") or 0,
        ))
    for sub_part in part.get("parts") or []:
        attachments.extend(extract_attachments(sub_part))
    return attachments


class GmailService(GoogleService):
    """A service for making direct API calls to Gmail."""

    def __init__(self, access_token: str, http_client: Optional[httpx.AsyncClient] = None):
        super().__init__(access_token, http_client)
        self.base_url = "https://www.googleapis.com/gmail/v1/users/me"
        self.people_url = "https://people.googleapis.com/v1"

    @provider_call("send email")
    async def send_email(self, request: EmailRequest) -> ServiceResult:
        raw = encode_message(build_message(request))
        payload: Dict[str, Any] = {"raw": raw}
        if request.thread_id:
            payload["threadId"] = request.thread_id

        response = await self._request("POST", f"{self.base_url}/messages/send", json=payload)
        sent = response.json()
        if not sent.get("id"):
            return ServiceFailure(
                error="Gmail API did not return a message ID",
                details="The email may not have been sent successfully",
            )
        logger.info(f"📧 Email sent, message ID: {sent['id']}")
        return ServiceSuccess(data=SentEmail(message_id=sent["id"], thread_id=sent.get("threadId")).model_dump())

    @provider_call("get email")
    async def get_email(self, message_id: str) -> ServiceResult:
        response = await self._request("GET", f"{self.base_url}/messages/{message_id}", params={"format": "full"})
        message = response.json()
        payload = message.get("payload") or {}
        headers = payload.get("headers") or []
        text, html = extract_content(payload)

        content = EmailContent(
            message_id=message_id,
            thread_id=message.get("threadId") or "",
            subject=_header(headers, "Subject"),
            sender=_header(headers, "From"),
            to=_header(headers, "To"),
            date=_header(headers, "Date"),
            text=text,
            html=html,
            attachments=extract_attachments(payload),
        )
        return ServiceSuccess(data=content.model_dump())

    @provider_call("search emails")
    async def search_emails(self, request: SearchEmailsRequest) -> ServiceResult:
        response = await self._request(
            "GET", f"{self.base_url}/messages", params={"q": request.query, "maxResults": request.max_results}
        )
        messages = response.json().get("messages") or []
        logger.info(f"Found {len(messages)} messages for query '{request.query}'")

        results = []
        for message in messages:
            detail = await self._request(
                "GET",
                f"{self.base_url}/messages/{message['id']}",
                params={"format": "metadata", "metadataHeaders": ["Subject", "From", "Date"]},
            )
            headers = (detail.json().get("payload") or {}).get("headers") or []
            results.append(EmailSearchResult(
                id=message["id"],
                subject=_header(headers, "Subject"),
                sender=_header(headers, "From"),
                date=_header(headers, "Date"),
            ))
        return ServiceSuccess(data=[r.model_dump() for r in results])

    @provider_call("modify email")
    async def modify_email(self, request: ModifyEmailRequest) -> ServiceResult:
        body: Dict[str, List[str]] = {}
        if request.add_label_ids:
            body["addLabelIds"] = request.add_label_ids
        if request.remove_label_ids:
            body["removeLabelIds"] = request.remove_label_ids
        if not body:
            raise InvalidInputError("At least one of add_label_ids or remove_label_ids must be provided")

        await self._request("POST", f"{self.base_url}/messages/{request.message_id}/modify", json=body)
        return ServiceSuccess(data={
            "message_id": request.message_id,
            "added": request.add_label_ids or [],
            "removed": request.remove_label_ids or [],
        })

    @provider_call("search contacts")
    async def search_people(self, request: SearchPeopleRequest) -> ServiceResult:
        """Searches the "other contacts" the user has interacted with."""
        response = await self._send(
            "GET",
            f"{self.people_url}/otherContacts:search",
            params={
                "query": request.query.strip(),
                "pageSize": min(request.page_size, MAX_PEOPLE_PAGE_SIZE),
                "readMask": request.read_mask.strip() or PEOPLE_READ_MASK,
            },
        )
        if response.status_code == 403:
            message = self.error_details(response).lower()
            if "contacts" in message or "people" in message:
                logger.warning("People API rejected the token: contacts scope missing")
                return ServiceFailure(error=REAUTHORIZE_CONTACTS_MESSAGE)
        response.raise_for_status()

        return ServiceSuccess(data=response.json() or {"results": []})
