"""
Builds the raw RFC 2822 message handed to the Gmail send endpoint.

The message is assembled line by line so that the header order and the
multipart layout are fully deterministic apart from the boundary token.
"""

import base64
import re
from typing import List, Optional
from uuid import uuid4

from shared.errors import InvalidAddress
from ..types.gmail_models import EmailRequest

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def validate_email(address: str) -> bool:
    return bool(EMAIL_PATTERN.match(address))


def encode_header(text: str) -> str:
    """RFC 2047 base64-encodes a header value, but only when it contains non-ASCII characters."""
    if text.isascii():
        return text
    return f"=?UTF-8?B?{base64.b64encode(text.encode('utf-8')).decode('ascii')}?="


def resolve_mime_type(request: EmailRequest) -> str:
    if request.mime_type:
        return request.mime_type
    if request.html_body and request.body:
        return "multipart/alternative"
    if request.html_body:
        return "text/html"
    return "text/plain"


def _validate_recipients(request: EmailRequest):
    for field, addresses in (("Recipient", request.to), ("CC", request.cc), ("BCC", request.bcc)):
        for address in addresses or []:
            if not validate_email(address):
                raise InvalidAddress(field, address)


def _text_part(content_type: str, content: str) -> List[str]:
    return [
        f"Content-Type: {content_type}; charset=UTF-8",
        "Content-Transfer-Encoding: 7bit",
        "",
        content,
    ]


def build_message(request: EmailRequest, boundary: Optional[str] = None) -> str:
    """
    Returns the CRLF-joined message. Raises InvalidAddress for the first
    malformed To, CC or BCC address.
    """
    _validate_recipients(request)
    mime_type = resolve_mime_type(request)

    lines = ["From: me", f"To: {', '.join(request.to)}"]
    if request.cc:
        lines.append(f"Cc: {', '.join(request.cc)}")
    if request.bcc:
        lines.append(f"Bcc: {', '.join(request.bcc)}")
    lines.append(f"Subject: {encode_header(request.subject)}")
    if request.in_reply_to:
        lines.append(f"In-Reply-To: {request.in_reply_to}")
        lines.append(f"References: {request.in_reply_to}")
    lines.append("MIME-Version: 1.0")

    if mime_type == "multipart/alternative":
        boundary = boundary or f"----=_NextPart_{uuid4().hex}"
        lines.append(f'Content-Type: multipart/alternative; boundary="{boundary}"')
        lines.append("")
        # An HTML-only message still gets a plain-text alternative
        lines.append(f"--{boundary}")
        lines.extend(_text_part("text/plain", request.body or request.html_body or ""))
        lines.append("")
        lines.append(f"--{boundary}")
        lines.extend(_text_part("text/html", request.html_body or request.body))
        lines.append("")
        lines.append(f"--{boundary}--")
    elif mime_type == "text/html":
        lines.extend(_text_part("text/html", request.html_body or request.body))
    else:
        lines.extend(_text_part("text/plain", request.body))

    return "\r\n".join(lines)


def encode_message(message: str) -> str:
    """base64url without padding, as expected in the `raw` field."""
    return base64.urlsafe_b64encode(message.encode("utf-8")).decode("ascii").rstrip("=")
