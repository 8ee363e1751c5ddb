"""
Gmail tools for MCP server, using GmailService.
"""

import json
import logging
from typing import List, Optional

from shared.services.envelope import ServiceResult, to_tool_text
from shared.services.tool_runner import run_tool
from ..mcp_builder import mcp_builder
from ..dependencies import get_gmail_config
from ..services.gmail_service import GmailService
from ..types.gmail_models import (
    EmailContent,
    EmailRequest,
    MimeType,
    ModifyEmailRequest,
    PEOPLE_READ_MASK,
    SearchEmailsRequest,
    SearchPeopleRequest,
)

logger = logging.getLogger(__name__)


async def _gmail_service() -> GmailService:
    config = await get_gmail_config()
    return GmailService(config.access_token)

# --- Result formatting ---

def _format_sent(result: ServiceResult) -> str:
    if not result.success:
        return to_tool_text(result)
    return f"Email sent successfully! Message ID: {result.data['message_id']}"


def _format_email(result: ServiceResult) -> str:
    if not result.success:
        return to_tool_text(result)
    return EmailContent(**result.data).to_text()


def _format_search(result: ServiceResult) -> str:
    if not result.success:
        return to_tool_text(result)
    if not result.data:
        return "No emails found matching the query."
    return "\n".join(
        f"ID: {r['id']}\nSubject: {r['subject']}\nFrom: {r['sender']}\nDate: {r['date']}\n"
        for r in result.data
    )


def _format_modified(result: ServiceResult) -> str:
    if not result.success:
        return to_tool_text(result)
    actions = []
    if result.data["added"]:
        actions.append(f"Added labels: {', '.join(result.data['added'])}")
    if result.data["removed"]:
        actions.append(f"Removed labels: {', '.join(result.data['removed'])}")
    return f"Email {result.data['message_id']} modified successfully.\n" + "\n".join(actions)


def _format_people(result: ServiceResult) -> str:
    if not result.success:
        return to_tool_text(result)
    return json.dumps(result.data or {"results": []}, indent=2, ensure_ascii=False)

# --- Tool Implementations ---

@mcp_builder.tool()
async def send_email(
    to: List[str],
    subject: str,
    body: str,
    html_body: Optional[str] = None,
    mime_type: Optional[MimeType] = None,
    cc: Optional[List[str]] = None,
    bcc: Optional[List[str]] = None,
    thread_id: Optional[str] = None,
    in_reply_to: Optional[str] = None,
) -> str:
    """
    Sends an email from the user's Gmail account, with optional HTML content, CC and BCC recipients.
    To reply within a conversation, pass the thread_id and the Message-ID being replied to as in_reply_to.
    """
    logger.debug(f"📥 TOOL PARAMS [send_email]: to={to}, cc={cc}, bcc={bcc}, subject={subject!r}")
    return await run_tool(
        "send_email",
        _gmail_service,
        lambda service: service.send_email(EmailRequest(
            to=to,
            subject=subject,
            body=body,
            html_body=html_body,
            mime_type=mime_type,
            cc=cc,
            bcc=bcc,
            thread_id=thread_id,
            in_reply_to=in_reply_to,
        )),
        format_result=_format_sent,
    )

@mcp_builder.tool()
async def get_email(message_id: str) -> str:
    """
    Retrieves the full content of an email: headers, body and a list of its attachments.
    """
    return await run_tool(
        "get_email",
        _gmail_service,
        lambda service: service.get_email(message_id),
        format_result=_format_email,
    )

@mcp_builder.tool()
async def search_emails(query: str, max_results: int = 10) -> str:
    """
    Searches emails with Gmail search syntax, e.g. 'from:example@gmail.com', 'subject:meeting' or 'is:unread'.
    Returns the ID, subject, sender and date of each match.
    """
    return await run_tool(
        "search_emails",
        _gmail_service,
        lambda service: service.search_emails(SearchEmailsRequest(query=query, max_results=max_results)),
        format_result=_format_search,
    )

@mcp_builder.tool()
async def modify_email(
    message_id: str,
    add_label_ids: Optional[List[str]] = None,
    remove_label_ids: Optional[List[str]] = None,
) -> str:
    """
    Modifies email labels to mark as read/unread, archive, mark as important/spam, etc.
    Common labels: UNREAD, INBOX, IMPORTANT, SPAM, TRASH, STARRED. Removing INBOX archives the email.
    """
    return await run_tool(
        "modify_email",
        _gmail_service,
        lambda service: service.modify_email(ModifyEmailRequest(
            message_id=message_id,
            add_label_ids=add_label_ids,
            remove_label_ids=remove_label_ids,
        )),
        format_result=_format_modified,
    )

@mcp_builder.tool()
async def search_people(query: str, page_size: int = 10, read_mask: str = PEOPLE_READ_MASK) -> str:
    """
    Searches the people the user has exchanged emails with, by name, email address or phone number.
    Returns at most 30 contacts. Requires the contacts permission scope.
    `read_mask` lists the person fields to return, e.g. "names,emailAddresses".
    """
    return await run_tool(
        "search_people",
        _gmail_service,
        lambda service: service.search_people(SearchPeopleRequest(query=query, page_size=page_size, read_mask=read_mask)),
        format_result=_format_people,
    )
