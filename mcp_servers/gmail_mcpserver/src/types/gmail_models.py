from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel

MimeType = Literal["text/plain", "text/html", "multipart/alternative"]

PEOPLE_READ_MASK = "names,emailAddresses,phoneNumbers,metadata"


class EmailRequest(BaseModel):
    to: List[str]
    subject: str
    body: str = ""
    html_body: Optional[str] = None
    # When unset, the content type is derived from which bodies are present
    mime_type: Optional[MimeType] = None
    cc: Optional[List[str]] = None
    bcc: Optional[List[str]] = None
    thread_id: Optional[str] = None
    in_reply_to: Optional[str] = None


class SentEmail(BaseModel):
    message_id: str
    thread_id: Optional[str] = None


class EmailAttachment(BaseModel):
    id: str
    filename: str
    mime_type: str
    size: int


class EmailContent(BaseModel):
    message_id: str
    thread_id: str = ""
    subject: str = ""
    sender: str = ""
    to: str = ""
    date: str = ""
    text: str = ""
    html: str = ""
    attachments: List[EmailAttachment] = []

    def to_text(self) -> str:
        """Renders the message the way the get_email tool presents it."""
        note = ""
        if not self.text and self.html:
            note = "[Note: This email is HTML-formatted. Plain text version not available.]\n\n"
        body = self.text or self.html

        attachment_info = ""
        if self.attachments:
            lines = [
                f"- {a.filename} ({a.mime_type}, {round(a.size / 1024)} KB, ID: {a.id})"
                for a in self.attachments
            ]
            attachment_info = f"\n\nAttachments ({len(self.attachments)}):\n" + "\n".join(lines)

        return (
            f"Thread ID: {self.thread_id}\nSubject: {self.subject}\nFrom: {self.sender}\n"
            f"To: {self.to}\nDate: {self.date}\n\n{note}{body}{attachment_info}"
        )


class SearchEmailsRequest(BaseModel):
    query: str
    max_results: int = 10


class EmailSearchResult(BaseModel):
    id: str
    subject: str = ""
    sender: str = ""
    date: str = ""


class ModifyEmailRequest(BaseModel):
    message_id: str
    add_label_ids: Optional[List[str]] = None
    remove_label_ids: Optional[List[str]] = None


class SearchPeopleRequest(BaseModel):
    query: str
    page_size: int = 10
    # comma-separated People API person fields
    read_mask: str = PEOPLE_READ_MASK


class SearchPeopleResult(BaseModel):
    results: List[Dict[str, Any]] = []
