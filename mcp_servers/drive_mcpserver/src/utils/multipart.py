import json
from typing import Any, Dict, Optional, Tuple
from uuid import uuid4


def build_related_body(
    metadata: Dict[str, Any], content: bytes, mime_type: str, boundary: Optional[str] = None
) -> Tuple[bytes, str]:
    """
    Builds a multipart/related upload body: a JSON metadata part followed by the
    raw media part. Returns the body and the matching Content-Type header value.
    """
    boundary = boundary or f"drive_upload_{uuid4().hex}"
    head = "\r\n".join([
        f"--{boundary}",
        "Content-Type: application/json; charset=UTF-8",
        "",
        json.dumps(metadata),
        f"--{boundary}",
        f"Content-Type: {mime_type}",
        "",
        "",
    ]).encode("utf-8")
    tail = f"\r\n--{boundary}--".encode("utf-8")
    return head + content + tail, f"multipart/related; boundary={boundary}"
