# models/note.py
from pydantic import BaseModel, ConfigDict, ValidationError
from typing import Any, List, Optional

class Attachment(BaseModel):
    """One uploaded file. Every stored attachment has exactly these keys."""
    secureUrl: str
    publicId: Optional[str] = None
    originalFilename: Optional[str] = None
    resourceType: Optional[str] = None
    format: Optional[str] = None
    bytes: Optional[int] = None
    folder: Optional[str] = None
    relativePath: Optional[str] = None

# top-level note field -> attachment field it is copied from
MIRRORED_FIELDS = {
    "fileUrl": "secureUrl",
    "publicId": "publicId",
    "originalFilename": "originalFilename",
    "resourceType": "resourceType",
    "format": "format",
    "bytes": "bytes",
}

class NoteCreate(BaseModel):
    title: Optional[str] = None
    subject: Optional[str] = None
    courseId: Optional[str] = None
    courseTitle: Optional[str] = None
    description: Optional[str] = None
    attachments: Optional[List[Any]] = None  # raw entries, see normalize_attachments
    fileUrl: Optional[str] = None
    publicId: Optional[str] = None
    originalFilename: Optional[str] = None
    resourceType: Optional[str] = None
    format: Optional[str] = None
    bytes: Optional[int] = None

class NoteUpdate(NoteCreate):
    model_config = ConfigDict(extra="forbid")

def normalize_attachments(entries: Optional[List[Any]]) -> List[dict]:
    """Keep the entries that carry a secure URL and coerce them to the Attachment shape.

    Entries that are not objects or have no string secureUrl are dropped
    without complaint. Badly typed metadata on a kept entry becomes None.
    """
    attachments = []
    for entry in entries or []:
        if not isinstance(entry, dict):
            continue
        secure_url = entry.get("secureUrl")
        if not secure_url or not isinstance(secure_url, str):
            continue
        attachment = {"secureUrl": secure_url}
        for field in Attachment.model_fields:
            if field == "secureUrl":
                continue
            try:
                checked = Attachment(secureUrl=secure_url, **{field: entry.get(field)})
            except ValidationError:
                attachment[field] = None
            else:
                attachment[field] = getattr(checked, field)
        attachments.append(Attachment(**attachment).model_dump())
    return attachments

def mirrored_fields(attachments: List[dict], note: NoteCreate) -> dict:
    first = attachments[0] if attachments else {}
    fields = {}
    for note_field, attachment_field in MIRRORED_FIELDS.items():
        value = first.get(attachment_field)
        fields[note_field] = value if value is not None else getattr(note, note_field)
    return fields
