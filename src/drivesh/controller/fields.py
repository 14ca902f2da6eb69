"""Field selectors for Google Drive API responses."""

from __future__ import annotations

ENTRY_FIELDS: str = "id,name,mimeType,modifiedTime,createdTime,size"

LIST_FIELDS: str = f"nextPageToken,files({ENTRY_FIELDS})"

LOOKUP_FIELDS: str = "files(id,name,mimeType)"
