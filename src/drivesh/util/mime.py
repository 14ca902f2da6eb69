from __future__ import annotations

from typing import Optional

FOLDER_MIME: str = "application/vnd.google-apps.folder"

# Google Workspace types cannot be downloaded as-is; they are exported to an
# office format and the matching extension is appended to the local file.
EXPORT_FORMATS: dict[str, tuple[str, str]] = {
    "application/vnd.google-apps.document": (
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        ".docx",
    ),
    "application/vnd.google-apps.spreadsheet": (
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        ".xlsx",
    ),
    "application/vnd.google-apps.presentation": (
        "application/vnd.openxmlformats-officedocument.presentationml.presentation",
        ".pptx",
    ),
    "application/vnd.google-apps.drawing": ("image/png", ".png"),
    "application/vnd.google-apps.script": (
        "application/vnd.google-apps.script+json",
        ".json",
    ),
}


def is_folder(mime_type: Optional[str]) -> bool:
    return mime_type == FOLDER_MIME


def is_google_app(mime_type: Optional[str]) -> bool:
    """Returns True if the MIME type is a Google 'apps' type (folders included)."""
    if not mime_type:
        return False
    return mime_type.startswith("application/vnd.google-apps.")


def export_format(mime_type: Optional[str]) -> Optional[tuple[str, str]]:
    """Return (export_mime, extension) for exportable Google types, else None."""
    if not mime_type:
        return None
    return EXPORT_FORMATS.get(mime_type)


def exported_file_name(file_name: str, mime_type: Optional[str]) -> str:
    """Append the export extension for Google Workspace types."""
    fmt = export_format(mime_type)
    if fmt is None:
        return file_name
    ext = fmt[1]
    if file_name.lower().endswith(ext):
        return file_name
    return f"{file_name}{ext}"
