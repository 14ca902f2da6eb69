from .ids import new_fetch_id
from .mime import (
    EXPORT_FORMATS,
    FOLDER_MIME,
    export_format,
    exported_file_name,
    is_folder,
    is_google_app,
)
from .paths import (
    ROOT,
    base_name,
    is_drive_switch,
    join_path,
    normalize,
    parent_path,
    relative_to,
    resolve,
    split_drive_prefix,
    split_file_path,
    strip_trailing,
)
from .time import from_epoch_seconds, parse_rfc3339, parse_timestamp, to_rfc3339

__all__ = [
    "new_fetch_id",
    "FOLDER_MIME",
    "EXPORT_FORMATS",
    "is_folder",
    "is_google_app",
    "export_format",
    "exported_file_name",
    "ROOT",
    "normalize",
    "resolve",
    "strip_trailing",
    "is_drive_switch",
    "split_drive_prefix",
    "split_file_path",
    "join_path",
    "parent_path",
    "base_name",
    "relative_to",
    "parse_rfc3339",
    "to_rfc3339",
    "parse_timestamp",
    "from_epoch_seconds",
]
