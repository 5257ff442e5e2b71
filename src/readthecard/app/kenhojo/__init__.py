from readthecard.app.kenhojo.display import format_record, read_aloud_text
from readthecard.app.kenhojo.session import (
    ReaderService,
    list_readers,
    open_session,
    read_identity_record,
)

__all__ = [
    "ReaderService",
    "format_record",
    "list_readers",
    "open_session",
    "read_aloud_text",
    "read_identity_record",
]
