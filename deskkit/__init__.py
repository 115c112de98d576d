"""Desktop helper kit: file dialogs, image byte conversion and MySQL commands."""

from __future__ import annotations

from .database import CommandError, ConnectionState, HandlerOptions, MySqlHandler, PreparedCommand
from .dialogs import FileDialogHandler, TkDialogHost
from .images import ImageFormat, bytes_to_image, image_to_bytes
from .models import ConnectionProfile, DialogOutcome, DialogResult, SslMode

__all__ = [
    "CommandError",
    "ConnectionProfile",
    "ConnectionState",
    "DialogOutcome",
    "DialogResult",
    "FileDialogHandler",
    "HandlerOptions",
    "ImageFormat",
    "MySqlHandler",
    "PreparedCommand",
    "SslMode",
    "TkDialogHost",
    "bytes_to_image",
    "image_to_bytes",
]
