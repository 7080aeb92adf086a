"""Dialog components for the panel."""

from .base import AlertDialog, ConfirmDialog, DialogBase
from .text_viewer import TextViewerDialog

__all__ = [
    "AlertDialog",
    "ConfirmDialog",
    "DialogBase",
    "TextViewerDialog",
]
