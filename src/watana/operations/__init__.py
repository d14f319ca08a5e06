"""Typed operation facades exposed on :class:`~watana.client.WatanaClient`."""

from __future__ import annotations

from .folders import FolderOperations
from .pdf import PdfOperations
from .requests import SignatureRequestOperations

__all__ = ["FolderOperations", "PdfOperations", "SignatureRequestOperations"]
