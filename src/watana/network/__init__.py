"""Network transport layer."""

from __future__ import annotations

from .protocol import OperationTransport
from .transport import WatanaTransport

__all__ = ["OperationTransport", "WatanaTransport"]
