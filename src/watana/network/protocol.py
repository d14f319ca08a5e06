"""
Transport protocol abstraction for the Watana service.

The client depends on this protocol, not on the httpx implementation, so
tests and alternative transports can stand in for it.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, TypeVar

from pydantic import BaseModel

ResultT = TypeVar("ResultT", bound=BaseModel)


class OperationTransport(Protocol):
    """Protocol for sending one Watana operation and normalizing its answer."""

    async def send(self, operation: str, payload: Mapping[str, Any]) -> str:
        """
        Send one operation and return the response as JSON text.

        Binary (ZIP) answers are wrapped into a download envelope first, so
        the caller always receives JSON.

        Args:
            operation: Catalogue name, used when the payload names none.
            payload: Request body.

        Raises:
            ValidationError: If the operation name is empty.
            TransportError: On a non-2xx status.
            CommunicationError: On connection failures.
            RequestTimeoutError: When the timeout expires.
            UnsupportedContentTypeError: On an unknown response media type.
            UnexpectedError: On anything else.
        """
        ...

    async def send_typed(
        self, operation: str, payload: Mapping[str, Any], result_type: type[ResultT]
    ) -> ResultT:
        """
        Send one operation and decode the JSON into *result_type*.

        Raises:
            ResponseDecodingError: If the JSON does not fit *result_type*.
            Anything :meth:`send` raises.
        """
        ...
