from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class ListingServiceError(Exception):
    code: str
    message: str
    details: Optional[Any] = None
    http_status: int = 500

    def __str__(self) -> str:
        return self.message

    def to_contract_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "error": self.message,
            "code": self.code,
        }
        if self.details is not None:
            payload["details"] = self.details
        return payload
