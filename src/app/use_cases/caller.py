"""
Authenticated caller as seen by use cases.
"""

from dataclasses import dataclass
from typing import Any, Dict
from uuid import UUID


@dataclass(frozen=True)
class Caller:
    user_id: UUID
    tenant_id: UUID  # home tenant
    is_master: bool = False

    @classmethod
    def from_claims(cls, claims: Dict[str, Any]) -> "Caller":
        return cls(
            user_id=UUID(str(claims["user_id"])),
            tenant_id=UUID(str(claims["tenant_id"])),
            is_master=bool(claims.get("is_master", False)),
        )
