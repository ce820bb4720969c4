from typing import Optional
from fastapi import Header, HTTPException

RESTRICTED_ROLES = {"HR"}

def resolve_owner_restriction(role: Optional[str], user_id: Optional[int]) -> Optional[int]:
    """HR users only ever see the candidates they sourced; other roles see all."""
    if (role or "").strip().upper() not in RESTRICTED_ROLES:
        return None
    if user_id is None:
        raise HTTPException(status_code=401, detail="Missing user id for restricted role")
    return user_id

def get_owner_restriction(
    x_user_role: Optional[str] = Header(None),
    x_user_id: Optional[int] = Header(None),
) -> Optional[int]:
    # Both headers are set by the upstream auth layer.
    return resolve_owner_restriction(x_user_role, x_user_id)
