from typing import Optional
from pydantic import BaseModel
from app.models.user import UserRole


# ---------------------------------------------------------
# CURRENT STAFF (decoded from the portal session token)
# ---------------------------------------------------------
class CurrentStaff(BaseModel):
    staff_id: str
    role: UserRole
    access_token: Optional[str] = None
