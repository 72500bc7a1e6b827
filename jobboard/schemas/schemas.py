"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
"""

from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List
from datetime import datetime


# ============================================================
# COMPANY SCHEMAS
# ============================================================

class CompanyCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=200)
    email: EmailStr
    location: str = Field(..., min_length=1)
    contact_number: str = Field(..., min_length=3, max_length=30)
    reg_number: str = Field(..., min_length=1, max_length=50)

class CompanyUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=200)
    email: Optional[EmailStr] = None
    location: Optional[str] = Field(None, min_length=1)
    contact_number: Optional[str] = Field(None, min_length=3, max_length=30)
    reg_number: Optional[str] = Field(None, min_length=1, max_length=50)

class CompanyResponse(BaseModel):
    company_id: str
    name: str
    email: str
    location: str
    contact_number: str
    reg_number: str
    has_logo_fingerprint: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_doc(cls, doc: dict) -> "CompanyResponse":
        """Build the public view of a company document. The fingerprint itself stays private."""
        return cls(
            company_id=str(doc["_id"]), name=doc["name"], email=doc["email"],
            location=doc["location"], contact_number=doc["contact_number"],
            reg_number=doc["reg_number"], has_logo_fingerprint=bool(doc.get("logo_hash")),
            created_at=doc.get("created_at"), updated_at=doc.get("updated_at")
        )

class CompanyListResponse(BaseModel):
    companies: List[CompanyResponse]
    total: int


# ============================================================
# VERIFICATION SCHEMAS
# ============================================================

class VerificationResponse(BaseModel):
    verified: bool
    message: str
    distance: Optional[int] = None


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True
