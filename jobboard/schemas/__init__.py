"""
Schemas module - Request/Response schemas for API endpoints.

Difference from services:
- Services: Internal data structures (Mongo documents, verdicts)
- Schemas: API contract (what client sends/receives)
"""

from jobboard.schemas.schemas import (
    CompanyCreate, CompanyUpdate, CompanyResponse, CompanyListResponse, VerificationResponse,
    MessageResponse
)

__all__ = [
    "CompanyCreate",
    "CompanyUpdate",
    "CompanyResponse",
    "CompanyListResponse",
    "VerificationResponse",
    "MessageResponse",
]
