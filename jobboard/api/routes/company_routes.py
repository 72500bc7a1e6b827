"""
Company Routes

POST /companies - Register a company (multipart form, optional logo)
GET /companies - List companies
GET /companies/{company_id} - Get one company
PUT /companies/{company_id} - Update profile fields
DELETE /companies/{company_id} - Delete a company
PUT /companies/{company_id}/logo - Replace the registered logo fingerprint

Registration, profile edits and logo changes publish `company:update` to WebSocket subscribers.
Logo files are fingerprinted in memory and never written to disk here.
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Depends, UploadFile, File, Form
from pydantic import ValidationError
from pymongo.errors import DuplicateKeyError
from starlette.concurrency import run_in_threadpool

from jobboard.api.dependencies import get_company_repository, get_fingerprinter, get_broadcaster
from jobboard.core.config import Settings, get_settings
from jobboard.schemas.schemas import (
    CompanyCreate, CompanyUpdate, CompanyResponse, CompanyListResponse, MessageResponse
)
from jobboard.services.company_events import CompanyEventBroadcaster, COMPANY_UPDATE_EVENT
from jobboard.services.fingerprint_service import UnreadableImage
from jobboard.services.mongo_service import CompanyRepository
from jobboard.utils.file_upload import read_logo_upload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/companies", tags=["Companies"])


async def fingerprint_logo(logo: UploadFile, settings: Settings, fingerprint) -> str:
    """Validate an uploaded logo and return its fingerprint."""
    content, _ = await read_logo_upload(logo, settings.max_logo_size_bytes)
    try:
        return await run_in_threadpool(fingerprint, content)
    except UnreadableImage as e:
        logger.warning("Rejected logo %r: %s", logo.filename, e)
        raise HTTPException(status_code=400, detail="Error processing uploaded logo")


async def publish_update(broadcaster: CompanyEventBroadcaster, company: CompanyResponse) -> None:
    await broadcaster.publish(COMPANY_UPDATE_EVENT, company.model_dump(mode="json"))


@router.post("", response_model=CompanyResponse, status_code=201)
async def create_company(
    name: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    location: Optional[str] = Form(None),
    contact_number: Optional[str] = Form(None),
    reg_number: Optional[str] = Form(None),
    logo: Optional[UploadFile] = File(None),
    companies: CompanyRepository = Depends(get_company_repository),
    fingerprint=Depends(get_fingerprinter),
    broadcaster: CompanyEventBroadcaster = Depends(get_broadcaster),
    settings: Settings = Depends(get_settings),
):
    """
    Register a company.

    If a logo is supplied its fingerprint becomes the reference
    used by /verify-company.
    """
    if not all([name, email, location, contact_number, reg_number]):
        raise HTTPException(status_code=400, detail="Please provide all required fields")

    try:
        data = CompanyCreate(
            name=name.strip(), email=email.strip(), location=location.strip(),
            contact_number=contact_number.strip(), reg_number=reg_number.strip()
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.errors(include_url=False, include_context=False))

    if companies.find_by_email(data.email):
        raise HTTPException(status_code=400, detail="Company already exists")

    logo_hash = None
    if logo is not None and logo.filename:
        logo_hash = await fingerprint_logo(logo, settings, fingerprint)

    try:
        doc = companies.save({**data.model_dump(), "logo_hash": logo_hash})
    except DuplicateKeyError:
        raise HTTPException(status_code=400, detail="Company already exists")

    logger.info("Registered company %r (logo fingerprint: %s)", data.name, bool(logo_hash))

    company = CompanyResponse.from_doc(doc)
    await publish_update(broadcaster, company)
    return company


@router.get("", response_model=CompanyListResponse)
async def list_companies(companies: CompanyRepository = Depends(get_company_repository)):
    """List all registered companies."""
    docs = companies.list_companies()
    return CompanyListResponse(
        companies=[CompanyResponse.from_doc(d) for d in docs], total=len(docs)
    )


@router.get("/{company_id}", response_model=CompanyResponse)
async def get_company(company_id: str, companies: CompanyRepository = Depends(get_company_repository)):
    """Get a company by id."""
    doc = companies.find_by_id(company_id)
    if not doc:
        raise HTTPException(status_code=404, detail="Company not found")
    return CompanyResponse.from_doc(doc)


@router.put("/{company_id}/logo", response_model=CompanyResponse)
async def update_logo(
    company_id: str,
    logo: UploadFile = File(...),
    companies: CompanyRepository = Depends(get_company_repository),
    fingerprint=Depends(get_fingerprinter),
    broadcaster: CompanyEventBroadcaster = Depends(get_broadcaster),
    settings: Settings = Depends(get_settings),
):
    """Replace the company's reference logo fingerprint."""
    doc = companies.find_by_id(company_id)
    if not doc:
        raise HTTPException(status_code=404, detail="Company not found")

    doc["logo_hash"] = await fingerprint_logo(logo, settings, fingerprint)
    doc = companies.save(doc)

    logger.info("Updated logo fingerprint for company %r", doc["name"])

    company = CompanyResponse.from_doc(doc)
    await publish_update(broadcaster, company)
    return company


@router.put("/{company_id}", response_model=CompanyResponse)
async def update_company(
    company_id: str,
    data: CompanyUpdate,
    companies: CompanyRepository = Depends(get_company_repository),
    broadcaster: CompanyEventBroadcaster = Depends(get_broadcaster),
):
    """Update company profile. Only the fields sent are changed."""
    updates = data.model_dump(exclude_none=True)
    if not updates:
        raise HTTPException(status_code=400, detail="No fields to update")

    doc = companies.find_by_id(company_id)
    if not doc:
        raise HTTPException(status_code=404, detail="Company not found")

    if "email" in updates:
        owner = companies.find_by_email(updates["email"])
        if owner and str(owner["_id"]) != str(doc["_id"]):
            raise HTTPException(status_code=400, detail="Email already registered")

    doc.update(updates)
    try:
        doc = companies.save(doc)
    except DuplicateKeyError:
        raise HTTPException(status_code=400, detail="Email already registered")

    logger.info("Updated company %r: %s", doc["name"], ", ".join(sorted(updates)))

    company = CompanyResponse.from_doc(doc)
    await publish_update(broadcaster, company)
    return company


@router.delete("/{company_id}", response_model=MessageResponse)
async def delete_company(company_id: str, companies: CompanyRepository = Depends(get_company_repository)):
    """Delete a company and its reference fingerprint."""
    if not companies.delete(company_id):
        raise HTTPException(status_code=404, detail="Company not found")

    logger.info("Deleted company %s", company_id)
    return MessageResponse(message="Company deleted successfully")
