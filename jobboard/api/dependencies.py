"""
FastAPI dependencies - build services from settings.

Tests swap these out with app.dependency_overrides.
"""

from functools import partial

from fastapi import Depends

from jobboard.core.config import Settings, get_settings
from jobboard.services.company_events import CompanyEventBroadcaster, get_company_broadcaster
from jobboard.services.fingerprint_service import compute_fingerprint
from jobboard.services.mongo_service import CompanyRepository, get_company_service
from jobboard.services.verification_service import LogoVerificationService
from jobboard.utils.file_upload import UploadStorage


def get_company_repository() -> CompanyRepository:
    return get_company_service()


def get_upload_storage(settings: Settings = Depends(get_settings)) -> UploadStorage:
    return UploadStorage(settings.upload_dir)


def get_fingerprinter(settings: Settings = Depends(get_settings)):
    """Fingerprint function bound to the configured algorithm and hash size."""
    return partial(
        compute_fingerprint,
        algorithm=settings.logo_hash_algorithm,
        hash_size=settings.logo_hash_size,
    )


def get_logo_verifier(
    companies: CompanyRepository = Depends(get_company_repository),
    storage: UploadStorage = Depends(get_upload_storage),
    fingerprint=Depends(get_fingerprinter),
    settings: Settings = Depends(get_settings),
) -> LogoVerificationService:
    return LogoVerificationService(
        companies=companies,
        storage=storage,
        fingerprint=fingerprint,
        threshold=settings.logo_match_threshold,
    )


def get_broadcaster() -> CompanyEventBroadcaster:
    return get_company_broadcaster()
