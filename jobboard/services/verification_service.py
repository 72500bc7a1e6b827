"""
Logo Verification Service - does an uploaded logo match the one a company registered?

Flow for one request:
1. Validate company name and upload
2. Look the company up by name
3. Fingerprint the uploaded logo
4. Hamming distance against the stored reference fingerprint
5. Threshold decision -> verdict
6. Delete the uploaded file (on every path, including failures)
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from jobboard.core.errors import VerificationError, VerificationErrorKind
from jobboard.services.fingerprint_service import hamming_distance
from jobboard.services.mongo_service import CompanyRepository
from jobboard.utils.file_upload import UploadStorage

logger = logging.getLogger(__name__)


MATCH_MESSAGE = "match"
MISMATCH_MESSAGE = "mismatch"
NO_REFERENCE_MESSAGE = "no reference fingerprint on file"


@dataclass(frozen=True)
class VerificationVerdict:
    verified: bool
    distance: Optional[int]
    message: str


def apply_policy(distance: Optional[int], threshold: int) -> VerificationVerdict:
    """
    Map a distance to a verdict. The threshold is inclusive.

    None means the fingerprints could not be compared (no reference on file,
    or one produced by a different hash configuration).
    """
    if distance is None:
        return VerificationVerdict(verified=False, distance=None, message=NO_REFERENCE_MESSAGE)
    if distance <= threshold:
        return VerificationVerdict(verified=True, distance=distance, message=MATCH_MESSAGE)
    return VerificationVerdict(verified=False, distance=distance, message=MISMATCH_MESSAGE)


class LogoVerificationService:
    """
    Verifies uploaded logos against stored reference fingerprints.

    Stateless apart from its collaborators, so one instance can serve
    concurrent requests.
    """

    def __init__(
        self,
        companies: CompanyRepository,
        storage: UploadStorage,
        fingerprint: Callable[[bytes], str],
        threshold: int,
    ):
        if threshold < 0:
            raise ValueError("threshold must be >= 0")
        self.companies = companies
        self.storage = storage
        self.fingerprint = fingerprint
        self.threshold = threshold

    def verify(self, company_name: Optional[str], upload: Optional[Path]) -> VerificationVerdict:
        """
        Verify an uploaded logo for a company.

        Args:
            company_name: Registered company name
            upload: Handle of the uploaded logo in transient storage;
                always deleted before this returns or raises

        Returns:
            VerificationVerdict (a clean mismatch is a verdict, not an error)

        Raises:
            VerificationError: bad_request, not_found or internal_error
        """
        cleaned = False
        try:
            verdict = self._verify(company_name, upload)
        except VerificationError:
            raise
        except Exception as e:
            logger.exception("Logo verification failed for company %r", company_name)
            raise VerificationError(
                VerificationErrorKind.internal_error, "Internal server error"
            ) from e
        finally:
            cleaned = self._discard(upload)

        # a verdict is only returned once the upload is really gone
        if not cleaned:
            raise VerificationError(VerificationErrorKind.internal_error, "Internal server error")
        return verdict

    def _discard(self, upload: Optional[Path]) -> bool:
        """Delete the uploaded file. Returns False if storage refused."""
        try:
            self.storage.delete(upload)
        except OSError:
            logger.exception("Could not delete uploaded logo %s", upload)
            return False
        return True

    def _verify(self, company_name: Optional[str], upload: Optional[Path]) -> VerificationVerdict:
        name = (company_name or "").strip()
        if not name or upload is None:
            raise VerificationError(
                VerificationErrorKind.bad_request, "Missing company name or logo"
            )

        company = self.companies.find_by_name(name)
        if company is None:
            raise VerificationError(VerificationErrorKind.not_found, "Company not found")

        candidate = self.fingerprint(self.storage.read(upload))
        reference = company.get("logo_hash")

        distance = hamming_distance(candidate, reference)
        logger.info(
            "Compare %s: %s vs %s -> distance %s", name, candidate, reference, distance
        )
        if distance is None and reference:
            logger.warning(
                "Stored fingerprint for %r is not comparable with the current hash settings", name
            )

        return apply_policy(distance, self.threshold)
