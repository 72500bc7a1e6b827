"""
MongoDB Service - CRUD operations for the companies collection.

Each company document holds the profile fields plus `logo_hash`,
the reference fingerprint of the company's official logo:

    {
        "name": "Ceylon Traders",
        "email": "hello@ceylontraders.lk",
        "location": "Colombo",
        "contact_number": "+94-112345678",
        "reg_number": "PV/12345/2020",
        "logo_hash": "ffc3c3c3c3c3ffff",   # None until a logo is registered
        "created_at": datetime,
        "updated_at": datetime
    }

Writes are whole-document replaces, so concurrent logo updates are last-write-wins.
"""

from datetime import datetime, timezone
from typing import Optional, List, Protocol
from bson import ObjectId
from bson.errors import InvalidId
from pymongo.collection import Collection

from jobboard.db.mongodb import get_collection, COLLECTIONS


# ============================================================
# HELPER: Convert ObjectId to string for JSON serialization
# ============================================================

def serialize_doc(doc: dict) -> dict:
    """Convert MongoDB document to JSON-serializable dict."""
    if doc is None:
        return None
    if "_id" in doc:
        doc["_id"] = str(doc["_id"])
    return doc


def serialize_docs(docs: list) -> list:
    """Convert list of MongoDB documents to JSON-serializable list."""
    return [serialize_doc(doc) for doc in docs]


def _to_object_id(company_id: str) -> Optional[ObjectId]:
    try:
        return ObjectId(company_id)
    except (InvalidId, TypeError):
        return None


# ============================================================
# REPOSITORY INTERFACE
# The verification flow only depends on this, never on pymongo
# ============================================================

class CompanyRepository(Protocol):
    """Lookup and persistence of company records."""

    def find_by_id(self, company_id: str) -> Optional[dict]: ...

    def find_by_name(self, name: str) -> Optional[dict]: ...

    def find_by_email(self, email: str) -> Optional[dict]: ...

    def list_companies(self) -> List[dict]: ...

    def save(self, company: dict) -> dict: ...

    def delete(self, company_id: str) -> bool: ...


# ============================================================
# COMPANIES COLLECTION
# ============================================================

class CompanyService:
    """
    MongoDB-backed CompanyRepository.
    """

    def __init__(self, collection: Collection = None):
        self.collection: Collection = (
            collection if collection is not None else get_collection(COLLECTIONS["companies"])
        )

    def find_by_id(self, company_id: str) -> Optional[dict]:
        """Fetch a company by MongoDB ObjectId string. Malformed ids simply don't match."""
        oid = _to_object_id(company_id)
        if oid is None:
            return None
        return serialize_doc(self.collection.find_one({"_id": oid}))

    def find_by_name(self, name: str) -> Optional[dict]:
        """Fetch a company by its exact registered name."""
        return serialize_doc(self.collection.find_one({"name": name}))

    def find_by_email(self, email: str) -> Optional[dict]:
        return serialize_doc(self.collection.find_one({"email": email}))

    def list_companies(self) -> List[dict]:
        """All companies, newest first."""
        cursor = self.collection.find().sort("created_at", -1)
        return serialize_docs(list(cursor))

    def save(self, company: dict) -> dict:
        """
        Insert a new company (no `_id`) or replace an existing one.

        Returns:
            The stored document with `_id` as a string
        """
        doc = dict(company)
        now = datetime.now(timezone.utc)
        doc["updated_at"] = now

        company_id = doc.pop("_id", None)
        if company_id is None:
            doc.setdefault("created_at", now)
            result = self.collection.insert_one(doc)
            doc["_id"] = str(result.inserted_id)
            return doc

        self.collection.replace_one({"_id": ObjectId(company_id)}, doc, upsert=True)
        doc["_id"] = str(company_id)
        return doc

    def delete(self, company_id: str) -> bool:
        """Delete a company. Returns False when nothing matched."""
        oid = _to_object_id(company_id)
        if oid is None:
            return False
        result = self.collection.delete_one({"_id": oid})
        return result.deleted_count > 0


def get_company_service() -> CompanyService:
    """
    Get the company repository.

    Usage:
        companies = get_company_service()
        companies.find_by_name("Ceylon Traders")
    """
    return CompanyService()
