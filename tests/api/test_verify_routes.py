"""
API tests for POST /api/verify-company
"""

import io

from PIL import Image

from jobboard.api.dependencies import get_upload_storage
from jobboard.main import app
from jobboard.services.fingerprint_service import compute_fingerprint
from jobboard.utils.file_upload import UploadStorage
from tests.conftest import leftover_uploads

URL = "/api/verify-company"


def post_logo(client, company_name, content, filename="logo.png", content_type="image/png"):
    data = {"companyName": company_name} if company_name is not None else {}
    files = {"logo": (filename, content, content_type)} if content is not None else None
    return client.post(URL, data=data, files=files)


def test_matching_logo_verified(client, repo, circle_png, upload_dir):
    repo.add("Ceylon Traders", logo_hash=compute_fingerprint(circle_png))

    response = post_logo(client, "Ceylon Traders", circle_png)

    assert response.status_code == 200
    assert response.json() == {"verified": True, "message": "match", "distance": 0}
    assert leftover_uploads(upload_dir) == []


def test_recompressed_logo_verified(client, repo, circle_png, upload_dir):
    repo.add("Ceylon Traders", logo_hash=compute_fingerprint(circle_png))
    buf = io.BytesIO()
    Image.open(io.BytesIO(circle_png)).convert("RGB").resize((180, 180)).save(buf, format="JPEG", quality=85)

    response = post_logo(client, "Ceylon Traders", buf.getvalue(), "logo.jpg", "image/jpeg")

    assert response.status_code == 200
    assert response.json()["verified"] is True


def test_wrong_logo_is_clean_mismatch(client, repo, circle_png, split_png, upload_dir):
    repo.add("Ceylon Traders", logo_hash=compute_fingerprint(circle_png))

    response = post_logo(client, "Ceylon Traders", split_png)

    assert response.status_code == 200
    body = response.json()
    assert body["verified"] is False
    assert body["message"] == "mismatch"
    assert body["distance"] > 10
    assert leftover_uploads(upload_dir) == []


def test_no_reference_fingerprint(client, repo, circle_png, upload_dir):
    repo.add("LankaSoft Pvt Ltd", logo_hash=None)

    response = post_logo(client, "LankaSoft Pvt Ltd", circle_png)

    assert response.status_code == 200
    assert response.json() == {
        "verified": False, "message": "no reference fingerprint on file", "distance": None
    }
    assert leftover_uploads(upload_dir) == []


def test_unknown_company_404_and_cleaned(client, circle_png, upload_dir):
    response = post_logo(client, "Ghost Corp", circle_png)

    assert response.status_code == 404
    assert response.json()["verified"] is False
    assert response.json()["message"] == "Company not found"
    assert leftover_uploads(upload_dir) == []


def test_missing_company_name_400(client, circle_png, upload_dir):
    response = post_logo(client, None, circle_png)
    assert response.status_code == 400
    assert response.json() == {
        "verified": False, "message": "Missing company name or logo", "distance": None
    }
    assert leftover_uploads(upload_dir) == []


def test_blank_company_name_400(client, circle_png):
    assert post_logo(client, "   ", circle_png).status_code == 400


def test_missing_logo_400(client, repo):
    repo.add("Ceylon Traders", logo_hash="ffc3c3c3c3c3ffff")
    response = post_logo(client, "Ceylon Traders", None)
    assert response.status_code == 400
    assert response.json()["verified"] is False


def test_unsupported_file_type_400(client, repo, upload_dir):
    repo.add("Ceylon Traders", logo_hash="ffc3c3c3c3c3ffff")
    response = post_logo(client, "Ceylon Traders", b"hello", "logo.txt", "text/plain")
    assert response.status_code == 400
    assert "Unsupported file type" in response.json()["message"]
    assert leftover_uploads(upload_dir) == []


def test_oversized_logo_413(client, repo, upload_dir):
    repo.add("Ceylon Traders", logo_hash="ffc3c3c3c3c3ffff")
    response = post_logo(client, "Ceylon Traders", b"\0" * (1024 * 1024 + 1))
    assert response.status_code == 413
    assert leftover_uploads(upload_dir) == []


def test_undecodable_image_500_and_cleaned(client, repo, upload_dir):
    repo.add("Ceylon Traders", logo_hash="ffc3c3c3c3c3ffff")

    response = post_logo(client, "Ceylon Traders", b"this is not a png")

    assert response.status_code == 500
    assert response.json() == {
        "verified": False, "message": "Internal server error", "distance": None
    }
    assert leftover_uploads(upload_dir) == []


def test_verification_never_publishes(client, repo, broadcaster, circle_png):
    repo.add("Ceylon Traders", logo_hash=compute_fingerprint(circle_png))
    post_logo(client, "Ceylon Traders", circle_png)
    assert broadcaster.events == []


class LockedStorage(UploadStorage):
    def delete(self, path):
        raise PermissionError("file locked")


def test_cleanup_fault_reported_as_500(client, repo, circle_png, upload_dir):
    repo.add("Ceylon Traders", logo_hash=compute_fingerprint(circle_png))
    app.dependency_overrides[get_upload_storage] = lambda: LockedStorage(str(upload_dir))

    response = post_logo(client, "Ceylon Traders", circle_png)

    assert response.status_code == 500
    assert response.json() == {"verified": False, "message": "Internal server error", "distance": None}
