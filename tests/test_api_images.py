# =============================================================================
# tests/test_api_images.py - Image Endpoint Tests
# =============================================================================
# HTTP-level tests for /api/upload and /api/images.
#
# Run with: pytest tests/test_api_images.py -v
# =============================================================================

import pytest


def _upload(client, content, content_type="image/png", category="beans", name="a.png"):
    return client.post(
        "/api/upload",
        files={"file": (name, content, content_type)},
        data={"category": category},
    )


# =============================================================================
# Upload
# =============================================================================

class TestUpload:
    """Tests for POST /api/upload."""

    def test_upload_returns_image_path(self, client, png_bytes):
        response = _upload(client, png_bytes)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["imagePath"] == f"/images/beans/{body['fileName']}"
        assert body["fileName"].endswith(".png")

    def test_uploaded_image_is_served(self, client, png_bytes):
        image_path = _upload(client, png_bytes, category="drippers").json()["imagePath"]

        response = client.get(f"/api{image_path}")

        assert response.status_code == 200
        assert response.content == png_bytes
        assert response.headers["content-type"] == "image/png"
        assert response.headers["cache-control"] == "public, max-age=31536000, immutable"

    def test_invalid_type_returns_400(self, client):
        response = _upload(client, b"hello", content_type="text/plain", name="a.txt")

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_FILE_TYPE"

    def test_oversize_returns_413(self, client):
        response = _upload(client, b"x" * (5 * 1024 * 1024 + 1), content_type="image/jpeg", name="big.jpg")

        assert response.status_code == 413

    def test_invalid_category_returns_400(self, client, png_bytes):
        response = _upload(client, png_bytes, category="avatars")

        assert response.status_code == 400
        assert response.json()["detail"] == "無効なカテゴリです"

    def test_missing_file_returns_400(self, client):
        response = client.post("/api/upload", data={"category": "beans"})

        assert response.status_code == 400
        assert response.json()["detail"] == "ファイルが指定されていません"


# =============================================================================
# Delivery
# =============================================================================

class TestImageDelivery:
    """Tests for GET /api/images/{path}."""

    def test_traversal_returns_400(self, client):
        response = client.get("/api/images/..%2F..%2Fetc%2Fpasswd")

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_PATH"

    def test_missing_image_returns_404(self, client):
        response = client.get("/api/images/beans/missing.png")

        assert response.status_code == 404
        assert response.json()["detail"] == "画像が見つかりません"

    @pytest.mark.parametrize("name, media_type", [
        ("photo.webp", "image/webp"),
        ("photo.JPG", "image/jpeg"),
        ("photo.bin", "application/octet-stream"),
    ])
    def test_media_type_from_extension(self, client, image_store, name, media_type):
        (image_store.upload_root / "tastings").mkdir(parents=True)
        (image_store.upload_root / "tastings" / name).write_bytes(b"data")

        response = client.get(f"/api/images/tastings/{name}")

        assert response.status_code == 200
        assert response.headers["content-type"] == media_type


# =============================================================================
# Delete
# =============================================================================

class TestDeleteUpload:
    """Tests for DELETE /api/upload."""

    def test_delete_removes_image(self, client, png_bytes):
        image_path = _upload(client, png_bytes).json()["imagePath"]

        response = client.request("DELETE", "/api/upload", json={"imagePath": image_path})

        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert client.get(f"/api{image_path}").status_code == 404

    def test_delete_missing_returns_404(self, client):
        response = client.request("DELETE", "/api/upload", json={"imagePath": "/images/beans/gone.png"})
        assert response.status_code == 404

    def test_delete_outside_images_returns_400(self, client):
        response = client.request("DELETE", "/api/upload", json={"imagePath": "/images/../data/database.db"})
        assert response.status_code == 400
