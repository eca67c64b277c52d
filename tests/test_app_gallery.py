from datetime import UTC, datetime, timedelta
from typing import Never

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from starlette.status import HTTP_200_OK, HTTP_500_INTERNAL_SERVER_ERROR

from photoalbum.dao import PhotoDAO

BASE_TIME = datetime(2024, 3, 1, 8, 0, tzinfo=UTC)


def test_gallery_empty(client: TestClient) -> None:
    response = client.get("/")
    assert response.status_code == HTTP_200_OK
    data = response.json()
    assert data["photos"] == []
    assert isinstance(data["timestamp"], int)
    assert data["success_message"] is None
    assert data["error_message"] is None


def test_gallery_lists_newest_first(client: TestClient, dao: PhotoDAO) -> None:
    dao.create("photo2.jpg", b"\x02", "image/jpeg", uploaded_at=BASE_TIME - timedelta(days=1))
    dao.create("photo1.jpg", b"\x01", "image/jpeg", uploaded_at=BASE_TIME)
    response = client.get("/")
    assert response.status_code == HTTP_200_OK
    photos = response.json()["photos"]
    assert [p["original_file_name"] for p in photos] == ["photo1.jpg", "photo2.jpg"]
    assert "photo_data" not in photos[0]
    assert photos[0]["url"] == f"/photo/{photos[0]['id']}"


def test_gallery_timestamps_are_utc_aware(client: TestClient, dao: PhotoDAO) -> None:
    dao.create("photo.jpg", b"\x01", "image/jpeg", uploaded_at=BASE_TIME)
    uploaded_at = client.get("/").json()["photos"][0]["uploaded_at"]
    parsed = datetime.fromisoformat(uploaded_at)
    assert parsed.utcoffset() == timedelta(0)
    assert parsed == BASE_TIME


def test_gallery_shows_delete_notice_once(client: TestClient, dao: PhotoDAO) -> None:
    photo = dao.create("gone.jpg", b"\x01", "image/jpeg")
    client.post(f"/detail/{photo.id}/delete", follow_redirects=False)

    first = client.get("/")
    assert first.json()["success_message"] == "Photo deleted successfully"
    assert first.json()["error_message"] is None

    second = client.get("/")
    assert second.json()["success_message"] is None


def test_gallery_shows_error_notice_for_missing_delete(client: TestClient) -> None:
    client.post("/detail/non-existent-id/delete", follow_redirects=False)
    data = client.get("/").json()
    assert data["error_message"] == "Photo not found or could not be deleted"
    assert data["success_message"] is None


def test_gallery_ignores_unknown_notice(client: TestClient) -> None:
    client.cookies.set("flash", "something-else")
    data = client.get("/").json()
    assert data["success_message"] is None
    assert data["error_message"] is None


def test_gallery_storage_error(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    def broken_list(_self: PhotoDAO) -> Never:
        msg = "SELECT photos"
        raise OperationalError(msg, {}, Exception("connection refused"))

    monkeypatch.setattr(PhotoDAO, "list_all", broken_list)
    response = client.get("/")
    assert response.status_code == HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json()["detail"] == "Storage error"
