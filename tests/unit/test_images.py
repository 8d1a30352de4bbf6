"""
Tests for PUT /post-image and serving stored images from /images.
"""

from pathlib import Path

from fastapi.testclient import TestClient

from feedhub.main import create_app

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def _stored_files(directory: Path) -> list:
    return sorted(p.name for p in directory.iterdir())


class TestUploadAuth:
    def test_unauthenticated_upload_is_401(self, client, images_dir):
        response = client.put(
            "/post-image",
            files={"image": ("cat.png", PNG_BYTES, "image/png")},
        )

        assert response.status_code == 401
        assert response.json() == {"message": "Not authenticated!", "data": None}
        assert _stored_files(images_dir) == []

    def test_unauthenticated_upload_keeps_old_path(self, client, images_dir):
        old = images_dir / "old.png"
        old.write_bytes(PNG_BYTES)

        response = client.put("/post-image", data={"oldPath": str(old)})

        assert response.status_code == 401
        assert old.exists()


class TestUploadOutcomes:
    def test_no_file_is_200(self, client, images_dir, user_id, auth_headers):
        response = client.put("/post-image", headers=auth_headers(user_id))

        assert response.status_code == 200
        assert response.json() == {"message": "no file attached"}

    def test_png_is_stored_with_original_name_suffix(self, client, images_dir, user_id, auth_headers):
        response = client.put(
            "/post-image",
            headers=auth_headers(user_id),
            files={"image": ("cat.png", PNG_BYTES, "image/png")},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "file stored"
        assert body["filePath"].endswith("-cat.png")
        stored = Path(body["filePath"])
        assert stored.parent == images_dir
        assert stored.read_bytes() == PNG_BYTES

    def test_jpeg_and_jpg_are_accepted(self, client, images_dir, user_id, auth_headers):
        for name, content_type in [("a.jpeg", "image/jpeg"), ("b.jpg", "image/jpg")]:
            response = client.put(
                "/post-image",
                headers=auth_headers(user_id),
                files={"image": (name, b"\xff\xd8\xff", content_type)},
            )
            assert response.status_code == 201
        assert len(_stored_files(images_dir)) == 2

    def test_disallowed_type_is_rejected_and_not_stored(self, client, images_dir, user_id, auth_headers):
        response = client.put(
            "/post-image",
            headers=auth_headers(user_id),
            files={"image": ("notes.txt", b"hello", "text/plain")},
        )

        assert response.status_code == 415
        body = response.json()
        assert body["data"] == {"filename": "notes.txt", "content_type": "text/plain"}
        assert _stored_files(images_dir) == []

    def test_client_directories_are_stripped(self, client, images_dir, user_id, auth_headers):
        response = client.put(
            "/post-image",
            headers=auth_headers(user_id),
            files={"image": ("../../evil.png", PNG_BYTES, "image/png")},
        )

        assert response.status_code == 201
        assert Path(response.json()["filePath"]).parent == images_dir


class TestOldPath:
    def test_old_path_removed_with_new_upload(self, client, images_dir, user_id, auth_headers):
        old = images_dir / "old.png"
        old.write_bytes(PNG_BYTES)

        response = client.put(
            "/post-image",
            headers=auth_headers(user_id),
            files={"image": ("new.png", PNG_BYTES, "image/png")},
            data={"oldPath": str(old)},
        )

        assert response.status_code == 201
        assert not old.exists()

    def test_old_path_removed_without_new_upload(self, client, images_dir, user_id, auth_headers):
        old = images_dir / "old.png"
        old.write_bytes(PNG_BYTES)

        response = client.put("/post-image", headers=auth_headers(user_id), data={"oldPath": str(old)})

        assert response.status_code == 200
        assert not old.exists()

    def test_missing_old_path_is_not_an_error(self, client, images_dir, user_id, auth_headers):
        response = client.put(
            "/post-image",
            headers=auth_headers(user_id),
            data={"oldPath": str(images_dir / "gone.png")},
        )

        assert response.status_code == 200

    def test_old_path_outside_images_dir_is_left_alone(self, client, images_dir, tmp_path, user_id, auth_headers):
        outside = tmp_path / "precious.txt"
        outside.write_text("keep me")

        response = client.put("/post-image", headers=auth_headers(user_id), data={"oldPath": str(outside)})

        assert response.status_code == 200
        assert outside.exists()


class TestServing:
    def test_stored_image_is_served_under_images(self, images_dir, user_id, auth_headers):
        # The static mount captures IMAGES_DIR when the app is built.
        client = TestClient(create_app(), raise_server_exceptions=False)
        upload = client.put(
            "/post-image",
            headers=auth_headers(user_id),
            files={"image": ("cat.png", PNG_BYTES, "image/png")},
        )
        assert upload.status_code == 201
        name = Path(upload.json()["filePath"]).name

        response = client.get(f"/images/{name}")

        assert response.status_code == 200
        assert response.content == PNG_BYTES
        assert response.headers["access-control-allow-origin"] == "*"

    def test_missing_image_is_404(self, images_dir):
        client = TestClient(create_app(), raise_server_exceptions=False)

        assert client.get("/images/nope.png").status_code == 404
