import re
from datetime import timedelta

from tests.conftest import START_MILLIS, ScriptedRandom, SteppingClock, video_file


def stored_files(upload_dir):
    return sorted(p.name for p in upload_dir.iterdir()) if upload_dir.exists() else []


class TestUpload:
    def test_example_upload(self, client, upload_dir):
        response = client.post(
            "/upload",
            data={"title": "My Clip"},
            files=video_file("clip.mov", size=1_200_000, content_type="video/quicktime"),
        )

        assert response.status_code == 200
        record = response.json()
        assert record["title"] == "My Clip"
        assert record["size"] == 1_200_000
        assert re.fullmatch(r"/uploads/my-clip-\d+-\d+\.mov", record["path"])
        assert record["path"] == f"/uploads/{record['filename']}"
        assert set(record) == {"id", "title", "filename", "path", "size", "uploadDate"}

    def test_size_matches_bytes_on_disk(self, client, upload_dir):
        record = client.post("/upload", files=video_file("a.mp4", size=4321, content_type="video/mp4")).json()
        assert (upload_dir / record["filename"]).stat().st_size == record["size"] == 4321

    def test_exact_record_with_fixed_clock_and_random(self, make_client):
        client = make_client(
            variant="progress",
            clock=SteppingClock(step=timedelta(0)),
            rng=ScriptedRandom(0.123456789),
        )
        record = client.post("/upload", data={"title": "My Clip"}, files=video_file()).json()

        assert record == {
            "id": str(START_MILLIS),
            "title": "My Clip",
            "filename": f"my-clip-{START_MILLIS}-1234.mov",
            "path": f"/uploads/my-clip-{START_MILLIS}-1234.mov",
            "size": 1024,
            "uploadDate": "2024-05-01T10:00:00.000Z",
        }

    def test_title_defaults_to_filename_stem(self, client):
        record = client.post("/upload", files=video_file("Holiday Trip.mp4", content_type="video/mp4")).json()
        assert record["title"] == "Holiday Trip"
        assert record["filename"].startswith("holiday-trip-")

    def test_basic_variant_keeps_raw_title_and_full_filename(self, make_client):
        client = make_client(variant="basic")
        titled = client.post("/upload", data={"title": "My Clip"}, files=video_file()).json()
        untitled = client.post("/upload", data={"title": ""}, files=video_file()).json()

        assert titled["filename"].startswith("My Clip-")
        assert untitled["title"] == "clip.mov"
        assert untitled["filename"].startswith("clip.mov-")

    def test_basic_variant_cannot_write_outside_upload_dir(self, make_client, upload_dir, tmp_path):
        client = make_client(variant="basic")
        record = client.post("/upload", data={"title": "../../outside"}, files=video_file()).json()

        assert "/" not in record["filename"]
        assert (upload_dir / record["filename"]).is_file()
        assert stored_files(tmp_path) == ["uploads"]

    def test_long_title_is_stored(self, make_client, tmp_path):
        for variant in ("progress", "basic"):
            upload_dir = tmp_path / variant
            client = make_client(variant=variant, upload_dir=upload_dir)
            response = client.post("/upload", data={"title": "a" * 300}, files=video_file())

            assert response.status_code == 200
            record = response.json()
            assert record["title"] == "a" * 300
            assert record["filename"].endswith(".mov")
            assert (upload_dir / record["filename"]).is_file()

    def test_served_file_matches_upload(self, client):
        payload = bytes(range(256)) * 4
        record = client.post(
            "/upload", files={"video": ("clip.mov", payload, "video/quicktime")}
        ).json()

        response = client.get(record["path"])
        assert response.status_code == 200
        assert response.content == payload
        assert response.headers["content-type"] == "video/quicktime"

    def test_same_millisecond_uploads_get_distinct_ids(self, make_client):
        client = make_client(clock=SteppingClock(step=timedelta(0)))
        first = client.post("/upload", files=video_file()).json()
        second = client.post("/upload", files=video_file()).json()

        assert int(second["id"]) == int(first["id"]) + 1
        assert first["filename"] != second["filename"]

    def test_name_collision_draws_a_new_name(self, make_client, upload_dir):
        client = make_client(
            clock=SteppingClock(step=timedelta(0)),
            rng=ScriptedRandom(0.1, 0.1, 0.2),
        )
        first = client.post("/upload", files=video_file(fill=b"a")).json()
        second = client.post("/upload", files=video_file(fill=b"b")).json()

        assert first["filename"] == f"clip-{START_MILLIS}-1000.mov"
        assert second["filename"] == f"clip-{START_MILLIS}-2000.mov"
        assert (upload_dir / first["filename"]).read_bytes() == b"a" * 1024

    def test_persistent_collisions_fail_without_overwriting(self, make_client, upload_dir):
        client = make_client(
            clock=SteppingClock(step=timedelta(0)),
            rng=ScriptedRandom(0.1),
        )
        first = client.post("/upload", files=video_file(fill=b"a")).json()
        response = client.post("/upload", files=video_file(fill=b"b"))

        assert response.status_code == 500
        assert "error" in response.json()
        assert (upload_dir / first["filename"]).read_bytes() == b"a" * 1024
        assert len(client.get("/videos").json()) == 1


class TestRejections:
    def test_missing_file(self, client, upload_dir):
        response = client.post("/upload", data={"title": "no file"})
        assert response.status_code == 400
        assert response.json() == {"error": "No file uploaded"}
        assert client.get("/videos").json() == []

    def test_non_video_mime_type(self, client, upload_dir):
        response = client.post("/upload", files=video_file("notes.txt", content_type="text/plain"))

        assert response.status_code == 415
        assert response.json() == {"error": "Only video files are allowed"}
        assert client.get("/videos").json() == []
        assert stored_files(upload_dir) == []

    def test_video_extension_does_not_bypass_mime_check(self, client, upload_dir):
        response = client.post("/upload", files=video_file("clip.mp4", content_type="image/png"))
        assert response.status_code == 415
        assert stored_files(upload_dir) == []

    def test_oversize_upload(self, make_client, upload_dir):
        client = make_client(max_upload_size=1024)
        response = client.post("/upload", files=video_file(size=2048))

        assert response.status_code == 413
        assert "error" in response.json()
        assert client.get("/videos").json() == []
        assert stored_files(upload_dir) == []

    def test_upload_at_ceiling_is_accepted(self, make_client):
        client = make_client(max_upload_size=1024)
        assert client.post("/upload", files=video_file(size=1024)).status_code == 200


class TestCatalogRoutes:
    def test_list_returns_uploads_in_order(self, client):
        titles = [f"clip {n}" for n in range(5)]
        for title in titles:
            assert client.post("/upload", data={"title": title}, files=video_file()).status_code == 200

        videos = client.get("/videos").json()
        assert [v["title"] for v in videos] == titles

    def test_empty_catalog(self, client):
        response = client.get("/videos")
        assert response.status_code == 200
        assert response.json() == []

    def test_get_known_video(self, client):
        record = client.post("/upload", data={"title": "find me"}, files=video_file()).json()
        client.post("/upload", data={"title": "other"}, files=video_file())

        response = client.get(f"/video/{record['id']}")
        assert response.status_code == 200
        assert response.json() == record

    def test_get_unknown_video(self, client):
        response = client.get("/video/123")
        assert response.status_code == 404
        assert response.json() == {"error": "Video not found: 123"}

    def test_apps_do_not_share_catalogs(self, make_client, tmp_path):
        first = make_client(upload_dir=tmp_path / "one")
        second = make_client(upload_dir=tmp_path / "two")
        first.post("/upload", files=video_file())
        assert second.get("/videos").json() == []
