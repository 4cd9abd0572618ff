"""Tests for downloading and storing cover images."""

from pathlib import Path

import httpx
import pytest

from src.bookshelf.core.errors import CoverAcquisitionError
from src.bookshelf.core.services.cover_storage import CoverStorageService
from src.bookshelf.runtime.config.config_data import CoverConfig
from tests.fixtures.covers import BASE_URL
from tests.utils import PNG_BYTES


class BrokenStream(httpx.SyncByteStream):
    """Body stream that fails after the first chunk."""

    def __iter__(self):
        yield b"partial-bytes"
        raise httpx.ReadError("connection reset")


def _leftovers(directory: Path) -> list[Path]:
    return [p for p in directory.iterdir() if p.name.endswith(".part")]


class TestCoverPaths:
    def test_cover_path_is_keyed_by_book_id(self, cover_storage, cover_config):
        path = cover_storage.cover_path(42)
        assert path == Path(cover_config.storage_dir) / "42.png"

    def test_public_url_uses_base_url_and_route_prefix(self, cover_storage):
        assert cover_storage.public_url(42) == f"{BASE_URL}/api/books/cover/42"

    def test_trailing_slash_on_base_url_is_dropped(self, cover_config):
        service = CoverStorageService(config=cover_config, base_url="http://books.test/")
        assert service.public_url(7) == "http://books.test/api/books/cover/7"

    def test_client_uses_configured_timeouts_without_redirects(self, tmp_path):
        config = CoverConfig(storage_dir=str(tmp_path), connect_timeout=1.5, read_timeout=2.5)
        service = CoverStorageService(config=config, base_url=BASE_URL)
        with service._build_client() as client:
            assert client.timeout.connect == 1.5
            assert client.timeout.read == 2.5
            assert client.follow_redirects is False


class TestSaveCoverFromUrl:
    def test_success_writes_bytes_and_returns_reference(self, cover_storage, image_server):
        url = image_server.serve("http://images.test/cover.png")

        reference = cover_storage.save_cover_from_url(url, 42)

        assert reference == f"{BASE_URL}/api/books/cover/42"
        assert cover_storage.cover_path(42).read_bytes() == PNG_BYTES
        assert _leftovers(cover_storage.storage_dir) == []

    def test_creates_storage_directory(self, cover_storage, image_server):
        assert not cover_storage.storage_dir.exists()
        cover_storage.save_cover_from_url(image_server.serve("http://images.test/a.png"), 1)
        assert cover_storage.storage_dir.is_dir()

    def test_extension_is_fixed_regardless_of_content_type(self, cover_storage, image_server):
        url = image_server.serve(
            "http://images.test/photo.jpg",
            content=b"jpeg-bytes",
            headers={"Content-Type": "image/jpeg"},
        )

        cover_storage.save_cover_from_url(url, 3)

        assert cover_storage.cover_path(3).name == "3.png"
        assert cover_storage.cover_path(3).read_bytes() == b"jpeg-bytes"

    def test_second_acquisition_replaces_the_artifact(self, cover_storage, image_server):
        first = image_server.serve("http://images.test/first.png", content=b"first" * 100)
        second = image_server.serve("http://images.test/second.png", content=b"second")

        cover_storage.save_cover_from_url(first, 5)
        cover_storage.save_cover_from_url(second, 5)

        assert cover_storage.cover_path(5).read_bytes() == b"second"
        assert sorted(p.name for p in cover_storage.storage_dir.iterdir()) == ["5.png"]

    @pytest.mark.parametrize("status_code", [201, 204, 299])
    def test_any_2xx_is_accepted(self, cover_storage, image_server, status_code):
        url = image_server.serve("http://images.test/ok.png", status_code=status_code)
        assert cover_storage.save_cover_from_url(url, 8).endswith("/8")

    @pytest.mark.parametrize("status_code", [304, 403, 404, 500])
    def test_non_2xx_fails_without_writing(self, cover_storage, image_server, status_code):
        url = image_server.serve("http://images.test/bad.png", status_code=status_code)

        with pytest.raises(CoverAcquisitionError) as exc_info:
            cover_storage.save_cover_from_url(url, 9)

        assert exc_info.value.reason == "status"
        assert not cover_storage.cover_path(9).exists()
        assert not cover_storage.storage_dir.exists()

    def test_redirect_is_not_followed(self, cover_storage, image_server):
        image_server.serve("http://images.test/real.png")
        url = image_server.serve(
            "http://images.test/moved.png",
            content=b"",
            status_code=302,
            headers={"Location": "http://images.test/real.png"},
        )

        with pytest.raises(CoverAcquisitionError) as exc_info:
            cover_storage.save_cover_from_url(url, 10)

        assert exc_info.value.reason == "status"
        assert [str(r.url) for r in image_server.requests] == [url]
        assert not cover_storage.cover_path(10).exists()

    def test_timeout_is_reported_as_acquisition_failure(self, cover_storage, image_server):
        url = image_server.fail("http://images.test/slow.png", httpx.ConnectTimeout("timed out"))

        with pytest.raises(CoverAcquisitionError) as exc_info:
            cover_storage.save_cover_from_url(url, 11)

        assert exc_info.value.reason == "transport"
        assert isinstance(exc_info.value.__cause__, httpx.ConnectTimeout)

    def test_failed_copy_keeps_previous_artifact_intact(self, cover_storage, image_server):
        good = image_server.serve("http://images.test/good.png")
        image_server.routes["http://images.test/broken.png"] = httpx.Response(
            200, stream=BrokenStream()
        )
        cover_storage.save_cover_from_url(good, 12)

        with pytest.raises(CoverAcquisitionError) as exc_info:
            cover_storage.save_cover_from_url("http://images.test/broken.png", 12)

        assert exc_info.value.reason == "transport"
        assert cover_storage.cover_path(12).read_bytes() == PNG_BYTES
        assert _leftovers(cover_storage.storage_dir) == []

    def test_failed_copy_leaves_no_artifact(self, cover_storage, image_server):
        image_server.routes["http://images.test/broken.png"] = httpx.Response(
            200, stream=BrokenStream()
        )

        with pytest.raises(CoverAcquisitionError):
            cover_storage.save_cover_from_url("http://images.test/broken.png", 13)

        assert not cover_storage.cover_path(13).exists()
        assert _leftovers(cover_storage.storage_dir) == []

    def test_storage_failure_is_reported_as_acquisition_failure(self, tmp_path, image_server):
        blocker = tmp_path / "not-a-directory"
        blocker.write_text("occupied")
        service = CoverStorageService(
            config=CoverConfig(storage_dir=str(blocker)),
            base_url=BASE_URL,
            transport=httpx.MockTransport(image_server.handle),
        )
        url = image_server.serve("http://images.test/cover.png")

        with pytest.raises(CoverAcquisitionError) as exc_info:
            service.save_cover_from_url(url, 14)

        assert exc_info.value.reason == "storage"

    def test_malformed_url_is_reported_as_acquisition_failure(self, cover_storage):
        with pytest.raises(CoverAcquisitionError):
            cover_storage.save_cover_from_url("http://[not-a-host/cover.png", 15)


class TestCoverLookup:
    def test_open_cover_returns_none_when_missing(self, cover_storage):
        assert cover_storage.open_cover(99) is None

    def test_open_cover_returns_path_after_save(self, cover_storage, image_server):
        cover_storage.save_cover_from_url(image_server.serve("http://images.test/c.png"), 21)
        assert cover_storage.open_cover(21) == cover_storage.cover_path(21)

    def test_discard_cover(self, cover_storage, image_server):
        cover_storage.save_cover_from_url(image_server.serve("http://images.test/c.png"), 22)

        assert cover_storage.discard_cover(22) is True
        assert cover_storage.open_cover(22) is None
        assert cover_storage.discard_cover(22) is False
