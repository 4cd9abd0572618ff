"""Cover image acquisition and local storage."""

import os
import tempfile
from pathlib import Path

import httpx
from loguru import logger

from src.bookshelf.core.errors import CoverAcquisitionError
from src.bookshelf.runtime.config.config_data import CoverConfig
from src.bookshelf.runtime.context import get_config


class CoverStorageService:
    """Downloads cover images and keeps one file per book on local disk.

    Every stored cover lives at ``<storage_dir>/<book_id><extension>`` and is
    exposed under ``<base_url><route_prefix><book_id>``.
    """

    def __init__(
        self,
        config: CoverConfig | None = None,
        base_url: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        main_config = get_config()
        self._config = config or main_config.cover
        self._base_url = (base_url or main_config.app.base_url).rstrip("/")
        self._transport = transport

    @property
    def storage_dir(self) -> Path:
        return Path(self._config.storage_dir)

    def cover_path(self, book_id: int) -> Path:
        return self.storage_dir / f"{book_id}{self._config.file_extension}"

    def public_url(self, book_id: int) -> str:
        return f"{self._base_url}{self._config.route_prefix}{book_id}"

    def _build_client(self) -> httpx.Client:
        timeout = httpx.Timeout(
            self._config.read_timeout, connect=self._config.connect_timeout
        )
        return httpx.Client(
            timeout=timeout, follow_redirects=False, transport=self._transport
        )

    def save_cover_from_url(self, image_url: str, book_id: int) -> str:
        """Download ``image_url`` and store it as the cover of ``book_id``.

        Redirects are not followed and any status outside 2xx is rejected
        before a byte is read. The body is streamed into a temporary file that
        replaces the final path only after the copy completed.

        Args:
            image_url: Remote location of the image
            book_id: Identifier the artifact is keyed by

        Returns:
            The public reference URL of the stored cover

        Raises:
            CoverAcquisitionError: On any network, status or storage failure
        """
        target = self.cover_path(book_id)
        tmp_path: Path | None = None

        try:
            with self._build_client() as client, client.stream("GET", image_url) as response:
                logger.info(
                    "Cover URL responded with status {}: {}", response.status_code, image_url
                )
                if not response.is_success:
                    raise CoverAcquisitionError(
                        f"Cover URL returned status {response.status_code}",
                        reason="status",
                        url=image_url,
                    )

                self.storage_dir.mkdir(parents=True, exist_ok=True)
                fd, tmp_name = tempfile.mkstemp(
                    dir=self.storage_dir, prefix=f".{book_id}-", suffix=".part"
                )
                tmp_path = Path(tmp_name)

                logger.info("Downloading cover: url={}, path={}", image_url, target)
                with os.fdopen(fd, "wb") as fh:
                    for chunk in response.iter_bytes(self._config.chunk_size):
                        fh.write(chunk)

                os.replace(tmp_path, target)
                tmp_path = None
        except CoverAcquisitionError as exc:
            logger.warning("Cover rejected for book {}: {}", book_id, exc)
            raise
        except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError, ValueError) as exc:
            logger.error(
                "Cover download failed: url={}, bookId={}, error={!r}", image_url, book_id, exc
            )
            raise CoverAcquisitionError(
                "Cover could not be downloaded", reason="transport", url=image_url
            ) from exc
        except OSError as exc:
            logger.error(
                "Cover could not be stored: path={}, bookId={}, error={!r}", target, book_id, exc
            )
            raise CoverAcquisitionError(
                "Cover could not be stored", reason="storage", url=image_url
            ) from exc
        finally:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)

        public_url = self.public_url(book_id)
        logger.info("Cover stored: path={}, public_url={}", target, public_url)
        return public_url

    def open_cover(self, book_id: int) -> Path | None:
        """Return the stored cover path for ``book_id`` if it exists."""
        path = self.cover_path(book_id)
        return path if path.is_file() else None

    def discard_cover(self, book_id: int) -> bool:
        """Remove the stored cover for ``book_id``. Returns whether a file was removed."""
        path = self.cover_path(book_id)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        logger.info("Removed cover artifact: {}", path)
        return True
