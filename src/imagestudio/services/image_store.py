"""Local storage for generated images."""

import logging
import time
from pathlib import Path
from typing import Callable

from imagestudio.utils.data_url import extension_for_mime_type

logger = logging.getLogger(__name__)

# Guards against pathological loops when many saves land on the same millisecond
MAX_NAME_ATTEMPTS = 100


class ImageStore:
    """Writes generated images into a flat, timestamp-named directory."""

    def __init__(
        self,
        image_dir: Path,
        url_prefix: str = "/generated-images",
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize image store.

        Args:
            image_dir: Directory that receives image files
            url_prefix: Public URL prefix under which image_dir is served
            clock: Returns epoch seconds; used to build file names
        """
        self.image_dir = Path(image_dir)
        self.url_prefix = url_prefix.rstrip("/")
        self._clock = clock

    def ensure_directory(self) -> None:
        """Create the image directory if needed. Failures are logged, not raised."""
        try:
            self.image_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"❌ [ImageStore] Error creating image directory {self.image_dir}: {e}")

    def save(self, data: bytes, mime_type: str) -> str:
        """
        Write image bytes to a new file.

        Args:
            data: Decoded image bytes
            mime_type: MIME type of the image (selects the file extension)

        Returns:
            Public relative path of the stored file (e.g. "/generated-images/generatedImage-1700000000000.png")

        Raises:
            OSError: If the file cannot be written
        """
        extension = extension_for_mime_type(mime_type)
        timestamp_ms = int(self._clock() * 1000)

        self.ensure_directory()

        for attempt in range(MAX_NAME_ATTEMPTS):
            suffix = f"-{attempt}" if attempt else ""
            file_name = f"generatedImage-{timestamp_ms}{suffix}.{extension}"
            file_path = self.image_dir / file_name
            try:
                # Exclusive create: never overwrite an earlier image
                with open(file_path, "xb") as f:
                    f.write(data)
            except FileExistsError:
                continue

            logger.info(f"💾 [ImageStore] Stored image {file_path} ({len(data)} bytes)")
            return f"{self.url_prefix}/{file_name}"

        raise FileExistsError(f"Could not find a free file name for timestamp {timestamp_ms}")
