import mimetypes
import os
import secrets
import time
from typing import Optional, Set

from fastapi import UploadFile

from school_directory.core.config import settings, get_upload_folder
from school_directory.core.exceptions import (
    FileTooLargeException,
    InvalidFileTypeException,
    UploadWriteException,
)
from school_directory.core.logging import logger


class UploadService:
    """Stores school images in the public upload folder under generated names."""

    FILENAME_PREFIX = "school"
    MAX_NAME_ATTEMPTS = 5

    def __init__(
        self,
        upload_folder: Optional[str] = None,
        max_size: Optional[int] = None,
        allowed_types: Optional[Set[str]] = None,
        chunk_size: Optional[int] = None
    ):
        self.upload_folder = upload_folder or get_upload_folder()
        self.max_size = max_size or settings.MAX_UPLOAD_SIZE
        self.allowed_types = allowed_types or settings.ALLOWED_IMAGE_TYPES
        self.chunk_size = chunk_size or settings.UPLOAD_CHUNK_SIZE

    @classmethod
    def generate_filename(cls, original_filename: Optional[str], content_type: Optional[str] = None) -> str:
        """
        Build ``school-<epoch millis>-<random>`` keeping the original extension.

        Falls back to an extension guessed from the content type when the
        original name has none.
        """
        ext = os.path.splitext(original_filename or "")[1].lower()
        if not ext and content_type:
            ext = mimetypes.guess_extension(content_type) or ""
        unique_suffix = f"{int(time.time() * 1000)}-{secrets.randbelow(10 ** 9)}"
        return f"{cls.FILENAME_PREFIX}-{unique_suffix}{ext}"

    def validate_content_type(self, content_type: Optional[str]) -> None:
        if (content_type or "").lower() not in self.allowed_types:
            raise InvalidFileTypeException(content_type)

    def path_for(self, filename: str) -> str:
        return os.path.join(self.upload_folder, os.path.basename(filename))

    def _open_unique(self, image: UploadFile):
        """Create a new file exclusively so concurrent uploads never share a name"""
        os.makedirs(self.upload_folder, exist_ok=True)
        for _ in range(self.MAX_NAME_ATTEMPTS):
            filename = self.generate_filename(image.filename, image.content_type)
            try:
                return filename, open(self.path_for(filename), "xb")
            except FileExistsError:
                continue
        raise UploadWriteException("Could not allocate a unique filename")

    async def save_image(self, image: UploadFile) -> str:
        """
        Validate and persist an uploaded image.

        Args:
            image: The uploaded file

        Returns:
            The generated filename, relative to the upload folder

        Raises:
            InvalidFileTypeException: content type is not an allowed image type
            FileTooLargeException: the file is larger than ``max_size`` bytes
            UploadWriteException: the file could not be written
        """
        self.validate_content_type(image.content_type)

        try:
            filename, handle = self._open_unique(image)
        except OSError as e:
            logger.error(f"Unable to create upload file in {self.upload_folder}: {e}")
            raise UploadWriteException(str(e)) from e

        written = 0
        try:
            with handle:
                while True:
                    chunk = await image.read(self.chunk_size)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > self.max_size:
                        raise FileTooLargeException(self.max_size)
                    handle.write(chunk)
        except FileTooLargeException:
            self.delete(filename)
            logger.warning(f"Rejected upload {image.filename!r}: larger than {self.max_size} bytes")
            raise
        except OSError as e:
            self.delete(filename)
            logger.error(f"Failed writing upload {filename}: {e}")
            raise UploadWriteException(str(e)) from e

        logger.info(f"Stored image {filename} ({written} bytes)")
        return filename

    def delete(self, filename: Optional[str]) -> None:
        """Remove a stored image, ignoring files that are already gone"""
        if not filename:
            return
        try:
            os.remove(self.path_for(filename))
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Could not remove upload {filename}: {e}")
