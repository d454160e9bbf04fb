from pathlib import Path
from typing import Union
import logging
import numpy as np
import cv2
from PIL import Image as PILImage
from ..models.pixel_buffer import PixelBuffer

logger = logging.getLogger(__name__)


class ImageCodecError(Exception):
    """Decode/encode failure carrying a short error code and a message."""

    def __init__(self, code: str, message: str, path: Union[str, Path, None] = None):
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message
        self.path = Path(path) if path is not None else None


class ImageDecodeError(ImageCodecError):
    pass


class ImageEncodeError(ImageCodecError):
    pass


# cv2 channel layout → RGBA
_TO_RGBA = {
    1: cv2.COLOR_GRAY2RGBA,
    3: cv2.COLOR_BGR2RGBA,
    4: cv2.COLOR_BGRA2RGBA,
}


class ImageRepository:
    """
    Handles file I/O for PixelBuffer entities.
    """
    @staticmethod
    def create_image(pixels: np.ndarray, path: Union[str, Path] = None) -> PixelBuffer:
        if path is None:
            return PixelBuffer(pixels)
        return PixelBuffer(pixels=pixels, path=Path(path))

    @staticmethod
    def _as_rgba(arr: np.ndarray) -> np.ndarray:
        if arr.dtype == np.uint16:
            arr = (arr >> 8).astype(np.uint8)
        elif arr.dtype != np.uint8:
            arr = np.clip(arr, 0, 255).astype(np.uint8)

        channels = 1 if arr.ndim == 2 else arr.shape[2]
        if channels not in _TO_RGBA:
            raise ValueError(f"Unsupported channel count: {channels}")
        return cv2.cvtColor(arr, _TO_RGBA[channels])

    @classmethod
    def load(cls, path: Union[str, Path]) -> PixelBuffer:
        path = Path(path)
        if not path.is_file():
            raise ImageDecodeError("ENOENT", "Image not found", path)

        arr = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
        if arr is None:
            raise ImageDecodeError("EDECODE", "Image unreadable or malformed", path)

        try:
            rgba = cls._as_rgba(arr)
        except (ValueError, cv2.error) as err:
            raise ImageDecodeError("EDECODE", str(err), path) from err

        logger.debug(f"Decoded {path} ({rgba.shape[1]}x{rgba.shape[0]})")
        return PixelBuffer(pixels=rgba, path=path)

    @staticmethod
    def save(image: PixelBuffer) -> None:
        if image.path is None:
            raise ImageEncodeError("ENOPATH", "PixelBuffer has no destination path")

        try:
            image.path.parent.mkdir(parents=True, exist_ok=True)
            PILImage.fromarray(np.ascontiguousarray(image.pixels)).save(image.path)
        except (OSError, ValueError) as err:
            raise ImageEncodeError("EENCODE", str(err), image.path) from err

        logger.debug(f"Encoded {image.path} ({image.width}x{image.height})")
