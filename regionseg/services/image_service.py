from pathlib import Path
from typing import Union
from ..models.pixel_buffer import PixelBuffer
from ..repositories.image_repository import ImageRepository


class ImageService:
    """I/O helpers.  No segmentation logic."""
    def __init__(self):
        self.image_repository = ImageRepository()

    def load(self, path: Union[str, Path]) -> PixelBuffer:
        """Decode a single image from disk into an RGBA PixelBuffer."""
        return self.image_repository.load(path)

    def save(self, image: PixelBuffer) -> None:
        """
        Encode the image to its own path.
        """
        self.image_repository.save(image)

    @staticmethod
    def copy(image: PixelBuffer) -> PixelBuffer:
        """Independent copy, so in-place passes leave the source untouched."""
        return image.copy()
