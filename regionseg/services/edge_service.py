from __future__ import annotations
import logging
import numpy as np
import cv2
from ..models.pixel_buffer import PixelBuffer
from ..repositories.image_repository import ImageRepository

logger = logging.getLogger(__name__)


class EdgeService:
    """
    Sobel gradient-magnitude edge extraction.
    *   No I/O here, works only with PixelBuffer objects (RGBA numpy arrays).
    *   The input buffer is never modified; a new buffer is returned.
    """

    def __init__(self):
        self.image_repository = ImageRepository()

    @staticmethod
    def _to_intensity(pixels: np.ndarray) -> np.ndarray:
        """floor((R + G + B) / 3) per pixel, as float64 for the convolution."""
        rgb_sum = pixels[:, :, :3].astype(np.int32).sum(axis=2)
        return (rgb_sum // 3).astype(np.float64)

    @staticmethod
    def _gradient_magnitude(intensity: np.ndarray) -> np.ndarray:
        """
        Rounded, clamped |∇I| from the 3×3 Sobel kernels.

        cv2's y-kernel is the negated [[1,2,1],[0,0,0],[-1,-2,-1]]; the sign
        does not survive the magnitude.
        """
        grad_x = cv2.Sobel(intensity, cv2.CV_64F, 1, 0, ksize=3)
        grad_y = cv2.Sobel(intensity, cv2.CV_64F, 0, 1, ksize=3)
        magnitude = np.rint(np.sqrt(grad_x ** 2 + grad_y ** 2))
        return np.clip(magnitude, 0, 255).astype(np.uint8)

    def sobel(self, image: PixelBuffer) -> PixelBuffer:
        """
        Args:
            image (PixelBuffer): RGBA source image.

        Returns:
            (PixelBuffer): Same-size image where every interior pixel has
            R = G = B = gradient magnitude. The 1-pixel border ring is black.
            Alpha is copied from the source for every pixel.
        """
        pixels = image.pixels
        result = np.zeros_like(pixels)
        result[:, :, 3] = pixels[:, :, 3]

        if image.width < 3 or image.height < 3:
            logger.debug(f"No interior pixels in {image.width}x{image.height} image, skipping Sobel")
            return self.image_repository.create_image(result)

        magnitude = self._gradient_magnitude(self._to_intensity(pixels))
        result[1:-1, 1:-1, :3] = magnitude[1:-1, 1:-1, np.newaxis]

        logger.debug(f"Sobel over {image.width}x{image.height}: max magnitude {int(magnitude[1:-1, 1:-1].max())}")
        return self.image_repository.create_image(result)
