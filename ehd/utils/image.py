"""
Image helpers for preparing descriptor input

Decoding and color conversion are delegated to OpenCV; the descriptor itself
only ever sees a single-channel array.
"""

from pathlib import Path
from typing import Union

import cv2
import numpy as np


def load_gray(image_path: Union[str, Path]) -> np.ndarray:
    """
    Load an image file as a single-channel uint8 array

    Raises:
        FileNotFoundError: If the path does not exist
        ValueError: If OpenCV cannot decode the file
    """
    image_path = Path(image_path)
    if not image_path.exists():
        raise FileNotFoundError(f"Image not found: {image_path}")

    gray = cv2.imread(str(image_path), cv2.IMREAD_GRAYSCALE)
    if gray is None:
        raise ValueError(f"Failed to load image: {image_path}")
    return gray


def crop_to_grid(image: np.ndarray,
                 horizontal_blocks: int = 4,
                 vertical_blocks: int = 4) -> np.ndarray:
    """
    Center-crop an image so it tiles into blocks of whole 2x2 cells

    Args:
        image: Image (H, W) or (H, W, C)
        horizontal_blocks: Blocks across the width
        vertical_blocks: Blocks down the height

    Returns:
        Cropped view whose width is a multiple of 2*horizontal_blocks and
        height a multiple of 2*vertical_blocks

    Raises:
        ValueError: If the image is smaller than one cell per block
    """
    h, w = image.shape[:2]
    crop_h = h - h % (2 * vertical_blocks)
    crop_w = w - w % (2 * horizontal_blocks)
    if crop_h == 0 or crop_w == 0:
        raise ValueError(
            f"Image {w}x{h} is too small for {horizontal_blocks}x{vertical_blocks} blocks"
        )

    y = (h - crop_h) // 2
    x = (w - crop_w) // 2
    return image[y:y + crop_h, x:x + crop_w]
