# materials/texture_loader.py
import logging
import os
import numpy as np
from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

def load_image(image_path: str) -> np.ndarray:
    """
    Decode an image file into a (height, width, 3) uint8 RGB array.

    Args:
        image_path: Path to the image file

    Returns:
        The decoded pixels, row 0 at the top

    Raises:
        FileNotFoundError: If the image file doesn't exist
        ValueError: If the file cannot be decoded as an image
    """
    if not os.path.exists(image_path):
        raise FileNotFoundError(f"Texture file not found: {image_path}")

    try:
        with Image.open(image_path) as img:
            # Convert to RGB if necessary
            if img.mode != 'RGB':
                img = img.convert('RGB')
            data = np.asarray(img, dtype=np.uint8).copy()
    except (UnidentifiedImageError, OSError) as e:
        raise ValueError(f"Error loading texture {image_path}: {e}") from e

    logger.debug("Loaded texture %s (%dx%d)", image_path, data.shape[1], data.shape[0])
    return data

def load_texture(image_path: str):
    """
    Load an image file as an ImageTexture. Raises like load_image().
    """
    from materials.textures import ImageTexture
    return ImageTexture(load_image(image_path))

def create_image_material(image_path: str, material_class, **material_params):
    """
    Create a material with an image texture.

    Args:
        image_path: Path to the image file
        material_class: Material class to instantiate (e.g., Lambertian, DiffuseLight)
        **material_params: Additional parameters for the material

    Returns:
        Material instance with the image texture
    """
    texture = load_texture(image_path)
    return material_class(texture, **material_params)
