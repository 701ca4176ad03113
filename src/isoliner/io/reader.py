"""Image reader for loading scalar fields.

This module provides the FieldReader class for decoding raster images
and sampling them into ScalarField domain models.
"""

from pathlib import Path

from PIL import Image, UnidentifiedImageError

from isoliner.config import SampleMode
from isoliner.domain import ScalarField
from isoliner.exceptions import ImageLoadError
from isoliner.io.converter import image_to_field


class FieldReader:
    """Loads raster images and samples them into scalar fields.

    Example:
        reader = FieldReader(Path("heightmap.tif"))
        reader.load()
        field = reader.read_field()
        reader.close()
    """

    def __init__(self, image_path: Path, sample_mode: SampleMode = SampleMode.LUMA16) -> None:
        """Initialize the field reader.

        Args:
            image_path: Path to the image file
            sample_mode: Pixel format used to sample the image
        """
        self._image_path = image_path
        self._sample_mode = sample_mode
        self._image: Image.Image | None = None

    def load(self) -> None:
        """Load and decode the image file.

        Raises:
            FileNotFoundError: If image file does not exist
            ImageLoadError: If the file cannot be decoded
        """
        if not self._image_path.exists():
            raise FileNotFoundError(f"Image file not found: {self._image_path}")

        try:
            image = Image.open(self._image_path)
            image.load()
        except (UnidentifiedImageError, OSError) as e:
            raise ImageLoadError(str(self._image_path), str(e)) from e

        self._image = image

    def _require_image(self) -> Image.Image:
        if self._image is None:
            raise RuntimeError("Image not loaded. Call load() first.")
        return self._image

    @property
    def width(self) -> int:
        """Return image width in pixels.

        Raises:
            RuntimeError: If image has not been loaded yet
        """
        return self._require_image().width

    @property
    def height(self) -> int:
        """Return image height in pixels.

        Raises:
            RuntimeError: If image has not been loaded yet
        """
        return self._require_image().height

    @property
    def mode(self) -> str:
        """Return the Pillow pixel mode of the decoded image.

        Raises:
            RuntimeError: If image has not been loaded yet
        """
        return self._require_image().mode

    def read_field(self) -> ScalarField:
        """Sample the decoded image into a scalar field.

        Returns:
            ScalarField with one sample per pixel

        Raises:
            RuntimeError: If image has not been loaded yet
            FieldShapeError: If the image is smaller than 2x2 pixels
        """
        return image_to_field(self._require_image(), self._sample_mode)

    def close(self) -> None:
        """Close the image file and free resources."""
        if self._image is not None:
            self._image.close()
            self._image = None

    def __enter__(self) -> "FieldReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
