"""Android package (APK) icon and label extraction."""

from io import BytesIO

from PIL import Image, UnidentifiedImageError
from pyaxmlparser import APK

from ..exceptions import IconFormatError, IconNotFoundError
from ..utils import setup_logger


class ApkIconExtractor:
    """Read the launcher icon, label and package id out of an APK."""

    def __init__(self) -> None:
        self.logger = setup_logger("apk_client", "processors.log")

    def open(self, path: str) -> APK:
        """Parse the package manifest.

        Raises:
            IconFormatError: If the file is not a readable APK.
        """
        try:
            return APK(path)
        except Exception as e:
            raise IconFormatError(f"Cannot open package {path}: {e}") from e

    def icon(self, handle: APK) -> Image.Image:
        """Decode the launcher icon.

        Adaptive (XML) icons have no raster data and count as missing.

        Raises:
            IconNotFoundError: If the package has no decodable icon.
        """
        try:
            data = handle.icon_data
        except Exception as e:
            raise IconNotFoundError(f"Cannot read icon: {e}") from e
        if not data:
            raise IconNotFoundError("Package declares no icon")

        try:
            image = Image.open(BytesIO(data))
            image.load()
        except (UnidentifiedImageError, OSError) as e:
            raise IconNotFoundError(f"Icon is not a raster image: {e}") from e
        return image

    def label(self, handle: APK) -> str:
        return handle.application or ""

    def package_identifier(self, handle: APK) -> str:
        return handle.package or ""
