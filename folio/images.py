"""Image optimization for Folio.

A build-time batch job that re-encodes the raster images of the site into
WebP. The candidate list is resolved up front, then each image is converted
in order. The first failure stops the batch; outputs already written stay on
disk and sources are never touched.

Key classes:
- WebpConverter: Re-encodes one image as WebP using Pillow.
- ImageOptimizer: Runs the converter over a directory.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from PIL import Image

from .errors import ConversionError

if TYPE_CHECKING:
    from .protocols import ImageConverter

SOURCE_DIR = "public/opt/images"
DESTINATION_DIR = "public/opt/images"
QUALITY = 80
EXTENSIONS = (".jpg", ".png", ".jpeg")


class WebpConverter:
    """Re-encodes images as WebP.

    Palette, greyscale and CMYK images are converted to RGB, or to RGBA when
    they carry transparency, before encoding.
    """

    suffix = ".webp"

    def convert(self, source: Path, dest: Path, quality: int) -> None:
        """Convert one image.

        Args:
            source: Source image path.
            dest: Destination path.
            quality: Encoder quality, 0-100.

        Raises:
            ConversionError: If the image cannot be read, decoded or written.
        """
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            with Image.open(source) as img:
                img.load()
                frame = self._normalize_mode(img)
                frame.save(dest, format="WEBP", quality=quality)
        except (OSError, ValueError, Image.DecompressionBombError) as exc:
            raise ConversionError(source, f"Cannot convert image: {exc}", exc) from exc

    def _normalize_mode(self, img: Image.Image) -> Image.Image:
        if img.mode in ("RGB", "RGBA"):
            return img
        if img.mode in ("P", "PA", "LA") or "transparency" in img.info:
            return img.convert("RGBA")
        return img.convert("RGB")


class ImageOptimizer:
    """Converts every matching image in a directory.

    Attributes:
        source_dir: Directory scanned for images (not recursive).
        destination_dir: Directory receiving the converted files.
        quality: Encoder quality passed to the converter.
        extensions: Accepted source suffixes, matched case-insensitively.
    """

    def __init__(
        self,
        source_dir: Path,
        destination_dir: Path,
        quality: int = QUALITY,
        extensions: tuple[str, ...] = EXTENSIONS,
        converter: ImageConverter | None = None,
    ):
        self.source_dir = source_dir
        self.destination_dir = destination_dir
        self.quality = quality
        self.extensions = tuple(ext.lower() for ext in extensions)
        self.converter = converter or WebpConverter()

    @classmethod
    def for_project(cls, project_root: Path) -> ImageOptimizer:
        """Create an optimizer with the fixed site layout and quality."""
        return cls(project_root / SOURCE_DIR, project_root / DESTINATION_DIR)

    def candidates(self) -> list[Path]:
        """Resolve the sorted list of images to convert."""
        if not self.source_dir.is_dir():
            return []
        return sorted(
            path
            for path in self.source_dir.iterdir()
            if path.is_file() and path.suffix.lower() in self.extensions
        )

    def destination_for(self, source: Path) -> Path:
        return self.destination_dir / f"{source.stem}{self.converter.suffix}"

    def run(self) -> list[Path]:
        """Convert every candidate image.

        Returns:
            Paths of the files written, in conversion order.

        Raises:
            ConversionError: On the first image that fails to convert.
        """
        written: list[Path] = []
        for source in self.candidates():
            dest = self.destination_for(source)
            self.converter.convert(source, dest, self.quality)
            written.append(dest)
        return written
