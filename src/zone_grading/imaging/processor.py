"""
Image loading, grading and export.

Thin wrapper around Pillow that turns files, bytes and arrays into
``PixelBuffer`` objects, runs the zone grader, and writes results back out.
"""

import io
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Optional, Union

import numpy as np
from PIL import Image

from zone_grading.config import ImageSettings, get_settings
from zone_grading.core.logging import get_logger
from zone_grading.core.models import ZoneConfig
from zone_grading.imaging.grader import ImageGrader, PixelBuffer

logger = get_logger(__name__)


class ImageFormat(str, Enum):
    """Supported image export formats."""

    PNG = "png"
    JPEG = "jpeg"
    TIFF = "tiff"
    ORIGINAL = "original"  # Same as input, or inferred from the path


_EXTENSION_FORMATS = {
    ".png": "PNG",
    ".jpg": "JPEG",
    ".jpeg": "JPEG",
    ".tif": "TIFF",
    ".tiff": "TIFF",
}


@dataclass
class ProcessingResult:
    """Pixels plus what is known about where they came from."""

    buffer: PixelBuffer
    original_size: tuple[int, int]
    original_mode: str
    original_format: Optional[str] = None
    graded: bool = False
    processing_notes: list[str] = field(default_factory=list)

    @property
    def size(self) -> tuple[int, int]:
        return self.buffer.width, self.buffer.height

    def get_info(self) -> dict:
        """Get processing info as dictionary."""
        return {
            "size": f"{self.buffer.width}x{self.buffer.height}",
            "original_size": f"{self.original_size[0]}x{self.original_size[1]}",
            "channels": self.buffer.channels,
            "original_mode": self.original_mode,
            "original_format": self.original_format,
            "graded": self.graded,
            "notes": self.processing_notes,
        }


def buffer_from_image(img: Image.Image) -> PixelBuffer:
    """Convert a PIL image to an RGB or RGBA PixelBuffer."""
    has_alpha = "A" in img.getbands() or "transparency" in img.info
    mode = "RGBA" if has_alpha else "RGB"
    if img.mode != mode:
        img = img.convert(mode)
    return PixelBuffer(np.array(img, dtype=np.uint8))


def buffer_to_image(buffer: PixelBuffer) -> Image.Image:
    """Convert a PixelBuffer to a PIL image."""
    return Image.fromarray(buffer.data)


class ImageProcessor:
    """Load, grade and export images.

    Supports:
    - Loading from paths, bytes, PIL images and numpy arrays
    - Downscaling large images for interactive preview
    - Grading with a zone snapshot without touching the loaded original
    - Exporting to PNG, JPEG and TIFF
    """

    def __init__(
        self,
        settings: ImageSettings | None = None,
        grader: ImageGrader | None = None,
    ):
        """Initialize the image processor.

        Args:
            settings: Image settings.
            grader: Grader to use. Defaults to one built from global settings.
        """
        self.settings = settings or get_settings().image
        self.grader = grader or ImageGrader()

    def load_image(
        self,
        source: Union[str, Path, Image.Image, np.ndarray, bytes],
        max_width: Optional[int] = None,
    ) -> ProcessingResult:
        """Load an image from various sources.

        Args:
            source: Image path, PIL Image, numpy array, or encoded bytes.
            max_width: Fit the image to this width, keeping aspect ratio.
                Images narrower than this are left alone.

        Returns:
            ProcessingResult holding an RGB or RGBA buffer.
        """
        if isinstance(source, (str, Path)):
            img = Image.open(source)
            img.load()
            original_format = img.format
        elif isinstance(source, bytes):
            img = Image.open(io.BytesIO(source))
            img.load()
            original_format = img.format
        elif isinstance(source, Image.Image):
            img = source.copy()
            original_format = getattr(source, "format", None)
        elif isinstance(source, np.ndarray):
            # Grayscale, RGB or RGBA; Pillow infers the mode from the shape
            if not (source.ndim == 2 or (source.ndim == 3 and source.shape[2] in (3, 4))):
                raise ValueError(f"Unsupported array shape: {source.shape}")
            img = Image.fromarray(source.astype(np.uint8))
            original_format = None
        else:
            raise TypeError(f"Unsupported source type: {type(source)}")

        original_size = img.size
        original_mode = img.mode
        notes = []

        if max_width and img.width > max_width:
            scale = max_width / img.width
            new_size = (max_width, max(1, round(img.height * scale)))
            img = img.resize(new_size, Image.Resampling.LANCZOS)
            notes.append(f"Resized from {original_size[0]}x{original_size[1]} for preview")

        return ProcessingResult(
            buffer=buffer_from_image(img),
            original_size=original_size,
            original_mode=original_mode,
            original_format=original_format,
            processing_notes=notes,
        )

    def load_preview(self, source: Union[str, Path, Image.Image, np.ndarray, bytes]) -> ProcessingResult:
        """Load an image fitted to the configured preview width."""
        return self.load_image(source, max_width=self.settings.max_preview_width)

    def grade(self, result: ProcessingResult, zones: Iterable[ZoneConfig]) -> ProcessingResult:
        """Grade a loaded image.

        The loaded buffer is left untouched so it can be regraded with
        different zones.

        Returns:
            New ProcessingResult with the graded buffer.
        """
        zones = list(zones)
        active = [z.id.value for z in zones if z.is_active]
        graded = self.grader.grade(result.buffer, zones)

        note = f"Graded zones: {', '.join(active)}" if active else "No active zones"
        return replace(
            result,
            buffer=graded,
            graded=True,
            processing_notes=[*result.processing_notes, note],
        )

    def export(
        self,
        result: ProcessingResult,
        output_path: Union[str, Path],
        format: ImageFormat = ImageFormat.ORIGINAL,
        jpeg_quality: Optional[int] = None,
    ) -> Path:
        """Export an image to file.

        Args:
            result: ProcessingResult to export.
            output_path: Output file path.
            format: Export format; ORIGINAL infers from the path, then the
                source format.
            jpeg_quality: JPEG quality, defaults to the configured value.

        Returns:
            Path to exported file.
        """
        output_path = Path(output_path)
        fmt = self._resolve_format(format, output_path.suffix, result.original_format)
        img, save_kwargs = self._prepare_save(result.buffer, fmt, jpeg_quality)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        img.save(output_path, format=fmt, **save_kwargs)
        logger.debug(f"Exported {fmt}", extra={"path": str(output_path)})
        return output_path

    def export_to_bytes(
        self,
        result: ProcessingResult,
        format: ImageFormat = ImageFormat.PNG,
        jpeg_quality: Optional[int] = None,
    ) -> tuple[bytes, str]:
        """Export an image to bytes.

        Returns:
            Tuple of (image_bytes, file_extension).
        """
        fmt = self._resolve_format(format, "", result.original_format)
        img, save_kwargs = self._prepare_save(result.buffer, fmt, jpeg_quality)

        out = io.BytesIO()
        img.save(out, format=fmt, **save_kwargs)

        ext_map = {"TIFF": ".tiff", "PNG": ".png", "JPEG": ".jpg"}
        return out.getvalue(), ext_map.get(fmt, ".png")

    def _resolve_format(
        self,
        format: ImageFormat,
        suffix: str,
        original_format: Optional[str],
    ) -> str:
        if format != ImageFormat.ORIGINAL:
            return format.value.upper()
        fmt = _EXTENSION_FORMATS.get(suffix.lower())
        if fmt is None:
            fmt = (original_format or "PNG").upper()
        if fmt == "JPG":
            fmt = "JPEG"
        return fmt

    def _prepare_save(
        self,
        buffer: PixelBuffer,
        fmt: str,
        jpeg_quality: Optional[int],
    ) -> tuple[Image.Image, dict]:
        img = buffer_to_image(buffer)
        save_kwargs: dict = {}

        if fmt == "JPEG":
            save_kwargs["quality"] = jpeg_quality or self.settings.jpeg_quality
            # JPEG doesn't support alpha
            if img.mode == "RGBA":
                img = img.convert("RGB")
        elif fmt == "TIFF":
            save_kwargs["compression"] = "tiff_lzw"
        elif fmt == "PNG":
            save_kwargs["compress_level"] = 6

        return img, save_kwargs

    @staticmethod
    def get_supported_formats() -> list[str]:
        """Get list of supported input extensions."""
        return sorted(_EXTENSION_FORMATS)


def grade_image(image: Image.Image, zones: Iterable[ZoneConfig]) -> Image.Image:
    """Grade a PIL image and return a new PIL image (RGB or RGBA)."""
    graded = ImageGrader().grade(buffer_from_image(image), zones, in_place=True)
    return buffer_to_image(graded)
