"""
Imaging module: pixel transforms, zone grading and image I/O.
"""

from zone_grading.imaging.grader import ImageGrader, PixelBuffer, grade
from zone_grading.imaging.processor import (
    ImageFormat,
    ImageProcessor,
    ProcessingResult,
    buffer_from_image,
    buffer_to_image,
    grade_image,
)
from zone_grading.imaging.transform import (
    decode_lut,
    encode_channels,
    gamma_to_linear,
    linear_to_gamma,
    linear_to_stop,
    luminance,
    stop_to_linear,
)

__all__ = [
    # Transform
    "gamma_to_linear",
    "linear_to_gamma",
    "luminance",
    "linear_to_stop",
    "stop_to_linear",
    "decode_lut",
    "encode_channels",
    # Grader
    "ImageGrader",
    "PixelBuffer",
    "grade",
    # Processor
    "ImageFormat",
    "ImageProcessor",
    "ProcessingResult",
    "buffer_from_image",
    "buffer_to_image",
    "grade_image",
]
