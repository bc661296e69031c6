"""
Image Loader - Reads image files into raw RGBA frames
Supports: PNG, GIF (animated), WebP (animated), JPEG, BMP
"""

from PIL import Image, ImageSequence
import numpy as np
from pathlib import Path
from dataclasses import dataclass, field
from typing import List, Union
import logging

from .errors import MalformedFrameError

logger = logging.getLogger(__name__)

PixelBuffer = Union[bytes, bytearray, memoryview, np.ndarray]


@dataclass(frozen=True, eq=False)
class RawImageFrame:
    """One RGBA frame, row-major, 4 bytes per pixel"""
    data: PixelBuffer
    delay: int = 0  # in milliseconds

    def __post_init__(self):
        # Snapshot caller buffers so the frame cannot change after construction
        if isinstance(self.data, np.ndarray):
            data = np.array(self.data, dtype=np.uint8, copy=True)
            data.flags.writeable = False
            object.__setattr__(self, 'data', data)
        elif not isinstance(self.data, bytes):
            object.__setattr__(self, 'data', bytes(self.data))

    def as_array(self) -> np.ndarray:
        """Flat uint8 view of the pixel bytes"""
        if isinstance(self.data, np.ndarray):
            return np.ascontiguousarray(self.data, dtype=np.uint8).reshape(-1)
        return np.frombuffer(bytes(self.data), dtype=np.uint8)

    @property
    def byte_length(self) -> int:
        if isinstance(self.data, np.ndarray):
            return int(self.data.size)
        return len(self.data)


@dataclass(frozen=True)
class RawImage:
    """A static or animated RGBA image"""
    width: int
    height: int
    frames: List[RawImageFrame] = field(default_factory=list)

    @property
    def expected_frame_length(self) -> int:
        return self.width * self.height * 4

    def validate(self) -> None:
        """Raise MalformedFrameError for the first frame with the wrong byte count"""
        expected = self.expected_frame_length
        for i, frame in enumerate(self.frames):
            if frame.byte_length != expected:
                raise MalformedFrameError(i, expected, frame.byte_length)

    @classmethod
    def from_array(cls, pixels: np.ndarray, delay: int = 0) -> 'RawImage':
        """Create a single-frame image from an HxWx3 or HxWx4 array"""
        return cls.from_arrays([pixels], [delay])

    @classmethod
    def from_arrays(cls, frames: List[np.ndarray], delays: List[int] = None) -> 'RawImage':
        """Create an image from a list of HxWx3 / HxWx4 arrays"""
        if not frames:
            raise ValueError("No frames provided")

        delays = delays or [0] * len(frames)
        if len(delays) != len(frames):
            raise ValueError("Need one delay per frame")

        height, width = frames[0].shape[:2]
        raw_frames = []
        for pixels, delay in zip(frames, delays):
            if pixels.ndim != 3 or pixels.shape[2] not in (3, 4):
                raise ValueError("Pixels must be HxWx3 or HxWx4 array")
            if pixels.shape[:2] != (height, width):
                raise ValueError("All frames must share the same size")

            # Ensure RGBA
            if pixels.shape[2] == 3:
                alpha = np.full((*pixels.shape[:2], 1), 255, dtype=np.uint8)
                pixels = np.concatenate([pixels.astype(np.uint8), alpha], axis=2)

            raw_frames.append(RawImageFrame(pixels.astype(np.uint8).tobytes(), int(delay)))

        return cls(width=width, height=height, frames=raw_frames)


class ImageLoader:
    """Decodes image files into RawImage values"""

    SUPPORTED_FORMATS = {'.png', '.gif', '.jpg', '.jpeg', '.bmp', '.webp'}

    @classmethod
    def load(cls, path: Union[str, Path]) -> RawImage:
        """Load every frame of an image file

        Args:
            path: Path to the image file

        Returns:
            RawImage with one frame per animation frame (one for static images)
        """
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        suffix = path.suffix.lower()
        if suffix not in cls.SUPPORTED_FORMATS:
            raise ValueError(f"Unsupported format: {suffix}")

        with Image.open(path) as img:
            return cls.from_pil(img)

    @classmethod
    def from_pil(cls, img: Image.Image) -> RawImage:
        """Convert an opened Pillow image (all frames) into a RawImage"""
        frames = []
        for frame in ImageSequence.Iterator(img):
            rgba = frame.convert('RGBA')
            delay = int(frame.info.get('duration', img.info.get('duration', 0)) or 0)
            frames.append(RawImageFrame(rgba.tobytes(), delay))

        logger.debug("Loaded %dx%d image with %d frame(s)", img.width, img.height, len(frames))

        return RawImage(width=img.width, height=img.height, frames=frames)
