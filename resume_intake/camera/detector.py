"""Edge-density heuristic deciding whether a camera frame shows a document.

Runs once per preview frame. The result is only a hint for the capture UI:
it never submits a file and no frame is kept after evaluation.
"""

from dataclasses import dataclass

import numpy as np

SAMPLE_STRIDE = 10
EDGE_THRESHOLD = 50.0
DOCUMENT_DENSITY_THRESHOLD = 0.1

_LUMINANCE_WEIGHTS = np.array([0.299, 0.587, 0.114])


@dataclass(frozen=True)
class EdgeDetectionSample:
    edge_density: float
    is_document_likely: bool


def to_pixel_array(
    pixels: bytes | bytearray | memoryview | np.ndarray,
    width: int,
    height: int,
    channels: int = 4,
) -> np.ndarray:
    """View a flat pixel buffer as a (height, width, channels) array."""
    if isinstance(pixels, (bytes, bytearray, memoryview)):
        array = np.frombuffer(pixels, dtype=np.uint8)
    else:
        array = np.asarray(pixels)
    expected = width * height * channels
    if array.size != expected:
        raise ValueError(
            f"Pixel buffer has {array.size} values, expected {expected} "
            f"for {width}x{height}x{channels}"
        )
    return array.reshape(height, width, channels)


def luminance(frame: np.ndarray) -> np.ndarray:
    """Weighted RGB intensity for a (height, width, channels) frame."""
    frame = frame.astype(np.float64)
    if frame.shape[2] >= 3:
        return frame[:, :, :3] @ _LUMINANCE_WEIGHTS
    return frame[:, :, 0]


class DocumentEdgeDetector:
    def __init__(
        self,
        stride: int = SAMPLE_STRIDE,
        edge_threshold: float = EDGE_THRESHOLD,
        density_threshold: float = DOCUMENT_DENSITY_THRESHOLD,
        weighted_luminance: bool = False,
    ) -> None:
        self._stride = stride
        self._weighted_luminance = weighted_luminance
        self._edge_threshold = edge_threshold
        self._density_threshold = density_threshold

    def detect(
        self,
        pixels: bytes | bytearray | memoryview | np.ndarray,
        width: int,
        height: int,
        channels: int = 4,
    ) -> EdgeDetectionSample:
        """Sample every ``stride``-th pixel, skipping the 1-pixel border.

        Each sample is compared against its right and lower neighbour; it is an
        edge when the gradient magnitude exceeds the edge threshold. Density is
        the edge count per hundred pixels of frame area. Gradients are taken on
        the first channel unless weighted luminance was requested.
        """
        if width < 3 or height < 3:
            return EdgeDetectionSample(edge_density=0.0, is_document_likely=False)

        intensity = self._intensity(to_pixel_array(pixels, width, height, channels))
        ys = np.arange(1, height - 1, self._stride)
        xs = np.arange(1, width - 1, self._stride)
        grid_y, grid_x = np.meshgrid(ys, xs, indexing="ij")

        center = intensity[grid_y, grid_x]
        gx = intensity[grid_y, grid_x + 1] - center
        gy = intensity[grid_y + 1, grid_x] - center
        edge_count = int(np.count_nonzero(np.hypot(gx, gy) > self._edge_threshold))

        density = edge_count / (width * height / 100)
        return EdgeDetectionSample(
            edge_density=density,
            is_document_likely=density > self._density_threshold,
        )

    def _intensity(self, frame: np.ndarray) -> np.ndarray:
        if self._weighted_luminance:
            return luminance(frame)
        return frame[:, :, 0].astype(np.float64)
