import io
import time
from dataclasses import dataclass, field

import numpy as np
from PIL import Image

from resume_intake.camera.detector import DocumentEdgeDetector, EdgeDetectionSample, to_pixel_array
from resume_intake.logging.logger import Log
from resume_intake.validation.models import RawInput

_SUPPORTED_CHANNELS = (1, 3, 4)
ENHANCE_BRIGHTNESS = 10
ENHANCE_CONTRAST = 1.2


@dataclass(frozen=True)
class CameraFrame:
    """One raw frame from the camera stream."""

    pixels: bytes = field(repr=False)
    width: int
    height: int
    channels: int = 4


def enhance(frame: np.ndarray) -> np.ndarray:
    """Apply the fixed contrast/brightness boost used for captured photos."""
    adjusted = (frame.astype(np.float64) - 128) * ENHANCE_CONTRAST + 128 + ENHANCE_BRIGHTNESS
    if frame.shape[2] == 4:
        adjusted[:, :, 3] = frame[:, :, 3]
    return np.clip(adjusted, 0, 255).astype(np.uint8)


class CameraCapture:
    """Tracks the document-detected hint and turns explicit captures into files.

    Detection only toggles ``document_detected``; a file is produced only by
    calling ``capture``.
    """

    def __init__(
        self,
        detector: DocumentEdgeDetector | None = None,
        jpeg_quality: int = 90,
        enhance_images: bool = True,
    ) -> None:
        self._detector = detector or DocumentEdgeDetector()
        self._jpeg_quality = jpeg_quality
        self._enhance_images = enhance_images
        self._document_detected = False
        self._capture_count = 0

    @property
    def document_detected(self) -> bool:
        return self._document_detected

    def evaluate(self, frame: CameraFrame) -> EdgeDetectionSample:
        sample = self._detector.detect(frame.pixels, frame.width, frame.height, frame.channels)
        if sample.is_document_likely != self._document_detected:
            self._document_detected = sample.is_document_likely
            Log.debug(
                "Document detected" if self._document_detected else "Document lost",
                edge_density=round(sample.edge_density, 3),
            )
        return sample

    def reset(self) -> None:
        self._document_detected = False

    def capture(self, frame: CameraFrame, name: str | None = None) -> RawInput:
        """Encode the frame as a JPEG upload candidate."""
        if frame.channels not in _SUPPORTED_CHANNELS:
            raise ValueError(f"Unsupported channel count: {frame.channels}")
        array = to_pixel_array(frame.pixels, frame.width, frame.height, frame.channels)
        if self._enhance_images and frame.channels >= 3:
            array = enhance(array)
        if frame.channels == 1:
            array = array[:, :, 0]

        image = Image.fromarray(np.ascontiguousarray(array)).convert("RGB")
        buffer = io.BytesIO()
        image.save(buffer, format="JPEG", quality=self._jpeg_quality)

        self._capture_count += 1
        now_ms = int(time.time() * 1000)
        file_name = name or f"camera-capture-{now_ms}-{self._capture_count}.jpg"
        Log.info(f"Captured camera frame {file_name}", size=buffer.tell())
        return RawInput.from_bytes(
            file_name,
            buffer.getvalue(),
            mime_type="image/jpeg",
            last_modified_ms=now_ms,
        )
