"""Camera session service."""

from .device import CameraStream, CaptureDevice, MediaTrack, SimulatedCaptureDevice
from .service import CameraSession, CameraState

__all__ = [
    "CameraStream",
    "CaptureDevice",
    "MediaTrack",
    "SimulatedCaptureDevice",
    "CameraSession",
    "CameraState",
]
