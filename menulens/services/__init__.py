"""Services package for MenuLens."""

from .camera import CameraSession, SimulatedCaptureDevice
from .onboarding import OnboardingController
from .scan import MockMenuClassifier, ScanSimulator
from .session import SessionController

__all__ = [
    "CameraSession",
    "SimulatedCaptureDevice",
    "OnboardingController",
    "MockMenuClassifier",
    "ScanSimulator",
    "SessionController",
]
