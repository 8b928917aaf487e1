"""
Capture device surface.

A CaptureDevice hands out CameraStream handles; stopping a stream ends every
track it carries. The simulated device stands in for platform camera access.
"""

from __future__ import annotations

import asyncio
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from ...core.config import CameraConfig
from ...core.exceptions import CameraError, CameraErrorReason
from ...core.logging import get_logger

logger = get_logger(__name__)


@dataclass
class MediaTrack:
    """A single video track of a stream."""

    kind: str = "video"
    label: str = ""
    live: bool = True

    def stop(self) -> None:
        self.live = False


@dataclass
class CameraStream:
    """Opaque handle to a live capture stream."""

    facing_mode: str
    tracks: list[MediaTrack] = field(default_factory=list)
    stream_id: str = field(default_factory=lambda: uuid.uuid4().hex[:8])

    @property
    def active(self) -> bool:
        """Whether any track is still live."""
        return any(track.live for track in self.tracks)

    def stop(self) -> None:
        """Stop every track. Safe to call more than once."""
        for track in self.tracks:
            track.stop()


class CaptureDevice(ABC):
    """Abstract camera access."""

    @abstractmethod
    async def request_stream(self, facing_mode: str) -> CameraStream:
        """Ask for access to the camera and open a stream.

        Args:
            facing_mode: Preferred camera, "environment" (rear) or "user" (front).

        Returns:
            A live CameraStream.

        Raises:
            CameraError: If permission is denied, no camera exists, or the
                device fails for any other reason.
        """
        ...


class SimulatedCaptureDevice(CaptureDevice):
    """Capture device with a scripted permission outcome."""

    def __init__(
        self,
        permission: str = "granted",
        latency_seconds: float = 0.0,
        label: str = "Simulated camera",
    ) -> None:
        """Initialize the simulated device.

        Args:
            permission: "granted", "denied" or "absent" (no camera present).
            latency_seconds: How long the permission prompt takes to resolve.
            label: Track label reported on opened streams.
        """
        self.permission = permission
        self.latency_seconds = latency_seconds
        self.label = label
        self.requests = 0
        self.opened: list[CameraStream] = []

    @classmethod
    def from_config(cls, config: CameraConfig) -> SimulatedCaptureDevice:
        return cls(
            permission=config.simulated_permission,
            latency_seconds=config.simulated_latency_seconds,
        )

    async def request_stream(self, facing_mode: str) -> CameraStream:
        self.requests += 1
        if self.latency_seconds:
            await asyncio.sleep(self.latency_seconds)

        if self.permission == "denied":
            raise CameraError(
                message="Camera permission denied",
                reason=CameraErrorReason.PERMISSION_DENIED,
            )
        if self.permission == "absent":
            raise CameraError(
                message="No camera found",
                reason=CameraErrorReason.NOT_FOUND,
                context={"facing_mode": facing_mode},
            )
        if self.permission != "granted":
            raise CameraError(
                message=f"Unexpected permission outcome: {self.permission}",
                reason=CameraErrorReason.UNKNOWN,
            )

        stream = CameraStream(
            facing_mode=facing_mode,
            tracks=[MediaTrack(label=f"{self.label} ({facing_mode})")],
        )
        self.opened.append(stream)
        logger.debug("Simulated stream opened", stream_id=stream.stream_id)
        return stream
