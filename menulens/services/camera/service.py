"""
Camera Session Service.

Owns the one live camera stream of a session. The stream exists only while the
camera screen is showing; every exit path calls deactivate(), which also marks
any in-flight activation as stale so that a late stream is stopped on arrival
instead of being stored.
"""

from __future__ import annotations

import asyncio
from enum import Enum

from ...core.exceptions import CameraError, CameraErrorReason
from ...core.logging import get_logger
from ...core.types import ServiceResult
from .device import CameraStream, CaptureDevice

logger = get_logger(__name__)


class CameraState(str, Enum):
    """Lifecycle of the camera session."""

    IDLE = "idle"
    ACQUIRING = "acquiring"
    ACTIVE = "active"
    UNAVAILABLE = "unavailable"


class CameraSession:
    """Acquire and release the capture stream.

    Invariant: at most one live stream handle exists per session.
    """

    def __init__(self, device: CaptureDevice, facing_mode: str = "environment") -> None:
        """Initialize the camera session.

        Args:
            device: Capture device streams are requested from.
            facing_mode: Preferred camera facing.
        """
        self.device = device
        self.facing_mode = facing_mode
        self.state = CameraState.IDLE
        self.last_error: CameraError | None = None
        self._stream: CameraStream | None = None
        self._pending: asyncio.Task[ServiceResult[CameraStream]] | None = None
        self._generation = 0

    @property
    def stream(self) -> CameraStream | None:
        return self._stream

    @property
    def is_active(self) -> bool:
        return self._stream is not None

    async def activate(self) -> ServiceResult[CameraStream]:
        """Request the camera and keep the resulting stream.

        Activating while already active returns the existing handle without
        touching the device. Activating while a request is in flight waits for
        that same request.

        Returns:
            ServiceResult with the live stream, or a failure carrying the
            CameraError reason in its metadata. Never raises CameraError.
        """
        if self._stream is not None:
            logger.debug("Camera already active", stream_id=self._stream.stream_id)
            return ServiceResult.ok(self._stream, reused=True)

        if self._pending is None:
            self.state = CameraState.ACQUIRING
            self._pending = asyncio.ensure_future(self._acquire(self._generation))

        # Shielded: cancelling the caller must not abandon a half-granted stream.
        return await asyncio.shield(self._pending)

    async def _acquire(self, token: int) -> ServiceResult[CameraStream]:
        logger.info("Requesting camera", facing_mode=self.facing_mode)
        try:
            stream = await self.device.request_stream(self.facing_mode)
        except CameraError as e:
            return self._fail(token, e)
        except Exception as e:
            return self._fail(
                token,
                CameraError(
                    message="Camera failed to start",
                    reason=CameraErrorReason.UNKNOWN,
                    cause=e,
                ),
            )

        if token != self._generation:
            stream.stop()
            logger.info("Discarded stale camera stream", stream_id=stream.stream_id)
            return ServiceResult.fail("Camera activation superseded", stale=True)

        self._stream = stream
        self._pending = None
        self.state = CameraState.ACTIVE
        self.last_error = None
        logger.info("Camera ready", stream_id=stream.stream_id)
        return ServiceResult.ok(stream)

    def _fail(self, token: int, error: CameraError) -> ServiceResult[CameraStream]:
        if token != self._generation:
            logger.debug("Ignoring stale camera failure", reason=error.reason.value)
            return ServiceResult.fail(error.message, reason=error.reason.value, stale=True)

        self._pending = None
        self.state = CameraState.UNAVAILABLE
        self.last_error = error
        logger.warning("Camera unavailable", reason=error.reason.value, error=str(error))
        return ServiceResult.fail(error.message, reason=error.reason.value)

    def deactivate(self) -> None:
        """Stop all tracks and drop the handle. Idempotent."""
        self._generation += 1
        self._pending = None

        stream, self._stream = self._stream, None
        if stream is not None:
            stream.stop()
            logger.info("Camera released", stream_id=stream.stream_id)

        self.state = CameraState.IDLE
        self.last_error = None
