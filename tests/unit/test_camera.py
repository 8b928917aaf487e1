"""Unit tests for the camera session."""

import asyncio

import pytest

from menulens.core.config import CameraConfig
from menulens.core.exceptions import CameraError, CameraErrorReason
from menulens.services.camera import (
    CameraSession,
    CameraState,
    CameraStream,
    CaptureDevice,
    MediaTrack,
    SimulatedCaptureDevice,
)


class GatedCaptureDevice(CaptureDevice):
    """Device whose permission prompt resolves only when released."""

    def __init__(self):
        self.gate = asyncio.Event()
        self.requests = 0
        self.streams = []

    async def request_stream(self, facing_mode):
        self.requests += 1
        await self.gate.wait()
        stream = CameraStream(facing_mode=facing_mode, tracks=[MediaTrack(label="gated")])
        self.streams.append(stream)
        return stream


class ExplodingCaptureDevice(CaptureDevice):
    async def request_stream(self, facing_mode):
        raise RuntimeError("driver crashed")


@pytest.mark.asyncio
class TestCameraSession:
    """Tests for stream acquisition and release."""

    async def test_activate_success(self, camera, device):
        """A granted request stores a live rear-facing stream."""
        result = await camera.activate()
        assert result.success
        assert camera.is_active
        assert camera.state == CameraState.ACTIVE
        assert result.data is camera.stream
        assert result.data.active
        assert result.data.facing_mode == "environment"
        assert device.requests == 1

    async def test_activate_when_active_reuses_stream(self, camera, device):
        """Activating twice keeps a single stream and asks the device once."""
        first = await camera.activate()
        second = await camera.activate()
        assert second.data is first.data
        assert second.metadata.get("reused")
        assert device.requests == 1

    async def test_concurrent_activations_share_request(self):
        """Activations issued while one is pending wait for the same request."""
        device = GatedCaptureDevice()
        camera = CameraSession(device)
        first = asyncio.ensure_future(camera.activate())
        second = asyncio.ensure_future(camera.activate())
        await asyncio.sleep(0)
        assert camera.state == CameraState.ACQUIRING

        device.gate.set()
        results = await asyncio.gather(first, second)
        assert results[0].data is results[1].data
        assert device.requests == 1

    @pytest.mark.parametrize(
        "permission,reason",
        [
            ("denied", CameraErrorReason.PERMISSION_DENIED),
            ("absent", CameraErrorReason.NOT_FOUND),
        ],
    )
    async def test_activate_failure_degrades(self, permission, reason):
        """Denial or missing hardware degrades without raising."""
        camera = CameraSession(SimulatedCaptureDevice(permission=permission))
        result = await camera.activate()
        assert not result.success
        assert result.metadata["reason"] == reason.value
        assert camera.state == CameraState.UNAVAILABLE
        assert isinstance(camera.last_error, CameraError)
        assert camera.last_error.reason is reason
        assert camera.stream is None

    async def test_unexpected_device_failure_is_unknown(self):
        """Arbitrary device failures map to the unknown reason."""
        camera = CameraSession(ExplodingCaptureDevice())
        result = await camera.activate()
        assert not result.success
        assert camera.last_error.reason is CameraErrorReason.UNKNOWN
        assert isinstance(camera.last_error.cause, RuntimeError)

    async def test_deactivate_stops_tracks(self, camera):
        """Deactivating stops every track and clears the handle."""
        stream = (await camera.activate()).data
        camera.deactivate()
        assert not stream.active
        assert camera.stream is None
        assert camera.state == CameraState.IDLE

    async def test_deactivate_is_idempotent(self, camera, device):
        """A second deactivate changes nothing."""
        await camera.activate()
        camera.deactivate()
        camera.deactivate()
        assert camera.stream is None
        assert camera.state == CameraState.IDLE
        assert all(not s.active for s in device.opened)

    async def test_deactivate_without_activate(self, camera):
        camera.deactivate()
        assert camera.state == CameraState.IDLE

    async def test_late_stream_after_deactivate_is_discarded(self):
        """A stream granted after deactivation is stopped, never stored."""
        device = GatedCaptureDevice()
        camera = CameraSession(device)
        pending = asyncio.ensure_future(camera.activate())
        await asyncio.sleep(0)

        camera.deactivate()
        device.gate.set()
        result = await pending

        assert not result.success
        assert result.metadata.get("stale")
        assert camera.stream is None
        assert camera.state == CameraState.IDLE
        assert not device.streams[0].active

    async def test_reactivate_after_stale_request(self):
        """Coming back to the camera gets a fresh stream; the old one stays dead."""
        device = GatedCaptureDevice()
        camera = CameraSession(device)
        stale = asyncio.ensure_future(camera.activate())
        await asyncio.sleep(0)
        camera.deactivate()

        fresh = asyncio.ensure_future(camera.activate())
        device.gate.set()
        stale_result, fresh_result = await asyncio.gather(stale, fresh)

        assert not stale_result.success
        assert fresh_result.success
        assert camera.stream is fresh_result.data
        assert sum(1 for s in device.streams if s.active) == 1

    async def test_deactivate_clears_unavailable_state(self):
        camera = CameraSession(SimulatedCaptureDevice(permission="denied"))
        await camera.activate()
        camera.deactivate()
        assert camera.state == CameraState.IDLE
        assert camera.last_error is None


@pytest.mark.asyncio
class TestSimulatedCaptureDevice:
    """Tests for the simulated device."""

    async def test_from_config(self):
        device = SimulatedCaptureDevice.from_config(
            CameraConfig(simulated_permission="absent", simulated_latency_seconds=0.01)
        )
        with pytest.raises(CameraError) as exc_info:
            await device.request_stream("environment")
        assert exc_info.value.reason is CameraErrorReason.NOT_FOUND
        assert device.requests == 1

    async def test_stream_stop(self):
        stream = await SimulatedCaptureDevice().request_stream("user")
        assert stream.active
        stream.stop()
        stream.stop()
        assert not stream.active
