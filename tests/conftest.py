"""Test configuration for MenuLens."""

import pytest
import pytest_asyncio
from pathlib import Path
import tempfile

from menulens.models.onboarding import GUIDED_FLOW
from menulens.services.camera import CameraSession, SimulatedCaptureDevice
from menulens.services.scan import MockMenuClassifier, ScanSimulator
from menulens.storage import InMemoryKeyValueStore, LocalKeyValueStore, PreferenceStore

SCAN_LATENCY = 0.05


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests.

    Yields:
        Path: A Path object pointing to the temporary directory.
            The directory is automatically cleaned up after the test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def memory_store():
    """Create an empty in-memory key-value store.

    Returns:
        InMemoryKeyValueStore: A fresh store with no keys.
    """
    return InMemoryKeyValueStore()


@pytest.fixture
def local_store(temp_dir):
    """Create a filesystem key-value store rooted in a temporary directory.

    Args:
        temp_dir: Pytest fixture providing a temporary directory path.

    Returns:
        LocalKeyValueStore: A store writing under temp_dir.
    """
    return LocalKeyValueStore(temp_dir)


@pytest.fixture
def preferences(memory_store):
    """Create a preference store over the in-memory backend."""
    return PreferenceStore(memory_store)


@pytest.fixture
def device():
    """Create a simulated capture device that grants permission."""
    return SimulatedCaptureDevice()


@pytest.fixture
def camera(device):
    """Create a camera session bound to the simulated device."""
    return CameraSession(device)


@pytest.fixture
def scanner():
    """Create a scan simulator with a short latency."""
    return ScanSimulator(MockMenuClassifier(), latency_seconds=SCAN_LATENCY)


@pytest_asyncio.fixture
async def controller(preferences, camera, scanner):
    """Create a session controller over the guided onboarding flow.

    The controller is closed after the test so no stream outlives it.
    """
    from menulens.services.session import SessionController

    session = await SessionController.create(preferences, camera, scanner, GUIDED_FLOW)
    yield session
    await session.aclose()
