"""
Session Service.

Top-level controller. Owns the Session aggregate (profile, current screen,
modal flags) and coordinates the onboarding wizard, the camera stream and the
scan simulator.

Leaving the camera screen, by any route, resets the scanner and releases the
camera synchronously before the new screen is set.
"""

from __future__ import annotations

from collections.abc import Sequence

from ...core.config import Config, get_config
from ...core.exceptions import StorageError
from ...core.logging import bind_context, clear_context, get_logger
from ...core.types import ServiceResult
from ...models.onboarding import GUIDED_FLOW, OnboardingStep, get_flow
from ...models.profile import Goal, UserProfile
from ...models.scan import ScanResult, ScanState
from ...models.session import ModalKind, ModalVisibility, Screen, Session
from ...storage import PreferenceStore, create_store
from ..camera import CameraSession, CameraState, SimulatedCaptureDevice
from ..onboarding import OnboardingController
from ..scan import MockMenuClassifier, ScanSimulator

logger = get_logger(__name__)


class SessionController:
    """Coordinate one user session from onboarding through scanning."""

    def __init__(
        self,
        session: Session,
        preferences: PreferenceStore,
        camera: CameraSession,
        scanner: ScanSimulator,
        steps: Sequence[OnboardingStep] = GUIDED_FLOW,
    ) -> None:
        """Initialize the controller. Prefer ``create`` which seeds the profile.

        Args:
            session: Aggregate state this controller owns.
            preferences: Store the profile is loaded from and saved to.
            camera: Camera session bound to the camera screen.
            scanner: Scan simulator offered on the camera screen.
            steps: Onboarding flow to present.
        """
        self.session = session
        self.preferences = preferences
        self.camera = camera
        self.scanner = scanner
        self.steps = tuple(steps)
        self.onboarding = OnboardingController(session.profile, self.steps)
        self.session.screen = self.onboarding.screen
        bind_context(session_id=session.session_id)

    @classmethod
    async def create(
        cls,
        preferences: PreferenceStore,
        camera: CameraSession,
        scanner: ScanSimulator,
        steps: Sequence[OnboardingStep] = GUIDED_FLOW,
    ) -> SessionController:
        """Build a controller whose profile is seeded from saved preferences."""
        profile = await preferences.load()
        controller = cls(Session(profile=profile), preferences, camera, scanner, steps)
        logger.info(
            "Session started",
            restored=not profile.is_empty,
            steps=len(controller.steps),
        )
        return controller

    @classmethod
    async def from_config(cls, config: Config | None = None) -> SessionController:
        """Wire a controller from configuration."""
        config = config or get_config()
        preferences = PreferenceStore(
            create_store(config.storage), key=config.storage.preferences_key
        )
        camera = CameraSession(
            SimulatedCaptureDevice.from_config(config.camera),
            facing_mode=config.camera.facing_mode,
        )
        scanner = ScanSimulator(MockMenuClassifier(), latency_seconds=config.scan.latency_seconds)
        return await cls.create(
            preferences, camera, scanner, steps=get_flow(config.onboarding.variant)
        )

    @property
    def screen(self) -> Screen:
        return self.session.screen

    @property
    def profile(self) -> UserProfile:
        return self.session.profile

    @property
    def modals(self) -> ModalVisibility:
        return self.session.modals

    @property
    def camera_available(self) -> bool:
        """False once the camera screen has degraded to the unavailable state."""
        return self.camera.state != CameraState.UNAVAILABLE

    @property
    def scan_state(self) -> ScanState:
        return self.scanner.state

    @property
    def scan_result(self) -> ScanResult | None:
        """Result to render, only ever shown on the camera screen."""
        if not self.session.screen.is_camera:
            return None
        return self.scanner.result

    # Onboarding

    async def advance(self) -> ServiceResult[Screen]:
        return await self._apply(self.onboarding.advance())

    async def select_goal(self, goal: Goal | str) -> ServiceResult[Screen]:
        return await self._apply(self.onboarding.select_goal(goal))

    def toggle_filter(self, name: str) -> bool:
        return self.onboarding.toggle_filter(name)

    async def submit_email(self, value: str) -> ServiceResult[Screen]:
        return await self._apply(self.onboarding.submit_email(value))

    async def _apply(self, result: ServiceResult[Screen]) -> ServiceResult[Screen]:
        if not result.success or result.data == self.session.screen:
            return result
        if result.data.is_camera:
            await self._enter_camera()
        else:
            self.session.screen = result.data
        return result

    # Navigation

    async def navigate(self, screen: Screen) -> None:
        """Move to another screen, releasing camera resources when leaving Camera.

        Args:
            screen: Target screen. An onboarding target restarts the wizard at
                that step. Within onboarding only forward targets are accepted;
                from Camera any step is.

        Raises:
            ValueError: If an onboarding step is outside the configured flow,
                or lies behind the current onboarding step.
        """
        current = self.session.screen
        if screen == current:
            return

        if not screen.is_camera and not current.is_camera and screen.step < current.step:
            raise ValueError(
                f"Onboarding only moves forward: step {screen.step} is behind {current.step}"
            )

        if screen.is_camera:
            await self._enter_camera()
            return

        onboarding = OnboardingController(self.session.profile, self.steps, step=screen.step)
        if current.is_camera:
            self._leave_camera()
        self.onboarding = onboarding
        self.session.screen = screen
        logger.info("Navigated", screen=str(screen), previous=str(current))

    async def restart_onboarding(self) -> None:
        await self.navigate(Screen.onboarding(1))

    async def _enter_camera(self) -> None:
        self.session.screen = Screen.camera()
        logger.info("Entered camera screen")
        result = await self.camera.activate()
        if not result.success and not result.metadata.get("stale"):
            logger.warning("Camera screen degraded", error=result.error)

    def _leave_camera(self) -> None:
        self.scanner.reset()
        self.camera.deactivate()

    # Scanning

    def start_scan(self) -> bool:
        """Scan the menu with the profile's active filters.

        Returns:
            True if a scan started; False off the camera screen or while a
            scan is already running.
        """
        if not self.session.screen.is_camera:
            logger.warning("Scan requested outside camera screen", screen=str(self.session.screen))
            return False
        return self.scanner.start_scan(self.session.profile.active_filters)

    def cancel_scan(self) -> bool:
        return self.scanner.cancel_scan()

    async def wait_for_scan(self) -> ScanResult | None:
        await self.scanner.wait()
        return self.scan_result

    # Modals

    def open_modal(self, kind: ModalKind | str) -> None:
        kind = ModalKind(kind)
        self.session.modals.set(kind, True)
        logger.debug("Modal opened", modal=kind.value)

    def close_modal(self, kind: ModalKind | str) -> None:
        kind = ModalKind(kind)
        self.session.modals.set(kind, False)
        logger.debug("Modal closed", modal=kind.value)

    async def save_and_close_settings(
        self, profile: UserProfile | None = None
    ) -> ServiceResult[UserProfile]:
        """Apply edited preferences, persist them and close the settings modal.

        A storage failure is reported in the result; the modal closes anyway.

        Args:
            profile: Edited profile replacing the session's, if given.
        """
        if profile is not None:
            self.session.profile = profile
            self.onboarding.profile = profile

        try:
            await self.preferences.save(self.session.profile)
        except StorageError as e:
            logger.warning("Preferences not saved", error=str(e))
            result: ServiceResult[UserProfile] = ServiceResult.fail(
                "Your preferences could not be saved", key=e.key
            )
        else:
            result = ServiceResult.ok(self.session.profile)

        self.close_modal(ModalKind.SETTINGS)
        return result

    def enable_travel_mode(self) -> None:
        self.session.travel_mode_enabled = True
        self.close_modal(ModalKind.TRAVEL_MODE)
        logger.info("Travel mode enabled")

    # Teardown

    async def aclose(self) -> None:
        """End the session, releasing the camera if it is held."""
        if self.session.screen.is_camera:
            self._leave_camera()
        logger.info("Session closed")
        clear_context()

    async def __aenter__(self) -> SessionController:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
