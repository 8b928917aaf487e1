"""Unit tests for core models."""

import pytest
import pydantic

from menulens.models.onboarding import GUIDED_FLOW, INTRO_FLOW, StepKind, get_flow
from menulens.models.profile import (
    EMAIL_ERROR_MESSAGE,
    Allergen,
    DietaryRestriction,
    Goal,
    UserProfile,
    lookup_filter,
)
from menulens.models.scan import MenuItem, ScanResult
from menulens.models.session import ModalKind, ModalVisibility, Screen, ScreenKind, Session


class TestProfileModels:
    """Tests for the user profile and catalogs."""

    def test_lookup_filter_resolves_both_catalogs(self):
        """Filter names resolve to the catalog that owns them."""
        assert lookup_filter("vegan") is DietaryRestriction.VEGAN
        assert lookup_filter("Peanuts") is Allergen.PEANUTS
        assert lookup_filter("Dairy") is Allergen.DAIRY

    def test_lookup_filter_unknown(self):
        """Names outside both catalogs resolve to None."""
        assert lookup_filter("Kryptonite") is None
        assert lookup_filter("peanuts") is None

    def test_empty_profile(self):
        """A fresh profile has nothing collected."""
        profile = UserProfile()
        assert profile.is_empty
        assert profile.active_filters == frozenset()

    def test_active_filters_union(self):
        """Active filters combine both catalogs by display value."""
        profile = UserProfile(
            dietary_restrictions={DietaryRestriction.VEGAN},
            allergens={Allergen.PEANUTS, Allergen.DAIRY},
        )
        assert profile.active_filters == frozenset({"vegan", "Peanuts", "Dairy"})

    def test_invalid_email_rejected(self):
        """Emails without '@' fail validation on construction and assignment."""
        with pytest.raises(pydantic.ValidationError, match=EMAIL_ERROR_MESSAGE):
            UserProfile(email="not-an-email")

        profile = UserProfile()
        with pytest.raises(pydantic.ValidationError):
            profile.email = "still-not"
        assert profile.email is None

    def test_unknown_catalog_member_rejected(self):
        """Set members outside the catalog fail validation."""
        with pytest.raises(pydantic.ValidationError):
            UserProfile(allergens={"Kryptonite"})

    def test_serialization_is_sorted(self):
        """Sets serialize as sorted lists so the JSON is stable."""
        profile = UserProfile(
            goal=Goal.LIFESTYLE_DIET,
            allergens={Allergen.SOY, Allergen.DAIRY, Allergen.PEANUTS},
        )
        data = profile.model_dump(mode="json")
        assert data["allergens"] == ["Dairy", "Peanuts", "Soy"]
        assert data["goal"] == "Lifestyle Diet"


class TestSessionModels:
    """Tests for screens, modals and the session aggregate."""

    def test_screen_constructors(self):
        """Screen helpers build the two variants."""
        assert Screen.onboarding(2) == Screen(kind=ScreenKind.ONBOARDING, step=2)
        assert Screen.camera().is_camera
        assert str(Screen.onboarding(3)) == "Onboarding(3)"
        assert str(Screen.camera()) == "Camera"

    def test_screen_step_bounds(self):
        """Onboarding screens need a positive step; camera screens have none."""
        with pytest.raises(pydantic.ValidationError):
            Screen.onboarding(0)
        with pytest.raises(pydantic.ValidationError):
            Screen(kind=ScreenKind.CAMERA, step=1)

    def test_modal_flags_are_independent(self):
        """Opening one modal leaves the other untouched."""
        modals = ModalVisibility()
        modals.set(ModalKind.SETTINGS, True)
        assert modals.is_open(ModalKind.SETTINGS)
        assert not modals.is_open(ModalKind.TRAVEL_MODE)

    def test_session_defaults(self):
        """A new session starts on the first onboarding step."""
        session = Session()
        assert session.screen == Screen.onboarding(1)
        assert session.profile.is_empty
        assert not session.travel_mode_enabled
        assert len(session.session_id) == 8


class TestScanModels:
    """Tests for scan-related models."""

    def test_menu_item_conflicts(self):
        """A dish conflicts when an active filter matches its allergens or diets."""
        item = MenuItem(
            name="Cheese Plate",
            allergens=frozenset({Allergen.MILK}),
            violates=frozenset({DietaryRestriction.VEGAN}),
        )
        assert item.conflicts_with(frozenset({"Milk"}))
        assert item.conflicts_with(frozenset({"vegan"}))
        assert not item.conflicts_with(frozenset({"Peanuts", "keto"}))

    def test_scan_result_is_frozen(self):
        """Scan results cannot be modified after creation."""
        result = ScanResult(safe_items=("Soup",), risky_items=("Cake",))
        assert result.total_items == 2
        with pytest.raises(pydantic.ValidationError):
            result.safe_items = ()


class TestOnboardingFlows:
    """Tests for built-in onboarding flows."""

    def test_guided_flow_order(self):
        """The guided flow collects goal, filters, then email."""
        assert [s.kind for s in GUIDED_FLOW] == [StepKind.GOAL, StepKind.FILTERS, StepKind.EMAIL]

    def test_intro_flow(self):
        """The intro flow is three slides ending in Get Started."""
        assert len(INTRO_FLOW) == 3
        assert INTRO_FLOW[0].title == "Welcome to MenuLens"
        assert INTRO_FLOW[-1].action_label == "Get Started"

    def test_get_flow(self):
        """Variants resolve by name."""
        assert get_flow("guided") is GUIDED_FLOW
        assert get_flow("intro") is INTRO_FLOW
        with pytest.raises(KeyError):
            get_flow("unknown")
