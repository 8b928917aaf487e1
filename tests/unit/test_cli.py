"""Unit tests for the CLI."""

import asyncio

from typer.testing import CliRunner

from menulens import __version__
from menulens.cli import app, render_scan_result
from menulens.models.profile import Allergen, Goal, UserProfile
from menulens.services.scan import MockMenuClassifier
from menulens.storage import LocalKeyValueStore, PreferenceStore

runner = CliRunner()


def save_profile(path, profile):
    asyncio.run(PreferenceStore(LocalKeyValueStore(path)).save(profile))


class TestCli:
    """Tests for CLI commands."""

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_show_without_preferences(self, temp_dir):
        result = runner.invoke(app, ["preferences", "show", "--data-path", str(temp_dir)])
        assert result.exit_code == 0
        assert "No saved preferences" in result.output

    def test_show_saved_preferences(self, temp_dir):
        save_profile(
            temp_dir,
            UserProfile(goal=Goal.FITNESS_MACROS, allergens={Allergen.PEANUTS}, email="a@b.c"),
        )
        result = runner.invoke(app, ["preferences", "show", "--data-path", str(temp_dir)])
        assert result.exit_code == 0
        assert "Fitness/Macros" in result.output
        assert "Peanuts" in result.output

    def test_reset(self, temp_dir):
        save_profile(temp_dir, UserProfile(goal=Goal.LIFESTYLE_DIET))
        result = runner.invoke(
            app, ["preferences", "reset", "--yes", "--data-path", str(temp_dir)]
        )
        assert result.exit_code == 0
        assert "Preferences deleted" in result.output

        result = runner.invoke(
            app, ["preferences", "reset", "--yes", "--data-path", str(temp_dir)]
        )
        assert "Nothing to delete" in result.output

    def test_render_scan_result(self):
        from rich.console import Console

        console = Console(record=True, width=120)
        console.print(render_scan_result(MockMenuClassifier().classify(frozenset({"Dairy"}))))
        text = console.export_text()
        assert "Safe Options" in text
        assert "Contains Allergens" in text
        assert "Caesar Salad (contains dairy)" in text
        assert "Dairy" in text
