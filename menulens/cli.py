"""
MenuLens CLI.

Console front-end for a session: walks through onboarding, opens the simulated
camera, runs scans and renders their results.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console, Group
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.prompt import Confirm, Prompt
from rich.table import Table

from .core.config import Config, get_config
from .core.logging import setup_logging
from .models.onboarding import OnboardingStep, StepKind
from .models.profile import Allergen, DietaryRestriction, Goal, UserProfile, lookup_filter
from .models.scan import ScanResult
from .models.session import ModalKind
from .services.onboarding import OnboardingController
from .services.session import SessionController
from .storage import PreferenceStore, create_store

app = typer.Typer(
    name="menulens",
    help="Scan restaurant menus against your dietary filters",
    add_completion=False,
)
preferences_app = typer.Typer(help="Inspect or reset saved preferences")
app.add_typer(preferences_app, name="preferences")

console = Console()

TRAVEL_FEATURES = (
    ("Local Cuisine", "Authentic recommendations"),
    ("Opening Hours", "Real-time availability"),
    ("Group Friendly", "Perfect for families"),
)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        from . import __version__
        console.print(f"MenuLens v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """MenuLens: your personal dietary assistant for safer dining out."""
    pass


def _build_config(
    data_path: Optional[Path] = None,
    onboarding: Optional[str] = None,
    latency: Optional[float] = None,
    verbose: bool = False,
) -> Config:
    config = get_config().model_copy(deep=True)
    if data_path is not None:
        config.storage.base_path = data_path
    if onboarding is not None:
        config.onboarding.variant = onboarding  # type: ignore[assignment]
    if latency is not None:
        config.scan.latency_seconds = latency
    if verbose:
        config.log_level = "DEBUG"
    return config


def render_profile(profile: UserProfile) -> Table:
    """Tabulate a profile."""
    table = Table(title="Preferences")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("Goal", profile.goal.value if profile.goal else "[dim]not set[/dim]")
    table.add_row(
        "Dietary restrictions",
        ", ".join(sorted(d.value for d in profile.dietary_restrictions)) or "[dim]none[/dim]",
    )
    table.add_row(
        "Allergens",
        ", ".join(sorted(a.value for a in profile.allergens)) or "[dim]none[/dim]",
    )
    table.add_row("Email", profile.email or "[dim]not set[/dim]")
    return table


def render_scan_result(result: ScanResult) -> Group:
    """Render the safe, risky and allergen sections of a scan."""
    safe = Table(title="Safe Options", title_style="bold green", show_header=False)
    safe.add_column("Item")
    for item in result.safe_items:
        safe.add_row(f"[green]✓[/green] {item}")

    risky = Table(title="Contains Allergens", title_style="bold red", show_header=False)
    risky.add_column("Item")
    for item in result.risky_items:
        risky.add_row(f"[red]✗[/red] {item}")

    detected = ", ".join(sorted(result.allergens_detected)) or "none of your allergens"
    return Group(
        safe,
        risky,
        Panel(detected, title="Allergens Detected", border_style="yellow"),
    )


def _render_filters(profile: UserProfile) -> Table:
    table = Table(title="Filters")
    table.add_column("Catalog", style="cyan")
    table.add_column("Filter")
    table.add_column("Active", justify="center")

    for restriction in DietaryRestriction:
        on = restriction in profile.dietary_restrictions
        table.add_row("Diet", restriction.value, "[green]●[/green]" if on else "[dim]○[/dim]")
    for allergen in Allergen:
        on = allergen in profile.allergens
        table.add_row("Allergen", allergen.value, "[green]●[/green]" if on else "[dim]○[/dim]")
    return table


def _prompt_filter_toggles(profile: UserProfile, toggle: Callable[[str], bool]) -> None:
    while True:
        console.print(_render_filters(profile))
        answer = Prompt.ask(
            "Filters to toggle (comma separated, blank to continue)", default=""
        )
        names = [name.strip() for name in answer.split(",") if name.strip()]
        if not names:
            return
        for name in names:
            if lookup_filter(name) is None:
                console.print(f"[yellow]Unknown filter: {name}[/yellow]")
            toggle(name)


async def _run_onboarding_step(controller: SessionController, step: OnboardingStep) -> None:
    console.print(Panel(
        f"[bold]{step.title}[/bold]\n{step.description}",
        subtitle=f"Step {controller.onboarding.step} of {controller.onboarding.total_steps}",
        border_style="blue",
    ))

    if step.kind == StepKind.GOAL:
        goals = [g.value for g in Goal]
        for index, goal in enumerate(goals, start=1):
            console.print(f"  {index}. {goal}")
        choice = Prompt.ask("Goal", choices=[str(i) for i in range(1, len(goals) + 1)])
        await controller.select_goal(goals[int(choice) - 1])

    elif step.kind == StepKind.FILTERS:
        _prompt_filter_toggles(controller.profile, controller.toggle_filter)
        await controller.advance()

    elif step.kind == StepKind.EMAIL:
        result = await controller.submit_email(Prompt.ask("Email"))
        if not result.success:
            console.print(f"[red]{result.error}[/red]")

    else:
        Prompt.ask(f"[bold]{step.action_label}[/bold] (press Enter)", default="")
        await controller.advance()


async def _scan(controller: SessionController) -> None:
    if not controller.start_scan():
        return
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task("Analyzing menu...", total=None)
        result = await controller.wait_for_scan()

    if result is None:
        console.print("[yellow]Scan cancelled[/yellow]")
        return
    console.print("[bold green]✓ Analysis Complete![/bold green]")
    console.print(render_scan_result(result))


async def _settings(controller: SessionController) -> None:
    controller.open_modal(ModalKind.SETTINGS)
    edited = controller.profile.model_copy(deep=True)
    editor = OnboardingController(edited, controller.steps)
    _prompt_filter_toggles(edited, editor.toggle_filter)

    if not Confirm.ask("Save changes?", default=True):
        controller.close_modal(ModalKind.SETTINGS)
        return
    result = await controller.save_and_close_settings(edited)
    if result.success:
        console.print("[green]Preferences saved[/green]")
    else:
        console.print(f"[yellow]{result.error}[/yellow]")


def _travel(controller: SessionController) -> None:
    controller.open_modal(ModalKind.TRAVEL_MODE)
    table = Table(title="Travel Mode", show_header=False)
    table.add_column("Feature", style="bold")
    table.add_column("Detail")
    for feature, detail in TRAVEL_FEATURES:
        table.add_row(feature, detail)
    console.print(Panel(
        Group("Get personalized dining recommendations for your destination", table),
        border_style="yellow",
    ))
    if Confirm.ask("Enable Travel Mode?", default=False):
        controller.enable_travel_mode()
        console.print("[green]Travel mode enabled[/green]")
    else:
        controller.close_modal(ModalKind.TRAVEL_MODE)


async def _camera_loop(controller: SessionController) -> None:
    while controller.screen.is_camera:
        if controller.camera_available:
            console.print("[dim]Point camera at menu[/dim]")
        else:
            error = controller.camera.last_error
            console.print(f"[yellow]Camera unavailable: {error.message if error else 'unknown'}[/yellow]")

        action = Prompt.ask(
            "[s]can, [p]references, [t]ravel, [r]estart onboarding, [q]uit",
            choices=["s", "p", "t", "r", "q"],
            default="s",
        )
        if action == "s":
            await _scan(controller)
        elif action == "p":
            await _settings(controller)
        elif action == "t":
            _travel(controller)
        elif action == "r":
            await controller.restart_onboarding()
        else:
            return


@app.command()
def run(
    data_path: Optional[Path] = typer.Option(
        None,
        "--data-path",
        "-d",
        help="Directory preferences are stored in",
    ),
    onboarding: Optional[str] = typer.Option(
        None,
        "--onboarding",
        help="Onboarding variant: guided or intro",
    ),
    latency: Optional[float] = typer.Option(
        None,
        "--latency",
        help="Simulated scan latency in seconds",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Enable verbose logging",
    ),
) -> None:
    """Start an interactive MenuLens session."""
    config = _build_config(data_path, onboarding, latency, verbose)
    setup_logging(config)

    console.print(Panel.fit(
        "[bold blue]MenuLens[/bold blue]\n"
        "Your personal dietary assistant for safer dining out",
        border_style="blue",
    ))

    async def run_async() -> None:
        async with await SessionController.from_config(config) as controller:
            while True:
                while not controller.screen.is_camera:
                    await _run_onboarding_step(controller, controller.onboarding.current)
                await _camera_loop(controller)
                if controller.screen.is_camera:
                    break

    asyncio.run(run_async())


@preferences_app.command("show")
def show_preferences(
    data_path: Optional[Path] = typer.Option(
        None,
        "--data-path",
        "-d",
        help="Directory preferences are stored in",
    ),
) -> None:
    """Print the saved preferences."""
    config = _build_config(data_path)

    async def run_async() -> UserProfile:
        store = PreferenceStore(create_store(config.storage), key=config.storage.preferences_key)
        return await store.load()

    profile = asyncio.run(run_async())
    if profile.is_empty:
        console.print("[dim]No saved preferences[/dim]")
        return
    console.print(render_profile(profile))


@preferences_app.command("reset")
def reset_preferences(
    data_path: Optional[Path] = typer.Option(
        None,
        "--data-path",
        "-d",
        help="Directory preferences are stored in",
    ),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Do not ask for confirmation",
    ),
) -> None:
    """Delete the saved preferences."""
    config = _build_config(data_path)
    if not yes and not Confirm.ask("Delete saved preferences?", default=False):
        raise typer.Exit()

    async def run_async() -> bool:
        store = PreferenceStore(create_store(config.storage), key=config.storage.preferences_key)
        return await store.clear()

    if asyncio.run(run_async()):
        console.print("[green]Preferences deleted[/green]")
    else:
        console.print("[dim]Nothing to delete[/dim]")


if __name__ == "__main__":
    app()
