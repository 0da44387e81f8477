#!/usr/bin/env python3
"""
Profile management CLI.

View and switch between discipline profiles.
"""

import sys
import re
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import typer

app = typer.Typer(help="DisciplineTX Profile Management")


@app.command()
def current():
    """Show current profile settings."""
    from dotenv import load_dotenv
    from disciplinetx.core.config import Config

    load_dotenv()
    config = Config.from_env()

    typer.echo(config.get_summary())


@app.command("list")
def list_profiles():
    """List all available profiles."""
    from disciplinetx.core.config import Config

    profiles_dir = Path("config/profiles")

    typer.secho("\n📊 Available Profiles:", bold=True)
    typer.echo("─" * 50)

    for profile_file in sorted(profiles_dir.glob("*.json")):
        profile_name = profile_file.stem
        try:
            profile_data = Config._load_json(profile_file)
        except (OSError, ValueError) as e:
            typer.echo(f"\n{profile_name} (error loading: {e})")
            continue

        guardrails = profile_data.get("guardrails", {})
        habits = profile_data.get("default_habits") or []

        typer.echo(f"\n{profile_name}")
        typer.echo(f"  Name: {profile_data.get('name', profile_name)}")
        typer.echo(f"  Description: {profile_data.get('description', '')}")
        typer.echo(f"  Max Trades/Day: {guardrails.get('max_trades_per_day', 3)}")
        typer.echo(f"  Max Daily Loss: {guardrails.get('max_daily_loss_pct', 2.0)}%")
        typer.echo(f"  Default Habits: {len(habits) or 'built-in'}")

    typer.echo("\n")


@app.command()
def switch(
    profile: str = typer.Argument(..., help="Profile name (default, strict, or custom)"),
):
    """Switch to a different profile (updates .env file)."""
    env_path = Path(".env")

    if not env_path.exists():
        typer.secho("Error: .env file not found!", fg=typer.colors.RED)
        raise typer.Exit(1)

    profile_path = Path(f"config/profiles/{profile}.json")
    if not profile_path.exists():
        typer.secho(f"Error: Profile '{profile}' not found!", fg=typer.colors.RED)
        typer.echo("Run: python scripts/profile.py list")
        raise typer.Exit(1)

    content = env_path.read_text()

    if "PROFILE_TEMPLATE=" in content:
        content = re.sub(r"PROFILE_TEMPLATE=.*", f"PROFILE_TEMPLATE={profile}", content)
    else:
        content += f"\nPROFILE_TEMPLATE={profile}\n"

    env_path.write_text(content)
    typer.secho(f"✓ Switched to profile: {profile}", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
