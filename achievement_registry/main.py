from __future__ import annotations

import json
import sys
from typing import Any, Optional

import typer
from pydantic import BaseModel

from achievement_registry.config import get_settings
from achievement_registry.domain.errors import Result
from achievement_registry.registry import AchievementRegistry
from achievement_registry.reporter import print_contract_health, print_user_report
from achievement_registry.store import available_backends
from achievement_registry.utils.logging import configure_logging

app = typer.Typer(help="Achievement registry CLI.")

CALLER_OPTION = typer.Option(..., "--caller", "-c", help="Identity performing the operation.")


def _registry() -> AchievementRegistry:
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    return AchievementRegistry.from_settings(settings)


def _echo_json(value: Any) -> None:
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json")
    typer.echo(json.dumps(value, indent=2, sort_keys=True))


def _finish(result: Result[Any]) -> None:
    """Print the operation outcome; exit non-zero on a refused operation."""
    if not result.ok:
        typer.echo(f"{result.error.value}: {result.message}", err=True)  # type: ignore[union-attr]
        raise typer.Exit(code=1)
    _echo_json(result.value)


def _run(operation: str, *args: Any) -> None:
    registry = _registry()
    try:
        _finish(getattr(registry, operation)(*args))
    finally:
        registry.close()


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    location = (
        str(settings.state_file)
        if settings.store_backend == "json"
        else f"{settings.db_user}@{settings.db_host}:{settings.db_port}/{settings.db_name}"
    )
    typer.echo(
        f"owner={settings.registry_owner} | backend={settings.store_backend} ({location}) | "
        f"enforce_certification_cap={settings.enforce_certification_cap} | "
        f"available backends: {', '.join(available_backends())}"
    )


# -- issuers -----------------------------------------------------------------


@app.command("register-issuer")
def register_issuer(
    issuer: str = typer.Argument(..., help="Account to authorize as issuer."),
    name: str = typer.Argument(...),
    description: str = typer.Option("", "--description", "-d"),
    caller: str = CALLER_OPTION,
) -> None:
    """Register (or re-register) an issuer. Owner only."""
    _run("register_issuer", caller, issuer, name, description)


@app.command("deactivate-issuer")
def deactivate_issuer(issuer: str = typer.Argument(...), caller: str = CALLER_OPTION) -> None:
    _run("deactivate_issuer", caller, issuer)


# -- catalogs ----------------------------------------------------------------


@app.command("create-achievement")
def create_achievement(
    name: str = typer.Argument(...),
    category: str = typer.Argument(...),
    reward: int = typer.Argument(..., help="Reward amount paid on claim."),
    description: str = typer.Option("", "--description", "-d"),
    caller: str = CALLER_OPTION,
) -> None:
    """Define a new achievement. Prints its id."""
    _run("create_achievement", caller, name, description, category, reward)


@app.command("deactivate-achievement")
def deactivate_achievement(
    achievement_id: int = typer.Argument(...), caller: str = CALLER_OPTION
) -> None:
    _run("deactivate_achievement", caller, achievement_id)


@app.command("create-certification")
def create_certification(
    name: str = typer.Argument(...),
    required: int = typer.Argument(..., help="Achievements an account must hold."),
    description: str = typer.Option("", "--description", "-d"),
    caller: str = CALLER_OPTION,
) -> None:
    """Define a new certification. Prints its id."""
    _run("create_certification", caller, name, description, required)


@app.command("deactivate-certification")
def deactivate_certification(
    certification_id: int = typer.Argument(...), caller: str = CALLER_OPTION
) -> None:
    _run("deactivate_certification", caller, certification_id)


# -- awards ------------------------------------------------------------------


@app.command("award-achievement")
def award_achievement(
    account: str = typer.Argument(...),
    achievement_id: int = typer.Argument(...),
    caller: str = CALLER_OPTION,
) -> None:
    _run("award_achievement", caller, account, achievement_id)


@app.command("award-certification")
def award_certification(
    account: str = typer.Argument(...),
    certification_id: int = typer.Argument(...),
    caller: str = CALLER_OPTION,
) -> None:
    _run("award_certification", caller, account, certification_id)


# -- ledger ------------------------------------------------------------------


@app.command()
def claim(achievement_id: int = typer.Argument(...), caller: str = CALLER_OPTION) -> None:
    """Claim the reward of an earned achievement. Prints the amount paid."""
    _run("claim_achievement_reward", caller, achievement_id)


@app.command()
def fund(amount: int = typer.Argument(...), caller: str = CALLER_OPTION) -> None:
    """Add funds to the reward balance. Prints the new balance."""
    _run("fund_contract", caller, amount)


@app.command()
def withdraw(amount: int = typer.Argument(...), caller: str = CALLER_OPTION) -> None:
    """Withdraw funds from the reward balance. Prints the new balance."""
    _run("withdraw_contract_funds", caller, amount)


@app.command()
def pause(caller: str = CALLER_OPTION) -> None:
    _run("emergency_pause", caller)


@app.command()
def resume(caller: str = CALLER_OPTION) -> None:
    _run("resume_operations", caller)


# -- queries -----------------------------------------------------------------


def _query(operation: str, *args: Any) -> Any:
    registry = _registry()
    try:
        return getattr(registry, operation)(*args)
    finally:
        registry.close()


def _echo_optional(value: Optional[BaseModel], what: str) -> None:
    if value is None:
        typer.echo(f"{what} not found", err=True)
        raise typer.Exit(code=1)
    _echo_json(value)


@app.command()
def profile(account: str = typer.Argument(...)) -> None:
    _echo_optional(_query("get_user_profile", account), f"Profile for {account!r}")


@app.command()
def achievement(achievement_id: int = typer.Argument(...)) -> None:
    _echo_optional(_query("get_achievement", achievement_id), f"Achievement {achievement_id}")


@app.command()
def certification(certification_id: int = typer.Argument(...)) -> None:
    _echo_optional(
        _query("get_certification", certification_id), f"Certification {certification_id}"
    )


@app.command()
def issuer(account: str = typer.Argument(...)) -> None:
    _echo_optional(_query("get_issuer_info", account), f"Issuer {account!r}")


@app.command()
def holds(
    account: str = typer.Argument(...),
    achievement_id: Optional[int] = typer.Option(None, "--achievement", "-a"),
    certification_id: Optional[int] = typer.Option(None, "--certification", "-x"),
) -> None:
    """Check whether an account holds an achievement or a certification."""
    if (achievement_id is None) == (certification_id is None):
        typer.echo("Pass exactly one of --achievement / --certification.", err=True)
        raise typer.Exit(code=2)
    if achievement_id is not None:
        _echo_json(_query("has_achievement", account, achievement_id))
    else:
        _echo_json(_query("has_certification", account, certification_id))


@app.command()
def stats() -> None:
    _echo_json(_query("get_contract_stats"))


@app.command()
def report(
    account: str = typer.Argument(...),
    table: bool = typer.Option(False, "--table", "-t", help="Render as a table."),
) -> None:
    """Show an account's progress together with global stats."""
    user_report = _query("get_user_report", account)
    if table:
        print_user_report(user_report)
    else:
        _echo_json(user_report)


@app.command()
def health(table: bool = typer.Option(False, "--table", "-t", help="Render as a table.")) -> None:
    contract_health = _query("get_contract_health")
    if table:
        print_contract_health(contract_health)
    else:
        _echo_json(contract_health)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
