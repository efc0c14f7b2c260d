"""
Demo seeding script for the achievement registry.

Builds a deterministic pseudo-random registry: a handful of issuers, a catalog
of achievements and certifications, awards spread over a population of learner
accounts and a share of claimed rewards. Ledger time advances one block per
operation so the seeded records carry distinct timestamps.
"""

from __future__ import annotations

import json
import random
import sys
import time
from dataclasses import asdict, dataclass
from pathlib import Path

import typer

from achievement_registry.clock import ManualLedgerClock
from achievement_registry.config import get_settings
from achievement_registry.registry import AchievementRegistry
from achievement_registry.store import InMemoryStore, JsonFileStore

app = typer.Typer(help="Seed a demo achievement registry.")

CATEGORIES = ["CS", "Math", "Physics", "Languages", "Design"]

# Record fields stamped with ledger time.
TIME_FIELDS = ("registered_at", "created_at", "earned_at", "joined_at", "last_activity")


@dataclass
class SeedSummary:
    issuers: int = 0
    achievements: int = 0
    certifications: int = 0
    awards: int = 0
    certifications_awarded: int = 0
    claims: int = 0
    rejected: int = 0


def _latest_ledger_time(store: InMemoryStore) -> int:
    """Highest ledger time stamped on any stored record, 0 for an empty store."""
    latest = 0
    for entries in store.dump_state().values():
        for entry in entries:
            for field in TIME_FIELDS:
                value = entry["doc"].get(field)
                if isinstance(value, int) and value > latest:
                    latest = value
    return latest


def _seed(
    registry: AchievementRegistry,
    clock: ManualLedgerClock,
    issuers: int,
    achievements: int,
    learners: int,
    seed: int,
    funding: int,
) -> SeedSummary:
    rng = random.Random(seed)
    owner = registry.owner
    summary = SeedSummary()

    def tick(result) -> bool:
        clock.advance()
        if not result.ok:
            summary.rejected += 1
        return result.ok

    issuer_ids = [f"issuer-{i:02d}" for i in range(1, issuers + 1)]
    for issuer in issuer_ids:
        if tick(registry.register_issuer(owner, issuer, f"Academy {issuer[-2:]}", "Demo issuer")):
            summary.issuers += 1

    catalog: list[tuple[str, int]] = []
    for n in range(1, achievements + 1):
        issuer = rng.choice(issuer_ids)
        reward = rng.randrange(registry.limits.min_reward, 20_001, 500)
        result = registry.create_achievement(
            issuer, f"Course {n}", f"Complete course {n}", rng.choice(CATEGORIES), reward
        )
        if tick(result):
            catalog.append((issuer, result.value))
            summary.achievements += 1

    certifications: list[tuple[str, int]] = []
    for level, required in enumerate((1, 3, 5), start=1):
        issuer = rng.choice(issuer_ids)
        result = registry.create_certification(
            issuer, f"Level {level} Graduate", f"Hold {required} achievements", required
        )
        if tick(result):
            certifications.append((issuer, result.value))
            summary.certifications += 1

    if funding:
        tick(registry.fund_contract(owner, funding))

    for n in range(1, learners + 1):
        account = f"learner-{n:04d}"
        earned = rng.sample(catalog, k=rng.randint(0, min(len(catalog), 8)))
        for issuer, achievement_id in earned:
            if tick(registry.award_achievement(issuer, account, achievement_id)):
                summary.awards += 1
                if rng.random() < 0.5 and tick(
                    registry.claim_achievement_reward(account, achievement_id)
                ):
                    summary.claims += 1
        for issuer, certification_id in certifications:
            certification = registry.get_certification(certification_id)
            if certification and len(earned) >= certification.required_achievements_count:
                if tick(registry.award_certification(issuer, account, certification_id)):
                    summary.certifications_awarded += 1

    return summary


@app.command()
def main(
    issuers: int = typer.Option(3, "--issuers", "-i", help="Number of issuers."),
    achievements: int = typer.Option(20, "--achievements", "-a", help="Catalog size."),
    learners: int = typer.Option(50, "--learners", "-l", help="Number of learner accounts."),
    funding: int = typer.Option(250_000, "--funding", "-f", help="Initial reward balance."),
    seed: int = typer.Option(42, "--seed", help="Deterministic RNG seed."),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="JSON state file to write (defaults to STATE_FILE; use --dry-run to skip).",
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Seed in memory only."),
) -> None:
    """
    Seed a registry with demo issuers, catalog entries, awards and claims.
    """
    settings = get_settings()
    store: InMemoryStore
    if dry_run:
        store = InMemoryStore()
    else:
        store = JsonFileStore(output or settings.state_file)
    # Continue after anything already stored so timestamps never move backwards.
    clock = ManualLedgerClock(start=_latest_ledger_time(store) + 1)
    registry = AchievementRegistry(store=store, owner=settings.registry_owner, clock=clock)

    start = time.perf_counter()
    summary = _seed(registry, clock, issuers, achievements, learners, seed, funding)
    duration = time.perf_counter() - start

    typer.echo(json.dumps(asdict(summary), indent=2))
    typer.echo(f"Seeding completed in {duration:.2f}s at ledger height {clock.now():,}.")


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
