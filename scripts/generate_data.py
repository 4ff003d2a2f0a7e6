"""
Seed script for the killboard database.

Generates deterministic pseudo-random users and per-day kill statistics and
loads them with Postgres COPY.
"""

from __future__ import annotations

import random
import sys
import time
from dataclasses import dataclass
from datetime import date, timedelta
from typing import List, Optional

import psycopg
import typer

from killboard.config import get_settings
from killboard.infrastructure.schema import create_tables

app = typer.Typer(help="Generate synthetic users and statistics and load them into Postgres.")

_FIRST_NAMES = ["Alice", "Bruno", "Chloe", "Dmitri", "Elena", "Farid", "Grace", "Hugo"]
_LAST_NAMES = ["Archer", "Baker", "Carter", "Duarte", "Evans", "Fischer", "Garcia", "Hale"]


@dataclass(frozen=True)
class SeedUser:
    username: str
    password: str
    first_name: str
    last_name: str


@dataclass(frozen=True)
class SeedStatistic:
    user_index: int
    kills: int
    date: date


def _generate_users(count: int, rng: random.Random) -> List[SeedUser]:
    users: List[SeedUser] = []
    for i in range(count):
        first = rng.choice(_FIRST_NAMES)
        last = rng.choice(_LAST_NAMES)
        users.append(
            SeedUser(
                username=f"{first.lower()}{i:04d}",
                password=f"Secret{rng.randint(100, 999)}",
                first_name=first,
                last_name=last,
            )
        )
    return users


def _generate_statistics(
    user_count: int, days: int, start: date, rng: random.Random
) -> List[SeedStatistic]:
    stats: List[SeedStatistic] = []
    for user_index in range(user_count):
        # Some users get no statistics at all.
        if rng.random() < 0.1:
            continue
        for offset in range(days):
            if rng.random() < 0.5:
                stats.append(
                    SeedStatistic(
                        user_index=user_index,
                        kills=rng.randint(0, 25),
                        date=start + timedelta(days=offset),
                    )
                )
    return stats


def _load(conninfo: str, users: List[SeedUser], stats: List[SeedStatistic]) -> None:
    with psycopg.connect(conninfo) as conn:
        with conn.cursor() as cur:
            ids: List[int] = []
            for user in users:
                cur.execute(
                    "INSERT INTO users (username, password, first_name, last_name) "
                    "VALUES (%s, %s, %s, %s) RETURNING id",
                    (user.username, user.password, user.first_name, user.last_name),
                )
                ids.append(cur.fetchone()[0])
            with cur.copy("COPY statistics (user_id, kills, date) FROM STDIN") as copy:
                for stat in stats:
                    copy.write_row((ids[stat.user_index], stat.kills, stat.date))
        conn.commit()


@app.command()
def main(
    users: int = typer.Option(100, "--users", "-u", help="Number of users to generate."),
    days: int = typer.Option(30, "--days", "-d", help="Days of statistics per user."),
    seed: int = typer.Option(42, "--seed", help="Deterministic RNG seed."),
    dsn: Optional[str] = typer.Option(None, "--dsn", help="Optional DSN override for Postgres."),
) -> None:
    """
    Generate users and statistics and load them into Postgres.
    """
    start = time.perf_counter()
    rng = random.Random(seed)
    conninfo = dsn or get_settings().pool_config().conninfo()

    seed_users = _generate_users(users, rng)
    seed_stats = _generate_statistics(users, days, date.today() - timedelta(days=days), rng)
    typer.echo(f"Generated {len(seed_users):,} users and {len(seed_stats):,} statistics (seed={seed})")

    create_tables(conninfo)
    _load(conninfo, seed_users, seed_stats)
    typer.echo(f"Load completed in {time.perf_counter() - start:.2f}s.")


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
