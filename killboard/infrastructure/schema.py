"""
Table definitions for the killboard store.

Creates the two tables the repositories query. Safe to run repeatedly
(`IF NOT EXISTS`); there is no migration machinery.
"""

from __future__ import annotations

import psycopg

from killboard.utils.logging import get_logger

log = get_logger(__name__)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS users (
    id          SERIAL PRIMARY KEY,
    username    VARCHAR(255) NOT NULL UNIQUE,
    password    VARCHAR(255) NOT NULL,
    first_name  VARCHAR(255) NOT NULL,
    last_name   VARCHAR(255) NOT NULL
);

CREATE TABLE IF NOT EXISTS statistics (
    id          SERIAL PRIMARY KEY,
    user_id     INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    kills       INTEGER NOT NULL DEFAULT 0 CHECK (kills >= 0),
    date        DATE NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_statistics_user_id ON statistics(user_id);
CREATE INDEX IF NOT EXISTS idx_statistics_date ON statistics(date);
"""


def create_tables(conninfo: str) -> None:
    """Execute the schema SQL on a dedicated connection."""
    with psycopg.connect(conninfo) as conn:
        with conn.cursor() as cur:
            cur.execute(SCHEMA_SQL)
        conn.commit()
    log.info("Database schema initialized")


def truncate_tables(conninfo: str) -> None:
    """Remove every row and reset id sequences."""
    with psycopg.connect(conninfo) as conn:
        with conn.cursor() as cur:
            cur.execute("TRUNCATE TABLE statistics, users RESTART IDENTITY CASCADE;")
        conn.commit()


__all__ = ["SCHEMA_SQL", "create_tables", "truncate_tables"]
