import random
from datetime import date

import pytest
from typer.testing import CliRunner

from killboard import main as cli
from killboard.config import get_settings
from killboard.infrastructure.executor import StoreFailure
from scripts import generate_data

runner = CliRunner()


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_generate_users_is_deterministic_and_valid():
    first = generate_data._generate_users(5, random.Random(123))
    second = generate_data._generate_users(5, random.Random(123))

    assert first == second
    assert len({u.username for u in first}) == 5
    for user in first:
        assert len(user.password) >= 8
        assert any(c.isupper() for c in user.password)
        assert any(c.isdigit() for c in user.password)
        assert user.first_name.isalpha() and user.last_name.isalpha()


def test_generate_statistics_stays_in_window():
    start = date(2024, 1, 1)
    stats = generate_data._generate_statistics(20, 10, start, random.Random(7))

    assert stats
    assert all(0 <= s.user_index < 20 for s in stats)
    assert all(s.kills >= 0 for s in stats)
    assert all(start <= s.date < date(2024, 1, 11) for s in stats)


def test_info_masks_password(monkeypatch):
    monkeypatch.setenv("DB_PASSWORD", "hunter2")

    result = runner.invoke(cli.app, ["info"])

    assert result.exit_code == 0
    assert "hunter2" not in result.output
    assert "****" in result.output


def test_prune_reports_deleted_count(monkeypatch):
    async def fake_prune(settings, kills):
        assert kills == 10
        return 3

    monkeypatch.setattr(cli, "_prune", fake_prune)
    monkeypatch.setattr(cli, "configure_logging", lambda **_: None)

    result = runner.invoke(cli.app, ["prune", "--kills", "10"])

    assert result.exit_code == 0
    assert "Deleted 3 user(s)" in result.output


def test_prune_exits_nonzero_on_store_failure(monkeypatch):
    async def failing_prune(settings, kills):
        raise StoreFailure("connection refused")

    monkeypatch.setattr(cli, "_prune", failing_prune)
    monkeypatch.setattr(cli, "configure_logging", lambda **_: None)

    result = runner.invoke(cli.app, ["prune", "-k", "5"])

    assert result.exit_code == 1


def test_prune_rejects_negative_threshold():
    result = runner.invoke(cli.app, ["prune", "--kills", "-1"])

    assert result.exit_code != 0
