"""CLI entry point for the journal calculators.

Every command reads plain JSON (arrays of dates or journal rows) and
prints its result as JSON on stdout.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

import click

from .core.clock import IClock, SimClock, WallClock
from .core.config import Settings, load_settings
from .core.errors import ConfigError, InvalidInputError
from .observability.logger import get_logger, setup_logging

log = get_logger(__name__)

_DATE = click.DateTime(formats=["%Y-%m-%d"])


def _read_json_array(path: str | None) -> list[Any]:
    if path is None:
        return []
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"{path} is not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise click.BadParameter(f"{path} must contain a JSON array")
    return data


def _clock(today: datetime | None) -> IClock:
    return SimClock.on(today.date()) if today else WallClock()


def _emit(payload: dict | list) -> None:
    click.echo(json.dumps(payload, indent=2))


@click.group()
@click.option("--config", default=None, help="TOML config file path")
@click.pass_context
def main(ctx: click.Context, config: str | None) -> None:
    """Trading journal calculators."""
    try:
        settings = load_settings(config_path=config)
    except ConfigError as exc:
        raise click.UsageError(str(exc)) from exc
    setup_logging(
        level=settings.observability.log_level,
        format=settings.observability.log_format,
    )
    ctx.obj = settings


@main.command()
@click.option("--trades", "trades_path", type=click.Path(exists=True, dir_okay=False),
              default=None, help="JSON array of trade dates")
@click.option("--checkins", "checkins_path", type=click.Path(exists=True, dir_okay=False),
              default=None, help="JSON array of check-in dates")
@click.option("--allowance", type=click.IntRange(min=0), default=None,
              help="Rest days allowed per 7-day window")
@click.option("--today", type=_DATE, default=None, help="Evaluate as of this date")
@click.pass_obj
def streak(
    settings: Settings,
    trades_path: str | None,
    checkins_path: str | None,
    allowance: int | None,
    today: datetime | None,
) -> None:
    """Current journaling streak."""
    from .journal.streak import calculate_streak

    if allowance is None:
        allowance = settings.streak.allowed_rest_days_per_week
    try:
        result = calculate_streak(
            _read_json_array(trades_path),
            _read_json_array(checkins_path),
            allowance,
            clock=_clock(today),
            max_lookback_days=settings.streak.max_lookback_days,
        )
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc
    log.info("streak_calculated", current_streak=result.current_streak)
    _emit(result.to_dict())


@main.command()
@click.argument("entries_path", type=click.Path(exists=True, dir_okay=False))
def score(entries_path: str) -> None:
    """Consistency score of the most recent entries."""
    from .journal.consistency import calculate_consistency_score

    try:
        result = calculate_consistency_score(_read_json_array(entries_path))
    except (InvalidInputError, ValueError) as exc:
        raise click.BadParameter(str(exc)) from exc
    log.info("consistency_scored", overall=result.overall)
    _emit(result.to_dict())


@main.command()
@click.option("--instrument", required=True, help="Symbol, e.g. EURUSD")
@click.option("--direction", required=True, type=click.Choice(["long", "short"]))
@click.option("--entry", "entry_price", required=True, help="Entry price")
@click.option("--exit", "exit_price", required=True, help="Exit price")
@click.option("--size", "position_size", required=True, help="Position size in lots")
@click.option("--stop", "stop_loss", default=None, help="Initial stop-loss price")
def pnl(
    instrument: str,
    direction: str,
    entry_price: str,
    exit_price: str,
    position_size: str,
    stop_loss: str | None,
) -> None:
    """Pips, P&L and R-multiple for one trade."""
    from decimal import Decimal, InvalidOperation

    from .journal.pnl import calculate_pnl

    try:
        result = calculate_pnl(
            instrument,
            direction,
            Decimal(entry_price),
            Decimal(exit_price),
            Decimal(position_size),
            Decimal(stop_loss) if stop_loss is not None else None,
        )
    except (InvalidOperation, InvalidInputError) as exc:
        raise click.BadParameter(f"invalid trade input: {exc}") from exc
    _emit(result.to_dict())


@main.command()
@click.argument("trade_count", type=click.IntRange(min=0))
def level(trade_count: int) -> None:
    """Unlock tier and progress for a cumulative trade count."""
    from .journal.levels import (
        get_level_for_trades,
        get_next_level,
        get_progress_to_next_level,
    )

    next_level = get_next_level(trade_count)
    _emit({
        "level": get_level_for_trades(trade_count).to_dict(),
        "next_level": next_level.to_dict() if next_level else None,
        "progress": get_progress_to_next_level(trade_count).to_dict(),
    })


@main.command()
@click.argument("entries_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--instrument", default=None, help="Instrument about to be traded")
@click.option("--emotion", default=None, help="Current emotion tag")
@click.option("--today", type=_DATE, default=None, help="Evaluate as of this date")
def nudges(
    entries_path: str,
    instrument: str | None,
    emotion: str | None,
    today: datetime | None,
) -> None:
    """Pre-trade warnings from past entries."""
    from .journal.nudges import generate_nudges

    try:
        result = generate_nudges(
            _read_json_array(entries_path),
            instrument=instrument,
            emotion=emotion,
            clock=_clock(today),
        )
    except (InvalidInputError, ValueError) as exc:
        raise click.BadParameter(str(exc)) from exc
    _emit([n.to_dict() for n in result])


@main.command()
@click.argument("entries_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--checkins", "checkins_path", type=click.Path(exists=True, dir_okay=False),
              default=None, help="JSON array of check-in dates")
@click.option("--today", type=_DATE, default=None, help="Evaluate as of this date")
@click.pass_obj
def stats(
    settings: Settings,
    entries_path: str,
    checkins_path: str | None,
    today: datetime | None,
) -> None:
    """Win rate and journaling streak."""
    from .journal.stats import summarize_journal

    try:
        result = summarize_journal(
            _read_json_array(entries_path),
            _read_json_array(checkins_path),
            allowed_rest_days_per_week=settings.streak.allowed_rest_days_per_week,
            clock=_clock(today),
        )
    except (InvalidInputError, ValueError) as exc:
        raise click.BadParameter(str(exc)) from exc
    _emit(result.to_dict())


@main.command()
@click.argument("entries_path", type=click.Path(exists=True, dir_okay=False))
def playbook(entries_path: str) -> None:
    """Win rate and R per playbook setup."""
    from .journal.playbook import calculate_playbook_stats

    try:
        result = calculate_playbook_stats(_read_json_array(entries_path))
    except (InvalidInputError, ValueError) as exc:
        raise click.BadParameter(str(exc)) from exc
    log.info("playbook_summarized", setups=len(result))
    _emit([s.to_dict() for s in result])


if __name__ == "__main__":
    main()
