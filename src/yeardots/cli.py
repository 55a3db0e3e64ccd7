"""yeardots CLI - a terminal host for the year grid."""

import sys

import click

from .adapters.system_clock import SystemClock
from .app import get_journal, open_session
from .config import load_config
from .core.calendar import CalendarDay, DayState, format_header, progress_label
from .core.calendar import today as calendar_today
from .errors import InvalidDay, StorageError
from .session import DayDot

COLUMNS = 7

SYMBOLS = {
    DayState.PAST: "●",
    DayState.TODAY: "◉",
    DayState.FUTURE: "·",
}


def _symbol(dot: DayDot) -> str:
    if dot.marked:
        return "◆"
    if dot.has_entry and dot.state != DayState.TODAY:
        return "✎"
    return SYMBOLS[dot.state]


@click.group()
@click.version_option()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """yeardots - your year as a grid of dots."""
    if debug:
        import logging

        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


@main.command()
@click.option("--year", "-y", type=int, default=None, help="Year to show, defaults to this year")
def year(year: int | None):
    """Show the year as a grid of dots."""
    with open_session() as session:
        overview = session.overview(year)

    click.echo(f"{overview.year}    {overview.header}\n")
    for start in range(0, len(overview.days), COLUMNS):
        row = overview.days[start : start + COLUMNS]
        click.echo(" ".join(_symbol(dot) for dot in row))


@main.command("today")
def today_cmd():
    """Show today's position in the year."""
    with open_session() as session:
        current = session.today
    click.echo(format_header(current.year, current.day_of_year))
    click.echo(progress_label(current.year, current.day_of_year))


@main.command()
@click.argument("day", type=int)
def mark(day: int):
    """Mark or unmark a future day of this year."""
    try:
        with open_session() as session:
            if day <= session.today.day_of_year:
                click.echo("Only future days can be marked.", err=True)
                sys.exit(1)
            markers = session.toggle_marker(day)
    except InvalidDay as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if not markers:
        click.echo("No marked days.")
        return
    for marker in markers:
        click.echo(f"◆ {format_header(marker.year, marker.day_of_year)} (day {marker.day_of_year})")


@main.command()
@click.argument("day", type=int)
@click.argument("text", required=False)
@click.option("--year", "-y", type=int, default=None, help="Year of the day, defaults to this year")
def write(day: int, text: str | None, year: int | None):
    """Write the journal entry for a day. Opens $EDITOR without TEXT."""
    try:
        with open_session() as session:
            target_year = year or session.today.year
            state = session.begin_editing(target_year, day)
            if state.read_only:
                session.end_editing()
                click.echo("Not yet.")
                return
            if text is None:
                text = click.edit(state.existing_text)
                if text is None:
                    session.end_editing()
                    click.echo("No changes.")
                    return
            session.text_changed(text)
            session.end_editing()
    except InvalidDay as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    action = "Saved" if text.strip() else "Cleared"
    click.echo(f"{action} {format_header(target_year, day)}.")


@main.command()
@click.argument("day", type=int)
@click.option("--year", "-y", type=int, default=None, help="Year of the day, defaults to this year")
def show(day: int, year: int | None):
    """Show the journal entry for a day."""
    config = load_config()
    target = calendar_today(SystemClock(config.timezone))
    target_year = year or target.year
    try:
        CalendarDay(target_year, day)
        entry = get_journal(config).find(target_year, day)
    except (InvalidDay, StorageError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(format_header(target_year, day))
    click.echo(progress_label(target_year, day))
    click.echo("")
    if (target_year, day) > (target.year, target.day_of_year):
        click.echo("Not yet.")
    elif entry is not None:
        click.echo(entry.text)
    else:
        click.echo("Nothing written.")
