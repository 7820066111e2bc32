"""
Command line tools for the results dataset and database.

Usage:
    python -m noskrien.cli normalize data/ --dry-run
    python -m noskrien.cli check-duplicates          # settings.data_dir
    python -m noskrien.cli generate-sql data/ import.sql
    python -m noskrien.cli merge-db --preview
    python -m noskrien.cli import-db data/
"""

import asyncio
import logging
import sys
from pathlib import Path

import click

from noskrien.config import settings
from noskrien.features.normalization import (
    GenderRepairPolicy,
    check_data_dir,
    generate_sql,
    load_data_dir,
    normalize_data_dir,
    normalize_records,
)
from noskrien.shared.exceptions import DataDirectoryError, MergeExecutionError

logger = logging.getLogger(__name__)

# Windows console encoding fix
if sys.platform == 'win32':
    sys.stdout.reconfigure(encoding='utf-8')


def _policy() -> GenderRepairPolicy:
    return GenderRepairPolicy.from_settings(settings)


def _data_dir(value: Path | None) -> Path:
    return value if value is not None else settings.data_dir


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Debug logging")
def cli(verbose):
    """Participant name reconciliation for noskrien results."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, settings.log_level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )


@cli.command()
@click.argument("data_dir", type=click.Path(path_type=Path), required=False)
@click.option("--dry-run", is_flag=True, help="Report only, do not rewrite files")
def normalize(data_dir, dry_run):
    """Merge Latvian spelling variants in DATA_DIR and write the files back.

    DATA_DIR defaults to the data_dir setting.
    """
    try:
        result = normalize_data_dir(_data_dir(data_dir), _policy(), dry_run=dry_run)
    except DataDirectoryError as e:
        raise click.ClickException(str(e))

    click.echo(f"Records scanned:      {result.records_scanned}")
    click.echo(f"Unique participants:  {result.unique_participants}")
    click.echo(f"Merged duplicates:    {result.merged_duplicates}")
    click.echo(f"Cross-gender moves:   {result.cross_gender_moves}")
    if result.skipped_races:
        click.echo(f"Skipped races:        {result.skipped_races}")

    if result.actions:
        click.echo()
        click.echo("Merges:")
        for action in result.actions[:20]:
            click.echo(f"  '{action.old_name}' -> '{action.new_name}' ({action.season})")
        if len(result.actions) > 20:
            click.echo(f"  ... and {len(result.actions) - 20} more")

    if dry_run:
        click.echo()
        click.echo("Dry run, no files changed.")


@cli.command("check-duplicates")
@click.argument("data_dir", type=click.Path(path_type=Path), required=False)
def check_duplicates(data_dir):
    """List identities that still have more than one spelling.

    Exits with status 1 when duplicates are found.
    """
    try:
        report = check_data_dir(_data_dir(data_dir), _policy())
    except DataDirectoryError as e:
        raise click.ClickException(str(e))

    click.echo(f"Records scanned: {report.records_scanned}")
    if report.is_clean:
        click.echo("No duplicates found.")
        return

    click.echo(f"Found {len(report.groups)} duplicate groups:")
    for group in report.groups:
        names = ", ".join(f"'{n}'" for n in group.names)
        moved = " [other gender file]" if group.cross_gender else ""
        click.echo(
            f"  {group.key.distance}/{group.key.gender}: {names} "
            f"(seasons: {', '.join(group.seasons)}){moved}"
        )
    sys.exit(1)


@cli.command("generate-sql")
@click.argument("data_dir", type=click.Path(path_type=Path))
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
def generate_sql_command(data_dir, output):
    """Write an idempotent import script for DATA_DIR to OUTPUT."""
    try:
        result = normalize_records(load_data_dir(data_dir), _policy())
    except DataDirectoryError as e:
        raise click.ClickException(str(e))

    script = generate_sql(result.participants)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(script.sql, encoding="utf-8")

    click.echo(f"Participants: {script.participant_count}")
    click.echo(f"Races:        {script.race_count}")
    click.echo(f"SQL saved: {output}")


@cli.command("merge-db")
@click.option("--preview", is_flag=True, help="Show the plan without changing anything")
def merge_db(preview):
    """Merge duplicate participants in the database."""
    asyncio.run(_merge_db(preview))


async def _merge_db(preview: bool):
    """Async implementation of merge-db command."""
    from noskrien.db.session import AsyncSessionLocal
    from noskrien.features.normalization import MergeService

    async with AsyncSessionLocal() as session:
        service = MergeService(session, _policy())

        if preview:
            plan = await service.preview()
            click.echo(f"Merges planned:     {plan.total_merges}")
            click.echo(f"Unique keepers:     {plan.unique_keepers}")
            click.echo(f"Cross-gender moves: {plan.cross_gender_moves}")
            for action in plan.actions:
                click.echo(
                    f"  '{action.old_name}' (id:{action.old_id}) -> "
                    f"'{action.new_name}' (id:{action.new_id})"
                )
            return

        try:
            execution = await service.execute()
        except MergeExecutionError as e:
            await session.commit()
            raise click.ClickException(f"{e} ({e.applied} merges kept)")
        await session.commit()

    click.echo(f"Updated races:        {execution.updated_races}")
    click.echo(f"Deleted participants: {execution.deleted_participants}")
    if execution.removed_duplicate_races:
        click.echo(f"Removed repeated races: {execution.removed_duplicate_races}")
    if execution.backfilled_keys:
        click.echo(f"Match keys filled in:   {execution.backfilled_keys}")


@cli.command("import-db")
@click.argument("data_dir", type=click.Path(path_type=Path), required=False)
def import_db(data_dir):
    """Normalize DATA_DIR (default: data_dir setting) and upsert it into the database."""
    try:
        result = normalize_records(load_data_dir(_data_dir(data_dir)), _policy())
    except DataDirectoryError as e:
        raise click.ClickException(str(e))
    asyncio.run(_import_db(result.participants))


async def _import_db(participants):
    """Async implementation of import-db command."""
    from noskrien.db.session import AsyncSessionLocal, init_db
    from noskrien.features.participants import ParticipantService

    init_db()
    async with AsyncSessionLocal() as session:
        stats = await ParticipantService(session).import_canonical(participants)
        await session.commit()

    click.echo(f"Participants created: {stats.participants_created}")
    click.echo(f"Participants updated: {stats.participants_updated}")
    click.echo(f"Races inserted:       {stats.races_inserted}")
    click.echo(f"Races skipped:        {stats.races_skipped}")


@cli.command()
@click.argument("name1")
@click.argument("name2")
@click.option("--category", default=None, help="Tautas or Sporta (default from settings)")
def compare(name1, name2, category):
    """Head-to-head of NAME1 and NAME2 from the database."""
    asyncio.run(_compare(name1, name2, category or settings.default_category))


async def _compare(name1: str, name2: str, category: str):
    """Async implementation of compare command."""
    from noskrien.db.session import AsyncSessionLocal
    from noskrien.features.comparison import arrange_for_display, compare_races, summarize
    from noskrien.features.participants import ParticipantService
    from noskrien.shared.formatters import format_diff, format_pace

    async with AsyncSessionLocal() as session:
        service = ParticipantService(session)
        history1 = await service.get_race_history(name1)
        history2 = await service.get_race_history(name2)

    rows = compare_races(history1, history2, category, settings.distance_tolerance_km)
    if not rows:
        click.echo(f"No common {category} races for '{name1}' and '{name2}'.")
        return

    head_to_head = arrange_for_display(rows, name1, name2)
    summary = summarize(head_to_head.rows)

    click.echo(f"{head_to_head.first_name} vs {head_to_head.second_name} ({category})")
    click.echo("-" * 78)
    click.echo(f"{'Date':10} | {'Race':16} | {'Time 1':>8} | {'Time 2':>8} | {'Pace 1':>10} | {'Pace 2':>10} | Diff")
    click.echo("-" * 78)
    for row in head_to_head.rows:
        click.echo(
            f"{row.date:10} | {row.race[:16]:16} | {row.p1_time:>8} | {row.p2_time:>8} | "
            f"{format_pace(row.pace1):>10} | {format_pace(row.pace2):>10} | {format_diff(row.diff)}"
        )
    click.echo("-" * 78)
    click.echo(
        f"Races: {summary.races}, wins {summary.first_wins}:{summary.second_wins}, "
        f"average {format_diff(summary.avg_diff)}"
    )


if __name__ == "__main__":
    cli()
