"""
Command‑line interface for the xdm toolkit.
Reads SaveForLaters measures from Excel/CSV sheets and writes their XDM form as JSON.
"""

import click
import json
import logging
import pandas as pd
import sys
import typing
import zipfile

from collections import namedtuple
from stairval.notepad import create_notepad

from .loader import load_sheets_as_tables
from .mapper import KNOWN_SHEET_ALIASES, SAVE_FOR_LATERS_KEY_COLUMNS, SaveForLatersMapper

AuditEntry = namedtuple("AuditEntry", ["step", "sheet", "message", "level"])


@click.group()
def main():
    """xdm: serialize Experience Data Model commerce measures."""
    pass


@main.command(name="serialize-excel")
@click.option(
    "-e",
    "--excel-path",
    "excel_file",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="path to the Excel workbook (or CSV file)",
)
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, writable=True),
    help="write the JSON array here instead of stdout",
)
@click.option("--verbose", is_flag=True, help="Also emit debug logs to stderr")
@click.option(
    "--log-file-path",
    type=click.Path(dir_okay=False, writable=True),
    help="Append timestamped logs to this file",
)
def serialize_excel(
    excel_file: str,
    output_path: typing.Optional[str] = None,
    verbose: bool = False,
    log_file_path: typing.Optional[str] = None,
):
    """
    Read each sheet, pick the SaveForLaters table, then:
      - map every row to a SaveForLaters measure,
      - report mapping errors and warnings,
      - write the serialized measures as a JSON array.
    """
    _configure_logging(verbose, log_file_path)
    logging.info(f"Beginning parse of '{excel_file}'")

    # 1) Read all sheets into DataFrames
    tables = _read_sheets(excel_file)
    logging.debug(f"Loaded sheets: {list(tables.keys())}")

    # 2) Map rows and collect issues
    notepad = create_notepad("save_for_laters")
    measures = SaveForLatersMapper().apply_mapping(tables, notepad)

    # 3) Report any errors or warnings
    _report_issues(notepad)
    if notepad.has_errors(include_subsections=True):
        sys.exit(1)

    # 4) Serialize
    payload = json.dumps(
        [measure.serialize_to_xdm() for measure in measures], indent=2, allow_nan=False
    )
    if output_path:
        with open(output_path, "w", encoding="utf-8") as out_f:
            out_f.write(payload)
        click.echo(f"Wrote {len(measures)} SaveForLaters measures to {output_path}")
    else:
        click.echo(payload)
    logging.info(f"Serialized {len(measures)} SaveForLaters measures from '{excel_file}'")


@main.command(name="audit-excel")
@click.option(
    "-e",
    "--excel-path",
    "excel_file",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="path to the Excel workbook (or CSV file)",
)
@click.option("-r", "--raw", is_flag=True, help="emit audit entries as JSON")
def audit_excel(excel_file: str, raw: bool = False):
    """
    Report header normalization, sheet classification and required-column checks.
    """
    tables = _read_sheets(excel_file)
    entries = preprocess(tables)

    if raw:
        click.echo(json.dumps([entry._asdict() for entry in entries], indent=2))
        return

    click.echo(f"{'SHEET':20}  {'STEP':20}  {'LEVEL':7}  MESSAGE")
    for entry in entries:
        line = f"{entry.sheet:20}  {entry.step:20}  {entry.level:7}  {entry.message}"
        # color by level
        if entry.level == "error":
            click.echo(click.style(line, fg="red"))
        elif entry.level in ("warn", "warning"):
            click.echo(click.style(line, fg="yellow"))
        else:
            click.echo(line)


def _read_sheets(excel_file: str) -> dict[str, pd.DataFrame]:
    # read each worksheet into a DataFrame, exiting with status 1 on unreadable input
    try:
        return load_sheets_as_tables(excel_file)
    except (OSError, ValueError, zipfile.BadZipFile) as e:
        logging.error(f"Failed to read '{excel_file}': {e}")
        click.echo(f"Error: failed to read {excel_file}: {e}", err=True)
        sys.exit(1)


def _configure_logging(verbose: bool, log_file_path: typing.Optional[str]) -> None:
    handlers: list[logging.Handler] = []
    if log_file_path:
        handlers.append(logging.FileHandler(log_file_path, mode="a", encoding="utf-8"))
    if verbose:
        handlers.append(logging.StreamHandler(sys.stderr))
    if handlers:
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.INFO,
            format="%(asctime)s %(levelname)s %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            handlers=handlers,
            force=True,
        )


def _report_issues(notepad):
    # if there were errors, show them
    if notepad.has_errors(include_subsections=True):
        click.echo("Errors found in mapping:", err=True)
        for err in notepad.errors():
            click.echo(f"- {err.message}", err=True)
    # show any warnings but keep going
    if notepad.has_warnings(include_subsections=True):
        click.echo("Warnings found in mapping:", err=True)
        for w in notepad.warnings():
            click.echo(f"- {w.message}", err=True)


def preprocess(tables: dict[str, pd.DataFrame]) -> list[AuditEntry]:
    """
    Run lightweight audits on each sheet:
      - header normalization
      - sheet classification
      - required-column presence
    """
    entries: list[AuditEntry] = []
    aliases = KNOWN_SHEET_ALIASES["save_for_laters"]

    # Step 1: header counts
    for name, df in tables.items():
        entries.append(AuditEntry(
            step="normalize-headers",
            sheet=name,
            message=f"{len(df.columns)} cols, {len(df)} rows",
            level="info",
        ))

    # Step 2: classify
    for name in tables:
        if name.strip().casefold() in aliases:
            kind = "save_for_laters"
        elif len(tables) == 1:
            kind = "save_for_laters (single sheet)"
        else:
            kind = "skip"
        entries.append(AuditEntry(step="classify-sheet", sheet=name, message=kind, level="info"))

    # Step 3: required columns
    for name, df in tables.items():
        missing = SAVE_FOR_LATERS_KEY_COLUMNS - set(df.columns)
        if missing:
            entries.append(AuditEntry(
                step="column-check",
                sheet=name,
                message=f"missing {sorted(missing)}",
                level="error" if name.strip().casefold() in aliases or len(tables) == 1 else "warning",
            ))
    return entries


if __name__ == "__main__":
    main()
