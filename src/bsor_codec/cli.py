"""BSOR replay tool - decode, encode and export replays."""
from __future__ import annotations

import json
from pathlib import Path

import click

from .decode import decode, decode_with_stats
from .encode import encode
from .jsonio import dumps, loads


def _fail(e: Exception) -> None:
    # Fail closed with a single-line reason.
    click.echo(f"FATAL: {e}", err=True)
    raise SystemExit(1)


@click.group()
def main():
    pass


@main.command("decode")
@click.argument("src", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("out", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--legacy-sections", is_flag=True, help="Always read six sections, skipping unknown tags")
@click.option("--stats", is_flag=True, help="Print string recovery statistics to stderr")
def decode_cmd(src: Path, out: Path, legacy_sections: bool, stats: bool) -> None:
    """Decode a .bsor replay into JSON."""
    try:
        replay, scan_stats = decode_with_stats(src.read_bytes(), legacy_sections=legacy_sections)
    except ValueError as e:
        _fail(e)

    out.write_text(dumps(replay) + "\n", encoding="utf-8")
    if stats:
        click.echo(json.dumps(scan_stats, sort_keys=True), err=True)
    click.echo(f"Decoded JSON saved to {out}")


@main.command("encode")
@click.argument("src", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("out", type=click.Path(dir_okay=False, path_type=Path))
def encode_cmd(src: Path, out: Path) -> None:
    """Encode a JSON replay into .bsor."""
    try:
        data = encode(loads(src.read_text(encoding="utf-8")))
    except Exception as e:
        _fail(e)

    out.write_bytes(data)
    click.echo(f".bsor file saved to {out}")


@main.command("export")
@click.argument("src", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("out", type=click.Path(file_okay=False, path_type=Path))
def export_cmd(src: Path, out: Path) -> None:
    """Export replay sections as Parquet tables."""
    # pandas/pyarrow load only for this command.
    from bsor_export.tables import write_tables

    try:
        replay = decode(src.read_bytes())
    except ValueError as e:
        _fail(e)

    written = write_tables(replay, out)
    click.echo(f"PASS: Tables written to {out}")
    for p in written:
        click.echo(f"  {p.name}")


if __name__ == "__main__":
    main()
