"""Inspection commands: where notes sit, what a scale contains, how a fret sounds."""

import click
import pyfiglet

from ..fretboard import find_positions, notes_in_range
from ..instruments import DEFAULT_INSTRUMENT, INSTRUMENTS, get_instrument, layout_for
from ..logging_config import setup_logging
from ..note_matcher import NoteMatcher
from ..note_types import FretCoordinate, FretRange
from ..scales import SCALES, notes_in_scale
from ..sound_cue import cue_for_note, cue_for_position, describe

instrument_option = click.option(
    "--instrument",
    "-i",
    type=click.Choice(sorted(INSTRUMENTS)),
    default=DEFAULT_INSTRUMENT,
    show_default=True,
    help="Instrument catalog entry",
)


def _fret_range(instrument, start, end):
    end = instrument.max_fret if end is None else min(end, instrument.max_fret)
    try:
        return FretRange(start, end)
    except ValueError as e:
        raise click.BadParameter(str(e))


def _render_board(layout, marked, fret_range):
    """Text fretboard; marked positions show their note, the rest a dash."""
    header = "    " + "".join(f"{fret:>4}" for fret in fret_range.frets())
    lines = [header]
    for string_index, string in enumerate(layout):
        cells = []
        for fret_index in fret_range.frets():
            if fret_index >= len(string):
                cells.append("    ")
            elif FretCoordinate(string_index, fret_index) in marked:
                cells.append(f"{string[fret_index]:>4}")
            else:
                cells.append("   -")
        lines.append(f"{string[0]:>2} |" + "".join(cells))
    return "\n".join(lines)


@click.group()
@click.option("--debug", is_flag=True, help="Show debug information")
def cli(debug):
    """Fretboarder inspection tools"""
    if debug:
        setup_logging(level="DEBUG")


@cli.command()
@click.argument("note")
@instrument_option
@click.option("--start", "-s", default=0, show_default=True, help="First fret")
@click.option("--end", "-e", type=int, default=None, help="Last fret (default: last fret of the instrument)")
@click.option("--banner", is_flag=True, help="Print the note as a big banner first")
def positions(note, instrument, start, end, banner):
    """Show every position of NOTE on the fretboard"""
    pitch_class = NoteMatcher.pitch_class(note)
    if pitch_class is None:
        raise click.BadParameter(f"Unknown note: {note}", param_hint="NOTE")

    inst = get_instrument(instrument)
    layout = layout_for(inst)
    fret_range = _fret_range(inst, start, end)
    found = find_positions([pitch_class], fret_range, layout)

    if banner:
        click.echo(pyfiglet.figlet_format(pitch_class))
    click.echo(f"{pitch_class} on {inst.name}, frets {fret_range}: {len(found)} positions")
    click.echo(_render_board(layout, set(found), fret_range))


@cli.command()
@click.argument("root")
@click.argument("scale_name", metavar="SCALE", type=click.Choice(list(SCALES)))
@instrument_option
@click.option("--start", "-s", default=0, show_default=True, help="First fret")
@click.option("--end", "-e", type=int, default=None, help="Last fret")
def scale(root, scale_name, instrument, start, end):
    """List the notes of ROOT SCALE and where they sit"""
    notes = notes_in_scale(root, scale_name)
    if not notes:
        raise click.BadParameter(f"Unknown root: {root}", param_hint="ROOT")

    inst = get_instrument(instrument)
    layout = layout_for(inst)
    fret_range = _fret_range(inst, start, end)
    found = find_positions(notes, fret_range, layout)

    click.echo(f"{root} {scale_name}: {' '.join(notes)}")
    click.echo(f"{len(found)} positions on {inst.name}, frets {fret_range}")
    click.echo(_render_board(layout, set(found), fret_range))


@cli.command()
@instrument_option
@click.option("--natural-only", is_flag=True, help="Only list natural notes")
def layout(instrument, natural_only):
    """Print the full note grid of an instrument"""
    inst = get_instrument(instrument)
    grid = layout_for(inst)
    fret_range = FretRange(0, inst.max_fret)
    everything = {
        FretCoordinate(s, f) for s, string in enumerate(grid) for f in range(len(string))
    }
    click.echo(f"{inst.name}: {' '.join(inst.tuning)} ({inst.frets} frets)")
    click.echo(_render_board(grid, everything, fret_range))
    notes = notes_in_range(grid, fret_range, natural_only)
    click.echo(f"Notes: {' '.join(notes)}")


@cli.command()
@click.argument("target")
@instrument_option
def cue(target, instrument):
    """Show the pitch played for TARGET, a note name or STRING:FRET"""
    string_part, sep, fret_part = target.partition(":")
    if sep:
        try:
            string_index, fret_index = int(string_part), int(fret_part)
        except ValueError:
            raise click.BadParameter(f"Expected STRING:FRET, got {target}", param_hint="TARGET")
        result = cue_for_position(instrument, string_index, fret_index)
    else:
        result = cue_for_note(target)
    click.echo(describe(result))


if __name__ == "__main__":
    cli()
