# ==============================================================================
# PALFORGE - COMMAND LINE INTERFACE
# ==============================================================================
# Command-line front end for the palette variation generator.
#
# Commands:
#   - generate: Compose the saved color groups into a batch of palettes
#   - single:   Run one mode over one index set (no groups, no skin overlay)
#   - preview:  Render a single composed variation as a swatch image
#   - groups:   Manage the saved color groups
#   - history:  Show past generation runs, or find a palette by MD5
#   - paths:    Show where settings and history are stored
#
# Usage:
#   palforge groups add --name Hair --indices 16-23 --mode colorize --count 12
#   palforge generate --input body.pal --output out/ --skin dark
#   palforge single --input body.pal --output out/ --mode grayscale --count 2
#   palforge preview --input body.pal --output preview.png --random
# ==============================================================================

import argparse
import json
import os
import random
import sys
from typing import List, Optional

from . import __version__
from .core.color_group import ColorGroup, parse_indices
from .core.composer import (
    batch_size, compose_batch, generate_single_mode, preview_palette,
    random_group_variations,
)
from .core.config import Config, get_config
from .core.database import Database
from .core.exceptions import InvalidInputError, PaletteWriteError
from .core.naming import NamingScheme
from .core.palette import PALETTE_COLOR_COUNT
from .core.parameters import GenerationMode, GenerationParameters, GrayscaleType, ScalingRule
from .core.paths import Paths
from .core.skin import SkinTone
from .core.transforms import grayscale_tone_set, step_sweep_variants
from .parsers.batch_exporter import BatchExporter, palette_md5
from .parsers.group_codec import decode_groups, encode_groups
from .parsers.pal_parser import PALParser, contact_sheet, render_swatch


# ==============================================================================
# COLOR HELPERS FOR TERMINAL OUTPUT
# ==============================================================================
class Colors:
    """ANSI color codes for terminal output."""
    HEADER = '\033[95m'
    BLUE = '\033[94m'
    CYAN = '\033[96m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    BOLD = '\033[1m'
    END = '\033[0m'

    @classmethod
    def disable(cls):
        """Disable colors (for non-supporting terminals)."""
        cls.HEADER = ''
        cls.BLUE = ''
        cls.CYAN = ''
        cls.GREEN = ''
        cls.YELLOW = ''
        cls.RED = ''
        cls.BOLD = ''
        cls.END = ''


def print_header(text: str):
    """Print a header."""
    print(f"\n{Colors.BOLD}{Colors.CYAN}{'=' * 60}{Colors.END}")
    print(f"{Colors.BOLD}{Colors.CYAN}  {text}{Colors.END}")
    print(f"{Colors.BOLD}{Colors.CYAN}{'=' * 60}{Colors.END}\n")


def print_success(text: str):
    print(f"{Colors.GREEN}✓ {text}{Colors.END}")


def print_error(text: str):
    print(f"{Colors.RED}✗ {text}{Colors.END}")


def print_info(text: str):
    print(f"{Colors.BLUE}ℹ {text}{Colors.END}")


def print_warning(text: str):
    print(f"{Colors.YELLOW}⚠ {text}{Colors.END}")


def progress_callback(current: int, total: int, message: str):
    """Progress bar for batch writes."""
    percent = (current / total) * 100 if total > 0 else 0
    bar_length = 30
    filled = min(bar_length, int(bar_length * current / total)) if total > 0 else 0
    bar = '█' * filled + '░' * (bar_length - filled)

    max_len = 40
    if len(message) > max_len:
        message = '...' + message[-(max_len - 3):]

    print(f"\r[{bar}] {percent:5.1f}% | {current}/{total} | {message:<{max_len}}",
          end='', flush=True)

    if total and current >= total:
        print()


# ==============================================================================
# SHARED HELPERS
# ==============================================================================

MODE_NAMES = {
    'hsv': GenerationMode.HSV_STANDARD,
    'colorize': GenerationMode.COLORIZE,
    'grayscale': GenerationMode.GRAYSCALE,
}

GRAYSCALE_TYPE_NAMES = {
    'bw': GrayscaleType.BLACK_WHITE,
    'gray': GrayscaleType.GRAY,
    'both': GrayscaleType.BOTH,
}

SCALING_NAMES = {
    'multiplicative': ScalingRule.MULTIPLICATIVE,
    'additive': ScalingRule.ADDITIVE,
}

SKIN_NAMES = {
    'default': SkinTone.DEFAULT,
    'dark': SkinTone.DARK,
}

# CLI option -> GenerationParameters field
PARAMETER_OPTIONS = [
    ('hue_min', 'Hue min (degrees)'),
    ('hue_max', 'Hue max (degrees)'),
    ('hue_step', 'Hue step (degrees, step sweep)'),
    ('saturation_min', 'Saturation offset / sweep start'),
    ('saturation_max', 'Saturation sweep end'),
    ('saturation_step', 'Saturation sweep step'),
    ('lightness_min', 'Lightness offset / sweep start'),
    ('lightness_max', 'Lightness sweep end'),
    ('lightness_step', 'Lightness sweep step'),
    ('colorize_hue_light', 'Colorize hue offset for light colors'),
    ('colorize_hue_medium', 'Colorize hue offset for medium colors'),
    ('colorize_hue_dark', 'Colorize hue offset for dark colors'),
    ('colorize_saturation', 'Colorize saturation'),
    ('colorize_brightness', 'Colorize brightness'),
    ('grayscale_light_tone', 'Grayscale light tone'),
    ('grayscale_medium_tone', 'Grayscale medium tone'),
    ('grayscale_dark_tone', 'Grayscale dark tone'),
    ('grayscale_contrast', 'Grayscale contrast'),
    ('grayscale_brightness', 'Grayscale brightness'),
]


def add_parameter_arguments(parser: argparse.ArgumentParser):
    """Add one --option per generation parameter."""
    group = parser.add_argument_group('generation parameters')
    for name, help_text in PARAMETER_OPTIONS:
        group.add_argument('--' + name.replace('_', '-'), dest=name, type=float,
                           default=None, help=help_text)
    group.add_argument('--grayscale-type', choices=sorted(GRAYSCALE_TYPE_NAMES),
                       default=None, help='Grayscale output: bw, gray or both')


def parameters_from_args(args, base: Optional[GenerationParameters] = None) -> GenerationParameters:
    """Build parameters from defaults (or base) plus any options given."""
    parameters = base.copy() if base else GenerationParameters()
    for name, _ in PARAMETER_OPTIONS:
        value = getattr(args, name, None)
        if value is not None:
            setattr(parameters, name, value)
    if getattr(args, 'grayscale_type', None):
        parameters.grayscale_type = GRAYSCALE_TYPE_NAMES[args.grayscale_type]
    return parameters


def load_config(args) -> Config:
    """Settings from --config, or the global settings file."""
    if getattr(args, 'config', None):
        config = Config(args.config)
        config.load()
        return config
    return get_config()


def get_database(args) -> Database:
    """Get or create the history database."""
    return Database(getattr(args, 'db', None) or Paths.get_database_path())


def load_base_palette(path: str) -> Optional[bytes]:
    parser = PALParser()
    if not parser.load(path):
        return None
    return parser.data


def naming_from_args(args, config: Config) -> NamingScheme:
    """NamingScheme from options, falling back to saved settings."""
    if args.costume is not None:
        costume, costume_number = True, args.costume
    else:
        costume, costume_number = config.sprite_type == 1, config.costume_number

    return NamingScheme(
        prefix=args.prefix or config.file_prefix,
        class_name=args.class_name if args.class_name is not None else config.class_name,
        gender=args.gender if args.gender is not None else config.gender,
        costume=costume,
        costume_number=costume_number,
    )


def add_output_arguments(parser: argparse.ArgumentParser):
    parser.add_argument('--input', '-i', help='Base .pal file (default: last used)')
    parser.add_argument('--output', '-o', help='Output folder (default: last used)')
    parser.add_argument('--prefix', help='File prefix when no class is set')
    parser.add_argument('--class', dest='class_name', help='Class sprite code')
    parser.add_argument('--gender', help='Gender code')
    parser.add_argument('--costume', type=int, metavar='NUMBER',
                        help='Use costume naming with this costume number')
    parser.add_argument('--preview', action='store_true',
                        help='Write a .png swatch next to every palette')
    parser.add_argument('--no-history', action='store_true',
                        help='Do not record this run in the history')


def resolve_io(args, config: Config):
    """Input/output paths from options or the last used ones."""
    input_path = args.input or config.last_input_palette
    output_path = args.output or config.last_output_folder
    if not input_path:
        print_error("No base palette given (use --input)")
        return None, None
    if not output_path:
        print_error("No output folder given (use --output)")
        return None, None
    return input_path, output_path


def export_batch(args, config: Config, palettes, total: int, kind: str,
                 input_path: str, output_path: str, base: bytes,
                 group_count: int = 0, skin_type: Optional[int] = None) -> int:
    """Write a batch and report the outcome. Returns an exit code."""
    record = config.record_history and not args.no_history
    database = get_database(args) if record else None

    exporter = BatchExporter(
        output_path,
        naming=naming_from_args(args, config),
        database=database,
        write_preview=args.preview or config.write_preview,
    )

    try:
        result = exporter.export(
            palettes, total=total, kind=kind,
            source_palette=os.path.abspath(input_path), source_data=base,
            group_count=group_count, skin_type=skin_type,
            progress_callback=progress_callback if total else None,
        )
    except PaletteWriteError as e:
        print()
        print_error(str(e))
        if e.written_files:
            print_warning(f"{len(e.written_files)} palettes were written before the failure")
        return 1
    finally:
        if database is not None:
            database.close()

    config.last_input_palette = input_path
    config.last_output_folder = output_path
    config.save()

    print_success(f"Wrote {result.count} palettes to {output_path}")
    if result.files:
        names = [os.path.basename(f) for f in result.files[:10]]
        more = f" ... (+{len(result.files) - 10} more)" if len(result.files) > 10 else ""
        print_info(", ".join(names) + more)
    return 0


# ==============================================================================
# GENERATE COMMAND
# ==============================================================================
def cmd_generate(args) -> int:
    """Compose the saved color groups into a batch."""
    config = load_config(args)
    input_path, output_path = resolve_io(args, config)
    if not input_path:
        return 1

    base = load_base_palette(input_path)
    if base is None:
        return 1

    groups = config.load_groups()
    skin = SKIN_NAMES[args.skin] if args.skin else config.skin_type

    try:
        palettes = compose_batch(base, groups, skin)
    except InvalidInputError as e:
        print_error(str(e))
        return 1

    total = batch_size(groups)
    print_header(f"Generating {total} palettes from {len(groups)} color groups")

    if args.skin:
        config.skin_type = skin

    return export_batch(args, config, palettes, total, 'groups', input_path,
                        output_path, base, group_count=len(groups), skin_type=int(skin))


# ==============================================================================
# SINGLE COMMAND
# ==============================================================================
def single_mode_total(mode: GenerationMode, parameters: GenerationParameters,
                      count: int) -> int:
    """Number of palettes generate_single_mode will produce."""
    if mode == GenerationMode.HSV_STANDARD and count == 0:
        return sum(1 for _ in step_sweep_variants(parameters))
    if mode == GenerationMode.GRAYSCALE:
        return count * len(grayscale_tone_set(parameters))
    return count


def cmd_single(args) -> int:
    """Run one generation mode over one index set."""
    config = load_config(args)
    input_path, output_path = resolve_io(args, config)
    if not input_path:
        return 1

    base = load_base_palette(input_path)
    if base is None:
        return 1

    try:
        indices = parse_indices(args.indices) if args.indices else []
    except ValueError as e:
        print_error(f"Invalid --indices: {e}")
        return 1

    mode = MODE_NAMES[args.mode]
    parameters = parameters_from_args(args)
    scaling = SCALING_NAMES[args.scaling] if args.scaling else None

    try:
        palettes = generate_single_mode(base, indices, mode, parameters, args.count, scaling)
    except InvalidInputError as e:
        print_error(str(e))
        return 1

    total = single_mode_total(mode, parameters, args.count)
    print_header(f"{mode.label}: {total} palettes over "
                 f"{len(indices) or PALETTE_COLOR_COUNT} colors")

    return export_batch(args, config, palettes, total, mode.label, input_path,
                        output_path, base)


# ==============================================================================
# PREVIEW COMMAND
# ==============================================================================
def cmd_preview(args) -> int:
    """Render one composed variation (or the whole batch) as an image."""
    config = load_config(args)
    input_path = args.input or config.last_input_palette
    if not input_path:
        print_error("No base palette given (use --input)")
        return 1

    base = load_base_palette(input_path)
    if base is None:
        return 1

    groups = config.load_groups()
    skin = SKIN_NAMES[args.skin] if args.skin else config.skin_type

    try:
        if args.sheet:
            palettes = list(compose_batch(base, groups, skin))
            image = contact_sheet(palettes, columns=args.columns)
        else:
            if args.random:
                variations = random_group_variations(groups, random.Random(args.seed))
            elif args.variations:
                variations = [int(v) for v in args.variations.split(',')]
            else:
                variations = []
            palette = preview_palette(base, groups, variations, skin)
            image = render_swatch(palette, args.cell_size)
            if args.pal:
                PALParser(palette).save(args.pal)
    except InvalidInputError as e:
        print_error(str(e))
        return 1
    except ValueError as e:
        print_error(f"Invalid --variations: {e}")
        return 1

    try:
        image.save(args.output, "PNG")
    except OSError as e:
        print_error(f"Failed to save preview: {e}")
        return 1

    if not args.sheet:
        shown = variations or [0] * len(groups)
        print_info("Variations: " + ", ".join(
            f"{g.name}={v}" for g, v in zip(groups, shown)))
    print_success(f"Saved preview to {args.output}")
    return 0


# ==============================================================================
# GROUPS COMMANDS
# ==============================================================================
def _save_groups(config: Config, groups: List[ColorGroup]):
    config.save_groups(groups)
    config.save()


def _group_at(groups: List[ColorGroup], number: int) -> Optional[ColorGroup]:
    if 1 <= number <= len(groups):
        return groups[number - 1]
    print_error(f"No color group #{number} (have {len(groups)})")
    return None


def cmd_groups_list(args) -> int:
    """List the saved color groups."""
    print_header("Color Groups")

    groups = load_config(args).load_groups()
    if not groups:
        print_warning("No color groups defined")
        return 0

    print(f"{'#':<4} {'Name':<20} {'Mode':<14} {'Vars':<6} {'Indices'}")
    print("-" * 70)
    for number, group in enumerate(groups, 1):
        status = "" if group.is_valid() else f"  {Colors.RED}(invalid){Colors.END}"
        print(f"{number:<4} {group.name:<20} {group.mode.label:<14} "
              f"{group.variation_count:<6} {group.indices_string()}{status}")

    print(f"\nTotal: {len(groups)} groups, batch size {batch_size(groups)}")
    return 0


def cmd_groups_add(args) -> int:
    """Add a color group."""
    config = load_config(args)
    groups = config.load_groups()

    try:
        indices = parse_indices(args.indices)
    except ValueError as e:
        print_error(f"Invalid --indices: {e}")
        return 1

    group = ColorGroup(
        name=args.name,
        indices=indices,
        mode=MODE_NAMES[args.mode],
        parameters=parameters_from_args(args),
        variation_count=args.count,
    )

    errors = group.validation_errors()
    if errors:
        print_error(f"Invalid group: {'; '.join(errors)}")
        return 1

    groups.append(group)
    _save_groups(config, groups)
    print_success(f"Added color group #{len(groups)}: {group}")
    return 0


def cmd_groups_duplicate(args) -> int:
    """Duplicate a color group."""
    config = load_config(args)
    groups = config.load_groups()
    group = _group_at(groups, args.number)
    if group is None:
        return 1

    copy = group.duplicate()
    groups.insert(args.number, copy)
    _save_groups(config, groups)
    print_success(f"Added color group #{args.number + 1}: {copy.name}")
    return 0


def cmd_groups_remove(args) -> int:
    """Remove a color group."""
    config = load_config(args)
    groups = config.load_groups()
    group = _group_at(groups, args.number)
    if group is None:
        return 1

    groups.remove(group)
    _save_groups(config, groups)
    print_success(f"Removed color group: {group.name}")
    return 0


def cmd_groups_clear(args) -> int:
    """Remove every color group."""
    config = load_config(args)
    _save_groups(config, [])
    print_success("Cleared all color groups")
    return 0


def cmd_groups_export(args) -> int:
    """Write the saved groups to a JSON file."""
    groups = load_config(args).load_groups()
    count, data = encode_groups(groups)

    try:
        with open(args.file, 'w', encoding='utf-8') as f:
            json.dump({'color_group_count': count, 'color_groups': data}, f, indent=4)
    except OSError as e:
        print_error(f"Failed to export groups: {e}")
        return 1

    print_success(f"Exported {count} color groups to {args.file}")
    return 0


def cmd_groups_import(args) -> int:
    """Load groups from a JSON file written by 'groups export'."""
    config = load_config(args)

    try:
        with open(args.file, 'r', encoding='utf-8') as f:
            stored = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        print_error(f"Failed to import groups: {e}")
        return 1

    if not isinstance(stored, dict):
        print_error("Failed to import groups: expected a JSON object")
        return 1

    imported = decode_groups(stored.get('color_group_count', 0),
                             stored.get('color_groups', ''))
    groups = config.load_groups() + imported if args.append else imported
    _save_groups(config, groups)
    print_success(f"Imported {len(imported)} color groups")
    return 0


# ==============================================================================
# HISTORY COMMAND
# ==============================================================================
def _show_hash_matches(db: Database, target: str) -> int:
    """List recorded palettes whose MD5 matches a hash or a .pal file."""
    if os.path.isfile(target):
        data = load_base_palette(target)
        if data is None:
            return 1
        digest = palette_md5(data)
    else:
        digest = target.strip().lower()

    print_header(f"Palettes with MD5 {digest}")
    matches = db.find_by_hash(digest)
    if not matches:
        print_warning("No recorded palette has this MD5")
        return 0

    print(f"{'Run':<5} {'Var':<5} Path")
    print("-" * 70)
    for palette in matches:
        print(f"{palette.run_id:<5} {palette.variation + 1:<5} {palette.path}")
    return 0


def cmd_history(args) -> int:
    """Show recent generation runs, or the files of one run."""
    db = get_database(args)
    try:
        if args.hash:
            return _show_hash_matches(db, args.hash)

        if args.run:
            run = db.get_run(args.run)
            if run is None:
                print_error(f"No run #{args.run}")
                return 1

            print_header(f"Run #{run.id}: {run.kind} ({run.status})")
            for palette in db.get_run_palettes(run.id):
                print(f"{palette.variation + 1:<5} {palette.hash_md5}  {palette.path}")
            return 0

        print_header("Generation History")
        runs = db.get_recent_runs(args.limit)
        if not runs:
            print_warning("No generation runs recorded")
            return 0

        print(f"{'ID':<5} {'Started':<20} {'Kind':<14} {'Written':<10} {'Status':<10} Output")
        print("-" * 90)
        for run in runs:
            started = run.started_at.strftime('%Y-%m-%d %H:%M:%S') if run.started_at else ''
            written = f"{run.written}/{run.requested}"
            print(f"{run.id:<5} {started:<20} {run.kind:<14} {written:<10} "
                  f"{run.status:<10} {run.output_folder}")

        stats = db.get_stats()
        print(f"\nRuns: {stats['runs']} ({stats['failed_runs']} failed), "
              f"palettes written: {stats['palettes']}")
        return 0
    finally:
        db.close()


# ==============================================================================
# PATHS COMMAND
# ==============================================================================
def cmd_paths(args) -> int:
    """Show data paths."""
    print("PalForge Paths:")
    print(f"  User Data:      {Paths.get_user_data_dir()}")
    print(f"  Config:         {getattr(args, 'config', None) or Paths.get_config_path()}")
    print(f"  Database:       {getattr(args, 'db', None) or Paths.get_database_path()}")
    print(f"  Default Output: {Paths.get_default_output_dir()}")
    return 0


# ==============================================================================
# MAIN ARGUMENT PARSER
# ==============================================================================
def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with every command."""
    parser = argparse.ArgumentParser(
        prog='palforge',
        description="PalForge - Ragnarok Online palette variation generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s groups add --name Hair --indices 16-23 --mode colorize --count 12
  %(prog)s generate --input body.pal --output out/
  %(prog)s single --input body.pal --output out/ --mode hsv --count 0
  %(prog)s preview --input body.pal --output preview.png --random
        """
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--config', help='Settings file (default: user data folder)')
    parser.add_argument('--db', help='History database (default: user data folder)')
    parser.add_argument('--no-color', action='store_true', help='Disable colored output')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # -------------------------------------------------------------------------
    # GENERATE command
    # -------------------------------------------------------------------------
    generate = subparsers.add_parser('generate', help='Compose the saved color groups')
    add_output_arguments(generate)
    generate.add_argument('--skin', choices=sorted(SKIN_NAMES), help='Skin ramp')
    generate.set_defaults(func=cmd_generate)

    # -------------------------------------------------------------------------
    # SINGLE command
    # -------------------------------------------------------------------------
    single = subparsers.add_parser('single', help='Run one mode over one index set')
    add_output_arguments(single)
    single.add_argument('--mode', choices=sorted(MODE_NAMES), default='hsv')
    single.add_argument('--indices', help='Indices such as "16-23,40" (default: all 256)')
    single.add_argument('--count', type=int, default=10,
                        help='Variations (HSV: 0 = full step sweep)')
    single.add_argument('--scaling', choices=sorted(SCALING_NAMES),
                        help='Saturation/lightness rule for HSV')
    add_parameter_arguments(single)
    single.set_defaults(func=cmd_single)

    # -------------------------------------------------------------------------
    # PREVIEW command
    # -------------------------------------------------------------------------
    preview = subparsers.add_parser('preview', help='Render a composed variation')
    preview.add_argument('--input', '-i', help='Base .pal file (default: last used)')
    preview.add_argument('--output', '-o', required=True, help='PNG file to write')
    preview.add_argument('--variations', help='Variation per group, e.g. "0,3,1"')
    preview.add_argument('--random', action='store_true', help='Random variation per group')
    preview.add_argument('--seed', type=int, help='Seed for --random')
    preview.add_argument('--sheet', action='store_true',
                         help='Render every variation of the batch on one sheet')
    preview.add_argument('--columns', type=int, default=5, help='Swatches per row for --sheet')
    preview.add_argument('--cell-size', type=int, default=16, help='Pixels per color cell')
    preview.add_argument('--pal', help='Also save the previewed palette as .pal')
    preview.add_argument('--skin', choices=sorted(SKIN_NAMES), help='Skin ramp')
    preview.set_defaults(func=cmd_preview)

    # -------------------------------------------------------------------------
    # GROUPS commands
    # -------------------------------------------------------------------------
    groups_parser = subparsers.add_parser('groups', help='Manage color groups')
    groups_sub = groups_parser.add_subparsers(dest='subcommand')

    groups_list = groups_sub.add_parser('list', help='List color groups')
    groups_list.set_defaults(func=cmd_groups_list)

    groups_add = groups_sub.add_parser('add', help='Add a color group')
    groups_add.add_argument('--name', default='', help='Group name')
    groups_add.add_argument('--indices', required=True, help='Indices such as "16-23,40"')
    groups_add.add_argument('--mode', choices=sorted(MODE_NAMES), default='hsv')
    groups_add.add_argument('--count', type=int, default=10, help='Number of variations')
    add_parameter_arguments(groups_add)
    groups_add.set_defaults(func=cmd_groups_add)

    groups_dup = groups_sub.add_parser('duplicate', help='Duplicate a color group')
    groups_dup.add_argument('number', type=int, help='Group number (from list)')
    groups_dup.set_defaults(func=cmd_groups_duplicate)

    groups_remove = groups_sub.add_parser('remove', help='Remove a color group')
    groups_remove.add_argument('number', type=int, help='Group number (from list)')
    groups_remove.set_defaults(func=cmd_groups_remove)

    groups_clear = groups_sub.add_parser('clear', help='Remove all color groups')
    groups_clear.set_defaults(func=cmd_groups_clear)

    groups_export = groups_sub.add_parser('export', help='Save groups to a JSON file')
    groups_export.add_argument('file', help='Destination file')
    groups_export.set_defaults(func=cmd_groups_export)

    groups_import = groups_sub.add_parser('import', help='Load groups from a JSON file')
    groups_import.add_argument('file', help='File written by "groups export"')
    groups_import.add_argument('--append', action='store_true',
                               help='Keep existing groups and add the imported ones')
    groups_import.set_defaults(func=cmd_groups_import)

    # -------------------------------------------------------------------------
    # HISTORY / PATHS commands
    # -------------------------------------------------------------------------
    history = subparsers.add_parser('history', help='Show generation history')
    history.add_argument('--limit', type=int, default=10, help='Runs to show')
    history.add_argument('--run', type=int, help='Show the files of one run')
    history.add_argument('--hash', metavar='MD5_OR_FILE',
                         help='Find generated palettes by MD5 or by a .pal file')
    history.set_defaults(func=cmd_history)

    paths = subparsers.add_parser('paths', help='Show data paths')
    paths.set_defaults(func=cmd_paths)

    parser.groups_parser = groups_parser
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.no_color or not sys.stdout.isatty():
        Colors.disable()
    elif sys.platform == 'win32':
        # Enable ANSI colors on Windows
        try:
            import ctypes
            kernel32 = ctypes.windll.kernel32
            kernel32.SetConsoleMode(kernel32.GetStdHandle(-11), 7)
        except (AttributeError, OSError):
            Colors.disable()

    if not args.command:
        parser.print_help()
        return 0

    if not hasattr(args, 'func'):
        if args.command == 'groups':
            parser.groups_parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
