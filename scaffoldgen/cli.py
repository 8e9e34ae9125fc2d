# File: scaffoldgen/cli.py
"""
Scaffoldgen - Command-Line Interface
=====================================

Thin ``argparse`` front end over ``ScaffoldGenerator``.  Field tokens are
validated here before the engine sees them, and files are only written after
every role rendered successfully.

Usage examples::

    # Scaffold views for a model (react-router templates)
    python -m scaffoldgen scaffold Post title:string content:text

    # Preact + orbita with zod-validated forms, written to ./app/views
    python -m scaffoldgen scaffold Post title:string --stack orbita \\
        --validated -o ./app/views

    # Read the model from a definition file, print instead of writing
    python -m scaffoldgen scaffold -d scaffold_example.yaml --dry-run

    # Validate only
    python -m scaffoldgen scaffold Post title:string --validate-only

    # Application shell (main.tsx, home page, vite.config.js)
    python -m scaffoldgen app MyApp -o ./my_app

Exit codes:
    0 - success
    1 - validation error
    2 - generation error
    3 - export error
    4 - input/argument error
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, NoReturn, Optional, Sequence, Tuple

from scaffoldgen.errors import ScaffoldError
from scaffoldgen.models import EmptyFormPolicy, GenerationConfig, ModelSpec

# ---------------------------------------------------------------------------
# Logger (configured in _setup_logging)
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("scaffoldgen")


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

EXIT_SUCCESS: int = 0
EXIT_VALIDATION_ERROR: int = 1
EXIT_GENERATION_ERROR: int = 2
EXIT_EXPORT_ERROR: int = 3
EXIT_INPUT_ERROR: int = 4

# --stack choice → StackConfig fields (validation filled from --validated)
_STACK_CHOICES: Dict[str, Tuple[str, str]] = {
    "react": ("react", "react-router"),
    "orbita": ("preact", "orbita"),
}


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(verbosity: int) -> None:
    """
    Configure the root scaffoldgen logger based on verbosity level.

    Args:
        verbosity: -1 = ERROR, 0 = WARNING, 1 = INFO, 2+ = DEBUG.
    """
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity >= 1:
        level = logging.INFO
    elif verbosity == 0:
        level = logging.WARNING
    else:
        level = logging.ERROR

    handler: logging.StreamHandler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    fmt: str = "%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s"
    datefmt: str = "%H:%M:%S"
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root_logger: logging.Logger = logging.getLogger("scaffoldgen")
    root_logger.setLevel(level)

    # Remove existing handlers to prevent duplication
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.propagate = False


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=".",
        metavar="DIR",
        help="Output directory (default: current directory).",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=False,
        help="Print the rendered files instead of writing them.",
    )
    parser.add_argument(
        "--template-dir",
        type=str,
        default=None,
        metavar="DIR",
        help="Directory of override templates laid out as <variant>/<file>.",
    )

    verbosity_group = parser.add_argument_group("verbosity")
    verbosity_group.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v for INFO, -vv for DEBUG).",
    )
    verbosity_group.add_argument(
        "-q", "--quiet",
        action="store_true",
        default=False,
        help="Suppress all output except errors.",
    )


def _build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    from scaffoldgen import __version__

    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="scaffoldgen",
        description=(
            "Scaffoldgen - CRUD view generator.\n\n"
            "Renders list, detail and form views (plus their type or schema "
            "declarations) for a model from its name and typed fields."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  %(prog)s scaffold Post title:string content:text\n"
            "  %(prog)s scaffold Post title:string --stack orbita --validated\n"
            "  %(prog)s scaffold -d scaffold_example.yaml --dry-run\n"
            "  %(prog)s app MyApp -o ./my_app\n"
        ),
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"Scaffoldgen v{__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    # --- scaffold ---
    scaffold = subparsers.add_parser(
        "scaffold",
        help="Generate the views of one model.",
        description="Generate the views of one model.",
    )
    scaffold.add_argument(
        "name",
        nargs="?",
        default=None,
        help="PascalCase model name (e.g. BlogPost).",
    )
    scaffold.add_argument(
        "fields",
        nargs="*",
        metavar="name:type",
        help="Ordered field tokens (e.g. title:string published:boolean).",
    )
    scaffold.add_argument(
        "-d", "--definition",
        type=str,
        default=None,
        metavar="PATH",
        help="Read the model (and config) from a YAML/JSON definition file.",
    )
    scaffold.add_argument(
        "--validate-only",
        action="store_true",
        default=False,
        help="Only validate the model without rendering templates.",
    )

    config_group = scaffold.add_argument_group("configuration overrides")
    config_group.add_argument(
        "--stack",
        type=str,
        default=None,
        choices=sorted(_STACK_CHOICES),
        help="Client stack: react (react-router) or orbita (preact).",
    )
    config_group.add_argument(
        "--validated",
        action="store_true",
        default=False,
        help="Use zod-validated forms (orbita stack only).",
    )
    config_group.add_argument(
        "--empty-form",
        type=str,
        default=None,
        choices=[p.value for p in EmptyFormPolicy],
        help="What to do when the model has no editable fields.",
    )
    _add_common_options(scaffold)

    # --- app ---
    app = subparsers.add_parser(
        "app",
        help="Generate the application shell (main.tsx, home page, vite config).",
        description="Generate the application shell.",
    )
    app.add_argument("app_name", help="Application name shown on the home page.")
    _add_common_options(app)

    return parser


# ---------------------------------------------------------------------------
# Config override builder
# ---------------------------------------------------------------------------


def _build_config_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """Build a config override dictionary from CLI arguments."""
    overrides: Dict[str, Any] = {}

    if args.stack is not None or args.validated:
        client, router = _STACK_CHOICES[args.stack or "orbita"]
        overrides["stack"] = {
            "client": client,
            "router": router,
            "validation": "zod" if args.validated else "none",
        }

    if args.template_dir is not None:
        overrides["template_dir"] = args.template_dir

    if args.empty_form is not None:
        overrides["empty_form_policy"] = args.empty_form

    return overrides


def _load_model(args: argparse.Namespace) -> Tuple[ModelSpec, GenerationConfig]:
    """
    Build the model and config from the definition file or the positional
    arguments, with CLI overrides applied on top.

    Raises:
        FileNotFoundError / ValueError: Unreadable definition or bad config.
        ScaffoldError: Malformed field token or unknown field type.
    """
    from scaffoldgen.generator import load_definition_file, parse_raw_definition
    from scaffoldgen.validators import parse_field_tokens

    if args.definition is not None:
        if args.name is not None:
            raise ValueError("Pass either a model name or --definition, not both.")
        raw: Dict[str, Any] = load_definition_file(Path(args.definition))
        model, config = parse_raw_definition(raw)
    else:
        if args.name is None:
            raise ValueError("A model name (or --definition) is required.")
        model = ModelSpec(
            class_name=args.name, fields=tuple(parse_field_tokens(args.fields))
        )
        config = GenerationConfig()

    overrides: Dict[str, Any] = _build_config_overrides(args)
    if overrides:
        config = GenerationConfig.model_validate(
            {**config.model_dump(), **overrides}
        )
    return model, config


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


def _emit(files: Dict[str, str], output_dir: Path, dry_run: bool) -> int:
    """Print or write *files*; returns the exit code."""
    from scaffoldgen.utils import write_files_batch

    if dry_run:
        for path, text in files.items():
            print(f"# --- {path} ---")
            print(text)
        return EXIT_SUCCESS

    try:
        total_files, total_bytes = write_files_batch(files, output_dir)
    except OSError as exc:
        logger.error("Failed to write files to %s: %s", output_dir, exc)
        return EXIT_EXPORT_ERROR

    for path in files:
        print(f"  create  {output_dir / path}")
    logger.info("Wrote %d files (%d bytes).", total_files, total_bytes)
    return EXIT_SUCCESS


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _run_scaffold(args: argparse.Namespace) -> int:
    """Run the scaffold command. Returns the appropriate exit code."""
    from scaffoldgen.generator import ScaffoldGenerator, ScaffoldResult
    from scaffoldgen.validators import ValidationResult, validate_model
    from scaffoldgen.variants import select_variant

    try:
        model, config = _load_model(args)
        select_variant(config.stack)
    except FileNotFoundError as exc:
        logger.error("Failed to load definition: %s", exc)
        return EXIT_INPUT_ERROR
    except ScaffoldError as exc:
        logger.error("[%s] %s", exc.code, exc.message)
        return EXIT_INPUT_ERROR
    except ValueError as exc:
        logger.error("Invalid input: %s", exc)
        return EXIT_INPUT_ERROR

    validation: ValidationResult = validate_model(model, config)
    if args.validate_only or not validation.is_valid:
        print(validation.format_report())
        return EXIT_SUCCESS if validation.is_valid else EXIT_VALIDATION_ERROR

    try:
        result: ScaffoldResult = ScaffoldGenerator(config).generate(model)
    except ScaffoldError as exc:
        logger.error("[%s] %s", exc.code, exc.message)
        return EXIT_GENERATION_ERROR

    if not args.dry_run:
        print(result.summary(), file=sys.stderr)
    return _emit(result.files_by_path(), Path(args.output), args.dry_run)


def _run_app(args: argparse.Namespace) -> int:
    """Run the app command. Returns the appropriate exit code."""
    from scaffoldgen.generator import ScaffoldGenerator

    try:
        config = GenerationConfig(template_dir=args.template_dir)
        files: Dict[str, str] = ScaffoldGenerator(config).generate_application(
            args.app_name
        )
    except ScaffoldError as exc:
        logger.error("[%s] %s", exc.code, exc.message)
        return EXIT_GENERATION_ERROR
    except ValueError as exc:
        logger.error("Invalid input: %s", exc)
        return EXIT_INPUT_ERROR

    return _emit(files, Path(args.output), args.dry_run)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def cli_main(argv: Optional[Sequence[str]] = None) -> NoReturn:
    """
    Main CLI entry point.

    Can be called from ``__main__.py`` or directly for testing.

    Args:
        argv: Optional argument list (defaults to sys.argv[1:]).
    """
    parser: argparse.ArgumentParser = _build_parser()
    args: argparse.Namespace = parser.parse_args(argv)

    if args.quiet:
        verbosity: int = -1
    else:
        verbosity = args.verbose
    _setup_logging(verbosity)

    if args.command == "app":
        exit_code: int = _run_app(args)
    else:
        exit_code = _run_scaffold(args)

    if exit_code != EXIT_SUCCESS:
        logger.debug("Exiting with code %d.", exit_code)
    sys.exit(exit_code)


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "cli_main",
    "EXIT_SUCCESS",
    "EXIT_VALIDATION_ERROR",
    "EXIT_GENERATION_ERROR",
    "EXIT_EXPORT_ERROR",
    "EXIT_INPUT_ERROR",
]

logger.debug("scaffoldgen.cli loaded.")
