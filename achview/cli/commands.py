"""CLI command implementations.

This module implements the CLI commands for the achview tool:
- parse: Decode a NACHA file and serialize the document (JSON/YAML)
- entries: Print or export the ordinal-numbered entry view
- inspect: Display file header and file control summary
- list_writers: List available output formats and writers
- check_config: Validate configuration files

Each command is implemented as a function that returns an exit code,
enabling both direct invocation and subprocess-based testing.
"""

import sys
from pathlib import Path
from typing import Annotated, Any

from cyclopts import Parameter

from achview.cli.config import (
    ConfigError,
    configure_logging,
    load_config,
    merge_config,
    validate_config,
)
from achview.cli.exit_codes import ExitCode
from achview.cli.output import handle_error, render_entries, render_summary
from achview.cli.registry import (
    get_document_format,
    get_entry_writer,
    list_document_formats,
    list_entry_writers,
)
from achview.core.assembler import parse_file
from achview.core.exceptions import (
    DecodeError,
    PipelineError,
    ReaderError,
    StructuralError,
    UnknownRecordType,
    WriterError,
)
from achview.core.pipeline import execute_export
from achview.core.serialize import serialize_document
from achview.core.view import flatten_entries


def infer_entry_writer(path: Path) -> str:
    """Infer the entry writer from an output file extension.

    Raises:
        ValueError: If extension is not recognized
    """
    extension_map = {
        ".csv": "csv",
        ".parquet": "parquet",
        ".pq": "parquet",
        ".json": "json",
    }

    suffix = path.suffix.lower()
    if suffix not in extension_map:
        raise ValueError(
            f"Cannot infer writer type from extension '{suffix}'. "
            f"Please specify --writer explicitly."
        )

    return extension_map[suffix]


def _settings(config: Path | None, **overrides: Any) -> dict[str, Any]:
    """Load the config file (if any), apply CLI overrides and set up logging."""
    cfg: dict[str, Any] = load_config(config) if config else {}
    cfg = merge_config(cfg, **overrides)

    errors = validate_config(cfg)
    if errors:
        raise ConfigError("; ".join(errors))

    if "log_level" in cfg or "log_file" in cfg:
        log_file = cfg.get("log_file")
        configure_logging(
            str(cfg.get("log_level", "warning")),
            Path(log_file) if log_file else None,
        )
    return cfg


def parse(
    input_path: Annotated[Path, Parameter(help="NACHA file path")],
    format: Annotated[str | None, Parameter(help="Output format (json, yaml)")] = None,
    output: Annotated[Path | None, Parameter(help="Write to this file instead of stdout")] = None,
    strict: Annotated[bool | None, Parameter(help="Fail on unrecognized record codes")] = None,
    config: Annotated[Path | None, Parameter(help="Configuration file path")] = None,
    verbose: Annotated[bool, Parameter(help="Show detailed error information")] = False,
    log_level: Annotated[str | None, Parameter(help="Log level (debug, info, warning, error)")] = None,
    log_file: Annotated[Path | None, Parameter(help="Log file path")] = None,
) -> int:
    """Decode a NACHA file and print or write the document hierarchy.

    Args:
        input_path: Path to the NACHA file
        format: Output format (default json)
        output: Output file (stdout if omitted)
        strict: Treat unrecognized record codes as fatal
        config: Path to configuration file
        verbose: Show stack traces on error
        log_level: Logging level
        log_file: Path to log file

    Returns:
        Exit code (0 for success, non-zero for errors)

    Example:
        >>> exit_code = parse(input_path=Path("payroll.ach"), format="yaml")
    """
    try:
        cfg = _settings(
            config, format=format, strict=strict, log_level=log_level, log_file=log_file
        )

        if not input_path.exists():
            print(f"Error: Input file not found: {input_path}", file=sys.stderr)
            return ExitCode.UNEXPECTED_ERROR

        fmt = cfg.get("format", "json")
        is_strict = bool(cfg.get("strict", False))

        if output is not None:
            try:
                writer = get_document_format(fmt)
            except KeyError as e:
                print(f"Error: {e.args[0]}", file=sys.stderr)
                return ExitCode.CONFIG_ERROR
            output.parent.mkdir(parents=True, exist_ok=True)
            execute_export(
                writer, input_path, output, strict=is_strict, **cfg.get("writer_config", {})
            )
            print(f"Parsed {input_path.name} → {output.name}")
        else:
            document = parse_file(input_path, strict=is_strict)
            try:
                print(serialize_document(document, fmt))
            except KeyError as e:
                print(f"Error: {e.args[0]}", file=sys.stderr)
                return ExitCode.CONFIG_ERROR

        return ExitCode.SUCCESS

    except StructuralError as e:
        handle_error(e, verbose=verbose)
        return ExitCode.STRUCTURAL_ERROR
    except (DecodeError, ReaderError, UnknownRecordType) as e:
        handle_error(e, verbose=verbose)
        return ExitCode.DECODE_ERROR
    except WriterError as e:
        handle_error(e, verbose=verbose)
        return ExitCode.WRITER_ERROR
    except ConfigError as e:
        handle_error(e, verbose=verbose)
        return ExitCode.CONFIG_ERROR
    except PipelineError as e:
        handle_error(e, verbose=verbose)
        return ExitCode.UNEXPECTED_ERROR
    except Exception as e:
        handle_error(e, verbose=verbose)
        return ExitCode.UNEXPECTED_ERROR


def entries(
    input_path: Annotated[Path, Parameter(help="NACHA file path")],
    output: Annotated[Path | None, Parameter(help="Export to this file instead of printing")] = None,
    writer: Annotated[str | None, Parameter(help="Entry writer (csv, parquet, json)")] = None,
    strict: Annotated[bool | None, Parameter(help="Fail on unrecognized record codes")] = None,
    config: Annotated[Path | None, Parameter(help="Configuration file path")] = None,
    verbose: Annotated[bool, Parameter(help="Show detailed error information")] = False,
    log_level: Annotated[str | None, Parameter(help="Log level (debug, info, warning, error)")] = None,
    log_file: Annotated[Path | None, Parameter(help="Log file path")] = None,
) -> int:
    """List every detail entry with its ordinal, or export the list.

    Without ``--output`` the entry table is printed. With it, the flattened
    view is exported through the selected writer, inferred from the output
    extension when ``--writer`` is not given.

    Returns:
        Exit code (0 for success, non-zero for errors)

    Example:
        >>> exit_code = entries(input_path=Path("payroll.ach"), output=Path("entries.parquet"))
    """
    try:
        cfg = _settings(
            config, writer=writer, strict=strict, log_level=log_level, log_file=log_file
        )

        if not input_path.exists():
            print(f"Error: Input file not found: {input_path}", file=sys.stderr)
            return ExitCode.UNEXPECTED_ERROR

        is_strict = bool(cfg.get("strict", False))

        if output is None:
            document = parse_file(input_path, strict=is_strict)
            print(render_entries(flatten_entries(document)))
            return ExitCode.SUCCESS

        try:
            writer_type = cfg.get("writer") or infer_entry_writer(output)
            writer_instance = get_entry_writer(writer_type)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return ExitCode.CONFIG_ERROR
        except KeyError as e:
            print(f"Error: {e.args[0]}", file=sys.stderr)
            return ExitCode.CONFIG_ERROR

        output.parent.mkdir(parents=True, exist_ok=True)
        document = execute_export(
            writer_instance,
            input_path,
            output,
            strict=is_strict,
            **cfg.get("writer_config", {}),
        )
        print(f"Exported {document.entry_count} entries → {output.name}")
        return ExitCode.SUCCESS

    except StructuralError as e:
        handle_error(e, verbose=verbose)
        return ExitCode.STRUCTURAL_ERROR
    except (DecodeError, ReaderError, UnknownRecordType) as e:
        handle_error(e, verbose=verbose)
        return ExitCode.DECODE_ERROR
    except WriterError as e:
        handle_error(e, verbose=verbose)
        return ExitCode.WRITER_ERROR
    except ConfigError as e:
        handle_error(e, verbose=verbose)
        return ExitCode.CONFIG_ERROR
    except Exception as e:
        handle_error(e, verbose=verbose)
        return ExitCode.UNEXPECTED_ERROR


def inspect(
    input_path: Annotated[Path, Parameter(help="NACHA file path")],
    strict: Annotated[bool | None, Parameter(help="Fail on unrecognized record codes")] = None,
    config: Annotated[Path | None, Parameter(help="Configuration file path")] = None,
) -> int:
    """Display the file header and file control summary of a NACHA file.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    try:
        cfg = _settings(config, strict=strict)

        if not input_path.exists():
            print(f"Error: Input file not found: {input_path}", file=sys.stderr)
            return ExitCode.UNEXPECTED_ERROR

        document = parse_file(input_path, strict=bool(cfg.get("strict", False)))

        print(f"File: {input_path}")
        print(render_summary(document))
        print(f"\nBatches: {len(document.batches)}")
        print(f"Entries: {document.entry_count}")
        print(f"Addenda: {document.addenda_count}")
        return ExitCode.SUCCESS

    except StructuralError as e:
        handle_error(e, verbose=False)
        return ExitCode.STRUCTURAL_ERROR
    except (DecodeError, ReaderError, UnknownRecordType) as e:
        handle_error(e, verbose=False)
        return ExitCode.DECODE_ERROR
    except ConfigError as e:
        handle_error(e, verbose=False)
        return ExitCode.CONFIG_ERROR
    except Exception as e:
        handle_error(e, verbose=False)
        return ExitCode.UNEXPECTED_ERROR


def list_writers() -> int:
    """List available document formats and entry writers.

    Returns:
        Exit code (always 0 for success)
    """
    print("Document formats:")
    for name, description in list_document_formats().items():
        print(f"  {name:15} {description.splitlines()[0].strip()}")

    print("Entry writers:")
    for name, description in list_entry_writers().items():
        print(f"  {name:15} {description.splitlines()[0].strip()}")

    return ExitCode.SUCCESS


def check_config(
    config_path: Annotated[Path, Parameter(help="Configuration file path")],
) -> int:
    """Validate a configuration file.

    Returns:
        Exit code (0 for valid config, 6 for invalid config)
    """
    try:
        config = load_config(config_path)
        errors = validate_config(config)

        if errors:
            print("✗ Configuration validation failed:", file=sys.stderr)
            for error in errors:
                print(f"  {error}", file=sys.stderr)
            return ExitCode.CONFIG_ERROR

        print("✓ Configuration is valid")
        for key in ("format", "writer", "strict", "log_level"):
            if key in config:
                print(f"  {key}: {config[key]}")
        return ExitCode.SUCCESS

    except ConfigError as e:
        print("✗ Configuration error:", file=sys.stderr)
        print(f"  {e}", file=sys.stderr)
        return ExitCode.CONFIG_ERROR
    except Exception as e:
        handle_error(e, verbose=False)
        return ExitCode.UNEXPECTED_ERROR
