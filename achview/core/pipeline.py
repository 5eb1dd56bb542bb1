"""Parse → write orchestration.

The flow is:
1. Parse the input file into a NachaDocument (fails fast, no partial output)
2. Hand the document to a writer

Errors from the achview hierarchy propagate unchanged so callers can map
them to specific exit codes; anything unexpected is wrapped in a
PipelineError naming the step that failed.
"""

import logging
from pathlib import Path
from typing import Any

from achview.core.assembler import parse_file
from achview.core.exceptions import AchviewError, PipelineError
from achview.core.model import NachaDocument
from achview.core.protocols import Writer

logger = logging.getLogger(__name__)


def execute_export(
    writer: Writer,
    input_path: Path,
    output_path: Path,
    strict: bool = False,
    **config: Any,
) -> NachaDocument:
    """Parse ``input_path`` and write it with ``writer`` to ``output_path``.

    Args:
        writer: Writer implementation for the output format
        input_path: Path to the NACHA file
        output_path: Path to the output file to create
        strict: Treat unrecognized record codes as fatal
        **config: Writer-specific configuration options

    Returns:
        The parsed document

    Raises:
        AchviewError: Any decode, structural, reader or writer error, unchanged
        PipelineError: For unexpected errors, with the failing step in context
    """
    try:
        document = parse_file(input_path, strict=strict)
    except AchviewError:
        raise
    except Exception as e:
        raise PipelineError(
            f"Pipeline failed at read step: {e}",
            step="read",
            input_path=str(input_path),
        ) from e

    try:
        writer.write(document, output_path, **config)
    except AchviewError:
        raise
    except Exception as e:
        raise PipelineError(
            f"Pipeline failed at write step: {e}",
            step="write",
            output_path=str(output_path),
        ) from e

    logger.info("Wrote %s → %s", input_path, output_path)
    return document
