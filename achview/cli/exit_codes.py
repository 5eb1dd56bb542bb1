"""Exit code constants for CLI commands.

Exit codes:
    0: SUCCESS - Operation completed successfully
    1: UNEXPECTED_ERROR - Unexpected/unhandled exception
    2: STRUCTURAL_ERROR - Records out of order or missing
    3: DECODE_ERROR - Input unreadable or a mandatory field is malformed
    4: WRITER_ERROR - Output file writing/serialization failure
    6: CONFIG_ERROR - Configuration file or argument error
"""


class ExitCode:
    """Standard exit codes for CLI commands.

    Example:
        >>> try:
        ...     document = parse_file(path)
        ... except StructuralError:
        ...     sys.exit(ExitCode.STRUCTURAL_ERROR)
    """

    SUCCESS = 0
    """Operation completed successfully."""

    UNEXPECTED_ERROR = 1
    """Unexpected or unhandled exception occurred."""

    STRUCTURAL_ERROR = 2
    """A record appeared out of order, or a file header/control is missing."""

    DECODE_ERROR = 3
    """Input could not be read or a mandatory field could not be decoded."""

    WRITER_ERROR = 4
    """Output file writing or serialization failed."""

    CONFIG_ERROR = 6
    """Configuration file or argument error."""
