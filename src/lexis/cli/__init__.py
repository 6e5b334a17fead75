"""CLI command implementations for Lexis."""

from lexis.cli.errors import CLIError
from lexis.cli.lookup import lookup_value_command
from lexis.cli.run import execute_pipeline_command
from lexis.cli.validate import validate_pipeline_command

__all__ = [
    "CLIError",
    "execute_pipeline_command",
    "lookup_value_command",
    "validate_pipeline_command",
]
