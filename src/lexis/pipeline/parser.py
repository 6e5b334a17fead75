"""YAML parser for pipeline definitions.

Pipeline files are parsed into validated Pydantic models. ``${VAR_NAME}``
patterns in string values are substituted from the environment.
"""

import os
import re
from pathlib import Path
from typing import Any, cast

import yaml
from lexis_dictionary import DictionaryYamlLoader
from pydantic import ValidationError

from lexis.pipeline.errors import PipelineParseError
from lexis.pipeline.models import PipelineConfig

# Pattern for environment variable substitution: ${VAR_NAME}
_ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")


def parse_pipeline(path: Path) -> PipelineConfig:
    """Parse a pipeline from a YAML file with environment variable substitution.

    Relative ``dictionary_path`` properties are resolved against the directory
    holding the pipeline file.

    Args:
        path: Path to the pipeline YAML file.

    Returns:
        Validated PipelineConfig model.

    Raises:
        PipelineParseError: If the file cannot be read, YAML is invalid,
            environment variables are missing, or validation fails.

    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.load(f, Loader=DictionaryYamlLoader)  # noqa: S506
    except FileNotFoundError as e:
        raise PipelineParseError(f"Pipeline file not found: {path}") from e
    except yaml.YAMLError as e:
        raise PipelineParseError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise PipelineParseError(f"Cannot read pipeline file {path}: {e}") from e

    if not isinstance(data, dict):
        raise PipelineParseError(f"Pipeline {path} must contain a mapping")

    data = _substitute_env_vars(data, path)
    pipeline = parse_pipeline_from_dict(cast(dict[str, Any], data))
    _resolve_dictionary_paths(pipeline, path.parent)
    return pipeline


def _substitute_env_vars(value: Any, path: Path) -> Any:  # noqa: ANN401
    """Recursively substitute ${VAR_NAME} patterns with environment variable values.

    Raises:
        PipelineParseError: If an environment variable is not defined.

    """
    if isinstance(value, str):
        return _substitute_string(value, path)
    if isinstance(value, dict):
        dict_value = cast(dict[str, Any], value)
        return {k: _substitute_env_vars(v, path) for k, v in dict_value.items()}
    if isinstance(value, list):
        list_value = cast(list[Any], value)
        return [_substitute_env_vars(item, path) for item in list_value]
    return value


def _substitute_string(value: str, path: Path) -> str:
    def replace_match(match: re.Match[str]) -> str:
        var_name = match.group(1)
        env_value = os.environ.get(var_name)
        if env_value is None:
            raise PipelineParseError(
                f"Environment variable '{var_name}' is not defined "
                f"(referenced in {path})"
            )
        return env_value

    return _ENV_VAR_PATTERN.sub(replace_match, value)


def _resolve_dictionary_paths(pipeline: PipelineConfig, base_dir: Path) -> None:
    for definition in pipeline.filters:
        dictionary_path = definition.properties.get("dictionary_path")
        if isinstance(dictionary_path, str) and not Path(dictionary_path).is_absolute():
            definition.properties["dictionary_path"] = str(base_dir / dictionary_path)


def parse_pipeline_from_dict(data: dict[str, Any]) -> PipelineConfig:
    """Parse a pipeline directly from a dictionary.

    No environment variable substitution is performed; use this for tests or
    pre-processed dictionaries.

    Args:
        data: Dictionary containing the pipeline definition.

    Returns:
        Validated PipelineConfig model.

    Raises:
        PipelineParseError: If the dict structure is invalid.

    """
    try:
        return PipelineConfig.model_validate(data)
    except ValidationError as e:
        raise PipelineParseError(f"Invalid pipeline structure: {e}") from e
