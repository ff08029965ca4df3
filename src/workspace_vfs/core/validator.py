from __future__ import annotations

"""
Configuration Validation Service.

Acts as the gatekeeper between untrusted configuration sources (JSON on
disk, CLI flags) and the workspace services. Handles type coercion,
range checks, path normalization and default value injection.
"""

import logging
from typing import Any, Dict, List, Tuple

from workspace_vfs.domain.config import get_default_config
from workspace_vfs.infra.fs import normalize_path

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Converts untrusted inputs into strictly typed parameters and fills
    missing keys with domain defaults.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raises exceptions on type mismatch instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: A tuple containing the normalized
                                          configuration and a list of warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    # 1. Base Type Validation
    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    # 2. Schema Definition (Declarative mapping)
    string_fields = [
        "assistant_endpoint", "assistant_model", "generated_file_name", "export_dir",
    ]
    bool_fields = ["seed_project"]
    int_fields = ["max_tokens", "request_timeout"]
    float_fields = ["temperature"]

    # 3. Field Processing & Normalization
    for field in string_fields:
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    for field in bool_fields:
        merged[field] = _as_bool(merged.get(field), defaults[field], field, warnings, strict)

    for field in int_fields:
        merged[field] = _as_positive_int(merged.get(field), defaults[field], field, warnings, strict)

    for field in float_fields:
        merged[field] = _as_float(merged.get(field), defaults[field], field, warnings, strict)

    # 4. Domain-Specific Normalization
    merged["export_dir"] = normalize_path(merged["export_dir"], defaults["export_dir"])
    if not 0.0 <= merged["temperature"] <= 2.0:
        msg = f"Field 'temperature' out of range: {merged['temperature']}."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using fallback.")
        merged["temperature"] = defaults["temperature"]

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_positive_int(value: Any, fallback: int, field: str, warnings: List[str], strict: bool) -> int:
    """Coerce numeric inputs into strictly positive integers."""
    if value is None:
        return fallback
    if isinstance(value, int) and not isinstance(value, bool) and value > 0:
        return value

    if not strict and isinstance(value, str):
        try:
            parsed = int(value.strip())
        except ValueError:
            parsed = 0
        if parsed > 0:
            warnings.append(f"Field '{field}' converted from '{value}' to {parsed}.")
            return parsed

    msg = f"Invalid field '{field}': expected positive int, received {value!r}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_float(value: Any, fallback: float, field: str, warnings: List[str], strict: bool) -> float:
    """Coerce numeric inputs into floats."""
    if value is None:
        return fallback
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)

    if not strict and isinstance(value, str):
        try:
            parsed = float(value.strip())
            warnings.append(f"Field '{field}' converted from '{value}' to {parsed}.")
            return parsed
        except ValueError:
            pass

    msg = f"Invalid field '{field}': expected float, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback
