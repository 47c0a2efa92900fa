"""CLI utilities package."""

import json
from pathlib import Path
from typing import Any, Dict, Optional, Tuple
import click
from ...config import load_config, get_pricing_catalog, get_ascii_mode
from ...pricing.catalog import PricingCatalog
from ...utils.errors import TfCostError
from ...utils.logging import get_logger
from .file_resolver import resolve_file_path

logger = get_logger("cli.utils")


def format_error(message: str, suggestion: Optional[str] = None) -> str:
    """
    Format error message with optional suggestion.

    Args:
        message: Error message
        suggestion: Optional suggestion or help text

    Returns:
        Formatted error string
    """
    error = f"Error: {message}"
    if suggestion:
        error += f"\nTip: {suggestion}"
    return error


def resolve_or_raise(file_path: str) -> Path:
    """resolve_file_path, reporting a missing file as TfCostError."""
    try:
        return resolve_file_path(file_path)
    except FileNotFoundError as e:
        raise TfCostError(str(e))


def load_settings(config_path: Optional[str]) -> Tuple[Dict[str, Any], PricingCatalog, Optional[bool]]:
    """
    Load config and derive the pricing catalog and ASCII mode.

    Returns:
        Tuple of (config, catalog, ascii_mode)
    """
    config = load_config(config_path)
    return config, get_pricing_catalog(config), get_ascii_mode(config)


def to_json(data: Any) -> str:
    """Serialize a pydantic model (camelCase keys) or plain data as indented JSON."""
    if hasattr(data, "model_dump"):
        data = data.model_dump(mode="json", by_alias=True)
    return json.dumps(data, indent=2)


def emit(text: str, output: Optional[str] = None, quiet: bool = False) -> None:
    """Write text to a file when output is given, otherwise echo to stdout."""
    if output:
        output_path = Path(output)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, 'w', encoding='utf-8') as f:
                f.write(text)
        except OSError as e:
            raise TfCostError(f"Failed to write output file {output_path}: {e}")
        if not quiet:
            click.echo(f"Output saved to: {output_path}", err=True)
        return

    try:
        click.echo(text, nl=not text.endswith("\n"))
    except UnicodeEncodeError:
        click.echo(text.encode("ascii", errors="replace").decode("ascii"), nl=not text.endswith("\n"))


__all__ = ["resolve_file_path", "resolve_or_raise", "format_error", "load_settings", "to_json", "emit"]
