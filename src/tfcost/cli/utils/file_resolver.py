"""Input path resolution for CLI arguments."""

from pathlib import Path
from typing import Optional


def resolve_file_path(file_path: str, base_dir: Optional[Path] = None) -> Path:
    """
    Resolve a state or plan path given on the command line.

    Relative paths are taken from base_dir (default: current directory).

    Raises:
        FileNotFoundError: If nothing exists at the path or it is a directory
    """
    candidate = Path(file_path).expanduser()
    if not candidate.is_absolute():
        candidate = (base_dir or Path.cwd()) / candidate
    candidate = candidate.resolve()

    if not candidate.exists():
        raise FileNotFoundError(f"File not found: {file_path}. Check the path and try again.")
    if not candidate.is_file():
        raise FileNotFoundError(f"Not a file: {file_path}. Pass a Terraform state or plan JSON file.")

    return candidate
