"""CLI utility functions."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union


def setup_logging(level: int = logging.INFO,
                  format_string: Optional[str] = None) -> None:
    """Setup logging configuration.

    Args:
        level: Logging level
        format_string: Custom format string
    """
    if format_string is None:
        if level <= logging.DEBUG:
            format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_string = "%(levelname)s: %(message)s"

    logging.basicConfig(
        level=level,
        format=format_string,
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True
    )

    # Hydra is chatty at DEBUG
    logging.getLogger('hydra').setLevel(logging.WARNING)


def parse_int_list(text: str) -> List[int]:
    """Parse ``"1,2,3"`` or ``"123"`` into a list of integers.

    Raises:
        ValueError: If the text contains anything but digits and separators
    """
    text = text.strip()
    if ',' in text or ' ' in text:
        parts = [p for p in text.replace(',', ' ').split() if p]
    else:
        parts = list(text)
    try:
        return [int(p) for p in parts]
    except ValueError:
        raise ValueError(f"Expected a list of integers, got {text!r}")


def parse_queens(text: str) -> Tuple[Optional[int], ...]:
    """Parse a queens row list such as ``"0,4,7,-,-,-,-,-"``.

    Use ``-``, ``.`` or ``_`` for an empty row.
    """
    parts = [p.strip() for p in text.split(',')]
    queens: List[Optional[int]] = []
    for part in parts:
        if part in ('-', '.', '_', ''):
            queens.append(None)
        else:
            try:
                queens.append(int(part))
            except ValueError:
                raise ValueError(f"Invalid queen column: {part!r}")
    return tuple(queens)


def save_results(results: Dict[str, Any],
                 output_path: Union[str, Path],
                 pretty: bool = True) -> None:
    """Save results to JSON file.

    Args:
        results: Results dictionary
        output_path: Output file path
        pretty: Whether to pretty-print JSON
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w') as f:
        if pretty:
            json.dump(results, f, indent=2, sort_keys=True)
        else:
            json.dump(results, f)


def format_duration(seconds: float) -> str:
    """Format duration in human-readable format."""
    if seconds < 0.001:
        return f"{seconds*1000000:.1f}µs"
    elif seconds < 1:
        return f"{seconds*1000:.1f}ms"
    elif seconds < 60:
        return f"{seconds:.2f}s"
    elif seconds < 3600:
        minutes = int(seconds // 60)
        secs = seconds % 60
        return f"{minutes}m {secs:.1f}s"
    else:
        hours = int(seconds // 3600)
        minutes = int((seconds % 3600) // 60)
        secs = seconds % 60
        return f"{hours}h {minutes}m {secs:.1f}s"
