"""CLI utility functions."""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


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
        datefmt="%Y-%m-%d %H:%M:%S"
    )


def parse_arrangement(text: str) -> List[int]:
    """Parse labels separated by commas and/or whitespace.

    Args:
        text: e.g. "1,2,3,4,5,6,7,8,0" or "1 2 3 4 5 6 7 8 0"

    Returns:
        List of integer labels

    Raises:
        ValueError: If a label is not an integer
    """
    tokens = text.replace(',', ' ').split()
    if not tokens:
        raise ValueError("Arrangement is empty")
    try:
        return [int(token) for token in tokens]
    except ValueError:
        raise ValueError(f"Arrangement labels must be integers: {text!r}") from None


def to_serializable(obj: Any) -> Any:
    """Convert results into JSON-compatible values."""
    if hasattr(obj, 'to_dict'):
        return to_serializable(obj.to_dict())
    if isinstance(obj, Enum):
        return obj.value
    if hasattr(obj, 'tolist'):
        return obj.tolist()
    if isinstance(obj, dict):
        return {k: to_serializable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_serializable(item) for item in obj]
    return obj


def save_results(results: Any,
                 output_path: Union[str, Path],
                 pretty: bool = True) -> None:
    """Save results to JSON file.

    Args:
        results: Results dictionary, list, or object with ``to_dict``
        output_path: Output file path
        pretty: Whether to pretty-print JSON
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    serializable_results = to_serializable(results)

    with open(output_path, 'w') as f:
        if pretty:
            json.dump(serializable_results, f, indent=2, sort_keys=True)
        else:
            json.dump(serializable_results, f)


def format_duration(seconds: float) -> str:
    """Format duration in human-readable format.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted duration string
    """
    if seconds < 0.001:
        return f"{seconds*1000000:.1f}µs"
    elif seconds < 1:
        return f"{seconds*1000:.1f}ms"
    elif seconds < 60:
        return f"{seconds:.2f}s"
    else:
        minutes = int(seconds // 60)
        secs = seconds % 60
        return f"{minutes}m {secs:.1f}s"


def create_comparison_table(results: List[Dict[str, Any]]) -> str:
    """Format comparison results as a fixed-width table.

    Args:
        results: Result dictionaries as produced by ``SearchResult.to_dict``

    Returns:
        Table text, one row per configuration
    """
    header = f"{'mode':<20} {'heuristic':<11} {'status':<16} {'steps':>6} {'expanded':>9} {'time':>10}"
    lines = [header, "-" * len(header)]

    for result in results:
        solution = result.get('solution')
        steps = str(solution['steps']) if solution else "-"
        stats = result.get('search_stats', {})
        lines.append(
            f"{result['evaluation_mode']:<20} {result['heuristic']:<11} {result['status']:<16} "
            f"{steps:>6} {stats.get('nodes_expanded', 0):>9} "
            f"{format_duration(result.get('computation_time', 0.0)):>10}"
        )

    return "\n".join(lines)
