"""
Output helpers shared by the command-line modules.
"""

import json
import logging
from typing import Any, Dict, Optional

from rich.console import Console
from rich.json import JSON

# Get a logger instance for this specific file


logger = logging.getLogger(__name__)

# A single console instance for user-facing output.


console = Console()


def save_or_print_results(data: Dict[str, Any], output_file: Optional[str]) -> None:
    """
    Saves the results to a JSON file if an output path is given, otherwise
    prints them to the console as syntax-highlighted JSON.

    Args:
        data (Dict[str, Any]): The result record, already dumped to a dict.
        output_file (Optional[str]): The file path to save the JSON output.
                                     If None, prints to the console.
    """
    try:
        json_str = json.dumps(data, indent=4, ensure_ascii=False, default=str)

        if output_file:
            logger.info("Saving results to %s", output_file)
            try:
                with open(output_file, "w", encoding="utf-8") as f:
                    f.write(json_str)
                console.print(
                    f"[bold green]Successfully saved to {output_file}[/bold green]"
                )
            except OSError as e:
                logger.error("Error saving file to %s: %s", output_file, e)
        else:
            console.print(JSON(json_str))
    except (TypeError, ValueError) as e:
        logger.error(
            "An unexpected error occurred while preparing results for output: %s", e
        )
