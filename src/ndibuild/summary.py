"""Rich tables summarising a pipeline run or a resolution report.

The run summary goes to stderr; stdout is reserved for linker directives.
"""

from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from .pipeline import BuildResult, Resolution


def _path_cell(path: Optional[Path], missing: str = "not found") -> Text:
    if path is None:
        return Text(missing, style="yellow")
    return Text(str(path))


def build_summary_table(result: BuildResult) -> Table:
    """Build a table describing what a pipeline run did."""
    staging = result.staging
    table = Table(title=f"NDI runtime ({staging.platform})", show_header=False, title_justify="left")
    table.add_column("item", style="bold")
    table.add_column("value")

    table.add_row("Runtime", _path_cell(staging.runtime_dir, missing="not found, staging skipped"))
    if staging.staging_dir is not None:
        table.add_row("Staged into", Text(str(staging.staging_dir)))
    for path in staging.staged:
        table.add_row("", Text(path.name, style="green"))
    if staging.symlink is not None:
        table.add_row("Alias", Text(staging.symlink.name))
    table.add_row("Link", Text(staging.directive or "dynamic (none emitted)"))
    if result.bindings_path is not None:
        table.add_row("Bindings", Text(str(result.bindings_path)))
    table.add_row("Time", Text(f"{result.build_time:.2f}s"))
    return table


def build_resolution_table(resolution: Resolution) -> Table:
    """Build a table describing where the SDK and runtime were found."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("Component")
    table.add_column("Location")
    table.add_row("SDK root", _path_cell(resolution.sdk_root))
    table.add_row("Runtime", _path_cell(resolution.runtime_dir))
    return table


def print_summary(result: BuildResult, console: Optional[Console] = None) -> None:
    """Render the run summary (to stderr unless a console is given)."""
    console = console if console is not None else Console(stderr=True)
    console.print(build_summary_table(result))
