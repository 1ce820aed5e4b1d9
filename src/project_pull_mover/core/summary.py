"""Human-readable summary of a run's changes."""

from project_pull_mover.core.executor import RunTotals

NOTHING_CHANGED_MESSAGE = "No pull requests needed a different status or a label change"


def _pull_units(count: int) -> str:
    return "pull request" if count == 1 else "pull requests"


def format_run_summary(totals: RunTotals) -> str | None:
    """Build one sentence describing every change, or None if nothing changed.

    Example:
        "Moved 2 pull requests to 'In progress', applied 'failing' to 1 pull request"
    """
    pieces: list[str] = []
    for status_name, count in totals.moved_by_status.items():
        pieces.append(f"moved {count} {_pull_units(count)} to '{status_name}'")
    for label_name, count in totals.labels_applied.items():
        pieces.append(f"applied '{label_name}' to {count} {_pull_units(count)}")
    for label_name, count in totals.labels_removed.items():
        pieces.append(f"removed '{label_name}' from {count} {_pull_units(count)}")

    if not pieces:
        return None
    pieces[0] = pieces[0][0].upper() + pieces[0][1:]
    return ", ".join(pieces)
