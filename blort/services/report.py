# services/report.py
from typing import List, Sequence

from blort.models.visit import OrderBy, VisitRecord


def format_names_report(records: Sequence[VisitRecord], limit: int, order_by: OrderBy) -> List[str]:
    """
    Builds the lines printed by `blort show`.

    Args:
        records: Records as returned by VisitRegistry.list_top
        limit: Requested limit, echoed in the title
        order_by: Ordering used for the listing

    Returns:
        List[str]: Output lines without trailing newlines
    """
    if not records:
        return ["No names found in database"]

    lines = [
        f"Top {limit} names (sorted by {order_by.label}):",
        f"{'Name':<20} {'Visits':<8} Last Seen",
        "-" * 50,
    ]
    for record in records:
        lines.append(
            f"{record.name:<20} {record.count:<8} {record.last_seen.strftime('%Y-%m-%d %H:%M:%S')}"
        )
    return lines
