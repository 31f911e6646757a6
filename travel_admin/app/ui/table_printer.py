from __future__ import annotations

from travel_admin.app.ui.listing_view import HeaderBinding, RowBinding
from travel_admin.app.ui.pagination_window import ELLIPSIS, PageWindowEntry

NO_RESULTS = "No results."


def format_table(title: str, headers: list[HeaderBinding], rows: list[RowBinding]) -> list[str]:
    lines = [f"\n{title}"]
    labels = [f"{header.label} {header.indicator}".rstrip() for header in headers]
    widths = [max([len(label)] + [len(row.cells[header.field_key]) for row in rows]) for label, header in zip(labels, headers)]
    id_width = max([2] + [len(row.record_id) for row in rows])

    lines.append(" | ".join(["id".ljust(id_width)] + [label.ljust(widths[idx]) for idx, label in enumerate(labels)]))
    lines.append("-+-".join("-" * width for width in [id_width, *widths]))
    if not rows:
        lines.append(NO_RESULTS)
        return lines

    for row in rows:
        cells = [row.cells[header.field_key].ljust(widths[idx]) for idx, header in enumerate(headers)]
        suffix = "  (deleting...)" if row.delete_pending else ""
        lines.append(" | ".join([row.record_id.ljust(id_width)] + cells) + suffix)
    return lines


def format_pager(entries: list[PageWindowEntry], active_page: int) -> str:
    parts = []
    for entry in entries:
        if entry == ELLIPSIS:
            parts.append("...")
        elif entry == active_page:
            parts.append(f"[{entry}]")
        else:
            parts.append(str(entry))
    return " ".join(parts)


def print_table(title: str, headers: list[HeaderBinding], rows: list[RowBinding]) -> None:
    print("\n".join(format_table(title, headers, rows)))
