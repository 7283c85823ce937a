"""Rich terminal reporter: one table row per revision or node."""

from __future__ import annotations

from typing import Optional, Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from trunkdump.dump.models import NodeAction, NodeEntry, Revision

_ACTION_STYLE = {
    NodeAction.ADD: "green",
    NodeAction.CHANGE: "yellow",
    NodeAction.DELETE: "red",
    NodeAction.MOVE: "cyan",
    NodeAction.UNKNOWN: "dim",
}


def _action_pill(node: NodeEntry) -> Text:
    return Text(node.action.value.upper(), style=_ACTION_STYLE.get(node.action, ""))


def _node_label(node: NodeEntry) -> str:
    if node.action is NodeAction.MOVE and node.copyfrom_relative_path is not None:
        return f"{node.relative_path} <- {node.copyfrom_relative_path}"
    if node.copyfrom_relative_path is not None:
        return f"{node.relative_path} (from {node.copyfrom_relative_path})"
    return node.relative_path or node.path


def render(
    revisions: Sequence[Revision],
    *,
    root: str,
    show_nodes: bool = True,
    show_log: bool = False,
    console: Optional[Console] = None,
) -> None:
    """Print parsed revisions to the terminal using Rich."""
    console = console or Console()

    if not revisions:
        console.print(f"[bold yellow]No revisions retained under {root}[/bold yellow]")
        return

    table = Table(
        title=f"Revisions under {root}",
        show_lines=show_nodes,
        title_style="bold",
        border_style="dim",
    )
    table.add_column("Rev", justify="right", style="green")
    table.add_column("Author", style="magenta")
    table.add_column("Date")
    table.add_column("Nodes", justify="right")
    if show_nodes:
        table.add_column("Changes", min_width=30)
    if show_log:
        table.add_column("Log")

    for revision in revisions:
        row = [
            str(revision.number),
            Text(revision.author),
            revision.timestamp.strftime("%Y-%m-%d %H:%M:%S") if revision.timestamp else revision.date,
            str(len(revision.nodes)),
        ]
        if show_nodes:
            changes = Text()
            for i, node in enumerate(revision.nodes):
                if i:
                    changes.append("\n")
                changes.append_text(_action_pill(node))
                changes.append(f" {node.kind.label} {_node_label(node)}")
            row.append(changes)
        if show_log:
            row.append(Text(revision.log))
        table.add_row(*row)

    console.print(table)
    _print_summary(console, revisions)


def _print_summary(console: Console, revisions: Sequence[Revision]) -> None:
    nodes = [n for r in revisions for n in r.nodes]
    console.print()
    console.print(f"[dim]Revisions:[/dim] {len(revisions)}")
    console.print(f"[dim]Nodes:[/dim]     {len(nodes)}")
    for action in (NodeAction.ADD, NodeAction.CHANGE, NodeAction.DELETE, NodeAction.MOVE):
        count = sum(1 for n in nodes if n.action is action)
        if count:
            console.print(f"[dim]  {action.value}:[/dim] {count}")
