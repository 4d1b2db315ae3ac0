"""
Console client for the CFBD basketball MCP server.

This module is a **thin UI layer**:
- It renders a simple REPL (console).
- It talks JSON-RPC over HTTP through `core.mcp_http.McpHttpClient`.
- It prints raw tool envelopes when `ROUTER_DEBUG=1`.

Commands
--------
/tools                              : Show MCP tools table
/exit, /quit                        : Leave

Tool shortcuts (tool name without the "get_basketball_" prefix):
  score         <team> [year]
  schedule      <team> [year]
  player_stats  <team> [year] [player name...]
  shooting_stats <team> [year] [player name...]
  ...
"""

from pathlib import Path
import sys

# Allow "core" imports when running from repo root or this file's folder
sys.path.append(str(Path(__file__).resolve().parents[2]))

import json
from typing import Any

from rich.console import Console
from rich.markdown import Markdown
from rich.table import Table

from core.mcp_http import McpHttpClient
from core.settings import MCP_URL, MCP_API_KEY, ROUTER_DEBUG

console = Console()

TOOL_PREFIX = "get_basketball_"


def printJsonBlock(obj: Any) -> None:
    """Render a Python object or JSON string as a fenced JSON block in the console."""
    text = obj if isinstance(obj, str) else json.dumps(obj, ensure_ascii=False, indent=2)
    console.print(Markdown("```json\n" + text + "\n```"))


def readUserInput(prompt: str = "[bold cyan]You[/] › ") -> str:
    """
    Read a single line from the console.
    Returns the special sentinel '__EXIT__' when user types /exit or /quit.
    """
    s = console.input(prompt).strip()
    if s in ("/quit", "/exit"):
        return "__EXIT__"
    return s


def printToolsPretty(toolsCatalog: dict) -> None:
    """
    Display the MCP tool catalog in a compact table:
    name | description | required args (from JSON Schema 'required' list)
    """
    tbl = Table(title="MCP Tools")
    tbl.add_column("name", style="bold")
    tbl.add_column("description")
    tbl.add_column("required args")
    for t in toolsCatalog["result"]["tools"]:
        req = ", ".join(t["inputSchema"].get("required", []))
        tbl.add_row(t["name"], t.get("description", ""), req)
    console.print(tbl)


def parseShortcut(line: str, toolNames: set[str]) -> tuple[str, dict[str, Any]] | None:
    """
    'player_stats oklahoma 2025 Jalon Moore' ->
    ('get_basketball_player_stats', {'team': 'oklahoma', 'year': 2025, 'query': 'Jalon Moore'})
    Returns None when the first word is not a known tool.
    """
    parts = line.split()
    if len(parts) < 2:
        return None
    name = parts[0] if parts[0] in toolNames else TOOL_PREFIX + parts[0]
    if name not in toolNames:
        return None

    args: dict[str, Any] = {"team": parts[1]}
    rest = parts[2:]
    if rest and rest[0].isdigit():
        args["year"] = int(rest[0])
        rest = rest[1:]
    if rest:
        args["query"] = " ".join(rest)
    return name, args


def main() -> None:
    """Interactive console loop against a running MCP server."""
    console.rule("[bold]CFBD Basketball MCP Console")
    console.print(f"[dim]server: {MCP_URL}[/dim]")
    console.print("[dim]commands: /exit | /tools | <tool> <team> [year] [player name][/dim]")

    client = McpHttpClient(MCP_URL, token=MCP_API_KEY)
    try:
        info = client.start()
        console.print(f"[green]connected:[/green] {info.get('serverInfo', {}).get('name', '?')}")
        tools = client.listTools()
    except Exception as e:
        console.print(f"[red]Cannot reach MCP server:[/red] {e}")
        sys.exit(1)

    toolNames = {t["name"] for t in tools["result"]["tools"]}

    try:
        # read lines until the sentinel is returned
        for user in iter(readUserInput, "__EXIT__"):
            if not user:
                continue

            if user == "/tools":
                printToolsPretty(tools)
                continue

            parsed = parseShortcut(user, toolNames)
            if parsed is None:
                console.print("[yellow]Unknown command. Try /tools.[/yellow]")
                continue

            name, args = parsed
            try:
                text = client.callTool(name, args)
            except Exception as e:
                console.print(f"[red]MCP error:[/red] {e}")
                continue

            if ROUTER_DEBUG:
                printJsonBlock({"tool": name, "arguments": args})
            console.print(text)

    except KeyboardInterrupt:
        console.print("\n[dim]Interrupted[/dim]")
    finally:
        client.stop()


if __name__ == "__main__":
    main()
