from __future__ import annotations

import json
import re
import shlex
from pathlib import Path
from typing import List


def repo_root() -> Path:
    return Path(__file__).resolve().parents[2]


def load_contract() -> dict:
    p = repo_root() / "specs" / "cli" / "contract.json"
    return json.loads(p.read_text(encoding="utf-8"))


def extract_bdd_commands() -> List[str]:
    """Return raw CLI strings used in BDD feature files (quoted)."""
    root = repo_root()
    feature_dir = root / "specs" / "bdd"
    features = list(feature_dir.glob("*.feature"))
    assert features, "No .feature files found under specs/bdd"

    pattern = re.compile(r'"(badgedesk [^"]+)"')
    cmds: List[str] = []
    for fp in features:
        text = fp.read_text(encoding="utf-8")
        for m in pattern.finditer(text):
            cmds.append(m.group(1))
    return cmds


def cli_to_command_id(cli: str) -> str:
    """Mechanical parse of a `badgedesk ...` invocation into a command id.

    Mirrors the Typer subcommand tree.
    """
    parts = shlex.split(cli)
    assert parts and parts[0] == "badgedesk", f"Expected CLI starting with 'badgedesk': {cli}"

    # Global commands: `badgedesk <cmd>`
    if len(parts) >= 2 and parts[1] in {"version", "doctor"}:
        return parts[1]

    # Group commands: `badgedesk <group> <verb>`
    if len(parts) < 3:
        raise AssertionError(f"Unparseable CLI (too short): {cli}")

    group = parts[1]
    verb = parts[2]
    if group in {"db", "person"}:
        return f"{group}.{verb}"

    raise AssertionError(f"Unknown CLI group in BDD: {cli}")
