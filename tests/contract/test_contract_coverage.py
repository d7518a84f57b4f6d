from __future__ import annotations

from typer.main import get_command

from badgedesk.cli import app
from tests.contract._helpers import cli_to_command_id, extract_bdd_commands, load_contract, repo_root


def _typer_command_ids() -> set[str]:
    root = get_command(app)
    ids: set[str] = set()
    for name, command in root.commands.items():
        sub = getattr(command, "commands", None)
        if sub:
            ids.update(f"{name}.{verb}" for verb in sub)
        else:
            ids.add(name)
    return ids


def test_every_contract_command_has_schema_and_bdd_scenario() -> None:
    root = repo_root()
    contract = load_contract()

    contract_cmd_ids = [c["id"] for c in contract["commands"]]
    assert len(contract_cmd_ids) == len(set(contract_cmd_ids)), "Duplicate command ids in contract.json"

    bdd_cmd_ids = {cli_to_command_id(c) for c in extract_bdd_commands()}

    for cmd in contract["commands"]:
        cid = cmd["id"]

        schema_path = root / cmd.get("schema_ok", f"schemas/{cid}.schema.json")
        assert schema_path.exists(), f"Missing schema for command {cid}: {schema_path}"

        assert cid in bdd_cmd_ids, f"Command {cid} is not referenced by any BDD feature scenario"


def test_contract_matches_cli_tree() -> None:
    contract_ids = {c["id"] for c in load_contract()["commands"]}
    assert _typer_command_ids() == contract_ids


def test_no_orphan_command_schemas() -> None:
    """Ensure we don't accumulate schema files for commands that aren't in the contract."""
    root = repo_root()
    cmd_ids = {c["id"] for c in load_contract()["commands"]}

    for p in (root / "schemas").glob("*.schema.json"):
        name = p.name.replace(".schema.json", "")
        if name.startswith("envelope."):
            continue
        assert name in cmd_ids, f"Orphan command schema (not in contract): {p}"
