from __future__ import annotations

import logging
import os
import sqlite3

import typer

from badgedesk.core import (
    config as config_core,
    db,
    envelope,
    paths,
)
from badgedesk.core.data_service import SqliteDataService
from badgedesk.core.errors import ImportParseError, PersistenceError, ValidationError
from badgedesk.core.jsonio import dumps
from badgedesk.core.person_manager import PersonManager

__version__ = "0.1.0"

app = typer.Typer(add_completion=False, help="badgedesk - manage the persons who receive access badges")


def _emit(out: dict) -> None:
    typer.echo(dumps(out))
    if out.get("ok") is True:
        raise typer.Exit(code=0)
    raise typer.Exit(code=1)


def _manager() -> PersonManager:
    return PersonManager(SqliteDataService())


def _optional(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


@app.callback()
def main() -> None:
    # stdout carries JSON envelopes only; logs go to stderr.
    try:
        level = config_core.log_level()
    except ValueError:
        # A broken config file is reported by `doctor`, not here.
        level = config_core.DEFAULT_LOG_LEVEL
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# ---- Sub-apps (public CLI contract) ----
db_app = typer.Typer(add_completion=False)
person_app = typer.Typer(add_completion=False)

app.add_typer(db_app, name="db")
app.add_typer(person_app, name="person")


# ---- Global commands ----
@app.command()
def version(json_output: bool = typer.Option(False, "--json", help="Output JSON envelope")):
    if json_output:
        _emit(envelope.ok(command="version", data={"version": __version__}))
    typer.echo(f"badgedesk {__version__}")


@app.command()
def doctor(json_output: bool = typer.Option(True, "--json")):
    workspace = paths.workspace_dir()
    db_path = paths.db_path()

    checks: list[dict] = []

    checks.append(
        {
            "name": "workspace.path",
            "ok": True,
            "details": {
                "path": str(workspace),
                "exists": workspace.exists(),
                "override": os.environ.get("BADGEDESK_WORKSPACE_DIR"),
            },
        }
    )

    db_exists = db_path.exists()
    db_details: dict[str, object] = {
        "path": str(db_path),
        "exists": db_exists,
        "override": os.environ.get("BADGEDESK_DB_PATH"),
    }
    if db_exists:
        try:
            db_details["schema_migrations"] = db.count_migrations(db_path)
        except sqlite3.Error as exc:
            db_details["error"] = str(exc)
            checks.append({"name": "db.status", "ok": False, "details": db_details})
        else:
            checks.append({"name": "db.status", "ok": True, "details": db_details})
    else:
        checks.append({"name": "db.status", "ok": False, "details": db_details})

    config_path = config_core.config_path()
    config_details: dict[str, object] = {"path": str(config_path), "exists": config_path.exists()}
    try:
        config_core.load_config()
    except ValueError as exc:
        config_details["error"] = str(exc)
        checks.append({"name": "config.file", "ok": False, "details": config_details})
    else:
        config_details["default_role"] = config_core.default_role()
        checks.append({"name": "config.file", "ok": True, "details": config_details})

    out = envelope.ok(command="doctor", data={"checks": checks})
    _emit(out)


# ---------------- db ----------------
@db_app.command("init")
def db_init(json_output: bool = typer.Option(True, "--json")):
    db_path = db.init_db()
    out = envelope.ok(command="db.init", data={"db_path": str(db_path)})
    _emit(out)


# -------------- person --------------
@person_app.command("add")
def person_add(
    first_name: str = typer.Option(..., "--first-name"),
    last_name: str = typer.Option(..., "--last-name"),
    role: str | None = typer.Option(None, "--role", help="Defaults to [person] default_role from config"),
    organization: str | None = typer.Option(None, "--organization"),
    badge_number: str | None = typer.Option(None, "--badge-number"),
    json_output: bool = typer.Option(True, "--json"),
):
    # Same trimming as the importer: padding is dropped, blank optional values become None.
    first_name = first_name.strip()
    last_name = last_name.strip()
    role = role.strip() if role is not None else None
    organization = _optional(organization)
    badge_number = _optional(badge_number)

    details = {"first_name": first_name, "last_name": last_name, "role": role, "badge_number": badge_number}
    manager = _manager()
    try:
        person = manager.add_new_person()
        person.first_name = first_name
        person.last_name = last_name
        if role is not None:
            person.role = role
        person.organization = organization
        person.badge_number = badge_number
        saved = manager.save()
        out = envelope.ok(
            command="person.add",
            data={"person": saved[0].to_dict(), "saved_count": len(saved)},
        )
    except ValidationError as exc:
        out = envelope.err(
            command="person.add",
            error_type="VALIDATION_FAILED",
            message=str(exc),
            details={**details, "problems": exc.problems},
        )
    except PersistenceError as exc:
        out = envelope.err(
            command="person.add",
            error_type="PERSISTENCE_FAILED",
            message=str(exc),
            details=details,
        )
    except ValueError as exc:
        out = envelope.err(
            command="person.add",
            error_type="INVALID_ARGUMENT",
            message=str(exc),
            details={**details, "config_path": str(config_core.config_path())},
        )
    _emit(out)


@person_app.command("list")
def person_list(json_output: bool = typer.Option(True, "--json")):
    persons = _manager().get_accessible_persons()
    out = envelope.ok(
        command="person.list",
        data={"persons": [person.to_dict() for person in persons], "count": len(persons)},
    )
    _emit(out)


@person_app.command("import")
def person_import(
    path: str = typer.Option(..., "--path", help="JSON or CSV file of person records"),
    json_output: bool = typer.Option(True, "--json"),
):
    data_service = SqliteDataService()
    manager = PersonManager(data_service)
    before = data_service.count_persons()
    try:
        persons = manager.import_persons(path)
        out = envelope.ok(
            command="person.import",
            data={
                "path": path,
                "persons": [person.to_dict() for person in persons],
                "imported_count": len(persons),
                "persisted_count_before": before,
                "persisted_count_after": data_service.count_persons(),
            },
        )
    except ImportParseError as exc:
        out = envelope.err(
            command="person.import",
            error_type="IMPORT_FAILED",
            message=str(exc),
            details={"path": exc.path, "reason": exc.reason},
        )
    _emit(out)


if __name__ == "__main__":
    app()
