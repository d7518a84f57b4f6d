from badgedesk.core import paths


def test_ensure_workspace_creates_subdirs(tmp_path, monkeypatch):
    monkeypatch.setenv("BADGEDESK_WORKSPACE_DIR", str(tmp_path))
    root = paths.ensure_workspace()
    for subdir in paths.WORKSPACE_SUBDIRS:
        assert (root / subdir).is_dir()


def test_db_path_defaults_to_workspace(tmp_path, monkeypatch):
    monkeypatch.setenv("BADGEDESK_WORKSPACE_DIR", str(tmp_path))
    monkeypatch.delenv("BADGEDESK_DB_PATH", raising=False)
    assert paths.db_path() == tmp_path / "db.sqlite3"


def test_resolve_db_path_honours_override(tmp_path, monkeypatch):
    target = tmp_path / "elsewhere" / "persons.sqlite3"
    monkeypatch.setenv("BADGEDESK_DB_PATH", str(target))
    monkeypatch.setenv("BADGEDESK_WORKSPACE_DIR", str(tmp_path / "workspace"))
    assert paths.resolve_db_path() == target
    assert target.parent.is_dir()
    assert not (tmp_path / "workspace").exists()
