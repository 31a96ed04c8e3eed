import pytest

from blort import cli
from blort.database.database import get_engine, get_registry, init_db
from blort.models.visit import OrderBy


@pytest.fixture
def database_url(tmp_path, monkeypatch):
    """Points the CLI at a fresh file database"""
    url = f"sqlite:///{tmp_path / 'cli.db'}"
    monkeypatch.setenv("DATABASE_URL", url)
    init_db(get_engine())
    return url


class TestParser:
    """Argument parsing"""

    def test_show_defaults(self):
        args = cli.build_parser().parse_args(["show"])
        assert args.limit == 10
        assert args.order is OrderBy.LAST_SEEN

    def test_show_options(self):
        args = cli.build_parser().parse_args(["show", "-l", "3", "--order", "visits"])
        assert args.limit == 3
        assert args.order is OrderBy.VISITS

    @pytest.mark.parametrize("argv", [
        ["show", "--limit", "0"],
        ["show", "--limit", "ten"],
        ["show", "--order", "count"],
        ["frobnicate"],
        [],
    ])
    def test_invalid_arguments(self, argv):
        with pytest.raises(SystemExit) as exc_info:
            cli.build_parser().parse_args(argv)
        assert exc_info.value.code == 2


class TestCommands:
    """clear and show against a real database"""

    def test_show_empty(self, database_url, capsys):
        assert cli.main(["show"]) == 0
        assert capsys.readouterr().out == "No names found in database\n"

    def test_show_by_visits(self, database_url, capsys):
        registry = get_registry()
        for name in ["alice", "alice", "bob"]:
            registry.record_visit(name)

        assert cli.main(["show", "--order", "visits", "--limit", "5"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "Top 5 names (sorted by visits):"
        assert lines[1] == f"{'Name':<20} {'Visits':<8} Last Seen"
        assert lines[2] == "-" * 50
        assert lines[3].startswith(f"{'alice':<20} {'2':<8} ")
        assert lines[4].startswith(f"{'bob':<20} {'1':<8} ")
        assert len(lines) == 5

    def test_show_respects_limit(self, database_url, capsys):
        registry = get_registry()
        for name in ["a", "b", "c"]:
            registry.record_visit(name)

        assert cli.main(["show", "-l", "2"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "Top 2 names (sorted by last seen):"
        assert len(lines) == 3 + 2

    def test_clear(self, database_url, capsys):
        get_registry().record_visit("alice")

        assert cli.main(["clear"]) == 0
        assert capsys.readouterr().out == "Database cleared successfully\n"
        assert get_registry().list_top(10, OrderBy.VISITS) == []

        # Clearing again still succeeds
        assert cli.main(["clear"]) == 0

    def test_missing_database_url(self, monkeypatch, capsys):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.setattr(cli, "load_dotenv", lambda: None)

        assert cli.main(["show"]) == 1
        assert "DATABASE_URL must be set" in capsys.readouterr().err

    def test_store_failure_exits_non_zero(self, tmp_path, monkeypatch, capsys):
        # A directory cannot be opened as a database file
        monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path}")

        assert cli.main(["show"]) == 1
        assert capsys.readouterr().err.startswith("Error: ")
