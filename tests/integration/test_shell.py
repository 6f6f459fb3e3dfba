"""Integration tests for the interactive shell, driven by scripted input."""

import io

from cli.main import main
from festplan.storage import sqlite_repo as repo

FEST_DATE = "2026-11-14"


class TestMenuLoop:

    def test_quit(self, run_shell):
        output = run_shell("q\n")

        assert "quit [q]" in output

    def test_end_of_input_exits(self, run_shell):
        """Closing stdin ends the session without an error."""
        output = run_shell("")

        assert "Choice: " in output

    def test_unknown_choice_keeps_running(self, run_shell):
        output = run_shell("x\nq\n")

        assert "No valid choice, try again…" in output
        assert output.count("quit [q]") == 2

    def test_bad_number_aborts_action(self, run_shell, settings):
        """Non-numeric input is reported and nothing is written."""
        output = run_shell("i\na\n0\nlots\nq\n")

        assert "'lots' is not a number" in output
        assert repo.get_stock(db_path=settings.database)["gin"] == 0.0

    def test_out_of_range_choice(self, run_shell):
        output = run_shell("c\nl\n7\nq\n")

        assert "7 is not a valid number" in output

    def test_nan_availability_rejected(self, run_shell, settings):
        """nan parses as a float but is not a stock level."""
        output = run_shell("i\na\n2\nnan\nq\n")

        assert "'nan' is not a number" in output
        assert repo.get_stock(db_path=settings.database)["rum"] == 1.0

    def test_infinite_recipe_amount_rejected(self, run_shell, settings):
        output = run_shell("c\nc\nBomb\nlime\ninf\nq\n")

        assert "'inf' is not a number" in output
        assert "Bomb" not in [c.name for c in repo.list_cocktails(db_path=settings.database)]


class TestFestMenu:

    def test_current_fest_ratio(self, run_shell):
        """30 Mojitos for 10 guests is a ratio of 3: too high."""
        output = run_shell("f\nc\nq\n")

        assert "planning for 30 cocktails and 10 guests" in output
        assert "3.00 cocktails/guest" in output
        assert "it is a bit high" in output

    def test_shopping_list(self, run_shell):
        """Rum is partly in stock, mint is not."""
        output = run_shell("f\ng\nq\n")

        lines = {line.split()[0]: line.split() for line in output.splitlines() if line.strip()}
        assert lines["rum"][1:] == ["0.20", "3.00"]
        assert lines["mint"][1:] == ["0.30", "6.00"]
        assert "gin" not in lines
        assert "Total: 9.00 €" in output

    def test_shopping_list_for_missing_fest(self, run_shell, settings):
        """A failed read aborts the action before anything is printed."""
        settings.current = "1999-12-31"

        output = run_shell("f\ng\nq\n")

        assert "Fest not found: 1999-12-31" in output
        assert "Total:" not in output
        assert "ingredient" not in output
        assert output.count("quit [q]") == 2

    def test_add_cocktail_to_selection(self, run_shell, settings):
        run_shell("f\na\na\n0\n20\n700\nq\n")

        fest = repo.get_fest(FEST_DATE, db_path=settings.database)
        assert fest.planned_counts == {"Mojito": 30, "Gin Tonic": 20}
        assert fest.cocktails["Gin Tonic"].price == 700

    def test_change_selection(self, run_shell, settings):
        run_shell("f\na\nc\n0\n40\n600\nq\n")

        fest = repo.get_fest(FEST_DATE, db_path=settings.database)
        assert fest.planned_counts == {"Mojito": 40}
        assert fest.cocktails["Mojito"].price == 600

    def test_deselect(self, run_shell, settings):
        run_shell("f\na\nd\n0\nq\n")

        assert repo.get_fest(FEST_DATE, db_path=settings.database).cocktails == {}

    def test_past_fests(self, run_shell):
        output = run_shell("f\nl\n0\nq\n")

        assert FEST_DATE in output
        assert "Mojito" in output
        assert "6.50" in output


class TestCocktailMenu:

    def test_create_with_existing_and_new_ingredient(self, run_shell, settings):
        """Ingredients are picked by number or typed as new names."""
        run_shell("c\nc\nDaiquiri\n2,lime\n0.05\n0.02\nq\n")

        daiquiri = repo.get_cocktail("Daiquiri", db_path=settings.database)
        assert daiquiri.ingredients == {"rum": 0.05, "lime": 0.02}
        assert "lime" in repo.get_stock(db_path=settings.database)

    def test_create_aborted_with_q(self, run_shell, settings):
        output = run_shell("c\nc\nDaiquiri\nq\nq\n")

        assert "No cocktail created" in output
        assert len(repo.list_cocktails(db_path=settings.database)) == 2

    def test_rename(self, run_shell, settings):
        run_shell("c\na\nn\n1\nMojito Royal\nq\n")

        names = [c.name for c in repo.list_cocktails(db_path=settings.database)]
        assert names == ["Gin Tonic", "Mojito Royal"]

    def test_alter_ingredient_amount(self, run_shell, settings):
        run_shell("c\na\ni\n1\n1\n0.05\nq\n")

        assert repo.get_cocktail("Mojito", db_path=settings.database).ingredients["rum"] == 0.05


class TestInventoryMenu:

    def test_inventory_value(self, run_shell):
        output = run_shell("i\nv\nq\n")

        assert "Current inventory value: 15.00 €" in output

    def test_add_item_and_set_price(self, run_shell, settings):
        run_shell("i\ni\nlime\n400\nq\n")

        assert repo.get_prices(db_path=settings.database)["lime"] == 400

    def test_duplicate_item_reported(self, run_shell):
        output = run_shell("i\ni\nrum\n100\nq\n")

        assert "ingredient already exists: rum" in output


class TestMain:

    def test_missing_config_is_fatal(self, tmp_path, capsys):
        assert main(["--config", str(tmp_path / "missing.toml")]) == 1
        assert "not found" in capsys.readouterr().err

    def test_zero_guests_is_fatal(self, tmp_path):
        config = tmp_path / "config.toml"
        config.write_text(f'awaited = 0\ncurrent = "{FEST_DATE}"\n', encoding="utf-8")

        assert main(["--config", str(config)]) == 1

    def test_creates_database_and_current_fest(self, tmp_path, monkeypatch, capsys):
        db = tmp_path / "fest.sqlite"
        config = tmp_path / "config.toml"
        config.write_text(
            f'Awaited = 80\nCurrent = "{FEST_DATE}"\nDatabase = "{db.as_posix()}"\n',
            encoding="utf-8",
        )
        monkeypatch.setattr("sys.stdin", io.StringIO("q\n"))

        assert main(["--config", str(config)]) == 0
        assert "Database not found" in capsys.readouterr().out
        assert repo.list_fest_dates(db_path=str(db)) == [FEST_DATE]

    def test_broken_schema_leaves_no_database(self, tmp_path):
        """A failed first start must not leave a file the next start would trust."""
        db = tmp_path / "fest.sqlite"
        schema = tmp_path / "schema.sql"
        schema.write_text("CREATE TABLE extra (x TEXT);\nCREATE TABLEE broken;\n", encoding="utf-8")
        config = tmp_path / "config.toml"
        config.write_text(
            f'awaited = 80\ncurrent = "{FEST_DATE}"\n'
            f'database = "{db.as_posix()}"\nschema = "{schema.as_posix()}"\n',
            encoding="utf-8",
        )

        assert main(["--config", str(config)]) == 1
        assert not db.exists()
        assert main(["--config", str(config)]) == 1
