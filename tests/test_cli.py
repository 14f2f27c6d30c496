"""Tests for the command-line interface."""

import json
from datetime import date

import pytest

from expense_tracker.cli import TABLE_HEADER, build_parser, format_summary, main


def run(capsys, *argv):
    code = main(list(argv))
    out, err = capsys.readouterr()
    return code, out, err


class TestExpenseCommands:
    """add / list / summary / delete."""

    def test_add_expense(self, capsys, data_dir):
        code, out, err = run(capsys, "add", "-d", "Lunch", "-a", "12.5", "-c", "food")
        assert code == 0
        assert out == "Expense added successfully (ID: 1)\n"

        stored = json.loads((data_dir / "expense.json").read_text(encoding="utf-8"))
        assert stored[0]["category"] == "FOOD"
        assert stored[0]["createAt"] == date.today().isoformat()

    def test_add_trims_description(self, capsys, data_dir):
        run(capsys, "add", "-d", "  Lunch  ", "-a", "12.5", "-c", "food")
        stored = json.loads((data_dir / "expense.json").read_text(encoding="utf-8"))
        assert stored[0]["description"] == "Lunch"

    def test_add_warns_when_budget_exceeded(self, capsys):
        today = date.today()
        run(capsys, "add-budget", "-b", "100", "-m", str(today.month), "-y", str(today.year))
        code, out, _ = run(capsys, "add", "-d", "TV", "-a", "150", "-c", "other")
        assert code == 0
        assert out == "Expense added successfully (ID: 1) - Warning: Budget exceeded by $50.00\n"

    def test_add_unknown_category(self, capsys, data_dir):
        code, out, err = run(capsys, "add", "-d", "Toy", "-a", "5", "-c", "toys")
        assert code == 1
        assert out == ""
        assert "Invalid input: category not found." in err
        assert not (data_dir / "expense.json").exists()

    @pytest.mark.parametrize("amount", ["0", "-3", "abc"])
    def test_add_rejects_bad_amount(self, capsys, amount):
        with pytest.raises(SystemExit) as exc:
            main(["add", "-d", "x", "-a", amount, "-c", "food"])
        assert exc.value.code == 2

    def test_list_empty(self, capsys):
        code, out, _ = run(capsys, "list")
        assert code == 0
        assert out == "No expenses found.\n"

    def test_list_table(self, capsys):
        run(capsys, "add", "-d", "A very long description indeed", "-a", "9.99", "-c", "fruits")
        code, out, _ = run(capsys, "list", "-c", "FRUITS")
        lines = out.splitlines()
        assert code == 0
        assert lines[0] == TABLE_HEADER
        assert lines[1].startswith(f"1    {date.today().isoformat()}")
        assert "FRUITS" in lines[1]
        assert "A very long descr..." in lines[1]
        assert lines[1].endswith("$9.99")

    def test_summary(self, capsys):
        run(capsys, "add", "-d", "Food", "-a", "500.3", "-c", "food")
        run(capsys, "add", "-d", "Net", "-a", "200", "-c", "internet_bill")

        assert run(capsys, "summary")[1] == "Total expenses: $700.30\n"
        assert run(capsys, "summary", "-c", "food")[1] == "Total expenses for FOOD: $500.30\n"

    def test_delete(self, capsys):
        run(capsys, "add", "-d", "Lunch", "-a", "12.5", "-c", "food")
        code, out, _ = run(capsys, "delete", "-i", "1")
        assert code == 0
        assert out == "Expense deleted successfully\n"
        assert run(capsys, "list")[1] == "No expenses found.\n"

    def test_delete_missing(self, capsys):
        code, out, err = run(capsys, "delete", "-i", "7")
        assert code == 1
        assert "Expense not found (ID: 7)" in err


class TestBudgetCommands:
    """add-budget / get-budget."""

    def test_add_and_get_budget(self, capsys):
        code, out, _ = run(capsys, "add-budget", "-b", "1000", "-m", "6", "-y", "2025")
        assert code == 0
        assert out == "The new budget for 06/2025 is: $1000.00\n"

        code, out, _ = run(capsys, "get-budget", "-m", "6", "-y", "2025")
        assert code == 0
        assert out == "Current budget for 06/2025 is: $1000.00\n"

    def test_get_missing_budget(self, capsys):
        code, out, err = run(capsys, "get-budget", "-m", "7", "-y", "2025")
        assert code == 1
        assert "Budget not found for 07/2025" in err

    @pytest.mark.parametrize("argv", [
        ["add-budget", "-b", "10", "-m", "13"],
        ["add-budget", "-b", "10", "-m", "6", "-y", "1999"],
        ["get-budget", "-y", "2101"],
        ["list", "-m", "0"],
    ])
    def test_rejects_out_of_range(self, capsys, argv):
        with pytest.raises(SystemExit) as exc:
            main(argv)
        assert exc.value.code == 2


class TestStorageFaults:
    """Corrupt files are reported, not hidden."""

    def test_corrupt_expense_file(self, capsys, data_dir):
        data_dir.mkdir(parents=True)
        (data_dir / "expense.json").write_text("not json", encoding="utf-8")
        code, out, err = run(capsys, "list")
        assert code == 1
        assert "Storage error" in err

    def test_data_dir_option(self, capsys, tmp_path):
        other = tmp_path / "elsewhere"
        run(capsys, "--data-dir", str(other), "add-budget", "-b", "5", "-m", "1", "-y", "2025")
        assert (other / "config.json").exists()


class TestFormatting:
    """Summary wording."""

    def test_format_summary_variants(self):
        assert format_summary(10.0, 6, None) == "Total expenses for JUNE: $10.00"
        assert format_summary(10.0, 6, "food") == "Total expenses for FOOD in JUNE: $10.00"

    def test_parser_requires_command(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])
