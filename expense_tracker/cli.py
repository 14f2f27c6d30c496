"""
Command-line interface for Expense Tracker.

    expense-tracker add -d "Lunch" -a 12.5 -c food
    expense-tracker list -m 6 -c food
    expense-tracker summary -m 6
    expense-tracker delete -i 3
    expense-tracker add-budget -b 1000 -m 6 -y 2025
    expense-tracker get-budget -m 6

Results go to stdout, errors to stderr. The exit code is 0 on success
and 1 when the command failed.
"""

import argparse
import calendar
import sys
from pathlib import Path
from typing import Optional

from expense_tracker import __version__
from expense_tracker.audit import configure_logging, get_logger
from expense_tracker.config import get_settings
from expense_tracker.models.expense import Category, CategoryNotFoundError, Expense
from expense_tracker.orchestrator import (
    BudgetFlow,
    BudgetNotFoundError,
    ExpenseFlow,
    ExpenseNotFoundError,
    create_app_components,
)
from expense_tracker.services.storage import StorageError


logger = get_logger(__name__)

TABLE_HEADER = f"{'ID':<4} {'Date':<12} {'Category':<12} {'Description':<20} {'Amount':>10}"
DESCRIPTION_WIDTH = 20


# ----------------------------- Argument types --------------------------------

def _month(value: str) -> int:
    month = _int(value)
    if not 1 <= month <= 12:
        raise argparse.ArgumentTypeError("month must be between 1 and 12")
    return month


def _year(value: str) -> int:
    year = _int(value)
    if not 2000 <= year <= 2100:
        raise argparse.ArgumentTypeError("year must be between 2000 and 2100")
    return year


def _positive_int(value: str) -> int:
    number = _int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError("id must be a positive integer")
    return number


def _positive_amount(value: str) -> float:
    try:
        amount = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid amount: {value!r}") from None
    if not amount > 0:
        raise argparse.ArgumentTypeError("amount must be positive")
    return amount


def _int(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from None


# ----------------------------- Formatting ------------------------------------

def _truncate(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    return text[:width - 3] + "..."


def format_expense_row(expense: Expense) -> str:
    return (
        f"{expense.id:<4} {expense.created_at.isoformat():<12} "
        f"{expense.category.value:<12} "
        f"{_truncate(expense.description, DESCRIPTION_WIDTH):<20} "
        f"{f'${expense.amount:.2f}':>10}"
    )


def format_summary(total: float, month: Optional[int], category: Optional[str]) -> str:
    if month is None and category is None:
        return f"Total expenses: ${total:.2f}"

    month_name = calendar.month_name[month].upper() if month is not None else None
    category_name = Category.from_string(category).value if category is not None else None

    if category_name is None:
        return f"Total expenses for {month_name}: ${total:.2f}"
    if month_name is None:
        return f"Total expenses for {category_name}: ${total:.2f}"
    return f"Total expenses for {category_name} in {month_name}: ${total:.2f}"


# ----------------------------- Commands --------------------------------------

def cmd_add(args: argparse.Namespace, expenses: ExpenseFlow, budgets: BudgetFlow) -> int:
    result = expenses.add_expense(args.description.strip(), args.amount, args.category)
    if result.budget_exceeded:
        print(
            f"Expense added successfully (ID: {result.expense.id}) - "
            f"Warning: Budget exceeded by ${abs(result.balance_left):.2f}"
        )
    else:
        print(f"Expense added successfully (ID: {result.expense.id})")
    return 0


def cmd_delete(args: argparse.Namespace, expenses: ExpenseFlow, budgets: BudgetFlow) -> int:
    expenses.delete_expense(args.id)
    print("Expense deleted successfully")
    return 0


def cmd_list(args: argparse.Namespace, expenses: ExpenseFlow, budgets: BudgetFlow) -> int:
    found = expenses.list_expenses(month=args.month, category=args.category)
    if not found:
        print("No expenses found.")
        return 0
    print(TABLE_HEADER)
    for expense in found:
        print(format_expense_row(expense))
    return 0


def cmd_summary(args: argparse.Namespace, expenses: ExpenseFlow, budgets: BudgetFlow) -> int:
    total = expenses.summarize(month=args.month, category=args.category)
    print(format_summary(total, args.month, args.category))
    return 0


def cmd_add_budget(args: argparse.Namespace, expenses: ExpenseFlow, budgets: BudgetFlow) -> int:
    budget = budgets.set_budget(args.budget, args.month, args.year)
    print(f"The new budget for {budget.month:02d}/{budget.year} is: ${budget.amount:.2f}")
    return 0


def cmd_get_budget(args: argparse.Namespace, expenses: ExpenseFlow, budgets: BudgetFlow) -> int:
    budget = budgets.get_budget(args.month, args.year)
    print(f"Current budget for {budget.month:02d}/{budget.year} is: ${budget.amount:.2f}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="expense-tracker",
        description="Track expenses and monthly budgets in local JSON files.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory holding the JSON files (overrides EXPENSE_TRACKER_DATA_DIR)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    add = sub.add_parser("add", help="Add a new expense entry.")
    add.add_argument("-d", "--description", required=True, help="Describe the expense")
    add.add_argument("-a", "--amount", required=True, type=_positive_amount,
                     help="Expense amount (must be positive)")
    add.add_argument("-c", "--category", required=True,
                     help=f"One of: {', '.join(c.value for c in Category)}")
    add.set_defaults(handler=cmd_add)

    delete = sub.add_parser("delete", help="Delete an expense by id.")
    delete.add_argument("-i", "--id", required=True, type=_positive_int, help="Expense id")
    delete.set_defaults(handler=cmd_delete)

    for name, handler, help_text in (
        ("list", cmd_list, "List expenses."),
        ("summary", cmd_summary, "Total of expenses."),
    ):
        query = sub.add_parser(name, help=help_text)
        query.add_argument("-m", "--month", type=_month, help="Month (1-12)")
        query.add_argument("-c", "--category", help="Category to filter with")
        query.set_defaults(handler=handler)

    add_budget = sub.add_parser(
        "add-budget", help="Set the budget amount for a given month and year."
    )
    add_budget.add_argument("-b", "--budget", required=True, type=_positive_amount,
                            help="Budget amount")
    add_budget.add_argument("-m", "--month", required=True, type=_month, help="Month (1-12)")
    add_budget.add_argument("-y", "--year", type=_year, help="Year (2000-2100)")
    add_budget.set_defaults(handler=cmd_add_budget)

    get_budget = sub.add_parser(
        "get-budget", help="Show the budget amount for a given month and year."
    )
    get_budget.add_argument("-m", "--month", type=_month, help="Month (1-12)")
    get_budget.add_argument("-y", "--year", type=_year, help="Year (2000-2100)")
    get_budget.set_defaults(handler=cmd_get_budget)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    if args.data_dir is not None:
        settings = settings.model_copy(update={"data_dir": args.data_dir.expanduser()})
    configure_logging(settings.log_level, settings.log_json)

    try:
        expense_flow, budget_flow = create_app_components(settings)
        return args.handler(args, expense_flow, budget_flow)
    except CategoryNotFoundError as e:
        print(f"Invalid input: {e}", file=sys.stderr)
    except ExpenseNotFoundError as e:
        print(f"Expense not found (ID: {e.expense_id})", file=sys.stderr)
    except BudgetNotFoundError as e:
        print(f"Budget not found for {e.month:02d}/{e.year}", file=sys.stderr)
    except StorageError as e:
        logger.error("command_failed", command=args.command, error=str(e))
        print(f"Storage error: {e}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
