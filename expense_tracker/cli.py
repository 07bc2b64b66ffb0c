# expense_tracker/cli.py
import logging
import sys
from calendar import month_name
from datetime import date
from decimal import Decimal, InvalidOperation

import click
from dotenv import load_dotenv

from expense_tracker.config import load_config, resolve_data_file
from expense_tracker.core.models import InvalidExpenseError
from expense_tracker.manual import load_manual_expenses
from expense_tracker.outputs import get_output
from expense_tracker.store import ExpenseStore
from expense_tracker.summary import filter_expenses_by_month, summarize, totals_by_category

logger = logging.getLogger(__name__)


class DecimalType(click.ParamType):
    name = 'decimal'

    def convert(self, value, param, ctx):
        if isinstance(value, Decimal):
            return value
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation:
            self.fail(f"{value!r} is not a valid amount", param, ctx)
        if not amount.is_finite():
            self.fail(f"{value!r} is not a valid amount", param, ctx)
        return amount


DECIMAL = DecimalType()


def _fail(message):
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _check_saved(store):
    if store.last_save_error is not None:
        click.echo(
            f"Warning: could not save expenses to {store.path}: {store.last_save_error}",
            err=True,
        )


def _money(cfg, amount):
    return f"{cfg['currency_symbol']}{amount:.2f}"


@click.group()
@click.option(
    '--file', 'data_file',
    default=None,
    type=click.Path(dir_okay=False),
    help='JSON file holding the expenses (default: expenses.json)'
)
@click.option(
    '--config', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help='Optional config.yaml'
)
@click.option(
    '--env-file', 'env_file',
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help='Optional .env file with EXPENSES_* settings'
)
@click.option('-v', '--verbose', is_flag=True, default=False, help='Enable debug logging')
@click.version_option(package_name='expense-ledger')
@click.pass_context
def main(ctx, data_file, config_path, env_file, verbose):
    """A simple command-line expense tracker."""
    if env_file:
        load_dotenv(env_file)

    try:
        cfg = load_config(config_path)
    except ValueError as e:
        raise click.UsageError(str(e))
    level = 'DEBUG' if verbose else str(cfg['log_level']).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise click.UsageError(f"Unknown log level: {cfg['log_level']}")
    logging.basicConfig(
        level=level,
        format='%(levelname)s %(name)s: %(message)s',
    )

    ctx.obj = {
        'config': cfg,
        'data_file': resolve_data_file(cfg, data_file),
    }


def _open_store(ctx):
    path = ctx.obj['data_file']
    logger.debug("Using expense file %s", path)
    return ExpenseStore(path)


@main.command()
@click.option('-d', '--description', required=True, help='Description of the expense.')
@click.option('-a', '--amount', required=True, type=DECIMAL, help='Amount of the expense.')
@click.option('-c', '--category', default=None, help='Category of the expense.')
@click.pass_context
def add(ctx, description, amount, category):
    """Add a new expense."""
    cfg = ctx.obj['config']
    if amount <= 0:
        _fail("Amount must be positive.")
    store = _open_store(ctx)
    try:
        expense = store.add(description, amount, category or cfg['default_category'])
    except InvalidExpenseError as e:
        _fail(e)
    _check_saved(store)
    click.echo(f"✅ Expense added successfully! ID: {expense.id}")


@main.command()
@click.pass_context
def view(ctx):
    """View all expenses."""
    cfg = ctx.obj['config']
    expenses = _open_store(ctx).list()
    if not expenses:
        click.echo("No expenses found. Try adding one with the 'add' command.")
        return

    click.echo("--- All Expenses ---")
    click.echo(f"{'ID':<10} {'Amount':<12} {'Description':<30} {'Category':<15} Date")
    click.echo("-" * 90)
    for e in expenses:
        click.echo(
            f"{e.id:<10} {_money(cfg, e.amount):<12} {e.description:<30} "
            f"{e.category:<15} {e.date.date().isoformat()}"
        )


@main.command()
@click.argument('expense_id')
@click.option('-d', '--description', default=None, help='New description for the expense.')
@click.option('-a', '--amount', default=None, type=DECIMAL, help='New amount for the expense.')
@click.option('-c', '--category', default=None, help='New category for the expense.')
@click.pass_context
def update(ctx, expense_id, description, amount, category):
    """Update an existing expense."""
    if description is None and amount is None and category is None:
        _fail(
            "You must specify at least one field to update "
            "(--description, --amount, or --category)."
        )
    if amount is not None and amount <= 0:
        _fail("Amount must be positive.")

    store = _open_store(ctx)
    try:
        updated = store.update(expense_id, description, amount, category)
    except InvalidExpenseError as e:
        _fail(e)
    if updated is None:
        _fail(f"Expense with ID '{expense_id}' not found.")
    _check_saved(store)
    click.echo(f"✅ Expense '{expense_id}' updated successfully.")


@main.command()
@click.argument('expense_id')
@click.pass_context
def delete(ctx, expense_id):
    """Delete an expense by its ID."""
    store = _open_store(ctx)
    if not store.delete(expense_id):
        _fail(f"Expense with ID '{expense_id}' not found.")
    _check_saved(store)
    click.echo(f"✅ Expense '{expense_id}' deleted successfully.")


@main.command()
@click.option(
    '-m', '--month',
    default=None,
    type=click.IntRange(1, 12),
    help='The month to summarize (1-12). If not specified, summarizes all expenses.'
)
@click.pass_context
def summary(ctx, month):
    """Show a summary of expenses."""
    cfg = ctx.obj['config']
    expenses = _open_store(ctx).list()
    result = summarize(expenses, month=month)

    if month is not None:
        click.echo(f"--- Summary for {month_name[month].upper()} {result.year} ---")
        expenses = filter_expenses_by_month(expenses, month, result.year)
    else:
        click.echo("--- Overall Summary ---")

    if result.count == 0:
        click.echo("No expenses found for this period.")
        return

    click.echo(f"Total Number of Expenses: {result.count}")
    click.echo(f"Total Amount: {_money(cfg, result.total)}")
    click.echo("By category:")
    for cat, total in totals_by_category(expenses).items():
        click.echo(f"  {cat:<20} {_money(cfg, total)}")


@main.command(name='import')
@click.argument('manual_file', type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def import_expenses(ctx, manual_file):
    """Add every expense listed in a YAML file."""
    cfg = ctx.obj['config']
    try:
        entries = load_manual_expenses(manual_file)
    except (ValueError, OSError) as e:
        _fail(f"Could not load {manual_file}: {e}")

    store = _open_store(ctx)
    added = []
    for entry in entries:
        try:
            added.append(store.add(
                entry['description'],
                entry['amount'],
                entry['category'] or cfg['default_category'],
            ))
        except InvalidExpenseError as e:
            click.echo(f"⚠️  Skipping {entry['description']!r}: {e}", err=True)
    _check_saved(store)
    click.echo(f"Imported {len(added)} expense(s) from {manual_file}.")


@main.command()
@click.option(
    '--format', 'output_format',
    default='csv',
    type=click.Choice(['csv', 'excel']),
    help='Export format: csv or excel'
)
@click.option(
    '--output', 'out_path',
    default=None,
    type=click.Path(dir_okay=False),
    help='File to write (default: <output_dir>/expenses.<ext>)'
)
@click.option('-m', '--month', default=None, type=click.IntRange(1, 12),
              help='Only export the given month (1-12) of the current year.')
@click.pass_context
def export(ctx, output_format, out_path, month):
    """Export expenses to CSV or Excel."""
    cfg = ctx.obj['config']
    expenses = _open_store(ctx).list()
    if month is not None:
        expenses = filter_expenses_by_month(expenses, month, date.today().year)

    outputter = get_output(output_format, cfg)
    written = outputter.append(expenses, out_path)
    click.echo(f"Exported {len(expenses)} expense(s) to {written}.")


if __name__ == '__main__':
    main()
