#!/usr/bin/env python3
"""
Refresh cached quotes once; schedule it (cron, systemd timer) for periodic refresh.

Usage: from project root:
  python scripts/refresh_quotes.py --portfolio <portfolio_id>
  python scripts/refresh_quotes.py AAPL MSFT RELIANCE.NS

Exit status: 0 all refreshed, 1 some symbols failed, 2 input rejected.
"""
from pathlib import Path
from typing import Optional

import click

from stockfolio.app_context import AppContext
from stockfolio.config.logging_config import setup_logging
from stockfolio.core.exceptions import AppError


@click.command()
@click.argument("symbols", nargs=-1)
@click.option("--portfolio", "portfolio_id", default=None, help="Refresh every symbol held in this portfolio.")
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Data directory holding stockfolio.db.",
)
def main(symbols: tuple[str, ...], portfolio_id: Optional[str], data_dir: Optional[Path]):
    """Refresh cached market quotes."""
    setup_logging()
    context = AppContext(data_dir=data_dir)
    context.initialize()
    try:
        if portfolio_id:
            result = context.market_data.refresh_portfolio(portfolio_id)
        else:
            result = context.market_data.refresh_quotes(list(symbols))
    except AppError as e:
        click.echo(e.message, err=True)
        raise SystemExit(2)
    finally:
        context.close()

    click.echo(f"Refreshed {result.updated_count} symbol(s)")
    for error in result.errors:
        click.echo(f"  {error}")
    if result.errors:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
