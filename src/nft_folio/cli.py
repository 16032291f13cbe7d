"""
NFT Folio CLI
"""

import asyncio
import sys
from pathlib import Path
from typing import Optional

import typer
from loguru import logger
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from .aggregator import aggregate, load_targets
from .config import config
from .data_source import get_collections
from .enrichment import enrich_and_sort_collections, load_display_config
from .models import CollectionTarget
from .storage import SnapshotStore

app = typer.Typer(help="NFT Folio - aggregate an artist's NFTs across marketplaces")
console = Console()


def _configure_logging():
    logger.remove()
    logger.add(sys.stderr, level=config.log_level)


def _floor(group) -> str:
    prices = [nft.price.amount for nft in group.nfts if nft.price and nft.price.currency == "ETH"]
    return f"{min(prices):.4f} ETH" if prices else "-"


@app.callback()
def main():
    _configure_logging()


@app.command()
def refresh(
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Snapshot file (JSON)"),
):
    """Run the aggregation pipeline and write the snapshot"""
    snapshot = SnapshotStore(output or config.snapshot_path)

    async def run():
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            task = progress.add_task("Aggregating NFTs...", total=None)
            grouped = await aggregate(config)
            progress.update(task, completed=True)
        return grouped

    try:
        grouped = asyncio.run(run())
        path = snapshot.write(grouped)
    except Exception as e:
        logger.exception(f"Failed to update NFTs: {e}")
        raise typer.Exit(code=1)

    table = Table(title="Collections")
    table.add_column("Slug", style="cyan")
    table.add_column("Items", style="yellow", justify="right")
    table.add_column("Floor", style="green")
    for slug, group in grouped.items():
        table.add_row(slug, str(len(group.nfts)), _floor(group))
    console.print(table)

    console.print(f"\n[green]Successfully wrote {len(grouped)} collections to {path}[/green]")


@app.command()
def show(
    live: bool = typer.Option(False, "--live", help="Ignore the snapshot and run the pipeline"),
):
    """Show collections in display order (snapshot, or live if none)"""
    grouped = asyncio.run(aggregate(config) if live else get_collections(config))
    collections = enrich_and_sort_collections(grouped, load_display_config(config.collections_path))

    table = Table(title="NFT Folio")
    table.add_column("Collection", style="magenta")
    table.add_column("Slug", style="cyan")
    table.add_column("Priority", justify="right")
    table.add_column("Items", style="yellow", justify="right")
    table.add_column("Floor", style="green")
    for collection in collections:
        table.add_row(
            collection.name,
            collection.slug,
            str(collection.priority),
            str(len(collection.nfts)),
            _floor(collection),
        )
    console.print(table)


@app.command()
def targets():
    """List configured targets and wallets"""
    table = Table(title="Targets")
    table.add_column("Type", style="cyan")
    table.add_column("Target", style="white")
    for target in load_targets(config.targets_path):
        if isinstance(target, CollectionTarget):
            table.add_row("collection", target.slug)
        else:
            table.add_row("item", f"{target.chain}/{target.contract}/{target.token_id}")
    for wallet in config.wallet_addresses:
        table.add_row("wallet", wallet)
    console.print(table)


if __name__ == "__main__":
    app()
