"""Command line entry point."""

from __future__ import annotations

import asyncio
import logging
from typing import Annotated, Optional

import typer

from ..errors import VoxtaskError
from ..sync.reconciler import SyncResult
from .output import print_error, print_info, print_success, print_sync_result

app = typer.Typer(
    name="voxtask",
    help="Voice agent call tasks with ElevenLabs conversation sync",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Verbose logging"),
    ] = False,
):
    """voxtask command line."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def serve(
    host: Annotated[Optional[str], typer.Option("--host", help="Bind address")] = None,
    port: Annotated[Optional[int], typer.Option("--port", "-p", help="Bind port")] = None,
):
    """Run the web server."""
    import uvicorn

    from ..web.config import WebConfig

    config = WebConfig.load()
    uvicorn.run(
        "voxtask.web.app:create_app",
        factory=True,
        host=host or config.host,
        port=port or config.port,
        reload=config.debug,
    )


@app.command()
def sync(
    agent_id: Annotated[str, typer.Argument(help="Local agent id")],
    db_path: Annotated[
        Optional[str],
        typer.Option("--db", help="Database path (default: VOXTASK_DB_PATH)"),
    ] = None,
):
    """Sync finished ElevenLabs conversations for one agent."""
    try:
        result = asyncio.run(_sync(agent_id, db_path))
    except VoxtaskError as e:
        print_error(e.message)
        raise typer.Exit(1) from None

    print_sync_result(result)
    print_success(result.message)
    if result.failed:
        print_info(f"{len(result.failed)} conversation(s) could not be synced.")


async def _sync(agent_id: str, db_path: str | None) -> SyncResult:
    from ..integrations.elevenlabs import ElevenLabsClient, ElevenLabsConfig
    from ..sync import ConversationReconciler, ConversationStore
    from ..web.config import WebConfig
    from ..web.db.database import connect

    elevenlabs_config = ElevenLabsConfig.load()
    elevenlabs_config.require_configured()

    db = await connect(db_path or WebConfig.load().db_path)
    client = ElevenLabsClient(elevenlabs_config)
    try:
        reconciler = ConversationReconciler(ConversationStore(db), client)
        return await reconciler.reconcile(agent_id)
    finally:
        await client.close()
        await db.close()
