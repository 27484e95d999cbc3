"""runstream CLI - Command Line Interface."""

import asyncio
import sys

import click
from loguru import logger

from runstream import __version__


def _configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


@click.group()
@click.version_option(__version__)
def cli():
    """runstream - stream LLM workflow runs as server-sent events."""
    pass


@cli.command()
@click.option("--host", default=None, help="Host to bind (default: HOST or 0.0.0.0)")
@click.option("--port", "-p", default=None, type=int, help="Port to bind (default: PORT or 3002)")
@click.option("--reload", is_flag=True, help="Enable auto-reload")
@click.option("--log-level", default=None, help="Log level (default: LOG_LEVEL or INFO)")
def serve(host: str | None, port: int | None, reload: bool, log_level: str | None):
    """Start the runstream API server."""
    import uvicorn

    from runstream.settings import settings

    host = host or settings.server.host
    port = port or settings.server.port
    level = log_level or settings.log_level
    _configure_logging(level)

    click.echo(f"Starting runstream v{__version__} on http://{host}:{port}")
    click.echo(f"  Threads: http://{host}:{port}/api/threads")
    click.echo(f"  API docs: http://{host}:{port}/docs")
    uvicorn.run(
        "runstream.api.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level=level.lower(),
        server_header=False,
    )


@cli.command()
@click.argument("query")
@click.option("--workflow", "-w", "workflow_ref", help="Workflow YAML path or module:attribute")
@click.option("--thread", "-t", "thread_id", default=None, help="Thread id to report in logs")
@click.option("--log-level", default="WARNING", help="Log level (default: WARNING)")
def ask(query: str, workflow_ref: str | None, thread_id: str | None, log_level: str):
    """
    Run the workflow once and print the SSE stream.

    Examples:
        runstream ask "What is the capital of France?"
        runstream ask "Summarize this" --workflow workflows/assistant.yaml
        runstream ask "hi" --workflow myproject.graphs:workflow
    """
    _configure_logging(log_level)
    asyncio.run(_ask_async(query, workflow_ref, thread_id))


async def _ask_async(query: str, workflow_ref: str | None, thread_id: str | None):
    """Async implementation of ask command."""
    from runstream.agentic.streaming import stream_run
    from runstream.agentic.workflow import load_workflow
    from runstream.api.routers.threads import new_thread_id
    from runstream.models.messages import InputMessage
    from runstream.settings import settings

    ref = workflow_ref or settings.workflow.ref
    messages = [InputMessage(type="human", content=query)]

    async for chunk in stream_run(
        lambda: load_workflow(ref),
        messages,
        thread_id=thread_id or new_thread_id(),
    ):
        click.echo(chunk, nl=False)


@cli.command()
def thread():
    """Print a new thread id."""
    from runstream.api.routers.threads import new_thread_id

    click.echo(new_thread_id())


def main():
    cli()


if __name__ == "__main__":
    main()
