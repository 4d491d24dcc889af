from __future__ import annotations

import asyncio
import logging

import typer

from stdiolink.config import AppConfig
from stdiolink.config_loader import load_config
from stdiolink.errors import TransportError
from stdiolink.server import JsonRpcServer
from stdiolink.transport.stdio import StdioTransport
from stdiolink.utils.stdout_guard import StdoutGuard

app = typer.Typer(add_completion=False)

logger = logging.getLogger(__name__)


async def _run_serve(cfg: AppConfig) -> None:
    async with StdioTransport(config=cfg.transport) as transport:
        server = JsonRpcServer(transport, name=cfg.name)
        await server.serve()


async def _run_echo(cfg: AppConfig) -> None:
    async with StdioTransport(config=cfg.transport) as transport:
        async for message in transport.receive():
            await transport.send(message)


def _run(coro_factory, config_path: str | None, name: str | None = None) -> None:
    cfg = load_config(config_path)
    if name:
        cfg.name = name
    with StdoutGuard(level=cfg.log_level):
        try:
            asyncio.run(coro_factory(cfg))
        except KeyboardInterrupt:
            logger.info("Received KeyboardInterrupt, shutting down.")
        except TransportError as e:
            logger.error("Transport failed: %s", e)
            raise typer.Exit(code=1) from e


@app.command("serve")
def serve(
    name: str | None = typer.Option(None, help="Server name reported by initialize"),
    config: str | None = typer.Option(None, "--config", "-c", help="Path to YAML/JSON config"),
) -> None:
    """Answer JSON-RPC ping/initialize/shutdown over stdio."""
    _run(_run_serve, config, name)


@app.command("echo")
def echo(
    config: str | None = typer.Option(None, "--config", "-c", help="Path to YAML/JSON config"),
) -> None:
    """Write every received line back to the peer unchanged."""
    _run(_run_echo, config)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
