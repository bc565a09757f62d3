"""MCP server and CLI for visualizing GitHub repository branches."""

import asyncio
import logging
import os
import sys
from pathlib import Path

import click
from dotenv import load_dotenv

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _configure(log_level: str, github_token: str | None, github_api_url: str | None) -> None:
    load_dotenv()
    logging.basicConfig(
        level=log_level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if github_token:
        os.environ["GITHUB_TOKEN"] = github_token
    if github_api_url:
        os.environ["GITHUB_API_URL"] = github_api_url


async def _serve(run_kwargs: dict) -> None:
    from .servers import web
    from .servers.github import mcp

    try:
        await mcp.run_async(show_banner=False, **run_kwargs)
    finally:
        await web.close_web_visualizer()


@click.command()
@click.option(
    "--transport",
    type=click.Choice(["stdio", "sse", "streamable-http"]),
    default="stdio",
    help="MCP transport type",
)
@click.option("--port", default=8000, help="Port for HTTP transports")
@click.option("--host", default="127.0.0.1", help="Host for HTTP transports")
@click.option("--github-token", envvar="GITHUB_TOKEN", help="GitHub personal access token")
@click.option("--github-api-url", envvar="GITHUB_API_URL", help="GitHub REST API base URL")
@click.option("--log-level", type=click.Choice(LOG_LEVELS), default="WARNING", help="Log level")
def main(
    transport: str,
    port: int,
    host: str,
    github_token: str | None,
    github_api_url: str | None,
    log_level: str,
) -> None:
    """Run the GitHub repository visualizer MCP server.

    The HTTP transports also serve the browser form at ``/``.
    """
    _configure(log_level, github_token, github_api_url)

    from .servers import prompts, resources, web  # noqa: F401 — registers decorators
    from .servers.github import mcp

    run_kwargs: dict = {"transport": transport}
    if transport != "stdio":
        run_kwargs["host"] = host
        run_kwargs["port"] = port

    asyncio.run(_serve(run_kwargs))


async def _render_to_file(repo_url: str, output: Path, width: int | None, height: int | None):
    from .client import GitHubClient
    from .config import GitHubConfig
    from .pages import render_page
    from .renderer import D3ForceRenderer, Dimensions
    from .view import RepositoryVisualizer

    config = GitHubConfig.from_env()
    dimensions = Dimensions(width=width or config.width, height=height or config.height)
    client = GitHubClient(config)
    try:
        state = await RepositoryVisualizer(client).submit(repo_url)
    finally:
        await client.close()
    output.write_text(render_page(state, D3ForceRenderer(), dimensions), encoding="utf-8")
    return state


@click.command()
@click.argument("repo_url")
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=Path("repository-graph.html"),
    show_default=True,
    help="HTML file to write",
)
@click.option("--width", type=click.IntRange(min=1), help="Drawing surface width in pixels")
@click.option("--height", type=click.IntRange(min=1), help="Drawing surface height in pixels")
@click.option("--github-token", envvar="GITHUB_TOKEN", help="GitHub personal access token")
@click.option("--github-api-url", envvar="GITHUB_API_URL", help="GitHub REST API base URL")
@click.option("--log-level", type=click.Choice(LOG_LEVELS), default="WARNING", help="Log level")
def render(
    repo_url: str,
    output: Path,
    width: int | None,
    height: int | None,
    github_token: str | None,
    github_api_url: str | None,
    log_level: str,
) -> None:
    """Fetch REPO_URL and write its branch graph as a standalone HTML page."""
    _configure(log_level, github_token, github_api_url)

    from .view import Errored, Idle

    state = asyncio.run(_render_to_file(repo_url, output, width, height))
    if isinstance(state, Idle) and state.error:
        raise click.ClickException(state.error)
    if isinstance(state, Errored):
        raise click.ClickException(state.message)
    click.echo(f"Wrote {output}")


if __name__ == "__main__":
    main()
