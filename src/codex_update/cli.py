"""codex-update CLI entry point."""

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from codex_update.updater import (
    Asset,
    Release,
    ReleaseAggregator,
    ReleaseSourceClient,
    UpdateError,
    UpdaterConfig,
    get_current_version,
    print_releases,
    resolve_target,
    update,
)

console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Configure logging with rich handler."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, console=console)],
    )


def fail(err: UpdateError) -> None:
    console.print(f"[red]✗[/red] {err}")
    raise SystemExit(1)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Update the codex binary from GitHub releases."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    setup_logging(verbose)


@cli.command("list")
@click.option("--repo", "-r", help="Secondary repository as owner/repo")
def list_command(repo: str | None) -> None:
    """List releases from the upstream and fallback repositories."""
    try:
        config = UpdaterConfig.from_env()
        with ReleaseSourceClient(config) as client:
            releases = ReleaseAggregator(client, config).list_releases(repo)
    except UpdateError as e:
        fail(e)

    print_releases(releases, get_current_version(), console)


@cli.command("install")
@click.argument("version", required=False)
@click.option("--repo", "-r", help="Secondary repository as owner/repo")
@click.option("--target", "-t", help="Target triple to download (default: detected)")
@click.option("--prerelease", is_flag=True, help="Allow installing a prerelease")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
def install(version: str | None, repo: str | None, target: str | None, prerelease: bool, yes: bool) -> None:
    """Download a release and replace the running binary.

    Installs VERSION if given, otherwise the newest stable release.
    """
    current_version = get_current_version()

    def confirm(release: Release, asset: Asset) -> bool:
        console.print(f"Found [cyan]{release.version}[/cyan] from {release.source}")
        console.print(f"  Asset: [dim]{asset.name}[/dim]")
        if not yes and not click.confirm(f"Update codex {current_version} → {release.version}?"):
            return False
        console.print("Downloading update...")
        return True

    try:
        config = UpdaterConfig.from_env()
        with ReleaseSourceClient(config) as client:
            console.print("Checking for releases...")
            outcome = update(
                version,
                override_source=repo,
                target=target,
                include_prereleases=prerelease,
                config=config,
                client=client,
                confirm=confirm,
            )
    except UpdateError as e:
        fail(e)

    if outcome is None:
        console.print("Aborted")
        return
    console.print(f"[green]✓[/green] Successfully updated to version from {outcome.asset.download_url}")


@cli.command("target")
def target_command() -> None:
    """Print the target triple used to select release assets."""
    console.print(resolve_target(), highlight=False)


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
