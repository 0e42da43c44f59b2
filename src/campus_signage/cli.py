import time
from typing import Optional

import typer

from .admin_client import AdminApiClient
from .config import Config
from .lifecycle import EventLifecycleManager
from .logging_config import setup_logging
from .pruner import PruneLoop
from .store import EventStore, StoreError
from .utils.ui import print_banner, info, success, error, get_console, events_table

app = typer.Typer(help="Campus digital signage")


@app.callback()
def _setup(
    ctx: typer.Context,
    config_file: Optional[str] = typer.Option(None, "--config", help="Path to config.yaml"),
) -> None:
    cfg = Config(config_file)
    log_cfg = cfg.logging_config
    setup_logging(log_cfg["level"], log_cfg["file"])
    ctx.obj = cfg


def _config(ctx: typer.Context) -> Config:
    return ctx.obj if isinstance(ctx.obj, Config) else Config()


@app.command()
def serve(
    ctx: typer.Context,
    host: Optional[str] = typer.Option(None, help="Bind address"),
    port: Optional[int] = typer.Option(None, help="Port"),
    debug: Optional[bool] = typer.Option(None, "--debug/--no-debug", help="Flask debug mode"),
):
    """Runs the signage web application."""
    from .api.app import create_app

    cfg = _config(ctx)
    server = cfg.server_config
    flask_app = create_app(cfg)
    print_banner("Campus Signage", subtitle=f"http://{host or server['host']}:{port or server['port']}")
    flask_app.run(
        host=host or server["host"],
        port=port or server["port"],
        debug=server["debug"] if debug is None else debug,
    )


@app.command("init-db")
def init_db(ctx: typer.Context):
    """Creates the events table if it does not exist."""
    try:
        EventStore(_config(ctx)).ensure_schema()
    except StoreError as e:
        error(f"Could not create the events table: {e}")
        raise typer.Exit(code=1)
    success("Events table ready")


@app.command("list-events")
def list_events(ctx: typer.Context):
    """Prints every event in the store."""
    try:
        events = EventStore(_config(ctx)).list_all()
    except StoreError as e:
        error(f"Could not load events: {e}")
        raise typer.Exit(code=1)
    get_console().print(events_table(events, title=f"Events ({len(events)})"))


@app.command()
def prune(
    ctx: typer.Context,
    once: bool = typer.Option(False, "--once", help="Run a single pass and exit"),
    interval: Optional[int] = typer.Option(None, help="Seconds between passes"),
    base_url: Optional[str] = typer.Option(None, help="Signage app URL (defaults to SIGNAGE_BASE_URL)"),
):
    """Deletes expired events through the admin API."""
    cfg = _config(ctx)
    client_cfg = cfg.admin_client_config
    credentials = cfg.admin_credentials
    if not credentials["username"] or not credentials["password"]:
        error("ADMIN_USER and ADMIN_PASS must be set")
        raise typer.Exit(code=1)

    client = AdminApiClient(
        base_url or client_cfg["base_url"],
        credentials["username"],
        credentials["password"],
        timeout=client_cfg["timeout"],
    )
    manager = EventLifecycleManager(client)
    loop = PruneLoop(manager, interval or cfg.lifecycle_config["prune_interval_seconds"])

    if once:
        deleted = loop.run_once()
        if manager.view.error:
            error(manager.view.error)
            raise typer.Exit(code=1)
        success(f"{deleted} expired event(s) processed")
        return

    info(f"Pruning expired events every {loop.interval}s against {client.base_url} (Ctrl+C to stop)")
    loop.start()
    try:
        while not loop.stopped:
            time.sleep(1)
    except KeyboardInterrupt:
        info("Stopping...")
    finally:
        loop.stop(timeout=5)


def main():
    app()


if __name__ == "__main__":
    main()
