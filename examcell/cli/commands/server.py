"""Run the HTTP server in the foreground."""

import cyclopts
import logfire
import uvicorn

from examcell.cli.console import get_console
from examcell.config import Config, configure_logging
from examcell.infrastructure.persistence.migrate import run_migrations

app = cyclopts.App(name="server", help="Server commands")


@app.default
def run(host: str | None = None, port: int | None = None, reload: bool = False) -> None:
    """Migrate the database (when enabled) and serve the API.

    Args:
        host: Host to bind to. Defaults to server.host from config.
        port: Port to listen on. Defaults to server.port from config.
        reload: Reload on code changes (development only).
    """
    config = Config()  # type: ignore[call-arg]
    configure_logging(config.logging)
    # Must run before the app module is imported
    logfire.configure(service_name="examcell", send_to_logfire="if-token-present")

    if config.database.auto_migrate:
        run_migrations(config.database.url)

    host = host or config.server.host
    port = port or config.server.port
    get_console().success(f"Serving on http://{host}:{port}")
    uvicorn.run(
        "examcell.application.api.rest.app:app",
        host=host,
        port=port,
        reload=reload,
        log_config=None,  # keep our logging configuration
    )
