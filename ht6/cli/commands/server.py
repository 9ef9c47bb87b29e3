"""Server commands."""

import cyclopts
import uvicorn

from ht6.cli.console import get_console

app = cyclopts.App(name="server", help="Server management commands")

APP_PATH = "ht6.application.api.rest.app:app"


@app.command
def start(
    host: str = "0.0.0.0",
    port: int = 8000,
    reload: bool = False,
) -> None:
    """Start the HT6 API server in the foreground.

    Args:
        host: Host to bind to.
        port: Port to listen on.
        reload: Restart on code changes (development only).
    """
    console = get_console()
    console.success(f"Serving on http://{host}:{port}")
    console.info("Configuration is read from HT6_* env vars and HT6_CONFIG_FILE")
    uvicorn.run(APP_PATH, host=host, port=port, reload=reload, access_log=True)
