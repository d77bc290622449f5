import dataclasses
from typing import Annotated

import cyclopts

LogLevelFlag = Annotated[
    str,
    cyclopts.Parameter(
        name=["--log-level"],
        help="Log level (debug, info, warning, error, critical)",
    ),
]

DEFAULT_LOG_LEVEL = "warning"

NoCacheFlag = Annotated[
    bool,
    cyclopts.Parameter(
        name=["--no-cache"],
        help="Fetch the web font again instead of using the local cache",
        negative=(),
    ),
]


@cyclopts.Parameter(name="*")
@dataclasses.dataclass(frozen=True)
class ServerFlags:
    """Flags for where and how the dashboard is served."""

    host: Annotated[
        str | None,
        cyclopts.Parameter(
            name=["--host"],
            help="Interface to bind. Set via the DATA_ANALYZER_HOST environment variable, the .data-analyzer.toml config file or the --host flag",
        ),
    ] = None
    port: Annotated[
        int | None,
        cyclopts.Parameter(
            name=["--port", "-p"],
            help="Port to listen on. Set via the DATA_ANALYZER_PORT environment variable, the .data-analyzer.toml config file or the --port flag",
        ),
    ] = None
    debug: Annotated[
        bool | None,
        cyclopts.Parameter(
            name=["--debug"],
            help="Show tracebacks in error responses",
        ),
    ] = None
    open_browser: Annotated[
        bool | None,
        cyclopts.Parameter(
            name=["--open"],
            help="Open the dashboard in a web browser once serving",
        ),
    ] = None
