from __future__ import annotations

import os
import uvicorn

from cortensor_providers.config.defaults import CORTENSOR_SERVICE_DEFAULT_HOST, CORTENSOR_SERVICE_DEFAULT_PORT
from cortensor_providers.config.env import SERVICE_HOST_ENV, SERVICE_PORT_ENV


def _parse_port(value: str | None, default: int) -> int:
    """Best-effort parse of a port from string, falling back to a sane default."""
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def main() -> None:
    """Start the development server for the adapter FastAPI app.

    - CORTENSOR_SERVICE_HOST: interface to bind (default "127.0.0.1")
    - CORTENSOR_SERVICE_PORT: port to bind (default 8091)
    - CORTENSOR_SERVICE_RELOAD: "true"/"false" to toggle auto-reload
      (default False)
    """
    host = os.getenv(SERVICE_HOST_ENV, CORTENSOR_SERVICE_DEFAULT_HOST)
    port = _parse_port(os.getenv(SERVICE_PORT_ENV), CORTENSOR_SERVICE_DEFAULT_PORT)
    reload_enabled = os.getenv("CORTENSOR_SERVICE_RELOAD", "false").lower() == "true"

    uvicorn.run(
        "cortensor_providers.service.app:app",
        host=host,
        port=port,
        reload=reload_enabled,
    )


if __name__ == "__main__":
    main()
