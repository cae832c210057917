import os
from dataclasses import dataclass


@dataclass
class ServerConfig:
    api_key: str
    host: str = "0.0.0.0"
    port: int = 8730


def get_server_config() -> ServerConfig:
    """Get API server configuration from environment variables.

    Expected env vars: PYREMIT_API_KEY (required),
    PYREMIT_SERVER_HOST, PYREMIT_SERVER_PORT (optional)
    """

    return ServerConfig(
        api_key=os.environ["PYREMIT_API_KEY"],
        host=os.environ.get("PYREMIT_SERVER_HOST", "0.0.0.0"),
        port=int(os.environ.get("PYREMIT_SERVER_PORT", "8730")),
    )
