import logging

import uvicorn

from pyremit_api.config import get_server_config

if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = get_server_config()

    uvicorn.run(
        "pyremit_api.app:create_app",
        host=config.host,
        port=config.port,
        factory=True,
    )
