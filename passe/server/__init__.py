"""
Sync server package; ``start_server`` runs it under uvicorn.
"""

import logging

import uvicorn

from passe.common.config import Config
from passe.common.logging_utils import setup_logger

from .core import SyncServer

logger = logging.getLogger(__name__)


def start_server(config: Config | None = None) -> None:
    """Serve the sync API until interrupted; the user database is flushed on exit."""
    config = config or Config()
    # All passe loggers share one handler; the CLI may have added it already
    setup_logger(logging.getLogger("passe"), config.LOG_LEVEL)
    server = SyncServer(config=config)
    logger.info("Storing user data in %s", server.data_dir)
    uvicorn.run(
        server.app,
        host=server.server_host,
        port=server.server_port,
        log_level=logging.getLevelName(config.LOG_LEVEL).lower(),
    )
