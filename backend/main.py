from application import create_app
from config.settings import load_settings
import logging
import socket
import sys

settings = load_settings()
app = create_app(settings)

logger = logging.getLogger(__name__)


def is_port_in_use(host: str, port: int) -> bool:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        try:
            s.bind((host, port))
            return False
        except OSError:
            return True


if __name__ == "__main__":
    import uvicorn

    if is_port_in_use(settings.host, settings.port):
        logger.error(f"Port {settings.port} is already in use!")
        logger.error(f"   To fix: set USERS_PORT or stop the process holding {settings.port}")
        sys.exit(1)

    logger.info(f"Starting User Management API on http://{settings.host}:{settings.port}...")
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
