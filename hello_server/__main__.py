import logging
import socket

from .app import PORT, app

logger = logging.getLogger(__name__)


def main():
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
    )
    logger.info("Server running on http://%s:%d", socket.gethostname(), PORT)
    # threaded: a delayed greeting must not hold up other requests
    app.run(host="0.0.0.0", port=PORT, threaded=True)


if __name__ == "__main__":
    main()
