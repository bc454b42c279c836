"""Run the development server: python -m studio_admin"""
import logging
import sys

from studio_admin.config import load_settings
from studio_admin.core.exceptions import ConfigurationError
from studio_admin.flask_app import create_app

logger = logging.getLogger("studio_admin")


def main() -> int:
    try:
        cfg = load_settings()
        app = create_app(cfg)
    except ConfigurationError as exc:
        logging.basicConfig(level=logging.ERROR)
        logger.critical(f"FATAL ERROR: {exc}")
        return 1

    logger.info(f"Backend server is running on port {cfg.port}")
    app.run(host="0.0.0.0", port=cfg.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
