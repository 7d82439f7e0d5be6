import logging

import uvicorn

from quote_relay.config import get_settings
from quote_relay.errors import ConfigError

logger = logging.getLogger(__name__)


def main() -> int:
    settings = get_settings()
    try:
        settings.require_api_key()
    except ConfigError as exc:
        logging.basicConfig(level=logging.INFO)
        logger.critical("startup.failed %s", exc)
        return 1
    uvicorn.run("quote_relay.api.app:app", host=settings.host, port=settings.port)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
