import logging

from app.db.engine import get_engine
from app.db.schema import metadata
from app.logging_config import configure_logging
from app.settings import get_settings

logger = logging.getLogger(__name__)


def main():
    settings = get_settings()
    configure_logging(settings.log_level)

    engine = get_engine()
    metadata.drop_all(engine)
    metadata.create_all(engine)
    logger.info("DB schema created at %s", settings.database_url)


if __name__ == "__main__":
    main()
