import logging
import sys


class ContextFormatter(logging.Formatter):
    """Custom formatter that handles optional entity and db_type fields."""
    def format(self, record):
        if not hasattr(record, 'entity'):
            record.entity = '-'
        if not hasattr(record, 'db_type'):
            record.db_type = '-'
        return super().format(record)


def configure_logging(level: str = "INFO") -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ContextFormatter(
        "%(asctime)s %(levelname)s %(name)s [entity=%(entity)s type=%(db_type)s] - %(message)s"
    ))
    logging.basicConfig(
        level=level,
        handlers=[handler],
    )
