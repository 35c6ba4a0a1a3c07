import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configures the root logger once for the whole process."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
