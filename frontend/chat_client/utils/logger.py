import logging

LOGGER_NAME = "chat_client"
LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}


def setup_logging(level: str = "INFO") -> logging.Logger:
    client_logger = logging.getLogger(LOGGER_NAME)
    client_logger.setLevel(LEVELS.get(str(level).strip().upper(), logging.INFO))

    # Streamlit re-runs the script on every interaction
    if not client_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        client_logger.addHandler(handler)

    return client_logger
