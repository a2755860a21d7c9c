"""Logging helpers do servico de quiz."""

import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configura logging basico e retorna o logger raiz do pacote."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    return logging.getLogger("trivia")


def get_logger(name: str) -> logging.Logger:
    """Retorna logger filho de ``trivia`` (ex: ``trivia.router``)."""
    return logging.getLogger(f"trivia.{name}")
