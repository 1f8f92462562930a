import logging.config
import os

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# stdout carries the result line of the send_tx script, so everything logs to stderr
LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": "%(asctime)s %(levelname)-6s %(name)8s:%(lineno)d %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "default",
            "stream": "ext://sys.stderr",
        },
    },
    "loggers": {
        "celo_e2e": {
            "level": LOG_LEVEL,
            "handlers": ["console"],
            "propagate": False,
        },
        "web3": {
            "level": "WARNING",
            "handlers": ["console"],
            "propagate": False,
        },
        "urllib3": {
            "level": "WARNING",
            "handlers": ["console"],
            "propagate": False,
        },
    },
    "root": {
        "level": "WARNING",
        "handlers": ["console"],
    },
}


def setup_logging():
    """ Apply the logging configuration. """
    logging.config.dictConfig(LOGGING_CONFIG)
