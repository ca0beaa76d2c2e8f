"""Logger access for carbonpy modules."""

import logging

PACKAGE_LOGGER = "carbonpy"

# Libraries stay silent until the application configures logging
logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        A standard library logger under the package hierarchy.
    """
    return logging.getLogger(name)
