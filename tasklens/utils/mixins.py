from typing import cast

import structlog


class LoggerMixin:
    """Mixin class to add logging capabilities to any class

    Classes with a ``key`` attribute (the collection stores) get it bound as
    ``store_key`` on every event.
    """

    @property
    def logger(self) -> structlog.stdlib.BoundLogger:
        """Get logger instance for this class"""
        logger = structlog.get_logger(self.__class__.__name__)
        key = getattr(self, "key", None)
        if key:
            logger = logger.bind(store_key=key)
        return cast("structlog.stdlib.BoundLogger", logger)
