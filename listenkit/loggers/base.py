from listenkit.config.logging import ClassNameAdapter, colored_formatter
from colorlog import StreamHandler
import logging


class Logger:
    """
    Per-component logger, e.g. ``Logger("TeardownChain", "teardown")``.

    Records go to ``listenkit.<name>`` with a handler coloured for ``type``.
    """

    def __init__(self, name: str, type: str, level: str = "warning"):
        self.name = name
        self.type = type

        self._logger = logging.getLogger(f"listenkit.{name}")
        self._logger.setLevel(getattr(logging, level.upper()))

        # One handler per component, however many instances exist
        if not self._logger.handlers:
            handler = StreamHandler()
            handler.setFormatter(colored_formatter(type))
            self._logger.addHandler(handler)
        self._logger.propagate = False

        self.logger = ClassNameAdapter(self._logger, {"class_name": name})

    def info(self, message: str):
        self.logger.info(message)

    def debug(self, message: str, exc_info=None):
        self.logger.debug(message, exc_info=exc_info)

    def warning(self, message: str):
        self.logger.warning(message)
