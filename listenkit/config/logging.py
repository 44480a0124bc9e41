import logging
from colorlog import StreamHandler, ColoredFormatter

LOG_FORMAT = (
    "%(asctime)s %(log_color)s%(class_name)s:%(levelname)s%(reset)s - %(message)s"
)
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

class_color_map = {
    "listen": {
        "INFO": "light_blue",
        "DEBUG": "cyan",
        "WARNING": "yellow",
    },
    "normalizer": {
        "INFO": "green",
        "DEBUG": "cyan",
        "WARNING": "yellow",
    },
    "teardown": {
        "INFO": "purple",
        "DEBUG": "cyan",
        "WARNING": "yellow",
    },
}


def colored_formatter(type: str) -> ColoredFormatter:
    """Formatter coloured for one component type; unknown levels print white."""
    colors = class_color_map.get(type, {})
    return ColoredFormatter(
        LOG_FORMAT,
        datefmt=DATE_FORMAT,
        reset=True,
        log_colors={
            level: colors.get(level, "white")
            for level in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
        },
    )


class ClassNameAdapter(logging.LoggerAdapter):
    """Stamps every record with the emitting component's ``class_name``."""

    def process(self, msg, kwargs):
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


# Package logger
logger = logging.getLogger("listenkit")
logger.setLevel(logging.WARNING)

handler = StreamHandler()
handler.setLevel(logging.DEBUG)
handler.setFormatter(colored_formatter("listen"))
logger.addHandler(handler)

# Keep listenkit output out of the host application's root logger
logger.propagate = False
