import logging

logger = logging.getLogger("chord_sync")


def get_logger(level: int | str = logging.DEBUG) -> logging.Logger:
    logging.basicConfig(
        level=level,
        format="%(asctime)s.%(msecs)03d %(levelname)s %(module)s:%(lineno)d: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logger
