import logging
import sys

from config.settings import LOG_LEVEL

_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def get_logger(name: str = "saucedemo") -> logging.Logger:
    """获取项目logger，handler只挂一次"""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%H:%M:%S"))
        logger.addHandler(handler)
        logger.setLevel(LOG_LEVEL)
        logger.propagate = True  # 让 pytest caplog / log_cli 也能收到
    return logger
