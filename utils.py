import logging
import sys

# Global logger instance
logger = logging.getLogger('eqcheck')

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def setup_logging(debug=False, log_file=None):
    level = logging.DEBUG if debug else logging.INFO
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)
    global logger
    logger = logging.getLogger('eqcheck')
    return logger


def handle_error(msg, exc=None, fatal=False):
    global logger
    if not logging.getLogger().handlers:  # Not configured yet
        logging.basicConfig(level=logging.ERROR, format=LOG_FORMAT)
        logger = logging.getLogger('eqcheck')
    logger.error(msg, exc_info=exc)
    if fatal:
        sys.exit(1)
    return False
