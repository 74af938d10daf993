
import logging
import os
from pathlib import Path

LOG_DIR = Path.cwd() / "logs"
LOG_FILE = LOG_DIR / "app.log"

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Cache for log mode to avoid repeated config reads
_log_mode_cache = None

def _get_log_mode():
    """Get log mode from the environment or configuration."""
    global _log_mode_cache
    if _log_mode_cache is not None:
        return _log_mode_cache

    env_mode = os.getenv('LOG_MODE')
    if env_mode:
        _log_mode_cache = env_mode.lower()
        return _log_mode_cache

    try:
        from deeplx_bridge.config import load_config
    except ImportError:
        # Config module is still initializing; do not cache this answer
        return 'info'

    config = load_config()
    _log_mode_cache = str(config.get('log_mode', 'info')).lower()
    return _log_mode_cache

def _make_file_handler(log_format: logging.Formatter) -> logging.FileHandler:
    LOG_DIR.mkdir(exist_ok=True)
    f_handler = logging.FileHandler(LOG_FILE, encoding='utf-8')
    f_handler.setLevel(logging.DEBUG)
    f_handler.setFormatter(log_format)
    return f_handler

def _levels_for(log_mode: str):
    if log_mode == 'debug':
        return logging.DEBUG, logging.DEBUG
    if log_mode == 'off':
        # Higher than CRITICAL disables everything
        return logging.CRITICAL + 1, logging.CRITICAL + 1
    return logging.INFO, logging.INFO

def _apply_log_mode(logger: logging.Logger, log_mode: str, log_format: logging.Formatter):
    logger_level, console_level = _levels_for(log_mode)
    logger.setLevel(logger_level)

    has_file_handler = any(isinstance(h, logging.FileHandler) for h in logger.handlers)

    # Add or remove FileHandler based on log_mode
    if log_mode != 'off' and not has_file_handler:
        logger.addHandler(_make_file_handler(log_format))
    elif log_mode == 'off' and has_file_handler:
        handlers_to_remove = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
        for handler in handlers_to_remove:
            handler.close()
            logger.removeHandler(handler)

    for handler in logger.handlers:
        if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
            handler.setLevel(console_level)

def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)

    log_mode = _get_log_mode()
    log_format = logging.Formatter(LOG_FORMAT)

    # Prevent duplicate handlers if logger already configured
    if logger.handlers:
        _apply_log_mode(logger, log_mode, log_format)
        return logger

    logger_level, console_level = _levels_for(log_mode)
    logger.setLevel(logger_level)

    if log_mode != 'off':
        logger.addHandler(_make_file_handler(log_format))

        c_handler = logging.StreamHandler()
        c_handler.setLevel(console_level)
        c_handler.setFormatter(log_format)
        logger.addHandler(c_handler)

    return logger
