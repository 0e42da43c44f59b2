import logging
import logging.config
import os


def setup_logging(level: str = "INFO", log_file: str = ""):
    """Configures logging for the application."""
    level = (level or "INFO").upper()
    handlers = {
        'default': {
            'level': level,
            'formatter': 'standard',
            'class': 'logging.StreamHandler',
        },
    }
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers['file'] = {
            'level': level,
            'formatter': 'standard',
            'class': 'logging.FileHandler',
            'filename': log_file,
            'encoding': 'utf-8',
        }

    logging_config = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'standard': {
                'format': '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
            },
        },
        'handlers': handlers,
        'loggers': {
            '': {  # root logger
                'handlers': list(handlers),
                'level': level,
                'propagate': False
            },
            'campus_signage': {
                'handlers': list(handlers),
                'level': level,
                'propagate': False
            },
        }
    }

    logging.config.dictConfig(logging_config)
