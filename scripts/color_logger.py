import logging
import colorlog

LOG_FORMAT = '%(log_color)s[%(levelname)s] %(name)s: %(message)s'
LOG_COLORS = {
    'DEBUG': 'blue',
    'INFO': 'green',
    'WARNING': 'yellow',
    'ERROR': 'red',
    'CRITICAL': 'bold_red',
}


class ColorLogger:
    def __init__(self, name, level=logging.INFO):
        self.counters = {"INFO": 0, "WARNING": 0, "ERROR": 0, "CRITICAL": 0}

        self.logger = colorlog.getLogger(name)
        self.logger.setLevel(level)

        # builders are called repeatedly, one handler per named logger
        if not any(isinstance(h, colorlog.StreamHandler) for h in self.logger.handlers):
            handler = colorlog.StreamHandler()
            handler.setFormatter(colorlog.ColoredFormatter(LOG_FORMAT, log_colors=LOG_COLORS))
            self.logger.addHandler(handler)

        self.wrap_log_methods()

    def wrap_log_methods(self):
        levels = ["info", "warning", "error", "critical"]

        for level in levels:
            original_method = getattr(type(self.logger), level).__get__(self.logger)

            def wrapped_log_method(message, *args, orig_method=original_method, log_level=level, **kwargs):
                self.counters[log_level.upper()] += 1
                kwargs.setdefault("stacklevel", 2)
                orig_method(message, *args, **kwargs)

            setattr(self.logger, level, wrapped_log_method)

    def get_counters(self):
        return self.counters

    def get_logger(self):
        return self.logger
