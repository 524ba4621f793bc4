"""
Colored console logging and the function-call tracing decorator used by the services
"""
import os
import logging
import colorlog
import functools
import inspect
import time
from .config import LOG_COLORS, LOG_LEVEL


class CustomLogger:
    """
    Custom logger class to handle detailed function logging with terminal output only
    """
    def __init__(self, name='CourseHub'):
        # Create logger
        self.logger = logging.getLogger(name)
        self.logger.setLevel(LOG_LEVEL)

        # Guard against duplicate handlers when the module is imported twice
        if not self.logger.handlers:
            console_handler = colorlog.StreamHandler()
            console_handler.setLevel(LOG_LEVEL)
            console_handler.setFormatter(build_formatter())
            self.logger.addHandler(console_handler)

    def log_function_call(self, func=None, log_params=True):
        """
        Decorator to log function calls with timing and parameters.
        Use log_function_call(log_params=False) for functions taking credentials or tokens.
        """
        if func is None:
            return functools.partial(self.log_function_call, log_params=log_params)

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            func_name = func.__name__
            file_name = inspect.getfile(func)
            line_no = inspect.getsourcelines(func)[1]

            self.logger.info(
                f"→ Entering {func_name} "
                f"[{os.path.basename(file_name)}:{line_no}]"
            )

            if not log_params:
                self.logger.debug("Parameters: <redacted>")
            elif args or kwargs:
                params = []
                if args:
                    params.append(f"args: {args}")
                if kwargs:
                    params.append(f"kwargs: {kwargs}")
                self.logger.debug(f"Parameters: {', '.join(params)}")

            start_time = time.time()
            try:
                result = func(*args, **kwargs)
                execution_time = (time.time() - start_time) * 1000

                self.logger.info(
                    f"← Completed {func_name} in {execution_time:.2f}ms"
                )
                return result

            except Exception as e:
                execution_time = (time.time() - start_time) * 1000
                self.logger.error(
                    f"✕ Error in {func_name} after {execution_time:.2f}ms: "
                    f"{str(e)}"
                )
                raise

        return wrapper


def build_formatter():
    """Create the detailed color formatter shared by every console handler"""
    return colorlog.ColoredFormatter(
        "%(log_color)s[%(asctime)s] %(levelname)-8s%(reset)s "
        "%(blue)s%(name)s %(bold_white)s%(funcName)s:%(lineno)d%(reset)s - "
        "%(message_log_color)s%(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        log_colors=LOG_COLORS,
        secondary_log_colors={
            'message': {
                'DEBUG': 'cyan',
                'INFO': 'white',
                'WARNING': 'yellow',
                'ERROR': 'red',
                'CRITICAL': 'red,bg_white',
            }
        }
    )


def setup_logging(level=None):
    """Configure colored logging on the root logger"""
    root = logging.getLogger()
    root.setLevel(level or LOG_LEVEL)
    if not any(isinstance(h, colorlog.StreamHandler) for h in root.handlers):
        handler = colorlog.StreamHandler()
        handler.setFormatter(build_formatter())
        root.addHandler(handler)
    # httpx logs every Supabase request at INFO
    logging.getLogger('httpx').setLevel(logging.WARNING)


# Initialize the custom logger
custom_logger = CustomLogger()
