'''
A Logger module for logging.

This module provides a Logger class to handle logging messages to a file
and optionally to the console. The logging levels supported include
`debug`, `info`, `warning`, `error`, and `critical` (case-insensitive).

Classes:
    Logger: Logs information to logfile and console at desired levels.

Example usage:

    # set up the Logger instance
    logger = utils.Logger(name='backbone',
                          log_file='./logs/backbone.log',
                          log_lvl=logging.DEBUG,
                          console_lvl=logging.WARNING)

    # log messages with varying log levels
    logger.log('info', 'Built MobileNet 0.75 at output stride 16')
    logger.log('debug', 'block  0: conv2d stride=2 rate=1 output_stride=2')

    # close the logger
    logger.close()

    # example lines in the resulting log file
    """
    2025-03-14 03:14:15,926-backbone-INFO - Built MobileNet 0.75 ...
    """
'''

# standard imports
import logging
import os

class Logger():
    '''
    A class to handle logging messages to a file and optionally to the
    console.

    Attributes:
        logger (logging.Logger): The logger instance.
    '''

    def __init__(
            self,
            name: str | None=None,
            log_file: str | None=None,
            log_lvl: int=logging.DEBUG,
            console_lvl: int | None=logging.INFO
        ):
        '''
        Initializes the Logger instance.

        If `name` is not provided, the module file name is used and if
        `log_file` is not provided, a proj.log file will be created
        under `./logs` of the current working directory.

        Args:
            name (str, optional): Name of the logger. If None use the
                module name.
            log_file (str, optional): Path to the log file.
            log_lvl (int, optional): Logging level for the file handler.
            console_lvl (int, optional): Logging level for the console
                handler. If None, console logging is disabled.
        '''

        # gather arguments
        if name is None:
            name = os.path.basename(__file__)
        if log_file is None:
            default_dirpath = f'{os.getcwd()}/logs'
            log_file = f'{default_dirpath}/proj.log' # default log file
        # make sure dir exists
        log_dir = os.path.dirname(os.path.abspath(log_file))
        os.makedirs(log_dir, exist_ok=True)

        # assign attributes for potential access
        self.name = name
        self.log_file = log_file

        # init logger attribute
        self.logger = logging.getLogger(name)
        # set log level accordingly
        self.logger.setLevel(log_lvl)
        # prevent log messages from propagating to the root logger
        self.logger.propagate = False

        # handlers attached by this wrapper, removed again on close
        self._handlers: list[logging.Handler] = []
        formatter = logging.Formatter(
            '%(asctime)s-%(name)s-%(levelname)s\t- %(message)s')

        # one file handler per log file; foreign handlers do not count
        log_path = os.path.abspath(log_file)
        if not any(
            isinstance(h, logging.FileHandler) and h.baseFilename == log_path
            for h in self.logger.handlers
        ):
            # delay=True to create file upon first log
            file_handler = logging.FileHandler(log_file, delay=True)
            file_handler.setLevel(log_lvl)
            file_handler.setFormatter(formatter)
            self._add_handler(file_handler)

        # add a console handler if chosen to and none is attached yet
        if console_lvl is not None and not any(
            type(h) is logging.StreamHandler # pylint: disable=unidiomatic-typecheck
            for h in self.logger.handlers
        ):
            console_handler = logging.StreamHandler()
            console_handler.setLevel(console_lvl)
            console_handler.setFormatter(formatter)
            self._add_handler(console_handler)

    def get_child(self, suffix: str) -> 'Logger':
        '''Return a new Logger wrapper around a child logger.'''

        # build the child logging.Logger
        child_logging_logger = self.logger.getChild(suffix)

        # new wrapper without re-adding handlers
        child = object.__new__(self.__class__)  # bypass __init__
        child.name = child_logging_logger.name
        child.log_file = getattr(self, 'log_file', None)
        child.logger = child_logging_logger
        child._handlers = [] # pylint: disable=protected-access

        # child has no handlers; records propagate to the parent's
        return child

    def log(self, level: str, message: str, skip_log: bool=False) -> None:
        '''
        Logs a message with the specified logging level.

        Args:
            level (str): The logging level includes `'debug'`, `'info'`,
                `'warning'`, `'error'`, and `'critical'`.
            message (str): The message to log.
            skip_log (bool, optional): Flag whether to log or not.
        '''

        # skip logging if chooses so
        if skip_log:
            return

        # define log levels
        log_levels = {
            'debug': self.logger.debug,
            'info': self.logger.info,
            'warning': self.logger.warning,
            'error': self.logger.error,
            'critical': self.logger.critical
        }

        # case-insensitive, defaulting to 'info' if level is unrecognized
        log_method = log_levels.get(level.lower(), self.logger.info)
        log_method(message)

    def log_lines(self, level: str, lines: list[str]) -> None:
        '''Log several messages at the same level.'''

        for line in lines:
            self.log(level, line)

    def log_sep(self, sep: str='=', ln: int=90) -> None:
        '''
        Log a separator with a length of repeated string.

        Args:
            sep (str, optional): Repeats to form a separator line
                (default: `'='`).
            ln (int, optional): Length of the line (default: 90).
        '''

        self.log('INFO', sep * ln)

    def close(self) -> None:
        '''Closes the handlers attached by this instance.'''

        for handler in self._handlers:
            handler.close()
            self.logger.removeHandler(handler)
        self._handlers = []

    def _add_handler(self, handler: logging.Handler) -> None:
        self.logger.addHandler(handler)
        self._handlers.append(handler)
