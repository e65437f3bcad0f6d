import logging
from collections import deque
from typing import Callable


class GraphLogger:

    _max_msgs: int = 20

    def __init__(self, name):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.DEBUG)

        # Prevent double handlers when modules reload
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter("[CGRAPH] [%(levelname)s] %(message)s")
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

        self.logger.propagate = False

        self.info_buffer = deque(maxlen=GraphLogger._max_msgs)

    def debug(self, msg):
        self.logger.debug(msg)

    def info(self, msg):
        self.logger.info(msg)
        self.info_buffer.append(("INFO", str(msg)))

    def warn(self, msg):
        self.logger.warning(msg)
        self.info_buffer.append(("WARNING", str(msg)))

    def error(self, msg, exc: Exception = None):
        if exc is not None:
            self.logger.error(msg, exc_info=exc)
            self.info_buffer.append(("ERROR", f"{msg}: {exc}"))
        else:
            self.logger.error(msg)
            self.info_buffer.append(("ERROR", str(msg)))

    def clear(self):
        self.info_buffer.clear()

    def coalesce(self, report: Callable[[str, str], None]) -> int:
        """Hand buffered messages to a UI callback, newest first."""
        count = 0
        while self.info_buffer:
            lvl, msg = self.info_buffer.pop()
            for line in str(msg).split("\n"):
                report(lvl, line.strip())
            count += 1
        return count


LOGGER = GraphLogger("ComplexGraph")
