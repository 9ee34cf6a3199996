import json
import sys
from datetime import datetime
from enum import Enum
from typing import Optional


class LogLevel(Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    SUCCESS = "SUCCESS"


class Colors:
    """ANSI color codes for console output"""
    RESET = '\033[0m'
    BOLD = '\033[1m'
    DIM = '\033[2m'

    WHITE = '\033[37m'
    BRIGHT_BLACK = '\033[90m'
    BRIGHT_RED = '\033[91m'
    BRIGHT_GREEN = '\033[92m'
    BRIGHT_YELLOW = '\033[93m'
    BRIGHT_BLUE = '\033[94m'
    BRIGHT_CYAN = '\033[96m'


class MovesbookLogger:
    """Colorized console logger for lifecycle events (plans created, deleted, defaults saved)"""

    def __init__(self, service_name: str = "MOVESBOOK", enable_colors: bool = True):
        self.service_name = service_name.upper()
        self.enable_colors = enable_colors

        self.level_colors = {
            LogLevel.DEBUG: Colors.BRIGHT_CYAN,
            LogLevel.INFO: Colors.BRIGHT_BLUE,
            LogLevel.WARNING: Colors.BRIGHT_YELLOW,
            LogLevel.ERROR: Colors.BRIGHT_RED,
            LogLevel.SUCCESS: Colors.BRIGHT_GREEN,
        }

        self.level_emojis = {
            LogLevel.DEBUG: "🔍",
            LogLevel.INFO: "ℹ️",
            LogLevel.WARNING: "⚠️",
            LogLevel.ERROR: "❌",
            LogLevel.SUCCESS: "✅",
        }

    def _get_timestamp(self) -> str:
        return datetime.now().strftime("%H:%M:%S.%f")[:-3]

    def _colorize(self, text: str, color: str) -> str:
        if not self.enable_colors:
            return text
        return f"{color}{text}{Colors.RESET}"

    def _format_message(self, level: LogLevel, message: str, context: Optional[str] = None) -> str:
        """Format: [TIMESTAMP] emoji [SERVICE/CONTEXT] [LEVEL] message"""
        timestamp = self._get_timestamp()
        emoji = self.level_emojis.get(level, "")
        level_color = self.level_colors.get(level, Colors.WHITE)

        level_text = self._colorize(f"[{level.value}]", level_color + Colors.BOLD)
        service_context = self.service_name
        if context:
            service_context += f"/{context.upper()}"

        service_text = self._colorize(f"[{service_context}]", Colors.BRIGHT_BLACK)
        timestamp_text = self._colorize(f"[{timestamp}]", Colors.DIM)

        return f"{timestamp_text} {emoji} {service_text} {level_text} {message}"

    def _log(self, level: LogLevel, message: str, context: Optional[str] = None, **kwargs):
        formatted_message = self._format_message(level, message, context)

        if kwargs:
            extras = []
            for key, value in kwargs.items():
                if isinstance(value, (dict, list)):
                    value_str = json.dumps(value, default=str, separators=(',', ':'))
                    if len(value_str) > 100:
                        value_str = value_str[:100] + "..."
                else:
                    value_str = str(value)
                extras.append(f"{key}={value_str}")
            formatted_message += self._colorize(f" | {', '.join(extras)}", Colors.DIM)

        print(formatted_message, file=sys.stdout)
        sys.stdout.flush()

    def debug(self, message: str, context: Optional[str] = None, **kwargs):
        self._log(LogLevel.DEBUG, message, context, **kwargs)

    def info(self, message: str, context: Optional[str] = None, **kwargs):
        self._log(LogLevel.INFO, message, context, **kwargs)

    def warning(self, message: str, context: Optional[str] = None, **kwargs):
        self._log(LogLevel.WARNING, message, context, **kwargs)

    def error(self, message: str, context: Optional[str] = None, **kwargs):
        self._log(LogLevel.ERROR, message, context, **kwargs)

    def success(self, message: str, context: Optional[str] = None, **kwargs):
        self._log(LogLevel.SUCCESS, message, context, **kwargs)


# Global logger instances for different areas
plan_logger = MovesbookLogger("PLANS")
defaults_logger = MovesbookLogger("DEFAULTS")
auth_logger = MovesbookLogger("AUTH")
