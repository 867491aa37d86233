"""
Structured Logging for the Long Range trainer.
Console output stays human readable while the rotating log files carry a
JSON payload with the session id, the category and any extra fields.
"""
import logging
import logging.handlers
import time
import json
import traceback
from pathlib import Path
from typing import Optional, Dict, Any, Union
from enum import Enum, auto
from contextlib import contextmanager
from datetime import datetime
import uuid
class LogLevel(Enum):
    """Log levels, including a TRACE level below DEBUG."""
    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50
class LogCategory(Enum):
    """Categories attached to every structured record."""
    SYSTEM = auto()
    BALLISTICS = auto()
    ENVIRONMENT = auto()
    SCORING = auto()
    SESSION = auto()
    USER_ACTION = auto()
    CONFIG = auto()
class StructuredFormatter(logging.Formatter):
    """Formatter that appends structured fields as JSON."""
    def __init__(self, include_json=True):
        super().__init__()
        self.include_json = include_json
    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).isoformat()
        basic_line = f"[{timestamp}] {record.levelname:8} {record.name}: {record.getMessage()}"
        if not self.include_json:
            return basic_line
        structured_data = {}
        for key, value in record.__dict__.items():
            if key.startswith('field_') or key in ['category', 'session_id']:
                structured_data[key] = value
        if record.exc_info:
            structured_data['exception'] = {
                'type': record.exc_info[0].__name__,
                'message': str(record.exc_info[1]),
                'traceback': traceback.format_exception(*record.exc_info)
            }
        structured_data['location'] = {
            'filename': record.filename,
            'line': record.lineno,
            'function': record.funcName
        }
        json_data = json.dumps(structured_data, default=str, ensure_ascii=False)
        return f"{basic_line} | {json_data}"
class RangeLogger:
    """Application logger with category and field support."""
    def __init__(self, name: str = "longrange", log_dir: Optional[Path] = None,
                 console_level: int = logging.INFO):
        self.name = name
        self.session_id = str(uuid.uuid4())[:8]
        if log_dir is None:
            log_dir = Path.home() / "LongRange" / "logs"
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self._setup_handlers(console_level)
        self.debug("Logging initialized", category=LogCategory.SYSTEM,
                   session_id=self.session_id, log_dir=str(self.log_dir))
    def _setup_handlers(self, console_level: int):
        """Attach console, main file and error file handlers."""
        self.logger = logging.getLogger(self.name)
        self.logger.setLevel(LogLevel.TRACE.value)
        self.logger.propagate = False
        for handler in list(self.logger.handlers):
            handler.close()
        self.logger.handlers.clear()
        console_handler = logging.StreamHandler()
        console_handler.setLevel(console_level)
        console_handler.setFormatter(StructuredFormatter(include_json=False))
        self.logger.addHandler(console_handler)
        file_handler = logging.handlers.RotatingFileHandler(
            self.log_dir / f"{self.name}.log", maxBytes=5*1024*1024, backupCount=3,
            encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(StructuredFormatter(include_json=True))
        self.logger.addHandler(file_handler)
        error_handler = logging.handlers.RotatingFileHandler(
            self.log_dir / f"{self.name}_errors.log", maxBytes=1024*1024, backupCount=3,
            encoding="utf-8"
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(StructuredFormatter(include_json=True))
        self.logger.addHandler(error_handler)
    def _log(self, level: int, message: str, category: Optional[Union[LogCategory, str]] = None,
             exception: Optional[Exception] = None, **kwargs):
        if isinstance(category, LogCategory):
            category_name = category.name
        elif category:
            category_name = str(category).upper()
        else:
            category_name = 'GENERAL'
        extra = {'session_id': self.session_id, 'category': category_name}
        for key, value in kwargs.items():
            if not key.startswith('_'):
                extra[f'field_{key}'] = value
        if exception:
            self.logger.log(level, message, exc_info=(type(exception), exception, exception.__traceback__), extra=extra)
        else:
            self.logger.log(level, message, extra=extra)
    def trace(self, message: str, category: Optional[LogCategory] = None, **kwargs):
        self._log(LogLevel.TRACE.value, message, category, **kwargs)
    def debug(self, message: str, category: Optional[LogCategory] = None, **kwargs):
        self._log(LogLevel.DEBUG.value, message, category, **kwargs)
    def info(self, message: str, category: Optional[LogCategory] = None, **kwargs):
        self._log(LogLevel.INFO.value, message, category, **kwargs)
    def warning(self, message: str, category: Optional[LogCategory] = None, **kwargs):
        self._log(LogLevel.WARNING.value, message, category, **kwargs)
    def error(self, message: str, exception: Optional[Exception] = None,
              category: Optional[LogCategory] = None, **kwargs):
        self._log(LogLevel.ERROR.value, message, category, exception, **kwargs)
    def critical(self, message: str, exception: Optional[Exception] = None,
                 category: Optional[LogCategory] = None, **kwargs):
        self._log(LogLevel.CRITICAL.value, message, category, exception, **kwargs)
    def log_user_action(self, action: str, details: Optional[Dict[str, Any]] = None):
        """Record a player action such as a turret click or a fire command."""
        log_data = {'action': action, 'timestamp': time.time()}
        if details:
            log_data.update(details)
        self._log(LogLevel.INFO.value, f"USER ACTION: {action}",
                  LogCategory.USER_ACTION, **log_data)
    def log_ballistics_calculation(self, calculation_type: str, inputs: Dict[str, Any],
                                   results: Dict[str, Any]):
        """Audit trail for solver runs."""
        self._log(LogLevel.INFO.value, f"BALLISTICS: {calculation_type}",
                  LogCategory.BALLISTICS, inputs=inputs, results=results)
    def log_environment(self, distance: float, wind_speed: float, wind_direction: float,
                        temperature: float, humidity: Optional[float] = None, **kwargs):
        """Log a freshly generated range scenario."""
        env_data = {
            'distance': distance,
            'wind_speed': wind_speed,
            'wind_direction': wind_direction,
            'temperature': temperature,
        }
        if humidity is not None:
            env_data['humidity'] = humidity
        env_data.update(kwargs)
        self._log(LogLevel.INFO.value, "ENVIRONMENT GENERATED", LogCategory.ENVIRONMENT, **env_data)
    @contextmanager
    def timer(self, operation: str, log_result: bool = True):
        """Context manager for timing operations."""
        start_time = time.time()
        operation_id = str(uuid.uuid4())[:8]
        self.trace(f"Starting operation: {operation}",
                   category=LogCategory.SYSTEM, operation_id=operation_id)
        try:
            yield operation_id
        finally:
            duration = time.time() - start_time
            if log_result:
                self.debug(f"Completed operation: {operation} in {duration:.3f}s",
                           category=LogCategory.SYSTEM, operation_id=operation_id,
                           duration=duration)
    def get_session_id(self) -> str:
        return self.session_id
# Global logger instance
_global_logger: Optional[RangeLogger] = None
def get_logger() -> RangeLogger:
    """Get the global logger instance."""
    global _global_logger
    if _global_logger is None:
        _global_logger = RangeLogger()
    return _global_logger
def setup_logger(name: str = "longrange", log_dir: Optional[Path] = None,
                 debug: bool = False) -> RangeLogger:
    """Set up and return the global logger."""
    global _global_logger
    console_level = logging.DEBUG if debug else logging.INFO
    _global_logger = RangeLogger(name, log_dir, console_level=console_level)
    return _global_logger
class LoggableMixin:
    """Mixin class to add logging capabilities to other classes."""
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._logger = get_logger()
        self._module_name = self.__class__.__name__
    def log_trace(self, message: str, **kwargs):
        self._logger.trace(f"[{self._module_name}] {message}", **kwargs)
    def log_debug(self, message: str, **kwargs):
        self._logger.debug(f"[{self._module_name}] {message}", **kwargs)
    def log_info(self, message: str, **kwargs):
        self._logger.info(f"[{self._module_name}] {message}", **kwargs)
    def log_warning(self, message: str, **kwargs):
        self._logger.warning(f"[{self._module_name}] {message}", **kwargs)
    def log_error(self, message: str, exception: Optional[Exception] = None, **kwargs):
        self._logger.error(f"[{self._module_name}] {message}", exception=exception, **kwargs)
    def log_user_action(self, action: str, details: Optional[Dict[str, Any]] = None):
        action_details = {'module': self._module_name}
        if details:
            action_details.update(details)
        self._logger.log_user_action(action, action_details)
