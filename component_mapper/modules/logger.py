# component_mapper/modules/logger.py
import os
import datetime
import threading
import json

from rich.console import Console

from component_mapper.modules.config import config


class Logger:
    LEVELS = {
        "debug": 10,
        "info": 20,
        "success": 25,
        "warning": 30,
        "error": 40,
    }

    LEVEL_STYLES = {
        "DEBUG": "bright_black",
        "INFO": "blue",
        "SUCCESS": "green",
        "WARNING": "yellow",
        "ERROR": "bold red",
    }

    def __init__(self, name="component-mapper", console=None):
        self.name = name
        self.log_file = config.get("logging", "log_file", fallback="component-mapper.log")
        self.color_output = config.getboolean("logging", "color_output", fallback=True)
        self.log_to_file = config.getboolean("logging", "log_to_file", fallback=False)
        self.log_to_console = config.getboolean("logging", "log_to_console", fallback=True)
        self.use_utc = config.getboolean("logging", "timestamp_utc", fallback=False)
        self.log_format = config.get("logging", "log_format", fallback="text").lower()
        self.max_log_size_kb = config.getint("logging", "max_log_size_kb", fallback=0)

        self.set_level(config.get("logging", "level", fallback="info"))

        if self.log_to_file:
            self._ensure_dir(self.log_file)

        self.console = console or Console(stderr=True, no_color=not self.color_output, highlight=False)
        self._lock = threading.Lock()

    def set_level(self, level):
        self.min_level = self.LEVELS.get(str(level).lower(), 20)

    def _ensure_dir(self, filepath):
        dirpath = os.path.dirname(filepath)
        if not dirpath:
            return
        try:
            os.makedirs(dirpath, exist_ok=True)
        except OSError as e:
            self.console.print(f"Logger: could not create log directory {dirpath}: {e}", markup=False)

    def _get_timestamp(self):
        if self.use_utc:
            now = datetime.datetime.now(datetime.timezone.utc)
        else:
            now = datetime.datetime.now()
        return now.strftime("%Y-%m-%d %H:%M:%S")

    def _rotate_if_needed(self, filepath):
        if self.max_log_size_kb <= 0:
            return
        if os.path.exists(filepath) and os.path.getsize(filepath) > self.max_log_size_kb * 1024:
            rotated = filepath + ".1"
            try:
                if os.path.exists(rotated):
                    os.remove(rotated)
                os.rename(filepath, rotated)
            except OSError as e:
                self.console.print(f"Logger: could not rotate {filepath}: {e}", markup=False)

    def _write_file(self, message):
        if not self.log_to_file:
            return
        self._rotate_if_needed(self.log_file)
        try:
            with open(self.log_file, "a", encoding="utf-8") as f:
                f.write(message + "\n")
        except OSError as e:
            self.console.print(f"Logger: could not write {self.log_file}: {e}", markup=False)

    def _format_text(self, level, message):
        return f"[{self._get_timestamp()}] [{self.name}] [{level}] {message}"

    def _format_json(self, level, message):
        return json.dumps({
            "timestamp": self._get_timestamp(),
            "logger": self.name,
            "level": level,
            "message": message
        })

    def format_message(self, level, message):
        if self.log_format == "json":
            return self._format_json(level, message)
        return self._format_text(level, message)

    def _log_to_console(self, formatted, level):
        if not self.log_to_console:
            return
        style = None
        if self.color_output and self.log_format == "text":
            style = self.LEVEL_STYLES.get(level)
        self.console.print(formatted, style=style, markup=False, highlight=False, soft_wrap=True)

    def should_log(self, level):
        return self.LEVELS.get(level.lower(), 0) >= self.min_level

    def log(self, level, message):
        level = level.upper()
        if not self.should_log(level):
            return

        formatted = self.format_message(level, message)
        with self._lock:
            self._log_to_console(formatted, level)
            self._write_file(formatted)

    def debug(self, message):
        self.log("DEBUG", message)

    def info(self, message):
        self.log("INFO", message)

    def success(self, message):
        self.log("SUCCESS", message)

    def warning(self, message):
        self.log("WARNING", message)

    def error(self, message):
        self.log("ERROR", message)
