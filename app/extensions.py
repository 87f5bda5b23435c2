"""
Modulo che contiene le estensioni Flask condivise (es. db, logger, ecc.).
"""

import json
import logging
import os
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Any, Dict

from flask import Flask
from flask_sqlalchemy import SQLAlchemy

# Istanza globale di SQLAlchemy, sarà inizializzata in create_app()
db = SQLAlchemy()


class JsonFormatter(logging.Formatter):
    """
    Formatter personalizzato che produce log in formato JSON.

    Campi principali:
    - timestamp: ISO 8601
    - level: livello di log (INFO, ERROR, ecc.)
    - logger: nome del logger
    - module: modulo sorgente
    - message: messaggio di log
    - extra: eventuali campi extra passati come extra={...}
    """

    # Attributi standard del LogRecord da non riportare tra gli extra
    standard_attrs = {
        "name", "msg", "args", "levelname", "levelno", "pathname", "filename",
        "module", "exc_info", "exc_text", "stack_info", "lineno", "funcName",
        "created", "msecs", "relativeCreated", "thread", "threadName",
        "processName", "process", "taskName", "message", "asctime",
    }

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        log_record: Dict[str, Any] = {
            "timestamp": timestamp.isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)

        extra_fields = {
            key: value
            for key, value in record.__dict__.items()
            if key not in self.standard_attrs
        }
        if extra_fields:
            log_record["extra"] = extra_fields

        return json.dumps(log_record, ensure_ascii=False, default=str)


def init_extensions(app: Flask) -> None:
    """
    Inizializza tutte le estensioni collegate all'app Flask.

    Questa funzione viene chiamata da create_app().
    """
    db.init_app(app)
    _init_logging(app)


def _init_logging(app: Flask) -> None:
    """
    Configura il logging applicativo:

    - handler su file con RotatingFileHandler
    - handler su console (stream)
    - formatter JSON strutturato

    Questo setup è pensato per supportare:
    - import DDT (pagine estratte, errori OCR/AI, anagrafiche create)
    - creazione e pianificazione delle spedizioni
    - errori DB
    """
    log_dir = app.config.get("LOG_DIR")
    log_file_name = app.config.get("LOG_FILE_NAME", "app.log")
    log_level_name = app.config.get("LOG_LEVEL", "INFO")

    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.join(log_dir, log_file_name)

    log_level = getattr(logging, log_level_name.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Evita di aggiungere handler duplicati se create_app viene chiamata più volte (es. in test)
    if not getattr(root_logger, "_json_logging_configured", False):
        json_formatter = JsonFormatter()

        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=5 * 1024 * 1024,  # 5 MB
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(json_formatter)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_level)
        console_handler.setFormatter(json_formatter)

        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)

        root_logger.addHandler(file_handler)
        root_logger.addHandler(console_handler)
        root_logger._json_logging_configured = True  # type: ignore[attr-defined]

    app.logger.setLevel(log_level)

    app.logger.info(
        "Logging JSON inizializzato.",
        extra={
            "component": "logging",
            "log_path": log_path,
            "level": log_level_name,
        },
    )
