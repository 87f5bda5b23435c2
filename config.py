"""
Modulo di configurazione per l'applicazione Flask.
"""

import os
from pathlib import Path


BASE_DIR = Path(__file__).resolve().parent


class Config:
    """Configurazione base, comune a tutti gli ambienti."""

    # Chiave segreta: in produzione deve essere sovrascritta da variabile d'ambiente
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # --- CONFIGURAZIONE DATABASE MYSQL --------------------------------------
    DB_USER = os.environ.get("DB_USER", "trasporti")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "trasporti")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = os.environ.get("DB_PORT", "3306")
    DB_NAME = os.environ.get("DB_NAME", "gestionale_trasporti")

    # Stringa di connessione composta in modo parametrico
    DEFAULT_DB_URL = (
        f"mysql+pymysql://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
    )

    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", DEFAULT_DB_URL)
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # --- UPLOAD DDT ---------------------------------------------------------
    # Oltre questa soglia werkzeug risponde 413 prima di leggere il body
    MAX_CONTENT_LENGTH = 25 * 1024 * 1024
    DDT_IMPORT_MAX_BYTES = int(os.environ.get("DDT_IMPORT_MAX_BYTES", 25 * 1024 * 1024))
    DDT_ALLOWED_MIME_TYPES = (
        "application/pdf",
        "image/jpeg",
        "image/jpg",
        "image/png",
    )

    # --- OCR -----------------------------------------------------------------
    OCR_LANG = os.environ.get("OCR_LANG", "ita")
    OCR_PDF_MAX_PAGES = int(os.environ.get("OCR_PDF_MAX_PAGES", "20"))
    TESSERACT_CMD = os.environ.get("TESSERACT_CMD")
    POPPLER_PATH = os.environ.get("POPPLER_PATH")

    # --- AI (estrazione campi DDT) -------------------------------------------
    AI_INTEGRATIONS_OPENAI_BASE_URL = os.environ.get("AI_INTEGRATIONS_OPENAI_BASE_URL")
    AI_INTEGRATIONS_OPENAI_API_KEY = os.environ.get("AI_INTEGRATIONS_OPENAI_API_KEY")
    AI_MODEL = os.environ.get("AI_MODEL", "gpt-5")
    AI_MAX_COMPLETION_TOKENS = int(os.environ.get("AI_MAX_COMPLETION_TOKENS", "2048"))

    # --- UTENTE DI DEFAULT (seed) ----------------------------------------------
    DEFAULT_USERNAME = os.environ.get("DEFAULT_USERNAME", "ufficio")
    DEFAULT_PASSWORD = os.environ.get("DEFAULT_PASSWORD", "password123")

    # --- LOGGING -------------------------------------------------------------
    LOG_DIR = os.environ.get("LOG_DIR", str(BASE_DIR / "logs"))
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    LOG_FILE_NAME = os.environ.get("LOG_FILE_NAME", "app.log")


class DevConfig(Config):
    """Configurazione per ambiente di sviluppo."""
    DEBUG = True
    ENV = "development"
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG")


class ProdConfig(Config):
    """Configurazione per ambiente di produzione."""
    DEBUG = False
    ENV = "production"
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


class TestConfig(Config):
    """Configurazione per la suite pytest (SQLite in memoria)."""
    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    LOG_LEVEL = "WARNING"
    AI_INTEGRATIONS_OPENAI_API_KEY = "test-key"
