"""
Eccezioni di dominio condivise dai servizi.

Le route API le traducono in risposte JSON (409).
"""


class ConflictError(Exception):
    """Violazione di un vincolo di unicità o di integrità referenziale."""
