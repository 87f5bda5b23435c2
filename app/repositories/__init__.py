"""
Package repositories.
Espone i Repository per l'accesso ai dati.
"""

from .committente_repo import CommittenteRepository
from .destinatario_repo import DestinatarioRepository
from .autista_repo import AutistaRepository
from .mezzo_repo import MezzoRepository
from .giro_repo import GiroRepository
from .spedizione_repo import SpedizioneRepository
from .user_repo import UserRepository

__all__ = [
    "CommittenteRepository",
    "DestinatarioRepository",
    "AutistaRepository",
    "MezzoRepository",
    "GiroRepository",
    "SpedizioneRepository",
    "UserRepository",
]
