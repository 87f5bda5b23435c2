"""
Pacchetto per i modelli SQLAlchemy.

Qui vengono esportate le classi modello principali.
"""

from .user import User
from .committente import Committente
from .destinatario import Destinatario
from .autista import Autista
from .mezzo import Mezzo
from .giro import Giro, TURNI
from .spedizione import Spedizione, STATI_SPEDIZIONE

__all__ = [
    "User",
    "Committente",
    "Destinatario",
    "Autista",
    "Mezzo",
    "Giro",
    "TURNI",
    "Spedizione",
    "STATI_SPEDIZIONE",
]
