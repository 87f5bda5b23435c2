"""
Unit of Work Pattern.
Gestisce la transazione del database atomica e l'accesso ai repository.
"""
from typing import Optional
from app.extensions import db

# Import Repositories
from app.repositories.committente_repo import CommittenteRepository
from app.repositories.destinatario_repo import DestinatarioRepository
from app.repositories.autista_repo import AutistaRepository
from app.repositories.mezzo_repo import MezzoRepository
from app.repositories.giro_repo import GiroRepository
from app.repositories.spedizione_repo import SpedizioneRepository
from app.repositories.user_repo import UserRepository

class UnitOfWork:
    def __init__(self):
        self.session = db.session
        self._committenti: Optional[CommittenteRepository] = None
        self._destinatari: Optional[DestinatarioRepository] = None
        self._autisti: Optional[AutistaRepository] = None
        self._mezzi: Optional[MezzoRepository] = None
        self._giri: Optional[GiroRepository] = None
        self._spedizioni: Optional[SpedizioneRepository] = None
        self._users: Optional[UserRepository] = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            self.rollback()
            return False
        # Flask gestisce la chiusura della sessione, non chiudere qui

    @property
    def committenti(self) -> CommittenteRepository:
        if self._committenti is None:
            self._committenti = CommittenteRepository(self.session)
        return self._committenti

    @property
    def destinatari(self) -> DestinatarioRepository:
        if self._destinatari is None:
            self._destinatari = DestinatarioRepository(self.session)
        return self._destinatari

    @property
    def autisti(self) -> AutistaRepository:
        if self._autisti is None:
            self._autisti = AutistaRepository(self.session)
        return self._autisti

    @property
    def mezzi(self) -> MezzoRepository:
        if self._mezzi is None:
            self._mezzi = MezzoRepository(self.session)
        return self._mezzi

    @property
    def giri(self) -> GiroRepository:
        if self._giri is None:
            self._giri = GiroRepository(self.session)
        return self._giri

    @property
    def spedizioni(self) -> SpedizioneRepository:
        if self._spedizioni is None:
            self._spedizioni = SpedizioneRepository(self.session)
        return self._spedizioni

    @property
    def users(self) -> UserRepository:
        if self._users is None:
            self._users = UserRepository(self.session)
        return self._users

    def commit(self):
        try:
            self.session.commit()
        except Exception:
            self.rollback()
            raise

    def rollback(self):
        self.session.rollback()
