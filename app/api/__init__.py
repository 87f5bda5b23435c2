"""
Pacchetto per le API JSON usate dal frontend.

Contiene:
- api_auth_bp          -> login
- api_stats_bp         -> contatori dashboard
- api_committenti_bp, api_destinatari_bp, api_autisti_bp, api_mezzi_bp
                       -> anagrafiche
- api_giri_bp          -> giri di consegna
- api_spedizioni_bp    -> spedizioni (creazione, assegnazione, stato)
- api_import_ddt_bp    -> import DDT con OCR + AI
- api_riepilogo_bp     -> riepilogo committenti ed export CSV
"""

from .api_auth import api_auth_bp
from .api_stats import api_stats_bp
from .api_committenti import api_committenti_bp
from .api_destinatari import api_destinatari_bp
from .api_autisti import api_autisti_bp
from .api_mezzi import api_mezzi_bp
from .api_giri import api_giri_bp
from .api_spedizioni import api_spedizioni_bp
from .api_import_ddt import api_import_ddt_bp
from .api_riepilogo import api_riepilogo_bp

__all__ = [
    "api_auth_bp",
    "api_stats_bp",
    "api_committenti_bp",
    "api_destinatari_bp",
    "api_autisti_bp",
    "api_mezzi_bp",
    "api_giri_bp",
    "api_spedizioni_bp",
    "api_import_ddt_bp",
    "api_riepilogo_bp",
]
