"""DTO condivisi dai servizi (payload, schema estrazione DDT, candidati import)."""

from .payloads import (
    AssignPayload,
    AutistaPayload,
    CommittentePayload,
    DestinatarioPayload,
    GiroPayload,
    MezzoPayload,
    SpedizionePayload,
    StatoPayload,
)
from .ddt_data import DDTData, DDTDestinatario
from .import_candidate import (
    CandidateMetadata,
    ImportCandidate,
    STATUS_ERROR,
    STATUS_PENDING,
    STATUS_SAVED,
)
from .summary_filters import SummaryFilters

__all__ = [
    "AssignPayload",
    "AutistaPayload",
    "CommittentePayload",
    "DestinatarioPayload",
    "GiroPayload",
    "MezzoPayload",
    "SpedizionePayload",
    "StatoPayload",
    "DDTData",
    "DDTDestinatario",
    "CandidateMetadata",
    "ImportCandidate",
    "STATUS_ERROR",
    "STATUS_PENDING",
    "STATUS_SAVED",
    "SummaryFilters",
]
