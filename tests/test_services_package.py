"""
Il pacchetto servizi espone solo ciò che le route e la CLI usano.
"""

import app.services as services
from app.repositories.base import SqlAlchemyRepository
from app.services.dto import CandidateMetadata, ImportCandidate


def test_public_surface():
    assert sorted(services.__all__) == ["ConflictError", "get_setting"]


def test_candidates_are_serialized_only_to_wire_format():
    candidate = ImportCandidate(page_number=2, metadata=CandidateMetadata(destinatario_error="cap"))

    assert candidate.to_dict() == {
        "pageNumber": 2,
        "metadata": {
            "committenteMapped": False,
            "destinatarioMapped": False,
            "destinatarioCreated": False,
            "destinatarioError": "cap",
        },
    }
    assert not hasattr(ImportCandidate, "from_dict")


def test_repository_has_no_manual_flush():
    assert not hasattr(SqlAlchemyRepository, "flush")
