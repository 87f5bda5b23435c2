"""
Test del flusso di revisione: conferma, conferma multipla, scarto, modifica.
"""

import re
from types import SimpleNamespace

from app.extensions import db
from app.models import Spedizione
from app.services.ddt_review_service import ImportReview, build_shipment_payload
from app.services.dto import STATUS_ERROR, STATUS_PENDING, STATUS_SAVED, ImportCandidate
from app.services.errors import ConflictError


def _candidate(page, committente_id=1, destinatario_id=2, **fields):
    data = {
        "dataDDT": "2024-03-05",
        "numeroDDT": f"DDT-{page}",
        "colli": 1,
        "peso": 5.0,
    }
    data.update(fields)
    if committente_id is not None:
        data["committenteId"] = committente_id
    if destinatario_id is not None:
        data["destinatarioId"] = destinatario_id
    return ImportCandidate(page_number=page, data=data)


class _FakeCreate:
    def __init__(self, fail_pages=()):
        self.payloads = []
        self.fail_pages = set(fail_pages)

    def __call__(self, payload):
        if payload["numeroDDT"] in {f"DDT-{p}" for p in self.fail_pages}:
            raise ConflictError("DDT già registrato")
        self.payloads.append(payload)
        return SimpleNamespace(id=len(self.payloads), numero_spedizione=len(self.payloads))


class TestEligibility:
    def test_complete_candidate_is_eligible(self):
        assert ImportReview.is_auto_save_eligible(_candidate(1))

    def test_missing_mapping_is_not_eligible(self):
        assert not ImportReview.is_auto_save_eligible(_candidate(1, committente_id=None))
        assert not ImportReview.is_auto_save_eligible(_candidate(1, destinatario_id=None))

    def test_page_error_is_not_eligible(self):
        assert not ImportReview.is_auto_save_eligible(ImportCandidate(page_number=1, error="Nessun dato riconosciuto"))

    def test_saved_is_not_eligible(self):
        candidate = _candidate(1)
        candidate.status = STATUS_SAVED
        assert not ImportReview.is_auto_save_eligible(candidate)


class TestConfirm:
    def test_confirm_builds_shipment_payload(self):
        create = _FakeCreate()
        review = ImportReview([_candidate(3)], create_shipment=create)

        assert review.confirm(3) is True
        assert create.payloads[0] == {
            "committenteId": 1,
            "destinatarioId": 2,
            "dataDDT": "2024-03-05",
            "numeroDDT": "DDT-3",
            "colli": 1,
            "pesoKg": 5.0,
            "contrassegno": None,
            "note": "Importato da DDT - pagina 3",
            "stato": "INSERITA",
            "giroId": None,
        }
        assert review.get(3).status == STATUS_SAVED

    def test_second_confirm_is_a_no_op(self):
        create = _FakeCreate()
        review = ImportReview([_candidate(1)], create_shipment=create)

        assert review.confirm(1) is True
        assert review.confirm(1) is False
        assert len(create.payloads) == 1

    def test_missing_document_number_is_synthesized(self):
        payload = build_shipment_payload(_candidate(2, numeroDDT=None))
        assert re.fullmatch(r"DDT-AUTO-\d+-P2", payload["numeroDDT"])

    def test_unresolved_candidate_is_not_committed(self):
        create = _FakeCreate()
        review = ImportReview([_candidate(1, destinatario_id=None)], create_shipment=create)

        assert review.confirm(1) is False
        assert create.payloads == []
        assert review.get(1).status == STATUS_PENDING

    def test_failure_marks_error_and_is_retryable(self):
        create = _FakeCreate(fail_pages=[1])
        review = ImportReview([_candidate(1)], create_shipment=create)

        assert review.confirm(1) is False
        candidate = review.get(1)
        assert candidate.status == STATUS_ERROR
        assert candidate.error == "DDT già registrato"

        create.fail_pages.clear()
        assert review.confirm(1) is True
        assert candidate.status == STATUS_SAVED
        assert candidate.error is None


class TestConfirmAll:
    def test_one_failure_does_not_block_the_others(self):
        create = _FakeCreate(fail_pages=[2])
        review = ImportReview(
            [_candidate(1), _candidate(2), _candidate(3), _candidate(4, committente_id=None)],
            create_shipment=create,
        )

        assert review.confirm_all() == 2
        assert [c.status for c in review.candidates] == [STATUS_SAVED, STATUS_ERROR, STATUS_SAVED, STATUS_PENDING]

    def test_saved_candidates_skipped(self):
        create = _FakeCreate()
        review = ImportReview([_candidate(1), _candidate(2)], create_shipment=create)
        review.confirm(1)

        assert review.confirm_all() == 1
        assert len(create.payloads) == 2


class TestDiscardAndEdit:
    def test_discard_removes_candidate_only(self):
        create = _FakeCreate()
        review = ImportReview([_candidate(1), _candidate(2)], create_shipment=create)

        assert review.discard(1) is True
        assert [c.page_number for c in review.candidates] == [2]
        assert create.payloads == []
        assert review.discard(1) is False

    def test_edit_exports_prefill_and_drops_candidate(self):
        review = ImportReview([_candidate(1, destinatario_id=None)], create_shipment=_FakeCreate())

        prefill = review.edit(1)

        assert prefill == {
            "committenteId": 1,
            "dataDDT": "2024-03-05",
            "numeroDDT": "DDT-1",
            "colli": 1,
            "pesoKg": 5.0,
        }
        assert review.candidates == []


def test_confirm_persists_shipments_with_increasing_numbers(app, make_committente, make_destinatario, make_spedizione):
    committente = make_committente("Cati")
    destinatario = make_destinatario()
    make_spedizione(committente, destinatario, 41)

    review = ImportReview([
        _candidate(1, committente.id, destinatario.id),
        _candidate(2, committente.id, destinatario.id),
    ])

    assert review.confirm_all() == 2
    numbers = [c.shipment["numeroSpedizione"] for c in review.candidates]
    assert numbers == [42, 43]

    assert review.confirm(1) is False
    assert Spedizione.query.count() == 3


def test_invalid_candidate_fields_become_candidate_error(app, make_committente, make_destinatario):
    committente = make_committente("Cati")
    destinatario = make_destinatario()
    review = ImportReview([_candidate(1, committente.id, destinatario.id, colli=None)])

    assert review.confirm(1) is False
    candidate = review.get(1)
    assert candidate.status == STATUS_ERROR
    assert "colli" in candidate.error
    assert db.session.query(Spedizione).count() == 0
