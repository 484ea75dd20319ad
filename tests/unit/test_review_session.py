"""Tests for the review session state machine."""

from unittest.mock import MagicMock

import pytest

from kyc_extractor.documents.models import DocumentImage, DocumentImages, DocumentType
from kyc_extractor.exceptions import InferenceError, SessionStateError, StoreError
from kyc_extractor.records.duplicates import DuplicateResolver
from kyc_extractor.records.memory_store import InMemoryRecordStore
from kyc_extractor.records.models import KycRecord
from kyc_extractor.records.reconciler import RecordReconciler
from kyc_extractor.review.session import ReviewSession, SaveStatus, SessionState


def _make_session(
    record: KycRecord, store: InMemoryRecordStore | None = None
) -> tuple[ReviewSession, InMemoryRecordStore, MagicMock]:
    store = store or InMemoryRecordStore()
    extractor = MagicMock()
    extractor.extract.return_value = record
    session = ReviewSession(
        extractor=extractor,
        resolver=DuplicateResolver(store),
        reconciler=RecordReconciler(store),
    )
    return session, store, extractor


class TestExtract:
    def test_moves_to_extracted(
        self, sample_record: KycRecord, id_card_images: DocumentImages
    ) -> None:
        session, _, _ = _make_session(sample_record)
        assert session.state is SessionState.IDLE
        session.extract(DocumentType.ID_CARD, id_card_images)
        assert session.state is SessionState.EXTRACTED
        assert session.record == sample_record

    def test_failure_returns_to_idle(
        self, sample_record: KycRecord, id_card_images: DocumentImages
    ) -> None:
        session, _, extractor = _make_session(sample_record)
        session.extract(DocumentType.ID_CARD, id_card_images)
        extractor.extract.side_effect = InferenceError("timeout")
        with pytest.raises(InferenceError):
            session.extract(DocumentType.ID_CARD, id_card_images)
        assert session.state is SessionState.IDLE
        assert session.record is None

    def test_not_allowed_while_duplicate_pending(
        self, sample_record: KycRecord, id_card_images: DocumentImages
    ) -> None:
        store = InMemoryRecordStore()
        store.insert(sample_record)
        session, _, _ = _make_session(sample_record, store)
        session.extract(DocumentType.ID_CARD, id_card_images)
        session.save()
        with pytest.raises(SessionStateError, match="Cannot extract"):
            session.extract(DocumentType.ID_CARD, id_card_images)


class TestUpdateField:
    def test_edits_pending_record(
        self, sample_record: KycRecord, id_card_images: DocumentImages
    ) -> None:
        session, _, _ = _make_session(sample_record)
        session.extract(DocumentType.ID_CARD, id_card_images)
        session.update_field("phone_number", "0717597203")
        assert session.record is not None
        assert session.record.phone_number == "0717597203"

    def test_requires_extracted_state(self, sample_record: KycRecord) -> None:
        session, _, _ = _make_session(sample_record)
        with pytest.raises(SessionStateError, match="Cannot edit"):
            session.update_field("full_name", "Ali")


class TestSave:
    def test_commits_new_record_with_images(
        self, sample_record: KycRecord, id_card_images: DocumentImages
    ) -> None:
        session, store, _ = _make_session(sample_record)
        session.extract(DocumentType.ID_CARD, id_card_images)
        outcome = session.save()
        assert outcome.status is SaveStatus.COMMITTED
        assert outcome.saved is not None
        stored = store.get(outcome.saved.id)
        assert stored is not None
        assert stored.record.id_front_image is not None
        assert stored.record.id_back_image is not None
        assert stored.record.passport_image is None
        assert session.state is SessionState.IDLE

    def test_ignored_images_are_not_saved(
        self,
        sample_record: KycRecord,
        id_card_images: DocumentImages,
        passport_image: DocumentImage,
    ) -> None:
        session, store, _ = _make_session(sample_record)
        images = DocumentImages(front=id_card_images.front, passport=passport_image)
        session.extract(DocumentType.ID_CARD, images)
        outcome = session.save()
        assert outcome.saved is not None
        stored = store.get(outcome.saved.id)
        assert stored is not None
        assert stored.record.id_front_image is not None
        assert stored.record.passport_image is None

    def test_record_without_identifiers_is_saved_again(
        self, id_card_images: DocumentImages
    ) -> None:
        session, store, _ = _make_session(KycRecord(full_name="Ali"))
        for _ in range(2):
            session.extract(DocumentType.ID_CARD, id_card_images)
            assert session.save().status is SaveStatus.COMMITTED
        assert len(store.list_records()) == 2

    def test_duplicate_stops_with_diff(
        self, sample_record: KycRecord, id_card_images: DocumentImages
    ) -> None:
        store = InMemoryRecordStore()
        existing = store.insert(sample_record.with_field("full_name", "Ali"))
        session, _, _ = _make_session(sample_record.with_field("full_name", "Ali Hassan"), store)
        session.extract(DocumentType.ID_CARD, id_card_images)
        outcome = session.save()
        assert outcome.status is SaveStatus.DUPLICATE_FOUND
        assert outcome.existing == existing
        assert session.state is SessionState.DUPLICATE_FOUND
        changed = {row.field for row in outcome.diff if row.changed}
        assert changed == {"full_name"}
        assert len(store.list_records()) == 1

    def test_store_error_keeps_record(
        self, sample_record: KycRecord, id_card_images: DocumentImages
    ) -> None:
        store = MagicMock()
        store.list_records.return_value = []
        store.insert.side_effect = StoreError("db down")
        extractor = MagicMock()
        extractor.extract.return_value = sample_record
        session = ReviewSession(extractor, DuplicateResolver(store), RecordReconciler(store))
        session.extract(DocumentType.ID_CARD, id_card_images)
        with pytest.raises(StoreError):
            session.save()
        assert session.state is SessionState.EXTRACTED
        assert session.record == sample_record

    def test_requires_extraction_first(self, sample_record: KycRecord) -> None:
        session, _, _ = _make_session(sample_record)
        with pytest.raises(SessionStateError, match="Cannot save"):
            session.save()


class TestDuplicateDecision:
    def _at_duplicate(
        self, sample_record: KycRecord, id_card_images: DocumentImages
    ) -> tuple[ReviewSession, InMemoryRecordStore, str, int]:
        store = InMemoryRecordStore()
        existing = store.insert(sample_record)
        new = KycRecord(national_id=sample_record.national_id, full_name="Ali Hassan")
        session, _, _ = _make_session(new, store)
        session.extract(DocumentType.ID_CARD, id_card_images)
        session.save()
        return session, store, existing.id, existing.timestamp

    def test_update_existing_overwrites(
        self, sample_record: KycRecord, id_card_images: DocumentImages
    ) -> None:
        session, store, existing_id, timestamp = self._at_duplicate(
            sample_record, id_card_images
        )
        saved = session.update_existing()
        assert saved.id == existing_id
        assert saved.timestamp > timestamp
        assert saved.record.full_name == "Ali Hassan"
        assert saved.record.blood_group is None
        assert saved.record.id_front_image is not None
        assert session.state is SessionState.IDLE
        assert len(store.list_records()) == 1

    def test_discard_leaves_store_unchanged(
        self, sample_record: KycRecord, id_card_images: DocumentImages
    ) -> None:
        session, store, existing_id, timestamp = self._at_duplicate(
            sample_record, id_card_images
        )
        session.discard()
        stored = store.get(existing_id)
        assert stored is not None
        assert stored.timestamp == timestamp
        assert stored.record == sample_record
        assert session.state is SessionState.IDLE
        assert session.existing is None

    def test_update_requires_duplicate_state(
        self, sample_record: KycRecord, id_card_images: DocumentImages
    ) -> None:
        session, _, _ = _make_session(sample_record)
        session.extract(DocumentType.ID_CARD, id_card_images)
        with pytest.raises(SessionStateError, match="Cannot update"):
            session.update_existing()


class TestDiscardAndReset:
    def test_discard_after_extraction(
        self, sample_record: KycRecord, id_card_images: DocumentImages
    ) -> None:
        session, store, _ = _make_session(sample_record)
        session.extract(DocumentType.ID_CARD, id_card_images)
        session.discard()
        assert session.state is SessionState.IDLE
        assert store.list_records() == []

    def test_discard_requires_pending_record(self, sample_record: KycRecord) -> None:
        session, _, _ = _make_session(sample_record)
        with pytest.raises(SessionStateError):
            session.discard()

    def test_reset_from_any_state(
        self, sample_record: KycRecord, id_card_images: DocumentImages
    ) -> None:
        session, _, _ = _make_session(sample_record)
        session.extract(DocumentType.ID_CARD, id_card_images)
        session.reset()
        assert session.state is SessionState.IDLE
        assert session.record is None
