"""Review session: one extraction, reviewer edits, then save/update/discard.

States::

    IDLE --extract--> EXTRACTED --save--> IDLE (committed as new)
                                    \\--> DUPLICATE_FOUND --update_existing--> IDLE
                                                          \\--discard--------> IDLE

A session is single-threaded; callers must not start a new extraction
while another call on the same session is in flight.
"""

from dataclasses import dataclass, field
from enum import Enum

from kyc_extractor.config.settings import Settings
from kyc_extractor.documents.composition import composition
from kyc_extractor.documents.models import DocumentImages, DocumentType
from kyc_extractor.exceptions import SessionStateError
from kyc_extractor.extraction.base import BaseExtractor
from kyc_extractor.extraction.factory import ExtractorFactory
from kyc_extractor.logging.logger import Log
from kyc_extractor.notification.factory import NotifierFactory
from kyc_extractor.records.diff import DiffRow, diff
from kyc_extractor.records.duplicates import DuplicateResolver
from kyc_extractor.records.factory import RecordStoreFactory
from kyc_extractor.records.models import KycRecord, SavedKycRecord
from kyc_extractor.records.reconciler import RecordReconciler
from kyc_extractor.records.store_base import BaseRecordStore


class SessionState(str, Enum):
    IDLE = "idle"
    EXTRACTED = "extracted"
    DUPLICATE_FOUND = "duplicate_found"


class SaveStatus(str, Enum):
    COMMITTED = "committed"
    DUPLICATE_FOUND = "duplicate_found"


@dataclass(frozen=True)
class SaveOutcome:
    """Result of ``ReviewSession.save``."""

    status: SaveStatus
    saved: SavedKycRecord | None = None
    existing: SavedKycRecord | None = None
    diff: list[DiffRow] = field(default_factory=list)


class ReviewSession:
    """Holds one in-flight record between extraction and its terminal decision."""

    def __init__(
        self,
        extractor: BaseExtractor,
        resolver: DuplicateResolver,
        reconciler: RecordReconciler,
    ) -> None:
        self._extractor = extractor
        self._resolver = resolver
        self._reconciler = reconciler
        self._state = SessionState.IDLE
        self._images = DocumentImages()
        self._record: KycRecord | None = None
        self._existing: SavedKycRecord | None = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def record(self) -> KycRecord | None:
        return self._record

    @property
    def existing(self) -> SavedKycRecord | None:
        return self._existing

    def extract(self, doc_type: DocumentType, images: DocumentImages) -> KycRecord:
        """Extract a fresh record, replacing any pending one.

        On failure the session is back in IDLE and the error propagates.
        """
        self._require(SessionState.IDLE, SessionState.EXTRACTED, action="extract")
        self._clear()
        record = self._extractor.extract(doc_type, images)
        self._images = images.restricted_to(composition(doc_type, images))
        self._record = record
        self._state = SessionState.EXTRACTED
        return record

    def update_field(self, name: str, value: str | None) -> KycRecord:
        """Apply a reviewer correction to the pending record."""
        self._require(SessionState.EXTRACTED, action="edit")
        self._record = self._pending().with_field(name, value)
        return self._record

    def save(self) -> SaveOutcome:
        """Commit the pending record, or stop at DUPLICATE_FOUND with a diff.

        A StoreError leaves the session in EXTRACTED with the record intact.
        """
        self._require(SessionState.EXTRACTED, action="save")
        pending = self._pending().with_images(self._images)

        existing = self._resolver.find_duplicate(pending)
        if existing is None:
            saved = self._reconciler.commit_new(pending)
            self._clear()
            return SaveOutcome(status=SaveStatus.COMMITTED, saved=saved)

        self._record = pending
        self._existing = existing
        self._state = SessionState.DUPLICATE_FOUND
        return SaveOutcome(
            status=SaveStatus.DUPLICATE_FOUND,
            existing=existing,
            diff=diff(existing.record, pending),
        )

    def update_existing(self) -> SavedKycRecord:
        """Overwrite the duplicate with the pending record."""
        self._require(SessionState.DUPLICATE_FOUND, action="update")
        if self._existing is None:
            raise SessionStateError("No duplicate record to update")
        saved = self._reconciler.commit_update(self._existing.id, self._pending())
        self._clear()
        return saved

    def discard(self) -> None:
        """Drop the pending record and any duplicate context."""
        self._require(SessionState.EXTRACTED, SessionState.DUPLICATE_FOUND, action="discard")
        self._reconciler.discard(self._pending())
        self._clear()

    def reset(self) -> None:
        self._clear()

    def _require(self, *allowed: SessionState, action: str) -> None:
        if self._state not in allowed:
            raise SessionStateError(
                f"Cannot {action} while session is {self._state.value}; "
                f"allowed in: {[s.value for s in allowed]}"
            )

    def _pending(self) -> KycRecord:
        if self._record is None:
            raise SessionStateError("No pending record")
        return self._record

    def _clear(self) -> None:
        self._state = SessionState.IDLE
        self._images = DocumentImages()
        self._record = None
        self._existing = None


def build_session(
    settings: Settings,
    store: BaseRecordStore | None = None,
) -> ReviewSession:
    """Build a ReviewSession with all adapters configured from settings."""
    if store is None:
        store = RecordStoreFactory.create(settings)
    extractor = ExtractorFactory.create(settings)
    notifier = NotifierFactory.create(settings)
    Log.debug(
        f"Session built: provider={settings.inference_provider}, "
        f"store={type(store).__name__}, notifier={type(notifier).__name__}"
    )
    return ReviewSession(
        extractor=extractor,
        resolver=DuplicateResolver(store),
        reconciler=RecordReconciler(store, notifier),
    )
