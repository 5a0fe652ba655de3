from __future__ import annotations

from facility_assistant.exceptions.custom import StorageError
from facility_assistant.schemas.conversation import ConversationTurn
from facility_assistant.schemas.facility import FacilityFragment, FragmentCategory
from facility_assistant.schemas.status import SourceStatus


class MemoryStore:
    """In-process store for fragments, source statuses and conversation turns.

    All methods are synchronous and run on the event loop thread, so each call
    is atomic with respect to other coroutines. Listing methods return tuples,
    which are snapshots that later appends do not affect.
    """

    def __init__(self, max_fragments: int = 5000) -> None:
        self._fragments: dict[str, FacilityFragment] = {}
        self._statuses: dict[str, SourceStatus] = {}
        self._turns: list[ConversationTurn] = []
        self._max_fragments = max_fragments

    def _evict(self) -> None:
        if len(self._fragments) <= self._max_fragments:
            return
        # Drop the oldest superseded fragments first; active ones are kept
        candidates = sorted(
            (f for f in self._fragments.values() if not f.active),
            key=lambda f: f.captured_at,
        )
        while len(self._fragments) > self._max_fragments and candidates:
            self._fragments.pop(candidates.pop(0).fragment_id, None)

    # --- Fragments ---

    def append_fragment(self, fragment: FacilityFragment) -> FacilityFragment:
        """Store a fragment and deactivate older ones for the same source+category."""
        superseded = [
            f for f in self._fragments.values()
            if f.active
            and f.source == fragment.source
            and f.category == fragment.category
            and f.captured_at <= fragment.captured_at
        ]
        active = sum(1 for f in self._fragments.values() if f.active)
        if active - len(superseded) + 1 > self._max_fragments:
            raise StorageError(
                f"Fragment store is full ({self._max_fragments} active fragments)"
            )

        for existing in superseded:
            self._fragments[existing.fragment_id] = existing.model_copy(
                update={"active": False}
            )
        self._fragments[fragment.fragment_id] = fragment
        self._evict()
        return fragment

    def append_fragments(
        self, fragments: list[FacilityFragment]
    ) -> list[FacilityFragment]:
        """Store a batch all-or-nothing: capacity is checked before any write."""
        newest: dict[tuple[str, str], FacilityFragment] = {}
        for fragment in fragments:
            key = (fragment.source, fragment.category)
            if key not in newest or fragment.captured_at >= newest[key].captured_at:
                newest[key] = fragment

        superseded = sum(
            1 for f in self._fragments.values()
            if f.active
            and (f.source, f.category) in newest
            and f.captured_at <= newest[(f.source, f.category)].captured_at
        )
        active = sum(1 for f in self._fragments.values() if f.active)
        if active - superseded + len(newest) > self._max_fragments:
            raise StorageError(
                f"Fragment store is full ({self._max_fragments} active fragments)"
            )

        return [self.append_fragment(fragment) for fragment in fragments]

    def list_fragments(
        self,
        *,
        active_only: bool = True,
        source: str | None = None,
        category: FragmentCategory | None = None,
    ) -> tuple[FacilityFragment, ...]:
        """Fragments in ascending capture order."""
        items = sorted(self._fragments.values(), key=lambda f: f.captured_at)
        return tuple(
            f for f in items
            if (f.active or not active_only)
            and (source is None or f.source == source)
            and (category is None or f.category == category)
        )

    # --- Source statuses ---

    def upsert_status(self, status: SourceStatus) -> SourceStatus:
        self._statuses[status.source] = status
        return status

    def get_status(self, source: str) -> SourceStatus | None:
        return self._statuses.get(source)

    def snapshot_status(self) -> dict[str, SourceStatus]:
        return dict(self._statuses)

    # --- Conversation turns ---

    def append_turn(self, turn: ConversationTurn) -> ConversationTurn:
        self._turns.append(turn)
        return turn

    def list_turns_by_session(self, session_id: str) -> tuple[ConversationTurn, ...]:
        return tuple(sorted(
            (t for t in self._turns if t.session_id == session_id),
            key=lambda t: t.occurred_at,
        ))

    def list_turns(self) -> tuple[ConversationTurn, ...]:
        """All turns, newest first."""
        return tuple(sorted(self._turns, key=lambda t: t.occurred_at, reverse=True))
