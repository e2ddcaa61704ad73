"""Revision status cache data models.

Decoupled from statusmark_core so the store layer can be used independently
and statusmark_core has no knowledge of persistence concerns.
"""

from __future__ import annotations

from dataclasses import dataclass, field

STATUS_UNKNOWN = ""
STATUS_FAILURE = "failure"
STATUS_PENDING = "pending"
STATUS_SUCCESS = "success"

KNOWN_STATUSES = (STATUS_FAILURE, STATUS_PENDING, STATUS_SUCCESS)


def normalize_status(status) -> str:
    """Map anything that is not a recognized status to STATUS_UNKNOWN."""
    if status in KNOWN_STATUSES:
        return status
    return STATUS_UNKNOWN


@dataclass(frozen=True)
class RevisionEntry:
    """Last observed status of one revision."""

    status: str = STATUS_UNKNOWN
    last_modified: int = 0  # unix seconds


@dataclass
class CacheState:
    """Revision hash -> RevisionEntry mapping persisted between invocations."""

    revisions: dict[str, RevisionEntry] = field(default_factory=dict)

    def get(self, revision: str) -> RevisionEntry:
        """Return the entry for revision, or an unknown entry if absent."""
        return self.revisions.get(revision, RevisionEntry())

    def put(self, revision: str, entry: RevisionEntry) -> None:
        self.revisions[revision] = entry

    def to_dict(self) -> dict:
        return {
            "Revisions": {
                rev: {"Status": entry.status, "LastModified": entry.last_modified}
                for rev, entry in self.revisions.items()
            }
        }

    @classmethod
    def from_dict(cls, data) -> CacheState:
        """Build a state from the decoded cache document.

        Unrecognized statuses become unknown; entries with malformed fields are
        dropped. A document that is not shaped like a cache yields an empty state.
        """
        state = cls()
        if not isinstance(data, dict):
            return state
        revisions = data.get("Revisions")
        if not isinstance(revisions, dict):
            return state

        for rev, raw in revisions.items():
            if not isinstance(raw, dict):
                continue
            last_modified = raw.get("LastModified", 0)
            # bool is an int subclass but never a timestamp
            if not isinstance(last_modified, int) or isinstance(last_modified, bool):
                continue
            state.revisions[rev] = RevisionEntry(
                status=normalize_status(raw.get("Status", STATUS_UNKNOWN)),
                last_modified=last_modified,
            )
        return state
