"""
Attachment Registry - Per-Host Mixin Bookkeeping

🗂️ Ownership Tracking:
Every host that composes mixins carries one AttachmentRegistry for as long as
at least one attachment is outstanding. The registry remembers, in attachment
order, which class attached each mixin and how to finalize it, together with
a running count of finalized mixins.
"""

from typing import Any, Callable, Dict, Iterator, List, Optional, Type, TYPE_CHECKING
from dataclasses import dataclass, field

from ..config.settings import get_settings

if TYPE_CHECKING:
    from .mixin import Mixin

# Instance attribute holding the registry on a composed host
REGISTRY_ATTR = "_mixins_applied"


@dataclass
class AttachmentRecord:
    """How one mixin got onto a host and how to take it off again"""
    owner: type
    destroy: Callable[[], Any]
    finalized: bool = False


@dataclass
class AttachmentRegistry:
    """
    Insertion-ordered map of mixin class to AttachmentRecord.

    ``destroyed`` is the teardown counter: the number of records whose
    finalizer has run. The registry is retired by its host once
    ``destroyed`` equals the number of records.
    """
    records: Dict[Type['Mixin'], AttachmentRecord] = field(default_factory=dict)
    destroyed: int = 0

    def __len__(self) -> int:
        return len(self.records)

    def __contains__(self, mixin: type) -> bool:
        return mixin in self.records

    def __iter__(self) -> Iterator[Type['Mixin']]:
        return iter(self.records)

    def get(self, mixin: type) -> Optional[AttachmentRecord]:
        return self.records.get(mixin)

    def add(self, mixin: Type['Mixin'], owner: type, destroy: Callable[[], Any]) -> AttachmentRecord:
        """
        Record a fresh attachment.

        A finalized record for the same mixin is replaced: the new record
        goes to the end of the attachment order and the old one no longer
        counts towards ``destroyed``.
        """
        previous = self.records.pop(mixin, None)
        if previous is not None and previous.finalized:
            self.destroyed -= 1

        record = AttachmentRecord(owner=owner, destroy=destroy)
        self.records[mixin] = record
        return record

    def owned_by(self, owner: type) -> List[AttachmentRecord]:
        """Records attached by ``owner`` that are still waiting for teardown, oldest first"""
        return [
            record for record in self.records.values()
            if record.owner is owner and not record.finalized
        ]

    def mark_finalized(self, record: AttachmentRecord):
        record.finalized = True
        self.destroyed += 1

    @property
    def drained(self) -> bool:
        """True when every recorded mixin has been finalized"""
        return self.destroyed == len(self.records)

    def is_live(self, mixin: type) -> bool:
        record = self.records.get(mixin)
        return record is not None and not record.finalized

    def live(self) -> List[Type['Mixin']]:
        return [mixin for mixin, record in self.records.items() if not record.finalized]

    def clear(self):
        self.records.clear()
        self.destroyed = 0


def get_registry(host: Any) -> Optional[AttachmentRegistry]:
    """Return the host's registry, or None if it has no outstanding attachments"""
    return getattr(host, REGISTRY_ATTR, None)


def has_mixin(host: Any, mixin: type) -> bool:
    """
    Check whether ``mixin`` is attached to ``host``.

    With the "immediate" membership policy a mixin stops being a member as
    soon as its own finalizer has run. With "on_retirement" it stays a
    member until the whole registry is retired.
    """
    registry = get_registry(host)
    if registry is None:
        return False

    if get_settings().retire_membership_immediately:
        return registry.is_live(mixin)
    return mixin in registry


def is_composed(host: Any) -> bool:
    """True while the host has any outstanding attachment"""
    return get_registry(host) is not None


def applied_mixins(host: Any) -> List[Type['Mixin']]:
    """Mixins currently attached to ``host``, in attachment order"""
    registry = get_registry(host)
    if registry is None:
        return []

    if get_settings().retire_membership_immediately:
        return registry.live()
    return list(registry)


def owner_of(host: Any, mixin: type) -> Optional[type]:
    """The class that attached ``mixin`` to ``host``, if it is attached"""
    if not has_mixin(host, mixin):
        return None
    return get_registry(host).get(mixin).owner


__all__ = [
    "AttachmentRecord", "AttachmentRegistry", "REGISTRY_ATTR",
    "get_registry", "has_mixin", "is_composed", "applied_mixins", "owner_of",
]
