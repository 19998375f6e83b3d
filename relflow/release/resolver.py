"""Which units still need a release, and how to tag them.

A unit counts as released when either marker for its version exists:
`v<version>` (the whole workspace was tagged together) or
`<name>-v<version>` (the unit was tagged on its own).

New releases are tagged collectively (one `v<version>` tag and one GitHub
release for the batch) unless something forces per-unit tags:

- a pending unit has a changelog of its own,
- pending units do not all share one version,
- some marker for this version already exists, i.e. any marker ending in
  `v<version>`: a `<name>-v<version>` tag, and also `v<version>` itself
  when part of that version is still pending.

This module does no I/O.
"""

from __future__ import annotations

from collections.abc import Collection, Sequence
from dataclasses import dataclass
from typing import Literal

from relflow.workspace.model import Unit

__all__ = [
    "Granularity",
    "UnitStatus",
    "Release",
    "PublishSet",
    "is_released",
    "pending_units",
    "choose_granularity",
    "collective_notes",
    "resolve_publish_set",
]

Granularity = Literal["collective", "separate"]


@dataclass(frozen=True, slots=True)
class UnitStatus:
    unit: Unit
    already_released: bool


@dataclass(frozen=True, slots=True)
class Release:
    tag: str
    notes: str


@dataclass(frozen=True, slots=True)
class PublishSet:
    statuses: tuple[UnitStatus, ...]
    to_publish: tuple[Unit, ...]
    granularity: Granularity
    tags: tuple[str, ...]
    releases: tuple[Release, ...]

    @property
    def is_empty(self) -> bool:
        return not self.to_publish

    def tag_for(self, unit: Unit) -> str:
        return unit.collective_tag if self.granularity == "collective" else unit.own_tag


def is_released(unit: Unit, markers: Collection[str]) -> bool:
    return unit.collective_tag in markers or unit.own_tag in markers


def pending_units(order: Sequence[Unit], markers: Collection[str]) -> list[Unit]:
    return [u for u in order if not is_released(u, markers)]


def choose_granularity(pending: Sequence[Unit], markers: Collection[str]) -> Granularity:
    if not pending:
        return "collective"
    if any(u.changelog_path is not None for u in pending):
        return "separate"

    versions = {u.version for u in pending}
    if len(versions) != 1:
        return "separate"

    (version,) = versions
    if any(m.endswith(f"v{version}") for m in markers):
        return "separate"
    return "collective"


def collective_notes(units: Sequence[Unit]) -> str | None:
    """Merge the notes of a collectively released batch into one body.

    A note equal to the one just before it is dropped, so a changelog shared
    by every unit appears once. When more than one note is left, each gets a
    `# <name> <version>` heading.
    """
    kept: list[Unit] = []
    previous: str | None = None
    for unit in units:
        if unit.release_notes is None:
            continue
        if unit.release_notes != previous:
            kept.append(unit)
        previous = unit.release_notes

    if not kept:
        return None
    if len(kept) == 1:
        return kept[0].release_notes
    return "\n\n".join(f"# {u.name} {u.version}\n\n{u.release_notes}" for u in kept)


def resolve_publish_set(order: Sequence[Unit], markers: Collection[str]) -> PublishSet:
    """Compute the publish set from units in publish order.

    Release notes are taken from `Unit.release_notes`, so they must already be
    attached to the pending units.
    """
    statuses = tuple(UnitStatus(unit=u, already_released=is_released(u, markers)) for u in order)
    pending = [s.unit for s in statuses if not s.already_released]
    granularity = choose_granularity(pending, markers)

    tags: tuple[str, ...]
    releases: list[Release] = []
    if not pending:
        tags = ()
    elif granularity == "collective":
        tag = pending[0].collective_tag
        tags = (tag,)
        notes = collective_notes(pending)
        if notes is not None:
            releases.append(Release(tag=tag, notes=notes))
    else:
        tags = tuple(u.own_tag for u in pending)
        releases.extend(
            Release(tag=u.own_tag, notes=u.release_notes)
            for u in pending
            if u.release_notes is not None
        )

    return PublishSet(
        statuses=statuses,
        to_publish=tuple(pending),
        granularity=granularity,
        tags=tags,
        releases=tuple(releases),
    )
