"""The ordered list of external actions a publish set calls for.

relflow never runs these. They are handed to the pipeline driver, which
performs them in order: publish every package (dependencies first), create
the tags, push them once, then create the releases.
"""

from __future__ import annotations

from dataclasses import dataclass

from relflow.release.resolver import PublishSet

__all__ = [
    "PublishPackage",
    "CreateTag",
    "PushTags",
    "CreateRelease",
    "Action",
    "plan_actions",
    "render_action",
]


@dataclass(frozen=True, slots=True)
class PublishPackage:
    name: str
    version: str


@dataclass(frozen=True, slots=True)
class CreateTag:
    tag: str


@dataclass(frozen=True, slots=True)
class PushTags:
    pass


@dataclass(frozen=True, slots=True)
class CreateRelease:
    tag: str
    notes: str


Action = PublishPackage | CreateTag | PushTags | CreateRelease


def plan_actions(publish_set: PublishSet) -> list[Action]:
    if publish_set.is_empty:
        return []

    actions: list[Action] = [PublishPackage(u.name, u.version) for u in publish_set.to_publish]
    actions.extend(CreateTag(tag) for tag in publish_set.tags)
    actions.append(PushTags())
    actions.extend(CreateRelease(r.tag, r.notes) for r in publish_set.releases)
    return actions


def render_action(action: Action) -> str:
    """Shell-style description of an action, for dry runs and logs."""
    match action:
        case PublishPackage(name=name):
            return f"cargo publish --no-verify -p {name}"
        case CreateTag(tag=tag):
            return f"git tag {tag}"
        case PushTags():
            return "git push --tags"
        case CreateRelease(tag=tag, notes=notes):
            return f"gh release create {tag} --notes-file - <<<EOF\n{notes}\nEOF"
