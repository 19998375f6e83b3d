"""JSON form of a release plan, consumed by the pipeline driver."""

from __future__ import annotations

import json

from relflow.release.actions import CreateRelease, CreateTag, PublishPackage, PushTags
from relflow.release.service import ReleasePlan

PLAN_SCHEMA = 1


def _action_obj(action: object) -> dict[str, object]:
    match action:
        case PublishPackage(name=name, version=version):
            return {"kind": "publish", "name": name, "version": version}
        case CreateTag(tag=tag):
            return {"kind": "tag", "tag": tag}
        case PushTags():
            return {"kind": "push-tags"}
        case CreateRelease(tag=tag, notes=notes):
            return {"kind": "release", "tag": tag, "notes": notes}
        case _:
            raise AssertionError(f"unexpected action: {action!r}")


def plan_payload(plan: ReleasePlan) -> dict[str, object]:
    publish_set = plan.publish_set
    return {
        "schema": PLAN_SCHEMA,
        "workspace": str(plan.workspace.root_path),
        "granularity": publish_set.granularity,
        "packages": [
            {
                "name": s.unit.name,
                "version": s.unit.version,
                "path": str(s.unit.path),
                "already_released": s.already_released,
                "dependencies": list(plan.graph.dependencies(s.unit.name)),
                "release_notes": s.unit.release_notes,
            }
            for s in publish_set.statuses
        ],
        "tags": list(publish_set.tags),
        "releases": [{"tag": r.tag, "notes": r.notes} for r in publish_set.releases],
        "actions": [_action_obj(a) for a in plan.actions],
    }


def dumps_plan(plan: ReleasePlan) -> str:
    return json.dumps(plan_payload(plan), indent=2)
