"""Tests for relflow.release.service (scan to publish set, on disk)."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from relflow.core.config import Config, PublishConfig
from relflow.core.result import Err, Ok
from relflow.output.console import MockConsole, Style
from relflow.release.actions import CreateRelease, CreateTag, PublishPackage, PushTags
from relflow.release.errors import ChangelogEntryMissing, MetadataMissing
from relflow.release.resolver import Release
from relflow.release.service import discover, plan_release
from relflow.workspace.errors import DependencyCycle, ManifestMissing

WriteTree = Callable[[dict[str, str]], Path]
PackageToml = Callable[..., str]


def _plan(root: Path, tags: set[str] | None = None, config: Config | None = None):
    console = MockConsole()
    result = plan_release(
        root=root,
        markers=frozenset(tags or ()),
        config=config or Config(),
        console=console,
    )
    return result, console


class TestDiscover:
    def test_orders_and_reports_edges(self, write_tree: WriteTree, package_toml: PackageToml) -> None:
        root = write_tree(
            {
                "Cargo.toml": "[workspace]\n",
                "synced/Cargo.toml": package_toml("synced", deps=("synced-derive",)),
                "synced-derive/Cargo.toml": package_toml("synced-derive"),
            }
        )
        console = MockConsole()
        result = discover(root=root, config=Config(), console=console)

        assert isinstance(result, Ok)
        assert [u.name for u in result.value.units] == ["synced-derive", "synced"]
        edges = console.find("depends on")
        assert [e.message for e in edges] == ["synced@0.1.0 depends on synced-derive@0.1.0"]
        assert edges[0].style == Style.DIM

    def test_cycle(self, write_tree: WriteTree, package_toml: PackageToml) -> None:
        root = write_tree(
            {
                "Cargo.toml": "[workspace]\n",
                "a/Cargo.toml": package_toml("a", deps=("b",)),
                "b/Cargo.toml": package_toml("b", deps=("a",)),
            }
        )
        result = discover(root=root, config=Config(), console=MockConsole())
        assert result == Err(DependencyCycle(names=("a", "b")))

    def test_not_a_workspace(self, tmp_path: Path) -> None:
        result = discover(root=tmp_path, config=Config(), console=MockConsole())
        assert result == Err(ManifestMissing(root=tmp_path))


class TestPlanRelease:
    def test_single_package(self, write_tree: WriteTree, package_toml: PackageToml) -> None:
        root = write_tree(
            {
                "Cargo.toml": package_toml("single", "2.2.2"),
                "CHANGELOG.md": "# Changelog\n\n## 2.2.2\n\n- first release\n",
            }
        )
        result, console = _plan(root)

        assert isinstance(result, Ok)
        plan = result.value
        assert plan.publish_set.granularity == "collective"
        assert plan.publish_set.tags == ("v2.2.2",)
        assert plan.actions == [
            PublishPackage("single", "2.2.2"),
            CreateTag("v2.2.2"),
            PushTags(),
            CreateRelease("v2.2.2", "- first release"),
        ]
        assert "publishable packages in workspace: [single@2.2.2]" in console.messages
        assert "1 package needs publishing: [single@2.2.2]" in console.messages

    def test_already_tagged(self, write_tree: WriteTree, package_toml: PackageToml) -> None:
        root = write_tree(
            {
                "Cargo.toml": package_toml("single", "2.2.2"),
                # would fail extraction if it were read
                "CHANGELOG.md": "## 1.0.0\n",
            }
        )
        result, console = _plan(root, {"v2.2.2", "v1.0.0"})

        assert isinstance(result, Ok)
        assert result.value.publish_set.is_empty
        assert result.value.actions == []
        assert console.find("no packages need publishing")
        assert "existing git tags: ['v1.0.0', 'v2.2.2']" in console.messages

    def test_workspace_inheritance(self, write_tree: WriteTree, package_toml: PackageToml) -> None:
        root = write_tree(
            {
                "Cargo.toml": '[workspace]\nmembers = ["lib", "derive"]\n\n[workspace.package]\nversion = "0.3.1"\n',
                "CHANGELOG.md": "## v0.3.1\nshared notes\n",
                "lib/Cargo.toml": package_toml(
                    "lib", None, deps=("derive",), extra="version.workspace = true"
                ),
                "derive/Cargo.toml": package_toml("derive", None, extra="version.workspace = true"),
            }
        )
        result, _ = _plan(root, {"v0.3.0"})

        assert isinstance(result, Ok)
        publish_set = result.value.publish_set
        assert [str(u) for u in publish_set.to_publish] == ["derive@0.3.1", "lib@0.3.1"]
        assert publish_set.releases == (Release(tag="v0.3.1", notes="shared notes"),)

    def test_shared_changelog_after_individual_tag(
        self, write_tree: WriteTree, package_toml: PackageToml
    ) -> None:
        root = write_tree(
            {
                "Cargo.toml": package_toml("toplevel", "1.0.0") + '\n[workspace]\nmembers = ["subpackage"]\n',
                "CHANGELOG.md": "## toplevel 1.0.0\ntop notes\n\n## subpackage 1.0.0\nsub notes\n",
                "subpackage/Cargo.toml": package_toml("subpackage", "1.0.0"),
            }
        )
        result, _ = _plan(root, {"subpackage-v1.0.0"})

        assert isinstance(result, Ok)
        publish_set = result.value.publish_set
        assert publish_set.granularity == "separate"
        assert publish_set.tags == ("toplevel-v1.0.0",)
        assert publish_set.releases == (Release(tag="toplevel-v1.0.0", notes="top notes"),)

    def test_packages_with_own_changelogs(
        self, write_tree: WriteTree, package_toml: PackageToml
    ) -> None:
        root = write_tree(
            {
                "Cargo.toml": "[workspace]\n",
                "core/Cargo.toml": package_toml("core", "0.2.0"),
                "core/CHANGELOG.md": "## 0.2.0\ncore notes\n",
                "app/Cargo.toml": package_toml("app", "0.2.0", deps=("core",)),
                "app/CHANGELOG.md": "## 0.2.0\napp notes\n",
            }
        )
        result, _ = _plan(root)

        assert isinstance(result, Ok)
        publish_set = result.value.publish_set
        assert publish_set.tags == ("core-v0.2.0", "app-v0.2.0")
        assert [r.notes for r in publish_set.releases] == ["core notes", "app notes"]

    def test_released_units_stay_in_plan(
        self, write_tree: WriteTree, package_toml: PackageToml
    ) -> None:
        root = write_tree(
            {
                "Cargo.toml": "[workspace]\n",
                "a/Cargo.toml": package_toml("a", "1.0.0"),
                "b/Cargo.toml": package_toml("b", "2.0.0"),
            }
        )
        result, _ = _plan(root, {"a-v1.0.0"})

        assert isinstance(result, Ok)
        assert [u.name for u in result.value.units] == ["a", "b"]
        assert [s.already_released for s in result.value.publish_set.statuses] == [True, False]

    def test_changelog_entry_missing(self, write_tree: WriteTree, package_toml: PackageToml) -> None:
        root = write_tree(
            {
                "Cargo.toml": package_toml("single", "2.2.3"),
                "CHANGELOG.md": "## 2.2.2\nold\n",
            }
        )
        result, _ = _plan(root)

        assert isinstance(result, Err)
        assert isinstance(result.error, ChangelogEntryMissing)
        assert result.error.unit == "single@2.2.3"

    def test_metadata_missing(self, write_tree: WriteTree) -> None:
        root = write_tree({"Cargo.toml": '[package]\nname = "mypkg"\nversion = "0.1.0"\n'})
        result, _ = _plan(root)
        assert result == Err(MetadataMissing(name="mypkg", field="license"))

    def test_metadata_check_can_be_disabled(self, write_tree: WriteTree) -> None:
        root = write_tree({"Cargo.toml": '[package]\nname = "mypkg"\nversion = "0.1.0"\n'})
        config = Config(publish=PublishConfig(require_metadata=False))
        result, _ = _plan(root, config=config)
        assert isinstance(result, Ok)
        assert result.value.publish_set.tags == ("v0.1.0",)
