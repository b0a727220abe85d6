# Sharelink Engine Tests
# End-to-end reconciliation runs against a temporary home directory

import os
from pathlib import Path

from sharelink.agent import run_reconciliation
from sharelink.reconcile.engine import ReconcileEngine
from sharelink.reconcile.models import ActionType, DesiredLink
from sharelink.reconcile.survey import find_shared_folders
from sharelink.resolver.source import Application, InMemorySubscriptionSource, Subscription


def _snapshot(root: Path) -> dict[str, str]:
    """Map every entry under root to a description of what it is."""
    result = {}
    for dirpath, dirnames, filenames in os.walk(root):
        for name in dirnames + filenames:
            path = Path(dirpath) / name
            rel = str(path.relative_to(root))
            if path.is_symlink():
                result[rel] = "link:" + os.readlink(path)
            elif path.is_dir():
                result[rel] = "dir"
            else:
                result[rel] = "file:" + path.read_text(encoding="utf-8")
    return result


class TestScenarios:
    """Single-run scenarios."""

    def test_orphan_link_deleted(self, home: Path, shares: Path):
        (home / "A").symlink_to(shares / "X")

        result = ReconcileEngine(home).run([])

        assert result.success
        assert result.removed == 1
        assert not os.path.lexists(home / "A")
        assert home.is_dir()
        assert (shares / "X" / "content.txt").exists()

    def test_new_link_created(self, home: Path, link):
        desired = link("B", "Y")

        result = ReconcileEngine(home).run([desired])

        assert result.created == 1
        assert Path(os.readlink(home / "B")) == desired.target

    def test_empty_dir_replaced(self, home: Path, link):
        desired = link("C", "Z")
        (home / "C").mkdir()

        result = ReconcileEngine(home).run([desired])

        assert result.pruned == 1
        assert result.created == 1
        assert Path(os.readlink(home / "C")) == desired.target

    def test_marker_only_dir_replaced(self, home: Path, link):
        desired = link("C", "Z")
        (home / "C" / ".stfs").mkdir(parents=True)

        result = ReconcileEngine(home).run([desired])

        assert result.purged == 1
        assert result.pruned == 0
        assert Path(os.readlink(home / "C")) == desired.target

    def test_matched_link_untouched(self, home: Path, link):
        desired = link("D", "W")
        (home / "D").symlink_to(desired.target)
        before = os.lstat(home / "D")

        result = ReconcileEngine(home).run([desired])

        assert result.matched == 1
        assert result.mutations == []
        assert os.lstat(home / "D").st_ino == before.st_ino

    def test_wrong_link_replaced(self, home: Path, shares: Path, link):
        desired = link("D", "W")
        (home / "D").symlink_to(shares / "X")

        result = ReconcileEngine(home).run([desired])

        types = [a.action_type for a in result.actions]
        assert types.index(ActionType.REMOVED) < types.index(ActionType.CREATED)
        assert Path(os.readlink(home / "D")) == desired.target

    def test_broken_link_replaced(self, home: Path, shares: Path, link):
        desired = link("D", "W")
        (home / "D").symlink_to(shares / "gone")

        ReconcileEngine(home).run([desired])

        assert Path(os.readlink(home / "D")) == desired.target

    def test_non_empty_dir_renamed_aside(self, home: Path, link):
        desired = link("docs", "X")
        (home / "docs").mkdir()
        (home / "docs" / "mine.txt").write_text("mine", encoding="utf-8")

        result = ReconcileEngine(home).run([desired])

        assert result.renamed == 1
        assert (home / "docs.1" / "mine.txt").read_text(encoding="utf-8") == "mine"
        assert Path(os.readlink(home / "docs")) == desired.target

    def test_moved_share_prunes_old_location(self, home: Path, shares: Path, link):
        (home / "old" / "place").mkdir(parents=True)
        (home / "old" / "place" / "X").symlink_to(shares / "X")
        desired = link("new/X", "X")

        ReconcileEngine(home).run([desired])

        assert not (home / "old").exists()
        assert Path(os.readlink(home / "new" / "X")) == desired.target

    def test_failures_do_not_fail_run(self, home: Path, shares: Path):
        desired = DesiredLink(link=home / "a" / "B", target=shares / "Y")
        (home / "a").write_text("a file where a folder should be", encoding="utf-8")

        result = ReconcileEngine(home).run([desired])

        assert result.success
        assert result.has_failures
        assert (home / "a").read_text(encoding="utf-8") == "a file where a folder should be"


class TestProperties:
    """Idempotence and convergence."""

    def _messy_home(self, home: Path, shares: Path) -> None:
        (home / "orphan").symlink_to(shares / "X")
        (home / "deep" / "er").mkdir(parents=True)
        (home / "deep" / "er" / "stale").symlink_to(shares / "Y")
        (home / "wrong").symlink_to(shares / "Y")
        (home / "broken").symlink_to(shares / "gone")
        (home / "busy").mkdir()
        (home / "busy" / "data.txt").write_text("data", encoding="utf-8")
        (home / "marked" / ".stfs").mkdir(parents=True)
        (home / "plain.txt").write_text("plain", encoding="utf-8")

    def _desired(self, link) -> list[DesiredLink]:
        return [
            link("wrong", "W"),
            link("broken", "X"),
            link("busy", "Y"),
            link("marked", "Z"),
            link("fresh/nested", "W"),
        ]

    def test_convergence(self, home: Path, shares: Path, link):
        self._messy_home(home, shares)
        desired = self._desired(link)

        ReconcileEngine(home).run(desired)

        for d in desired:
            assert Path(os.readlink(d.link)) == d.target
        assert find_shared_folders(home) == {d.link for d in desired}
        assert (home / "busy.1" / "data.txt").read_text(encoding="utf-8") == "data"
        assert (home / "plain.txt").exists()
        assert not (home / "deep").exists()

    def test_idempotence(self, home: Path, shares: Path, link):
        self._messy_home(home, shares)
        desired = self._desired(link)
        engine = ReconcileEngine(home)

        engine.run(desired)
        snapshot = _snapshot(home)

        second = engine.run(desired)

        assert second.mutations == []
        assert second.matched == len(desired)
        assert _snapshot(home) == snapshot

    def test_nested_links_stay_inside_home(self, home: Path, shares: Path, link):
        desired = [link("a", "X"), link("a/b", "Y")]
        engine = ReconcileEngine(home)

        engine.run(desired)
        second = engine.run(desired)

        assert second.mutations == []
        assert sorted(os.listdir(shares / "X")) == ["content.txt"]
        assert Path(os.readlink(home / "a")) == shares / "X"

    def test_empty_desired_clears_all_links(self, home: Path, shares: Path):
        self._messy_home(home, shares)

        ReconcileEngine(home).run([])

        assert find_shared_folders(home) == set()


class TestPlan:
    """Tests for ReconcileEngine.plan."""

    def test_plan_does_not_mutate(self, home: Path, shares: Path, link):
        (home / "A").symlink_to(shares / "X")
        (home / "C").mkdir()
        before = _snapshot(home)

        sets = ReconcileEngine(home).plan([link("C", "Z")])

        assert sets.discovered == {home / "A"}
        assert [d.link for d in sets.desired] == [home / "C"]
        assert _snapshot(home) == before


class TestRunReconciliation:
    """Tests for the resolve-and-run entry point."""

    def test_from_source(self, home: Path, shares: Path):
        source = InMemorySubscriptionSource(
            [
                Subscription("acct", "/projects", "projects"),
                Subscription("acct", "/", "root-share"),
                Subscription("acct", "/gone", "missing-share"),
                Subscription("acct", "/mail", "plain"),
            ],
            [
                Application("projects", f"Projects\r\nshare={shares / 'X'}"),
                Application("root-share", f"share={shares / 'Y'}"),
                Application("missing-share", f"share={shares / 'nope'}"),
                Application("plain", "nothing to share"),
            ],
        )

        result = run_reconciliation(home, source, "acct")

        assert result.success
        assert result.created == 1
        assert Path(os.readlink(home / "projects")) == shares / "X"
        assert not home.is_symlink()
        assert not os.path.lexists(home / "gone")
        assert find_shared_folders(home) == {home / "projects"}

    def test_home_given_as_string(self, home: Path, shares: Path):
        source = InMemorySubscriptionSource(
            [Subscription("acct", "B", "app")],
            [Application("app", f"share={shares / 'Y'}")],
        )

        result = run_reconciliation(str(home), source, "acct")

        assert result.created == 1
        assert (home / "B").is_symlink()
