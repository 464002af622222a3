"""End-to-end tests for scanning, resolving and rewriting a document."""

from unittest.mock import MagicMock

import pytest

from fakes import FakeDenoLand, FakeRegistry
from registry.github import GitHubRaw
from update import rewrite, update_file, update_text
from versioning.models import ResolutionOutcome, SpecifierReplacement


def run(before, registries=None):
    return update_text(before, registries if registries is not None else [FakeRegistry()])


class TestUnconstrained:
    """Specifiers without a fragment move to the newest release."""

    def test_upgrades_to_latest(self):
        result = run('import "https://fakeregistry.com/foo@0.0.1/mod.ts";')
        assert result.text == 'import "https://fakeregistry.com/foo@0.0.2/mod.ts";'
        assert len(result.outcomes) == 1
        outcome = result.outcomes[0]
        assert outcome.success is True
        assert outcome.replaced.old == "https://fakeregistry.com/foo@0.0.1/mod.ts"
        assert outcome.replaced.new == "https://fakeregistry.com/foo@0.0.2/mod.ts"

    def test_already_latest_is_noop_success(self):
        before = 'import "https://fakeregistry.com/foo@0.0.2/mod.ts";'
        result = run(before)
        assert result.text == before
        assert len(result.outcomes) == 1
        assert result.outcomes[0].success is True
        assert result.outcomes[0].changed is False
        assert result.changed is False

    def test_current_missing_from_registry_is_not_an_error(self):
        before = 'import "https://fakeregistry.com/foo@0.0.3/mod.ts";'
        result = run(before)
        assert result.text == before
        assert result.outcomes[0].success is True

    def test_deno_land_std(self):
        result = run('import "https://deno.land/std@0.34.0/mod.ts";', [FakeDenoLand()])
        assert result.text == 'import "https://deno.land/std@0.35.0/mod.ts";'

    def test_blank_fragment_behaves_like_no_fragment(self):
        result = run('import "https://fakeregistry.com/foo@0.0.1/mod.ts#";')
        assert result.text == 'import "https://fakeregistry.com/foo@0.0.2/mod.ts#";'


class TestFragments:
    """Constraint fragments after '#'."""

    def test_eq_not_found(self):
        before = 'import "https://fakeregistry.com/foo@0.0.3/mod.ts#=";'
        result = run(before)
        assert result.text == before
        assert len(result.outcomes) == 1
        assert result.outcomes[0].success is False
        assert result.outcomes[0].message == "no compatible version found"

    def test_eq_present_keeps_version(self):
        before = 'import "https://fakeregistry.com/foo@0.0.1/mod.ts#=";'
        result = run(before)
        assert result.text == before
        assert result.outcomes[0].success is True

    def test_eq_token_never_upgrades(self):
        before = 'import "https://fakeregistry.com/foo@0.0.1/mod.ts#=0.0.1";'
        assert run(before).text == before

    def test_eq_token_moves_to_pinned_version(self):
        result = run('import "https://fakeregistry.com/foo@0.0.2/mod.ts#=0.0.1";')
        assert result.text == 'import "https://fakeregistry.com/foo@0.0.1/mod.ts#=0.0.1";'

    def test_tilde_token(self):
        result = run('import "https://fakeregistry.com/foo@0.0.1/mod.ts#~0.0.1";')
        assert result.text == 'import "https://fakeregistry.com/foo@0.0.2/mod.ts#~0.0.1";'

    def test_tilde(self):
        result = run('import "https://fakeregistry.com/foo@0.0.1/mod.ts#~";')
        assert result.text == 'import "https://fakeregistry.com/foo@0.0.2/mod.ts#~";'

    def test_caret(self):
        result = run('import "https://fakeregistry.com/foo@0.0.1/mod.ts#^";')
        assert result.text == 'import "https://fakeregistry.com/foo@0.0.2/mod.ts#^";'

    def test_caret_stays_within_major(self):
        registry = FakeRegistry({"foo": ["2.0.0", "1.4.0", "1.2.0"]})
        result = run('import "https://fakeregistry.com/foo@1.2.0/mod.ts#^";', [registry])
        assert result.text == 'import "https://fakeregistry.com/foo@1.4.0/mod.ts#^";'

    def test_lt_token(self):
        result = run('import "https://fakeregistry.com/foo@0.0.1/mod.ts#<0.1.0";')
        assert result.text == 'import "https://fakeregistry.com/foo@0.0.2/mod.ts#<0.1.0";'

    def test_lt_token_with_spaces(self):
        result = run('import "https://fakeregistry.com/foo@0.0.1/mod.ts# < 0.1.0";')
        assert result.text == 'import "https://fakeregistry.com/foo@0.0.2/mod.ts# < 0.1.0";'

    def test_lt_without_candidates(self):
        before = 'import "https://fakeregistry.com/foo@0.0.1/mod.ts#<0.0.1";'
        result = run(before)
        assert result.text == before
        assert result.outcomes[0].message == "no compatible version found"

    def test_invalid_fragment_semver(self):
        before = 'import "https://fakeregistry.com/foo@0.0.1/mod.ts# < 0.1.b";'
        result = run(before)
        assert result.text == before
        assert len(result.outcomes) == 1
        assert result.outcomes[0].success is False
        assert result.outcomes[0].message == "invalid semver version: 0.1.b"

    def test_invalid_fragment_foo(self):
        before = 'import "https://fakeregistry.com/foo@0.0.1/mod.ts#foo";'
        result = run(before)
        assert result.text == before
        assert len(result.outcomes) == 1
        assert result.outcomes[0].success is False
        assert result.outcomes[0].message == "invalid semver fragment: foo"

    def test_invalid_path_version(self):
        before = 'import "https://fakeregistry.com/foo@0.0.b/mod.ts";'
        result = run(before)
        assert result.text == before
        assert result.outcomes[0].message == "invalid semver version: 0.0.b"


class TestPathOperators:
    """Operators written in the path move into a bare fragment."""

    def test_fragment_move_tilde(self):
        result = run('import "https://fakeregistry.com/foo@~0.0.1/mod.ts";')
        assert result.text == 'import "https://fakeregistry.com/foo@0.0.2/mod.ts#~";'

    def test_fragment_move_eq(self):
        result = run('import "https://fakeregistry.com/foo@=0.0.1/mod.ts";')
        assert result.text == 'import "https://fakeregistry.com/foo@0.0.1/mod.ts#=";'

    def test_fragment_move_caret(self):
        result = run('import "https://fakeregistry.com/foo@^0.0.1/mod.ts";')
        assert result.text == 'import "https://fakeregistry.com/foo@0.0.2/mod.ts#^";'

    def test_explicit_fragment_wins_over_path_operator(self):
        result = run('import "https://fakeregistry.com/foo@~0.0.1/mod.ts#=";')
        assert result.text == 'import "https://fakeregistry.com/foo@0.0.1/mod.ts#=";'

    def test_fragment_move_eq_missing_version_fails(self):
        before = 'import "https://fakeregistry.com/foo@=0.0.3/mod.ts";'
        result = run(before)
        assert result.text == before
        assert result.outcomes[0].message == "no compatible version found"


class TestMultipleSpecifiers:
    """Several specifiers and registries in one document."""

    def test_multiple_registries_grouped_by_registry(self):
        before = """
import "https://deno.land/std@0.34.0/mod.ts";
import "https://deno.land/std@0.34.0/foo.ts";
import { foo } from "https://fakeregistry.com/foo@0.0.1/mod.ts";
import { bar } from "https://fakeregistry.com/foo@0.0.1/bar.ts#=";
"""
        expected = """
import "https://deno.land/std@0.35.0/mod.ts";
import "https://deno.land/std@0.35.0/foo.ts";
import { foo } from "https://fakeregistry.com/foo@0.0.2/mod.ts";
import { bar } from "https://fakeregistry.com/foo@0.0.1/bar.ts#=";
"""
        result = run(before, [FakeRegistry(), FakeDenoLand()])
        assert result.text == expected
        assert len(result.outcomes) == 4
        # grouped by the order registries were passed in, not by position
        assert [o.registry for o in result.outcomes] == ["fakeregistry", "fakeregistry", "deno.land", "deno.land"]
        assert [o.success for o in result.outcomes] == [True, True, True, True]
        assert [o.changed for o in result.outcomes] == [True, False, True, True]

    def test_one_failure_does_not_stop_others(self):
        before = (
            'import "https://fakeregistry.com/foo@0.0.1/a.ts#nope";\n'
            'import "https://fakeregistry.com/foo@0.0.1/b.ts";\n'
        )
        result = run(before)
        assert result.text == (
            'import "https://fakeregistry.com/foo@0.0.1/a.ts#nope";\n'
            'import "https://fakeregistry.com/foo@0.0.2/b.ts";\n'
        )
        assert len(result.failures) == 1
        assert len(result.updates) == 1

    def test_lookup_failure_is_reported(self):
        before = 'import "https://fakeregistry.com/bar@1.0.0/mod.ts";'
        result = run(before)
        assert result.text == before
        assert result.outcomes[0].success is False
        assert result.outcomes[0].message == "lookup failed: bar (HTTP 404)"

    def test_repeated_import_one_outcome_per_occurrence(self):
        before = (
            'import "https://fakeregistry.com/foo@0.0.1/mod.ts";\n'
            'import "https://fakeregistry.com/foo@0.0.1/mod.ts";\n'
        )
        result = run(before)
        assert result.text == before.replace("0.0.1", "0.0.2")
        assert len(result.outcomes) == 2
        assert len(result.updates) == 2

    def test_no_specifiers(self):
        before = 'import { x } from "./local.ts";\nconsole.log("https://example.com");\n'
        result = run(before, [FakeRegistry(), FakeDenoLand()])
        assert result.text == before
        assert result.outcomes == []


class TestBranchNames:
    """Non-version path segments are never claimed."""

    def test_github_raw_branch_name(self):
        before = """
import "https://raw.githubusercontent.com/foo/bar/main/mod.ts";
import "https://raw.githubusercontent.com/foo/bar/main/mod.ts#=";
"""
        result = run(before)
        assert result.text == before
        assert len(result.outcomes) == 0

    def test_github_raw_branch_name_with_github_registry(self):
        client = MagicMock()
        before = 'import "https://raw.githubusercontent.com/foo/bar/main/mod.ts";'
        result = run(before, [GitHubRaw(client=client)])
        assert result.text == before
        assert result.outcomes == []
        client.get_tag_names.assert_not_called()

    def test_github_raw_commit_sha(self):
        client = MagicMock()
        before = (
            'import "https://raw.githubusercontent.com/foo/bar/3f2a9c1d0e/mod.ts";\n'
            'import "https://raw.githubusercontent.com/foo/bar/1234567/mod.ts";\n'
        )
        result = run(before, [GitHubRaw(client=client)])
        assert result.text == before
        assert result.outcomes == []
        client.get_tag_names.assert_not_called()


class TestComments:
    """Comment handling and its known global-substitution gap."""

    def test_line_comment_ignored(self):
        before = '//import "https://fakeregistry.com/foo@0.0.1/mod.ts";'
        result = run(before)
        assert result.text == before
        assert len(result.outcomes) == 0

    def test_block_comment_ignored(self):
        before = '/*import "https://fakeregistry.com/foo@0.0.1/mod.ts";*/'
        result = run(before)
        assert result.text == before
        assert len(result.outcomes) == 0

    def test_commented_duplicate_is_still_substituted(self):
        before = """
//import "https://fakeregistry.com/foo@0.0.1/mod.ts";
import "https://fakeregistry.com/foo@0.0.1/mod.ts";
"""
        expected = """
//import "https://fakeregistry.com/foo@0.0.2/mod.ts";
import "https://fakeregistry.com/foo@0.0.2/mod.ts";
"""
        result = run(before)
        assert result.text == expected
        assert len(result.outcomes) == 1


class TestUpdateFile:
    """File-level wrapper."""

    def test_writes_file(self, tmp_path):
        path = tmp_path / "mod.ts"
        path.write_text('import "https://fakeregistry.com/foo@0.0.1/mod.ts";', encoding="utf-8")
        result = update_file(str(path), [FakeRegistry()])
        assert result.changed
        assert path.read_text(encoding="utf-8") == 'import "https://fakeregistry.com/foo@0.0.2/mod.ts";'

    def test_dry_run_leaves_file(self, tmp_path):
        path = tmp_path / "mod.ts"
        before = 'import "https://fakeregistry.com/foo@0.0.1/mod.ts";'
        path.write_text(before, encoding="utf-8")
        result = update_file(str(path), [FakeRegistry()], dry_run=True)
        assert result.changed
        assert path.read_text(encoding="utf-8") == before

    def test_preserves_crlf(self, tmp_path):
        path = tmp_path / "mod.ts"
        path.write_bytes(b'import "https://fakeregistry.com/foo@0.0.1/mod.ts";\r\nexport {};\r\n')
        update_file(str(path), [FakeRegistry()])
        assert path.read_bytes() == b'import "https://fakeregistry.com/foo@0.0.2/mod.ts";\r\nexport {};\r\n'

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            update_file(str(tmp_path / "absent.ts"), [FakeRegistry()])


class TestRewrite:
    """Literal substitution of resolved outcomes."""

    def outcome(self, old, new):
        return ResolutionOutcome(
            specifier=old,
            registry="fakeregistry",
            success=True,
            replaced=SpecifierReplacement(old=old, new=new),
        )

    def test_repeated_outcome_applied_once(self):
        old = "https://fakeregistry.com/foo@0.0.1/mod.ts"
        new = old + "#~"
        text = f'import "{old}";\nimport "{old}";\n'
        assert rewrite(text, [self.outcome(old, new), self.outcome(old, new)]) == text.replace(old, new)

    def test_failures_and_unchanged_ignored(self):
        text = 'import "https://fakeregistry.com/foo@0.0.1/mod.ts";'
        failed = ResolutionOutcome(specifier="x", registry="fakeregistry", success=False, message="boom")
        latest = ResolutionOutcome(specifier="y", registry="fakeregistry", success=True)
        assert rewrite(text, [failed, latest]) == text
