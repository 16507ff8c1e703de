"""Tests for ExcludeFilter."""

from syncfiles._exclude import ExcludeFilter


class TestExcludeFilter:
    def test_no_patterns_not_active(self):
        ef = ExcludeFilter()
        assert ef.active is False
        assert ef.matches("anything") is False
        assert ef.is_excluded("anything") is False

    def test_empty_patterns_dropped(self):
        ef = ExcludeFilter(patterns=["", None])
        assert ef.active is False
        assert ef.patterns == ()
        assert ef.is_excluded("a.txt") is False

    def test_pattern_match(self):
        ef = ExcludeFilter(patterns=["*.pyc"])
        assert ef.active is True
        assert ef.is_excluded("foo.pyc") is True
        assert ef.is_excluded("foo.py") is False

    def test_ancestor_excludes_descendants(self):
        ef = ExcludeFilter(patterns=["build"])
        assert ef.is_excluded("build") is True
        assert ef.is_excluded("build/out/app.js") is True
        assert ef.is_excluded("src/build") is False
        # matches() only looks at the path itself
        assert ef.matches("build/out/app.js") is False

    def test_leading_dot_segments_ignored(self):
        ef = ExcludeFilter(patterns=["tmp"])
        assert ef.is_excluded("./tmp/x") is True

    def test_absolute_match(self):
        ef = ExcludeFilter(patterns=["/data/**/*.bak"])
        assert ef.matches("/data/a/b.bak") is True
        assert ef.matches("/other/a/b.bak") is False

    def test_exclude_from_file(self, tmp_path):
        pfile = tmp_path / "excludes.txt"
        pfile.write_text("*.log\n# comment\n\n  __pycache__  \n")
        ef = ExcludeFilter(patterns=["*.tmp"], exclude_from=str(pfile))
        assert ef.patterns == ("*.tmp", "*.log", "__pycache__")
        assert ef.is_excluded("app.log") is True
        assert ef.is_excluded("__pycache__/m.pyc") is True
        assert ef.is_excluded("app.py") is False

    def test_excluded_below_checks_parents(self):
        ef = ExcludeFilter(patterns=["/data/src/build"])
        assert ef.is_excluded_below("/data/src", "/data/src/build/out/a.o") is True
        assert ef.is_excluded_below("/data/src", "/data/src/lib/a.o") is False

    def test_excluded_below_stops_at_root(self):
        ef = ExcludeFilter(patterns=["/data"])
        assert ef.is_excluded_below("/data/src", "/data/src/a.txt") is False
