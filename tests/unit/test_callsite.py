"""Tests for call-site resolution."""

import inspect

from consolelog.core.callsite import CallSite, format_call_site, resolve_call_site


def resolve_from_helper(depth):
    return resolve_call_site(depth)


class TestResolveCallSite:
    def test_depth_zero_is_the_caller(self):
        line = inspect.currentframe().f_lineno + 1
        site = resolve_call_site(0)
        assert site.file.endswith("test_callsite.py")
        assert site.line == line

    def test_depth_one_skips_a_frame(self):
        line = inspect.currentframe().f_lineno + 1
        site = resolve_from_helper(1)
        assert site.line == line

    def test_too_deep_returns_none(self):
        assert resolve_call_site(100_000) is None


class TestFormatCallSite:
    def test_format(self):
        assert str(CallSite("app.py", 12)) == "app.py : 12"
        assert format_call_site(CallSite("app.py", 12)) == "app.py : 12"

    def test_unknown(self):
        assert format_call_site(None) == "unknown"

    def test_preformatted_string(self):
        assert format_call_site("views.py : 3") == "views.py : 3"
