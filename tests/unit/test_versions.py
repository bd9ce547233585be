"""Unit tests for .NET version normalization."""

from __future__ import annotations

import pytest

from pwsetup.dotnet.versions import major_minor, normalize_version


class TestNormalizeVersion:
    """Reduction of free-form versions to major.minor."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("8.0.x", "8.0"),
            ("9.0.x", "9.0"),
            ("8.0", "8.0"),
            ("8.0.100", "8.0"),
            ("10.0.100-preview.1", "10.0"),
        ],
    )
    def test_reduces_to_major_minor(self, raw: str, expected: str) -> None:
        assert normalize_version(raw) == expected

    @pytest.mark.parametrize("raw", ["8.0.x; rm -rf /", "8.0.x`whoami`", "8.0.x$(ls)"])
    def test_sanitizes_malicious_input(self, raw: str) -> None:
        assert normalize_version(raw) == "8.0"

    def test_single_component(self) -> None:
        assert normalize_version("8") == "8"

    def test_empty(self) -> None:
        assert normalize_version("") == ""

    def test_garbage_degrades_to_empty(self) -> None:
        assert normalize_version("latest; echo pwned") == ""

    def test_uppercase_x_is_not_a_wildcard(self) -> None:
        # "X" is stripped by sanitization, leaving a trailing empty component.
        assert normalize_version("8.0.X") == "8.0"

    def test_shell_metacharacters_never_survive(self) -> None:
        raw = "8.1;`$()| &><'\"\\\n"
        result = normalize_version(raw)
        assert not set(result) & set(";`$()| &><'\"\\\n")

    @pytest.mark.parametrize("raw", ["8.0.x", "8.0.100", "xx.1.2", "1.2.3.4", "7.x.x"])
    def test_output_has_at_most_one_dot(self, raw: str) -> None:
        result = normalize_version(raw)
        assert result.count(".") <= 1
        # "x" survives sanitization, so "xx.1.2" normalizes to "xx.1".
        assert set(result) <= set("0123456789.x")

    @pytest.mark.parametrize("raw", ["8.0.x", "8.0.100", "6.0", "1.2.3.4"])
    def test_idempotent(self, raw: str) -> None:
        once = normalize_version(raw)
        assert normalize_version(once) == once


class TestMajorMinor:
    def test_drops_patch(self) -> None:
        assert major_minor("8.0.100") == "8.0"

    def test_short_version_is_kept(self) -> None:
        assert major_minor("8") == "8"
