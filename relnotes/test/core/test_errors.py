"""Tests for relnotes.core.errors module."""

from relnotes.core.errors import ErrorCode


class TestErrorCodeValues:
    """Exit codes are part of the CLI contract."""

    def test_ok_is_zero(self) -> None:
        assert ErrorCode.OK == 0

    def test_tool_missing_is_one(self) -> None:
        assert ErrorCode.TOOL_MISSING == 1

    def test_usage_error_is_two(self) -> None:
        assert ErrorCode.USAGE_ERROR == 2

    def test_tag_error_is_three(self) -> None:
        assert ErrorCode.TAG_ERROR == 3

    def test_interrupted_shares_tag_error_code(self) -> None:
        assert ErrorCode.INTERRUPTED == 3

    def test_network_publish_io(self) -> None:
        assert ErrorCode.NETWORK_ERROR == 4
        assert ErrorCode.PUBLISH_ERROR == 5
        assert ErrorCode.IO_ERROR == 6

