"""Process exit codes.

The CLI maps every failure category to one of these codes. The values are
part of the command-line contract and must stay stable.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for the ``relnotes`` command.

    - 0: Success
    - 1: A required external tool (git, gh) is missing
    - 2: Usage error (wrong argument count, unreadable config)
    - 3: Invalid or already published release tag; also used on interruption
    - 4: Network error (listing, release metadata or history fetch failed)
    - 5: Creating or uploading the release failed
    - 6: I/O error (writing the notes file)
    """

    OK = 0
    TOOL_MISSING = 1
    USAGE_ERROR = 2
    TAG_ERROR = 3
    NETWORK_ERROR = 4
    PUBLISH_ERROR = 5
    IO_ERROR = 6

    # Interruption shares the tag error code.
    INTERRUPTED = 3
