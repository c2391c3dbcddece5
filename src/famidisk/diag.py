# famidisk/diag.py
#
# Non-fatal problems found while walking an image.
#
# Written & released by Keir Fraser <keir.xen@gmail.com>
#
# This is free and unencumbered software released into the public domain.
# See the file COPYING for more details, or visit <http://unlicense.org>.

from typing import List

class Issue:
    def __str__(self) -> str:
        raise NotImplementedError

class CRCMismatch(Issue):
    def __init__(self, block: str, side: int, offset: int,
                 read: int, expected: int) -> None:
        self.block, self.side, self.offset = block, side, offset
        self.read, self.expected = read, expected
    def __str__(self) -> str:
        return ('CRC mismatch in %s at offset 0x%X, '
                'read 0x%04X, expected 0x%04X'
                % (self.block, self.offset, self.read, self.expected))

class SideCountMismatch(Issue):
    def __init__(self, header: int, actual: int) -> None:
        self.header, self.actual = header, actual
    def __str__(self) -> str:
        return ('FDS header sides mismatch (header: %d, file: %d)'
                % (self.header, self.actual))


class Diagnostics:
    """Collects warnings without interrupting the walk. Each warning is
    printed as it is recorded unless @quiet is set."""

    def __init__(self, quiet: bool = False) -> None:
        self.issues: List[Issue] = []
        self.quiet = quiet

    def add(self, issue: Issue) -> None:
        self.issues.append(issue)
        if not self.quiet:
            print('WARNING: %s' % issue)

    def __len__(self) -> int:
        return len(self.issues)

    def __iter__(self):
        return iter(self.issues)

    @property
    def status(self) -> int:
        """Exit status: 0 if clean, 1 if any warnings were recorded."""
        return 1 if self.issues else 0

# Local variables:
# python-indent: 4
# End:
