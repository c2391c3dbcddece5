# famidisk/tools/util.py
#
# Utility functions shared by the command line tools.
#
# Written & released by Keir Fraser <keir.xen@gmail.com>
#
# This is free and unencumbered software released into the public domain.
# See the file COPYING for more details, or visit <http://unlicense.org>.

from __future__ import annotations
from typing import BinaryIO, Tuple, Type

import argparse

from famidisk.image.image import Image, detect, stream_length


class CmdlineHelpFormatter(argparse.ArgumentDefaultsHelpFormatter,
                           argparse.RawDescriptionHelpFormatter):
    def _get_help_string(self, action):
        help = action.help
        if '%no_default' in help:
            return help.replace('%no_default', '')
        if ('%(default)' in help
            or action.default is None
            or action.default is False
            or action.default is argparse.SUPPRESS):
            return help
        return help + ' (default: %(default)s)'


class ArgumentParser(argparse.ArgumentParser):
    def __init__(self, formatter_class=CmdlineHelpFormatter, *args, **kwargs):
        return super().__init__(formatter_class=formatter_class,
                                allow_abbrev=False,
                                *args, **kwargs)


def identify(f: BinaryIO) -> Tuple[Type[Image], int]:
    """Return the representation and length of the image open on @f."""
    length = stream_length(f)
    return detect(length), length


# Local variables:
# python-indent: 4
# End:
