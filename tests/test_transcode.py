import io
import struct

import pytest

from famidisk import error
from famidisk.diag import Diagnostics, CRCMismatch, SideCountMismatch
from famidisk.disk import DiskInfo, FileHeader
from famidisk.image.fds import FDS
from famidisk.image.image import ImageFile
from famidisk.image.qd import QD
from famidisk.stream import Reader, Writer
from famidisk.transcode import Options, Transcoder, convert_bytes
from famidisk.transcode import output_format

from helpers import (ref_crc, disk_info, side_blocks, fds_side, qd_side,
                     fds_header)


def convert(dat, **kwargs):
    out, fmt, diag = convert_bytes(dat, Options(**kwargs),
                                   Diagnostics(quiet=True))
    return out, fmt, diag


def test_minimal_qd_to_fds():
    dat = qd_side(side_blocks())
    out, fmt, diag = convert(dat, remove_header=True)
    assert fmt is FDS
    assert len(out) == 65500
    assert len(diag) == 0
    assert diag.status == 0
    assert out == fds_side(side_blocks())


def test_qd_to_fds_writes_header():
    blocks = side_blocks([b'data'])
    out, fmt, diag = convert(qd_side(blocks))
    assert fmt is FDS
    assert out == fds_header(1) + fds_side(blocks)
    assert diag.status == 0


def test_fds_to_qd():
    blocks = side_blocks([b'abc', b'defgh'])
    out, fmt, diag = convert(fds_side(blocks))
    assert fmt is QD
    assert out == qd_side(blocks)
    assert len(out) == 65536


def test_fds_with_header_to_qd_drops_header():
    blocks = side_blocks([b'abc'])
    out, fmt, diag = convert(fds_header(1) + fds_side(blocks))
    assert fmt is QD
    assert out == qd_side(blocks)
    assert diag.status == 0


def test_round_trip_qd_fds_qd():
    dat = (qd_side(side_blocks([b'\x01\x02\x03', b'x' * 4000], nr_files=1))
           + qd_side(side_blocks([b'side b'], side=1)))
    fds, _, _ = convert(dat, remove_header=True)
    qd, fmt, diag = convert(fds)
    assert fmt is QD
    assert qd == dat
    assert diag.status == 0


def test_round_trip_fds_qd_fds():
    dat = fds_side(side_blocks([b'hello', b'world']))
    qd, _, _ = convert(dat)
    fds, fmt, _ = convert(qd)
    assert fmt is FDS
    assert fds == fds_header(1) + dat


def test_hidden_files_survive_conversion():
    blocks = side_blocks([b'visible', b'hidden'], nr_files=1)
    out, _, _ = convert(fds_side(blocks))
    assert out == qd_side(blocks)


def test_crc_mismatch_is_diagnostic():
    blocks = side_blocks([b'payload'])
    bad = ref_crc(blocks[3]) ^ 0x0101
    dat = qd_side(blocks, crcs=[None, None, None, bad])
    out, _, diag = convert(dat, remove_header=True)
    assert out == fds_side(blocks)
    assert diag.status == 1
    issue, = diag
    assert isinstance(issue, CRCMismatch)
    assert issue.block == 'file data block'
    assert issue.read == bad
    assert issue.expected == ref_crc(blocks[3])
    # CRC follows disk info, file count and file header blocks.
    assert issue.offset == 58 + 2 + 2 + 16 + 2 + len(blocks[3])


def test_crc_mismatch_not_checked_without_verify():
    blocks = side_blocks()
    dat = qd_side(blocks, crcs=[None, 0x1234])
    _, _, diag = convert(dat, verify_crc=False)
    assert diag.status == 0


def test_zero_disk_info_crc_tolerated():
    blocks = side_blocks([b'abc'])
    dat = qd_side(blocks, crcs=[0, None, None, None])
    _, _, diag = convert(dat)
    assert len(diag) == 0


def test_zero_crc_on_other_blocks_reported():
    blocks = side_blocks([b'abc'])
    assert ref_crc(blocks[1]) != 0
    dat = qd_side(blocks, crcs=[0, 0, None, None])
    _, _, diag = convert(dat)
    issue, = diag
    assert issue.block == 'file amount block'
    assert issue.read == 0


def test_zero_dib_crc_output():
    blocks = side_blocks([b'abc'])
    out, fmt, _ = convert(fds_side(blocks), zero_dib_crc=True)
    assert fmt is QD
    assert out[56:58] == b'\x00\x00'
    assert out == qd_side(blocks, crcs=[0, None, None, None])
    # The null CRC passes verification when read back.
    _, _, diag = convert(out)
    assert diag.status == 0


def test_qd_crcs_copied_without_recompute():
    blocks = side_blocks([b'abc'])
    dat = qd_side(blocks, crcs=[None, None, 0xbeef, None])
    rd = Reader.from_bytes(dat)
    f = io.BytesIO()
    Transcoder(rd, QD, len(dat), Writer(f), QD,
               diag=Diagnostics(quiet=True)).run()
    assert f.getvalue() == dat


def test_recompute_repairs_crcs():
    blocks = side_blocks([b'abc', b'def'])
    dat = qd_side(blocks, crcs=[0x1111, None, None, None, 0x2222, None])
    out, fmt, diag = convert(dat, recompute_crc=True)
    assert fmt is QD
    assert out == qd_side(blocks)
    assert len(diag) == 2


def test_recompute_with_zero_dib_crc():
    blocks = side_blocks()
    out, _, _ = convert(qd_side(blocks), recompute_crc=True,
                        zero_dib_crc=True)
    assert out == qd_side(blocks, crcs=[0, None])


def test_add_header_counts_sides():
    dat = (fds_side(side_blocks([b'a'])) + fds_side(side_blocks(side=1)))
    out, fmt, diag = convert(dat, add_header=True)
    assert fmt is FDS
    assert out[4] == 2
    assert out == fds_header(2) + dat
    assert diag.status == 0


def test_qd_to_fds_header_counts_sides():
    dat = b''.join(qd_side(side_blocks(side=s)) for s in range(3))
    out, _, _ = convert(dat)
    assert out[:16] == fds_header(3)
    assert len(out) == 16 + 3*65500


def test_add_header_copies_and_repairs_header():
    dat = (fds_side(side_blocks([b'a'])) + fds_side(side_blocks(side=1)))
    out, _, diag = convert(fds_header(1) + dat, add_header=True)
    assert out == fds_header(2) + dat
    issue, = diag
    assert isinstance(issue, SideCountMismatch)
    assert (issue.header, issue.actual) == (1, 2)
    assert diag.status == 1


def test_remove_header():
    dat = fds_side(side_blocks([b'a']))
    out, fmt, diag = convert(fds_header(1) + dat, remove_header=True)
    assert fmt is FDS
    assert out == dat
    assert diag.status == 0


def test_output_side_too_large():
    # A full FDS side with many blocks has no room for their CRCs.
    payloads = [b'\x11' * 3000] * 19 + [b'\x22' * 8102]
    dat = fds_side(side_blocks(payloads))
    assert len(dat) == 65500
    with pytest.raises(error.Fatal, match='too large'):
        convert(dat)


def test_fatal_structure_aborts():
    dat = fds_side([disk_info(), b'\x09\x00'])
    with pytest.raises(error.Fatal):
        convert(dat)


def test_walk_without_output():
    blocks = side_blocks([b'abc'], nr_files=0)
    dat = qd_side(blocks) + qd_side(side_blocks(side=1))
    t = Transcoder(Reader.from_bytes(dat), QD, len(dat),
                   diag=Diagnostics(quiet=True))
    seen = list(t.blocks())
    assert t.nr_sides == 2
    assert [b.hidden for b in seen if isinstance(b, FileHeader)] == [True]
    assert sum(isinstance(b, DiskInfo) for b in seen) == 2
    assert t.diag.status == 0


def test_header_read_before_walk():
    dat = fds_header(3) + fds_side(side_blocks())
    t = Transcoder(Reader.from_bytes(dat), FDS, len(dat),
                   diag=Diagnostics(quiet=True))
    assert t.header.sides == 3
    diag = t.run()
    issue, = diag
    assert (issue.header, issue.actual) == (3, 1)


@pytest.mark.parametrize('in_fmt, kwargs, out_fmt', [
    (QD, {}, FDS),
    (QD, {'remove_header': True}, FDS),
    (QD, {'recompute_crc': True}, QD),
    (QD, {'recompute_crc': True, 'zero_dib_crc': True}, QD),
    (FDS, {}, QD),
    (FDS, {'zero_dib_crc': True}, QD),
    (FDS, {'add_header': True}, FDS),
    (FDS, {'remove_header': True}, FDS),
])
def test_output_format(in_fmt, kwargs, out_fmt):
    assert output_format(in_fmt, Options(**kwargs)) is out_fmt


@pytest.mark.parametrize('in_fmt, kwargs', [
    (FDS, {'add_header': True, 'remove_header': True}),
    (QD, {'add_header': True}),
    (QD, {'zero_dib_crc': True}),
    (FDS, {'recompute_crc': True}),
    (QD, {'recompute_crc': True, 'remove_header': True}),
    (FDS, {'add_header': True, 'zero_dib_crc': True}),
])
def test_invalid_options(in_fmt, kwargs):
    with pytest.raises(error.Fatal):
        output_format(in_fmt, Options(**kwargs))


def test_image_file_removed_on_error(tmp_path):
    name = tmp_path / 'out.fds'
    with pytest.raises(error.Fatal):
        with ImageFile(str(name)) as wr:
            wr.write(b'partial')
            raise error.Fatal('bad image')
    assert not name.exists()


def test_image_file_noclobber(tmp_path):
    name = tmp_path / 'out.qd'
    name.write_bytes(b'keep')
    with pytest.raises(error.Fatal, match='exists'):
        with ImageFile(str(name), noclobber=True):
            pass
    assert name.read_bytes() == b'keep'


def test_image_file_written(tmp_path):
    name = tmp_path / 'out.qd'
    with ImageFile(str(name)) as wr:
        wr.write(b'FDS\x1a\x00')
        wr.patch(4, struct.pack('B', 7))
    assert name.read_bytes() == b'FDS\x1a\x07'


def test_header_without_side_count_not_reported():
    dat = fds_side(side_blocks([b'a']))
    out, _, diag = convert(fds_header(0) + dat, add_header=True)
    assert diag.status == 0
    assert out == fds_header(1) + dat
