# Copyright (C) 2024-- The gfakit Development Team
#
# This file is part of gfakit.
#
# gfakit is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# gfakit is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with gfakit.  If not, see <http://www.gnu.org/licenses/>.

import pytest
from gfakit import config, parse_graph
from gfakit.graph import (
    parse_line,
    Header,
    Comment,
    Segment,
    Link,
    Containment,
    Path,
    SegmentEnd,
    OrientedSegment,
)
from gfakit.errors import (
    FormatError,
    GfaTypeError,
    InconsistencyError,
    ArgumentError,
)


def test_parse_segment():
    s = parse_line("S\t1\tACGT\tLN:i:4\tRC:i:20")
    assert type(s) is Segment
    assert s.name == "1"
    assert s.sequence == "ACGT"
    assert s.length == 4
    assert s.get("RC") == 20
    assert s.tagnames == ["LN", "RC"]
    assert s.uid is None
    assert str(s) == "S\t1\tACGT\tLN:i:4\tRC:i:20"


def test_parse_line_trailing_newline():
    assert str(parse_line("S\t1\tACGT\n")) == "S\t1\tACGT"


def test_segment_length():
    assert parse_line("S\t1\t*\tLN:i:10").length == 10
    s = parse_line("S\t1\t*")
    assert s.length is None
    with pytest.raises(ArgumentError) as ei:
        s.length_or_raise()
    assert str(ei.value) == (
        "The length of segment 1 is unknown: its sequence is * and it has no "
        "LN tag."
    )
    # At level 0 the LN value is text, but we can still get the length
    assert parse_line("S\t1\t*\tLN:i:10", validate=0).length == 10


def test_segment_ln_mismatch():
    with pytest.raises(InconsistencyError) as ei:
        parse_line("S\t1\tACGT\tLN:i:5")
    assert str(ei.value) == (
        "Segment 1 has a LN tag of 5, but its sequence is 4 characters long."
    )
    # Only checked at level 2
    assert parse_line("S\t1\tACGT\tLN:i:5", validate=1).length == 4
    s = parse_line("S\t1\tACGT")
    with pytest.raises(InconsistencyError):
        s.set("LN", 10)
    assert str(s) == "S\t1\tACGT"


def test_rejected_set_leaves_record_unchanged():
    s = parse_line("S\t1\tACGT\tLN:i:4")
    with pytest.raises(InconsistencyError):
        s.set("LN", 99)
    assert str(s) == "S\t1\tACGT\tLN:i:4"
    assert s.get("LN") == 4
    # Also for records that are in a graph
    g = parse_graph(["S\t1\tACGT\tLN:i:4"])
    with pytest.raises(InconsistencyError):
        g.get_segment("1").set("LN", 3)
    assert str(g) == "S\t1\tACGT\tLN:i:4\n"


def test_segment_ln_must_be_an_integer():
    for level in (1, 2):
        with pytest.raises(GfaTypeError) as ei:
            parse_line("S\t1\tACGT\tLN:Z:abc", validate=level)
        assert str(ei.value) == (
            'The LN tag of segment 1 has type "Z", but it should be an '
            'integer ("i").'
        )
    with pytest.raises(GfaTypeError):
        parse_line("S\t1\t*\tLN:f:1.5")
    # At level 0 nothing is checked until the length is needed
    s = parse_line("S\t1\t*\tLN:Z:abc", validate=0)
    with pytest.raises(FormatError) as ei:
        s.length_or_raise()
    assert str(ei.value) == 'The LN tag of segment 1 is not an integer: "abc"'
    g = parse_graph(["S\t1\t*\tLN:Z:abc"], validate=0)
    with pytest.raises(FormatError):
        g.info()


def test_segment_bad_fields():
    with pytest.raises(FormatError) as ei:
        parse_line("S\t*x\tACGT")
    assert str(ei.value) == (
        'Invalid name "*x" in segment line: should match '
        f"{config.NAME_PATT.pattern}"
    )
    with pytest.raises(FormatError) as ei:
        parse_line("S\t1\tAC GT")
    assert 'Invalid sequence "AC GT" in segment line' in str(ei.value)
    # Nothing is checked at level 0
    s = parse_line("S\t*x\tAC GT", validate=0)
    assert s.name == "*x"
    assert s.sequence == "AC GT"


def test_unknown_record_type():
    for level in (0, 1, 2):
        with pytest.raises(FormatError) as ei:
            parse_line("X\t1", validate=level)
        assert str(ei.value) == (
            f'Unknown record type "X" in line {"X" + chr(9) + "1"!r}. Should '
            "be one of H, S, L, C, P, #."
        )


def test_too_few_fields():
    for level in (0, 1, 2):
        with pytest.raises(FormatError) as ei:
            parse_line("L\t1\t+\t2", validate=level)
        assert str(ei.value) == (
            "A link line needs 5 positional field(s), but only 3 were given: "
            f"{'L' + chr(9) + '1' + chr(9) + '+' + chr(9) + '2'!r}"
        )


def test_link():
    l = parse_line("L\t1\t+\t2\t-\t3M1I")
    assert type(l) is Link
    assert l.from_segment == OrientedSegment("1", "+")
    assert l.to_segment == OrientedSegment("2", "-")
    # "1 +" is left through its end; "2 -" is entered through its end too
    assert l.from_end == SegmentEnd("1", "E")
    assert l.to_end == SegmentEnd("2", "E")
    assert l.other_end(SegmentEnd("1", "E")) == SegmentEnd("2", "E")
    assert l.references() == ["1", "2"]
    assert not l.is_self_loop()
    assert str(l) == "L\t1\t+\t2\t-\t3M1I"


def test_link_reverse():
    l = parse_line("L\t1\t+\t2\t-\t3M1I\tRC:i:5")
    r = l.reverse()
    assert str(r) == "L\t2\t+\t1\t-\t1D3M\tRC:i:5"
    assert str(r.reverse()) == "L\t1\t+\t2\t-\t3M1I\tRC:i:5"


def test_link_connects():
    l = parse_line("L\t1\t+\t2\t-\t*")
    assert l.connects(OrientedSegment("1", "+"), OrientedSegment("2", "-"))
    assert l.connects(OrientedSegment("2", "+"), OrientedSegment("1", "-"))
    assert not l.connects(
        OrientedSegment("1", "+"), OrientedSegment("2", "+")
    )
    assert not l.connects(
        OrientedSegment("2", "-"), OrientedSegment("1", "+")
    )


def test_link_overlap_lengths():
    l = parse_line("L\t1\t+\t2\t+\t3M2D")
    assert l.overlap_length_at(SegmentEnd("1", "E")) == 5
    assert l.overlap_length_at(SegmentEnd("2", "B")) == 3
    assert parse_line("L\t1\t+\t2\t+\t*").overlap_length_at(
        SegmentEnd("2", "B")
    ) == 0


def test_link_self_loop():
    l = parse_line("L\t1\t+\t1\t-\t*")
    assert l.is_self_loop()
    assert l.references() == ["1"]
    # Both ends of this link are the end of 1
    assert l.ends() == [SegmentEnd("1", "E"), SegmentEnd("1", "E")]


def test_link_bad_orientation():
    with pytest.raises(FormatError) as ei:
        parse_line("L\t1\t?\t2\t+\t*")
    assert str(ei.value) == (
        'Invalid from orientation "?" in link line: should match [+-]'
    )
    with pytest.raises(FormatError) as ei:
        parse_line("L\t1\t+\t2\t+\t10Q")
    assert "Invalid overlap" in str(ei.value)


def test_containment():
    c = parse_line("C\t1\t+\t2\t-\t012\t5M")
    assert type(c) is Containment
    assert c.pos == 12
    assert c.references() == ["1", "2"]
    # The position is canonicalized
    assert str(c) == "C\t1\t+\t2\t-\t12\t5M"
    with pytest.raises(FormatError) as ei:
        parse_line("C\t1\t+\t2\t-\tx1\t5M")
    assert str(ei.value) == (
        'Invalid position "x1" in containment line: should match [0-9]+'
    )
    assert parse_line("C\t1\t+\t2\t-\tx1\t5M", validate=0).pos == "x1"


def test_path():
    p = parse_line("P\tp1\t1+,2-,1+\t3M,4M")
    assert type(p) is Path
    assert p.name == "p1"
    assert p.steps == [("1", "+"), ("2", "-"), ("1", "+")]
    assert [str(o) for o in p.overlaps] == ["3M", "4M"]
    assert p.references() == ["1", "2"]
    assert p.implied_links() == [
        (("1", "+"), ("2", "-")),
        (("2", "-"), ("1", "+")),
    ]
    assert str(p) == "P\tp1\t1+,2-,1+\t3M,4M"
    assert str(parse_line("P\tp2\t1+\t*")) == "P\tp2\t1+\t*"


def test_path_overlap_count():
    with pytest.raises(FormatError) as ei:
        parse_line("P\tp1\t1+,2-,3+\t3M")
    assert str(ei.value) == (
        "Path p1 visits 3 segment(s), so it should have 2 overlap(s) (or *); "
        "it has 1."
    )


def test_path_bad_steps():
    with pytest.raises(FormatError) as ei:
        parse_line("P\tp1\t1+,2\t*")
    assert 'Invalid segment names "1+,2" in path line' in str(ei.value)


def test_path_constructor():
    p = Path("p1", [("1", "+"), ("2", "-")])
    assert str(p) == "P\tp1\t1+,2-\t*"
    with pytest.raises(FormatError) as ei:
        Path("p1", [])
    assert str(ei.value) == "Path p1 doesn't visit any segments"


def test_header_and_comment():
    h = parse_line("H\tVN:Z:1.0")
    assert type(h) is Header
    assert h.get("VN") == "1.0"
    assert str(h) == "H\tVN:Z:1.0"
    assert str(parse_line("H")) == "H"

    c = parse_line("# hello\tworld")
    assert type(c) is Comment
    assert c.content == " hello\tworld"
    assert str(c) == "# hello\tworld"
    with pytest.raises(FormatError) as ei:
        c.set("xx", 1)
    assert str(ei.value) == "Comment lines can't have tags"


def test_record_tags():
    s = Segment("1", "ACGT", tags=["RC:i:20"])
    assert s.get("RC") == 20
    assert s.get("KC") is None
    assert s.get("KC", 0) == 0
    assert s.get_datatype("RC") == "i"
    assert s.get_tag("RC").raw == "20"
    assert s.get_tag("KC") is None
    s.set("KC", 5)
    assert str(s) == "S\t1\tACGT\tRC:i:20\tKC:i:5"
    # Setting an existing tag keeps its type
    s.set("RC", 25)
    assert s.get_datatype("RC") == "i"
    with pytest.raises(GfaTypeError):
        s.set("RC", "lots")
    s.delete_tag("RC")
    s.delete_tag("XX")
    assert str(s) == "S\t1\tACGT\tKC:i:5"


def test_record_duplicate_tags():
    with pytest.raises(FormatError) as ei:
        parse_line("S\t1\tACGT\tRC:i:1\tRC:i:2")
    assert str(ei.value) == "Duplicate tag: RC"
    s = parse_line("S\t1\tACGT\tRC:i:1\tRC:i:2", validate=0)
    assert str(s) == "S\t1\tACGT\tRC:i:2"


def test_record_equality_and_copy():
    s = parse_line("S\t1\tACGT\tRC:i:20")
    assert s == parse_line("S\t1\tACGT\tRC:i:20")
    assert s != parse_line("S\t1\tACGT\tRC:i:21")
    assert s != parse_line("P\t1\t1+\t*")
    cpy = s.copy()
    assert cpy == s
    cpy.set("RC", 30)
    assert s.get("RC") == 20
