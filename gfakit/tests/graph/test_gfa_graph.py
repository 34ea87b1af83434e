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
from gfakit import config, parse_graph, parse_file
from gfakit.graph import (
    GfaGraph,
    Segment,
    Header,
    SegmentEnd,
    ABSENT,
    VIRTUAL,
    REAL,
)
from gfakit.errors import (
    LineMissingError,
    NotUniqueError,
    ArgumentError,
    FormatError,
)
from gfakit.tests.utils import get_input_path, tabify, run_tempfile_test


def test_deferred_validation():
    g = GfaGraph()
    g.append("S\t1\t*")
    g.validate()

    g.append("L\t1\t+\t2\t-\t*")
    with pytest.raises(LineMissingError) as ei:
        g.validate()
    assert str(ei.value) == (
        "Segment 2 does not exist\nReferences to 2 were found in the "
        "following lines:\nL\t1\t+\t2\t-\t*"
    )

    g.append("S\t2\t*")
    g.validate()

    g.append("P\t3\t1+,4-\t*")
    with pytest.raises(LineMissingError) as ei:
        g.validate()
    assert str(ei.value).startswith("Segment 4 does not exist")

    g.append("S\t4\t*")
    with pytest.raises(LineMissingError) as ei:
        g.validate()
    assert str(ei.value) == (
        "Link 1 + 4 - does not exist, but is required by the path:\n"
        "P\t3\t1+,4-\t*"
    )

    g.append("L\t4\t+\t1\t-\t*")
    g.validate()


def test_path_links_match_either_direction():
    g = parse_graph(
        tabify(
            [
                "S 1 *",
                "S 2 *",
                "L 1 + 2 + *",
                "P forward 1+,2+ *",
                "P backward 2-,1- *",
            ]
        )
    )
    g.validate()
    g.append("P\tnope\t1+,2-\t*")
    with pytest.raises(LineMissingError):
        g.validate()


def test_name_lists():
    g = GfaGraph()
    g.append("S\t1\t*")
    g.append("S\t2\t*")
    assert g.segment_names == ["1", "2"]
    g.delete(config.SEGMENT, "1")
    assert g.segment_names == ["2"]
    g.append("P\t3\t2+\t*")
    assert g.path_names == ["3"]
    g.delete(config.PATH, "3")
    assert g.path_names == []


def test_segment_states():
    g = GfaGraph()
    assert g.segment_state("1") == ABSENT
    link = g.append("L\t1\t+\t2\t-\t*")
    assert g.segment_state("1") == VIRTUAL
    assert g.segment_state("2") == VIRTUAL
    g.append("S\t1\tACGT")
    assert g.segment_state("1") == REAL
    # The segment is still referenced by the link, so it becomes virtual
    g.delete_segment("1")
    assert g.segment_state("1") == VIRTUAL
    g.delete_record(link)
    assert g.segment_state("1") == ABSENT
    assert g.segment_state("2") == ABSENT
    assert str(g) == ""


def test_path_states():
    g = GfaGraph()
    assert g.path_state("p") == ABSENT
    g.append("P\tp\t1+\t*")
    assert g.path_state("p") == REAL
    g.delete_path("p")
    assert g.path_state("p") == ABSENT


def test_duplicate_names():
    g = GfaGraph()
    g.append("S\t1\t*")
    with pytest.raises(NotUniqueError) as ei:
        g.append("S\t1\tACGT")
    assert str(ei.value) == (
        "There is already a segment named 1 in the graph:\nS\t1\t*"
    )
    g.append("P\tp\t1+\t*")
    with pytest.raises(NotUniqueError) as ei:
        g.append("P\tp\t1-\t*")
    assert str(ei.value).startswith("There is already a path named p")
    # A segment and a path can share a name
    g.append("P\t1\t1+\t*")
    assert str(g) == "S\t1\t*\nP\tp\t1+\t*\nP\t1\t1+\t*\n"


def test_segments_first():
    g = GfaGraph(segments_first=True)
    with pytest.raises(LineMissingError) as ei:
        g.append("L\t1\t+\t2\t-\t*")
    assert str(ei.value) == (
        "Segment 1 does not exist (and segments must be added before the "
        "lines referring to them):\nL\t1\t+\t2\t-\t*"
    )
    # Failed appends don't change the graph
    assert str(g) == ""
    assert g.segment_state("2") == ABSENT
    g.append("S\t1\t*")
    g.append("S\t2\t*")
    g.append("L\t1\t+\t2\t-\t*")
    assert len(g.links) == 1


def test_append_errors_leave_graph_unchanged():
    g = GfaGraph()
    g.append("S\t1\tACGT")
    before = str(g)
    with pytest.raises(FormatError):
        g.append("L\t1\t+\t2\t?\t*")
    with pytest.raises(NotUniqueError):
        g.append("S\t1\tA")
    assert str(g) == before
    assert g.segment_state("2") == ABSENT


def test_append_record():
    g = GfaGraph()
    s = g.append(Segment("1", "ACGT"))
    assert s.uid is not None
    assert g.get_segment("1") is s
    with pytest.raises(ArgumentError) as ei:
        g.append(s)
    assert "already belongs to a graph" in str(ei.value)
    other = GfaGraph()
    with pytest.raises(ArgumentError):
        other.append(s)
    other.append(s.copy())
    assert other.segment_names == ["1"]


def test_delete_errors():
    g = GfaGraph()
    g.append("L\t1\t+\t2\t-\t*")
    with pytest.raises(LineMissingError) as ei:
        g.delete_segment("1")
    assert str(ei.value) == "There is no segment named 1"
    with pytest.raises(LineMissingError) as ei:
        g.delete_path("x")
    assert str(ei.value) == "There is no path named x"
    with pytest.raises(ArgumentError) as ei:
        g.delete(config.LINK, "1")
    assert str(ei.value) == (
        'Can only delete segments ("S") and paths ("P") by name; got "L".'
    )
    with pytest.raises(ArgumentError) as ei:
        g.delete_record(Segment("1", "ACGT"))
    assert "is not a line of this graph" in str(ei.value)


def test_delete_cascade():
    g = parse_graph(
        tabify(
            [
                "S 1 ACGT",
                "S 2 ACGT",
                "S 3 ACGT",
                "L 1 + 2 + *",
                "L 2 + 3 + *",
                "C 2 + 3 + 0 *",
                "P p 1+,2+ *",
            ]
        )
    )
    g.delete_segment("2", cascade=True)
    assert str(g) == "S\t1\tACGT\nS\t3\tACGT\n"
    assert g.segment_state("2") == ABSENT
    assert g.path_state("p") == ABSENT
    g.validate()


def test_queries():
    g = parse_file(get_input_path("example1.gfa"))
    assert g.segment_names == ["1", "2", "3", "4"]
    assert g.path_names == ["p1"]
    assert len(g.links) == 2
    assert len(g.containments) == 0
    assert len(g.headers) == 1
    assert len(g.comments) == 1
    assert len(g.records) == 9
    assert g.has_segment("1")
    assert not g.has_segment("p1")
    assert g.has_path("p1")
    assert g.get_path("p1").steps == [("1", "+"), ("2", "+"), ("3", "+")]
    with pytest.raises(LineMissingError) as ei:
        g.get_segment("9")
    assert str(ei.value) == "There is no segment named 9"

    assert [str(r) for r in g.references_of("2")] == [
        "L\t1\t+\t2\t+\t2M",
        "L\t2\t+\t3\t+\t3M",
        "P\tp1\t1+,2+,3+\t2M,3M",
    ]
    assert g.references_of("9") == []
    assert [str(l) for l in g.links_of(SegmentEnd("2", "B"))] == [
        "L\t1\t+\t2\t+\t2M"
    ]
    assert g.links_of(SegmentEnd("1", "B")) == []
    assert g.paths_of("3") == [g.get_path("p1")]
    assert g.containments_of("3") == []
    assert repr(g) == "GfaGraph (4 segments, 2 links, 1 path)"


def test_round_trip():
    path = get_input_path("example1.gfa")
    with open(path, "r") as f:
        text = f.read()
    assert str(parse_file(path)) == text
    assert str(parse_graph(text)) == text
    assert str(parse_graph(text.splitlines())) == text


def test_to_file(tmp_path):
    g = parse_file(get_input_path("example1.gfa"))
    out = tmp_path / "out.gfa"
    g.to_file(str(out))
    g2 = GfaGraph.from_file(str(out))
    assert g == g2
    assert out.read_text() == str(g)


def test_read_file_skips_empty_lines():
    g = run_tempfile_test(["S 1 ACGT", "", "S 2 A", ""], None, None)
    assert g.segment_names == ["1", "2"]


def test_read_file_validates():
    run_tempfile_test(
        ["S 1 ACGT", "L 1 + 2 + *"],
        LineMissingError,
        "Segment 2 does not exist",
    )
    # ... unless validation is turned off
    g = run_tempfile_test(["S 1 ACGT", "L 1 + 2 + *"], None, None, validate=0)
    assert g.segment_state("2") == VIRTUAL
    run_tempfile_test(["S 1 ACGT", "Q 1"], FormatError, "Unknown record type")


def test_failed_read_file_leaves_graph_unchanged(tmp_path):
    g = parse_graph(["S\t1\t*"])
    bad = tmp_path / "bad.gfa"
    bad.write_text("\n".join(tabify(["S 2 *", "S 3 *", "L 2 +"])) + "\n")
    with pytest.raises(FormatError):
        g.read_file(str(bad))
    assert str(g) == "S\t1\t*\n"
    assert g.segment_state("2") == ABSENT

    # Same thing if the lines parse, but the graph doesn't validate
    unresolved = tmp_path / "unresolved.gfa"
    unresolved.write_text("\n".join(tabify(["S 2 *", "L 2 + 9 + *"])) + "\n")
    with pytest.raises(LineMissingError):
        g.read_file(str(unresolved))
    assert str(g) == "S\t1\t*\n"
    assert g.segment_state("9") == ABSENT

    # The graph is still usable afterwards
    g.append("S\t2\t*")
    assert g.segment_names == ["1", "2"]


def test_failed_extend_leaves_graph_unchanged():
    g = parse_graph(["S\t1\t*"])
    s2 = Segment("2", "ACGT")
    with pytest.raises(NotUniqueError):
        g.extend([s2, "L\t2\t+\t1\t+\t*", "S\t1\tA"])
    assert str(g) == "S\t1\t*\n"
    assert s2.uid is None
    assert g.segment_state("2") == ABSENT
    assert g.references_of("1") == []
    g.extend([s2])
    assert g.get_segment("2") is s2


def test_read_file_crlf(tmp_path):
    fp = tmp_path / "crlf.gfa"
    fp.write_bytes(b"S\t1\tACGT\r\nS\t2\tGG\r\nL\t1\t+\t2\t-\t2M\r\n")
    g = GfaGraph.from_file(str(fp))
    assert str(g) == "S\t1\tACGT\nS\t2\tGG\nL\t1\t+\t2\t-\t2M\n"
    assert parse_graph("S\t1\tACGT\r\nS\t2\tGG\r\n") == parse_graph(
        "S\t1\tACGT\nS\t2\tGG\n"
    )


def test_progress():
    calls = []
    g = GfaGraph(progress=lambda *args: calls.append(args))
    g.read_file(get_input_path("example1.gfa"))
    assert len(calls) == 9
    assert calls[0] == ("Reading GFA file", 1, 9)
    assert calls[-1] == ("Reading GFA file", 9, 9)


def test_equals_is_order_insensitive():
    lines = tabify(
        [
            "H VN:Z:1.0",
            "S 1 ACGT",
            "S 2 GG",
            "L 1 + 2 - *",
            "L 2 + 1 + *",
            "C 1 + 2 + 1 *",
        ]
    )
    g1 = parse_graph(lines)
    g2 = parse_graph(list(reversed(lines)))
    assert g1.equals(g2)
    assert g1 != g2
    assert g1 == parse_graph(lines)
    # Only segments and links count for equals()
    g2.delete_record(g2.containments[0])
    g2.delete_record(g2.headers[0])
    assert g1.equals(g2)
    g2.get_segment("2").set("RC", 5)
    assert not g1.equals(g2)


def test_clone():
    g = parse_graph(
        tabify(["H VN:Z:1.0", "S 1 ACGT RC:i:4", "L 1 + 2 + *"]),
        validate=0,
    )
    c = g.clone()
    assert c == g
    assert str(c) == str(g)
    assert c.segment_state("2") == VIRTUAL
    assert c.validation_level == 0
    c.get_segment("1").set("RC", 8)
    c.append("S\t2\tA")
    assert g.get_segment("1").get("RC") == "4"
    assert g.segment_state("2") == VIRTUAL
    assert c.segment_state("2") == REAL
    c.validate()


def test_header():
    g = parse_graph(tabify(["H VN:Z:1.0", "S 1 A", "H TS:i:100 VN:Z:2.0"]))
    h = g.header
    assert type(h) is Header
    assert h.get("VN") == "2.0"
    assert h.get("TS") == 100
    # Changes the last H line defining the tag
    g.set_header_tag("VN", "3.0")
    assert str(g) == "H\tVN:Z:1.0\nS\t1\tA\nH\tTS:i:100\tVN:Z:3.0\n"
    # New tags go in the first H line
    g.set_header_tag("xx", 5)
    assert str(g.headers[0]) == "H\tVN:Z:1.0\txx:i:5"


def test_header_created_if_needed():
    g = parse_graph(["S\t1\tA"])
    assert g.header.tagnames == []
    g.set_header_tag("VN", "1.0")
    assert str(g) == "S\t1\tA\nH\tVN:Z:1.0\n"


def test_replace_record():
    g = parse_graph(tabify(["S 1 A", "S 2 C", "L 1 + 2 + *", "S 3 G"]))
    link = g.links[0]
    new = link.copy()
    new.to_name = "3"
    g.replace_record(link, new)
    assert str(g) == "S\t1\tA\nS\t2\tC\nL\t1\t+\t3\t+\t*\nS\t3\tG\n"
    assert g.links_of(SegmentEnd("2", "B")) == []
    assert g.links_of(SegmentEnd("3", "B")) == [new]
    with pytest.raises(NotUniqueError):
        g.replace_record(g.get_segment("1"), Segment("2", "A"))
    with pytest.raises(ArgumentError):
        g.replace_record(link, link.copy())
