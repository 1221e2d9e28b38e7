import pytest

from orbitiq.tle import (
    expand_year,
    extract_tle,
    find_in_bulk,
    parse_designator,
)

from conftest import ISS_LINE1, ISS_LINE2, STARLINK_LINE1, STARLINK_LINE2


def _line1(field: str) -> str:
    """Synthetic line 1 with the given 8-char designator field."""
    return f"1 99999U {field:<8} 24001.50000000  .00000000  00000-0  00000-0 0  9990"


class TestValidation:
    def test_two_line(self):
        assert extract_tle(f"{ISS_LINE1}\n{ISS_LINE2}") == (ISS_LINE1, ISS_LINE2)

    def test_three_line_with_name_and_blank_lines(self):
        text = f"\nISS (ZARYA)\n\n{ISS_LINE1}\r\n{ISS_LINE2}\n\n"
        assert extract_tle(text) == (ISS_LINE1, ISS_LINE2)

    @pytest.mark.parametrize("text", [
        None,
        "",
        "   \n  ",
        ISS_LINE1,
        f"{ISS_LINE2}\n{ISS_LINE1}",
        f"{ISS_LINE1}\nISS (ZARYA)\n{ISS_LINE2}",
        "No GP data found",
    ])
    def test_invalid(self, text):
        assert extract_tle(text) is None


class TestDesignatorParsing:
    def test_iss(self):
        assert parse_designator(ISS_LINE1) == "1998-067A"

    def test_synthetic_98_067_a(self):
        assert parse_designator(_line1("98067A")) == "1998-067A"

    def test_multi_letter_piece(self):
        assert parse_designator(_line1("19074ABC")) == "2019-074ABC"

    def test_pivot_57_is_1957(self):
        assert expand_year(57) == 1957
        assert parse_designator(_line1("57001A")) == "1957-001A"

    def test_pivot_56_is_2056(self):
        assert expand_year(56) == 2056
        assert parse_designator(_line1("56001A")) == "2056-001A"

    def test_year_zero(self):
        assert parse_designator(_line1("00012B")) == "2000-012B"

    @pytest.mark.parametrize("line", [
        "1 25544U",
        _line1(""),
        _line1("98A"),
        _line1("AB067A"),
    ])
    def test_unparseable(self, line):
        assert parse_designator(line) is None

    def test_from_text(self):
        line1, _ = extract_tle(f"STARLINK-1007\n{STARLINK_LINE1}\n{STARLINK_LINE2}")
        assert parse_designator(line1) == "2019-074A"


class TestBulkScan:
    BULK = "\n".join([
        "STARLINK-99",
        "1 447130 19099B   24001.50000000  .00001000  00000-0  10000-3 0  9991",
        "2 447130 53.0000 100.0000 0001000  90.0000 270.0000 15.06000000 10000",
        "OLD SAT",
        "1 04471U 70034A   24001.50000000  .00000100  00000-0  10000-3 0  9992",
        "2 04471  80.0000 100.0000 0001000  90.0000 270.0000 14.00000000 10000",
        "STARLINK-1007",
        STARLINK_LINE1,
        STARLINK_LINE2,
    ])

    def test_exact_match(self):
        assert find_in_bulk(self.BULK, 44713) == (STARLINK_LINE1, STARLINK_LINE2)

    def test_no_prefix_collisions(self):
        text = "\n".join(self.BULK.splitlines()[:6])
        assert find_in_bulk(text, 44713) is None

    def test_shorter_id_matches_only_its_own_line(self):
        line1, _ = find_in_bulk(self.BULK, 4471)
        assert parse_designator(line1) == "1970-034A"

    def test_line1_must_be_followed_by_line2(self):
        text = f"{STARLINK_LINE1}\nSTARLINK-1007\n{STARLINK_LINE2}"
        assert find_in_bulk(text, 44713) is None

    def test_missing(self):
        assert find_in_bulk(self.BULK, 25544) is None
        assert find_in_bulk("", 25544) is None
