from lotto_api.errors import ScrapeError
from lotto_api.services.prize_tiers import (
    STRATEGIES,
    PrizeTierEntry,
    ScrapeResult,
    extract_by_row_pattern,
    extract_by_tbody_cells,
    extract_prize_tiers,
    run_strategies,
)


def _row(rank, total, count, per, cls="a"):
    return f'<tr class="{cls}"><td>{rank}등</td><td>{total}원</td><td>{count}</td><td>{per}원</td></tr>'


def test_single_class_row():
    html = '<tr class="a"><td>1등</td><td>20,000,000,000원</td><td>12</td><td>1,666,666,666원</td></tr>'

    assert extract_prize_tiers(html) == [
        PrizeTierEntry(rank=1, total_prize=20000000000, winner_count=12, prize_per_winner=1666666666)
    ]


def test_row_pattern_returns_every_match_sorted_by_rank():
    html = "<table><tbody>" + "".join(
        [
            _row(3, "1,000", "10", "100"),
            _row(1, "9,000,000", "2", "4,500,000"),
            _row(3, "2,000", "20", "100"),
            _row(5, "50,000", "10", "5,000"),
        ]
    ) + "</tbody></table>"

    entries = extract_prize_tiers(html)

    assert len(entries) == 4
    assert [e.rank for e in entries] == [1, 3, 3, 5]
    assert entries[0].total_prize == 9000000
    assert entries[0].prize_per_winner == 4500000
    # Stable sort keeps input order for equal ranks.
    assert [e.total_prize for e in entries if e.rank == 3] == [1000, 2000]


def test_row_pattern_tolerates_attributes_and_interleaved_markup():
    html = (
        '<TR id="r1" class="first" data-x="1">\n'
        '  <td class="rank">2등</td>\n'
        "  <!-- pool -->\n"
        '  <td class="tar">4,571,671,938원</td>\n'
        '  <td class="tar">71</td>\n'
        "  <td><span>ignored</span></td>\n"
        '  <td class="tar">64,389,746원</td>\n'
        "</TR>"
    )

    assert extract_by_row_pattern(html) == [
        PrizeTierEntry(rank=2, total_prize=4571671938, winner_count=71, prize_per_winner=64389746)
    ]


def test_row_pattern_requires_class_attribute():
    html = "<tr><td>1등</td><td>1,000원</td><td>1</td><td>1,000원</td></tr>"

    assert extract_by_row_pattern(html) == []


def test_tbody_fallback_when_rows_have_no_class():
    html = """
    <table>
      <thead><tr><th>순위</th><th>총 당첨금</th><th>당첨자 수</th><th>1인당</th></tr></thead>
      <tbody>
        <tr><td><strong>4등</strong></td><td><span>6,000,000,000</span>원</td><td>120,000 명</td><td>50,000원</td><td>비고</td></tr>
        <tr><td>1등</td><td>27,430,031,640원</td><td>22</td><td>1,246,819,620원</td></tr>
        <tr><td>합계</td><td>1</td><td>2</td><td>3</td></tr>
        <tr><td>2등</td><td>100원</td><td>1</td></tr>
      </tbody>
    </table>
    """

    entries = extract_prize_tiers(html)

    assert entries == [
        PrizeTierEntry(rank=1, total_prize=27430031640, winner_count=22, prize_per_winner=1246819620),
        PrizeTierEntry(rank=4, total_prize=6000000000, winner_count=120000, prize_per_winner=50000),
    ]


def test_tbody_fallback_defaults_missing_amounts_to_zero():
    html = "<tbody><tr><td>5등</td><td>-</td><td>없음</td><td></td></tr></tbody>"

    assert extract_by_tbody_cells(html) == [
        PrizeTierEntry(rank=5, total_prize=0, winner_count=0, prize_per_winner=0)
    ]


def test_tbody_fallback_rejects_ranks_outside_one_to_five():
    html = "<tbody><tr><td>0등</td><td>1</td><td>1</td><td>1</td></tr><tr><td>7등</td><td>1</td><td>1</td><td>1</td></tr></tbody>"

    assert extract_by_tbody_cells(html) == []


def test_tbody_fallback_only_reads_first_tbody():
    html = (
        "<tbody><tr><td>3등</td><td>1</td><td>2</td><td>3</td></tr></tbody>"
        "<tbody><tr><td>1등</td><td>9</td><td>9</td><td>9</td></tr></tbody>"
    )

    assert [e.rank for e in extract_by_tbody_cells(html)] == [3]


def test_no_match_returns_empty_list():
    assert extract_prize_tiers("") == []
    assert extract_prize_tiers("<html><body><p>점검 중입니다</p></body></html>") == []
    assert extract_prize_tiers("<tbody><tr><td>1등</td></tr></tbody>") == []


def test_run_strategies_reports_winning_strategy(sample_html):
    name, entries = run_strategies(sample_html)

    assert name == "row_pattern"
    assert [e.rank for e in entries] == [1, 2]

    plain = "<tbody><tr><td>1등</td><td>1</td><td>2</td><td>3</td></tr></tbody>"
    assert run_strategies(plain)[0] == "tbody_cells"
    assert run_strategies("nothing") == (None, [])


def test_run_strategies_first_non_empty_wins():
    calls = []

    def empty(html):
        calls.append("empty")
        return []

    def found(html):
        calls.append("found")
        return [PrizeTierEntry(2, 1, 1, 1), PrizeTierEntry(1, 1, 1, 1)]

    def never(html):
        calls.append("never")
        return [PrizeTierEntry(3, 1, 1, 1)]

    name, entries = run_strategies("x", [("empty", empty), ("found", found), ("never", never)])

    assert name == "found"
    assert [e.rank for e in entries] == [1, 2]
    assert calls == ["empty", "found"]


def test_default_strategy_order():
    assert [name for name, _ in STRATEGIES] == ["row_pattern", "tbody_cells"]


def test_scrape_result_failure_becomes_empty():
    result = ScrapeResult.failure(ScrapeError(details={"drwNo": 1}))

    assert not result.ok
    assert result.prizes_or_empty() == []


def test_scrape_result_success_keeps_rows():
    rows = [PrizeTierEntry(1, 10, 1, 10)]
    result = ScrapeResult.success(rows, "row_pattern")

    assert result.ok
    assert result.strategy == "row_pattern"
    assert result.prizes_or_empty() == rows


def test_tbody_fallback_ignores_commented_out_rows():
    html = (
        "<tbody>"
        "<!-- <tr><td>1등</td><td>999원</td><td>9</td><td>111원</td></tr> -->"
        "<tr><td>2등</td><td>4,000원</td><td>4</td><td>1,000원</td></tr>"
        "</tbody>"
    )

    assert extract_by_tbody_cells(html) == [
        PrizeTierEntry(rank=2, total_prize=4000, winner_count=4, prize_per_winner=1000)
    ]


def test_tbody_fallback_reads_only_direct_cells_of_each_row():
    html = (
        "<tbody><tr><td>3등</td><td>1,500원</td><td>3</td>"
        "<td>500원<table><tr><td>x</td></tr></table></td></tr></tbody>"
    )

    assert extract_by_tbody_cells(html) == [
        PrizeTierEntry(rank=3, total_prize=1500, winner_count=3, prize_per_winner=500)
    ]


def test_row_pattern_drops_ranks_outside_one_to_five():
    html = _row(0, "1,000", "1", "1,000") + _row(7, "2,000", "2", "1,000") + _row(4, "50,000", "10", "5,000")

    entries = extract_prize_tiers(html)

    assert [e.rank for e in entries] == [4]
    assert all(1 <= e.rank <= 5 for e in entries)


def test_only_ascii_digits_count_as_ranks():
    fullwidth = '<tr class="a"><td>１등</td><td>1,000원</td><td>1</td><td>1,000원</td></tr>'
    plain = "<tbody><tr><td>１등</td><td>1</td><td>1</td><td>1</td></tr></tbody>"

    assert extract_prize_tiers(fullwidth) == []
    assert extract_prize_tiers(plain) == []
