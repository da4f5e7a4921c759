# File: tests/test_aggregator.py
import json
from datetime import datetime

import pytest

from a11y_scout.aggregator import aggregate, collect_records
from a11y_scout.errors import ParseError
from a11y_scout.extractor import PageRecord
from a11y_scout.storage import Run, result_filename
from conftest import RUN_STARTED, make_audit, make_raw


def test_aggregate_empty_returns_none():
    assert aggregate("https://example.com/sitemap.xml", [], RUN_STARTED) is None


@pytest.mark.parametrize(
    "scores",
    [[1.0], [1.0, 0.5, 0.0], [0.1, 0.2, 0.3], [0.93, 0.87, 1.0, 0.64, 0.71]],
)
def test_aggregate_mean(scores):
    records = [PageRecord(path=f"/p{i}", score=s) for i, s in enumerate(scores)]
    report = aggregate("https://example.com/sitemap.xml", records, RUN_STARTED)
    assert report.site_average == sum(scores) / len(scores)
    assert list(report.page_scores) == [f"/p{i}" for i in range(len(scores))]


def test_aggregate_host_and_timestamp():
    report = aggregate(
        "https://www.example.org:8443/sitemap_index.xml",
        [PageRecord(path="/", score=1.0)],
        datetime(2024, 7, 24, 10, 34, 20, 123456),
    )
    assert report.host == "www.example.org:8443"
    assert report.report_timestamp == "2024-07-24T10:34:20"


def test_report_json_is_serialisable():
    records = [PageRecord(path="/", score=0.5)]
    report = aggregate("https://example.com/", records, RUN_STARTED)
    data = json.loads(report.json(pretty=True))
    assert data["host"] == "example.com"
    assert data["page_scores"] == {"/": 0.5}


# --------------------------------------------------------------------------- #
#                         Run directory & persistence                         #
# --------------------------------------------------------------------------- #


def test_run_directory_name(run: Run):
    assert run.root.name == "2024-07-24T10-34-20"
    assert run.root.is_dir()
    assert Run.open(run.root).started_at == RUN_STARTED


@pytest.mark.parametrize(
    "url,name",
    [
        ("https://example.com/", "_.json"),
        ("https://example.com/a/b", "_a_b.json"),
        ("https://example.com/a(1)+b,c;d=e@f!g$h&i'j*k[l]:m", "_a_1__b_c_d_e_f_g_h_i_j_k_l__m.json"),
        ("https://example.com/search?q=1#frag", "_search.json"),
    ],
)
def test_result_filename(url, name):
    assert result_filename(url) == name


def test_save_and_collect_in_discovery_order(run: Run):
    urls = ["https://example.com/zeta", "https://example.com/", "https://example.com/alpha"]
    for score, url in zip([0.2, 1.0, 0.6], urls):
        run.save_result(url, make_raw(url, score))

    records, failures = collect_records(run, order=urls)
    assert [r.path for r in records] == ["/zeta", "/", "/alpha"]
    assert failures == []

    records, _ = collect_records(run)
    assert [r.path for r in records] == ["/", "/alpha", "/zeta"]


def test_malformed_json_is_skipped(run: Run):
    run.save_result("https://example.com/ok", make_raw("https://example.com/ok", 0.8))
    (run.root / "_broken.json").write_text("{not json", encoding="utf-8")
    (run.root / "_list.json").write_text("[1, 2]", encoding="utf-8")

    records, failures = collect_records(run)

    assert [r.path for r in records] == ["/ok"]
    assert len(failures) == 2
    assert all(isinstance(f, ParseError) for f in failures)


def test_summary_file_is_not_a_page(run: Run):
    run.save_result("https://example.com/", make_raw("https://example.com/", 1.0))
    run.summary_path.write_text(json.dumps({"host": "example.com"}), encoding="utf-8")

    records, failures = collect_records(run)
    assert len(records) == 1
    assert failures == []


def test_aggregate_from_run(run: Run):
    run.save_result(
        "https://example.com/a",
        make_raw("https://example.com/a", 0.0, {"html-has-lang": make_audit()}),
    )
    run.save_result("https://example.com/b", make_raw("https://example.com/b", None))

    records, _ = collect_records(run)
    report = aggregate("https://example.com/sitemap.xml", records, run.started_at)

    assert report.page_scores == {"/a": 0.0, "/b": 0.0}
    assert list(report.page_failing_checks["/a"]) == ["html-has-lang"]
    assert report.page_failing_checks["/b"] == {}
    assert report.site_average == 0.0
