# File: tests/test_extractor.py
import pytest

from a11y_scout.errors import StructuralWarning
from a11y_scout.extractor import DisplayMode, display_mode_of, extract, is_failing_check
from conftest import make_audit, make_raw


@pytest.mark.parametrize("mode", ["notApplicable", "informative", "manual", "numeric", "error"])
@pytest.mark.parametrize("score", [0, 0.0, 1, None])
def test_non_binary_modes_never_fail(mode, score):
    assert not is_failing_check(make_audit(mode=mode, score=score))


@pytest.mark.parametrize(
    "score,expected",
    [(0, True), (0.0, True), (1, False), (0.5, False), (None, False), (False, False)],
)
def test_binary_fails_only_on_zero(score, expected):
    assert is_failing_check(make_audit(mode="binary", score=score)) is expected


def test_unknown_display_mode():
    assert display_mode_of({"scoreDisplayMode": "whatever"}) is None
    assert display_mode_of({}) is None
    assert display_mode_of({"scoreDisplayMode": "binary"}) is DisplayMode.BINARY
    assert not is_failing_check({"score": 0})


def test_extract_path_score_and_failing_checks():
    raw = make_raw(
        "https://example.com/catalogue/item?id=3#top",
        0.82,
        {
            "image-alt": make_audit(
                title="Image elements do not have [alt] attributes",
                description="Informative elements should aim for text. [Learn more](https://dequeuniversity.com/rules/axe/image-alt).",
                nodes=[{"selector": "img.logo", "snippet": '<img class="logo">', "explanation": "Fix this"}],
            ),
            "color-contrast": make_audit(score=1),
            "tabindex": make_audit(mode="notApplicable", score=0),
            "logical-tab-order": make_audit(mode="manual", score=0),
            "label": make_audit(title="Form elements do not have labels"),
        },
    )

    record = extract(raw)

    assert record.path == "/catalogue/item"
    assert record.score == pytest.approx(0.82)
    assert list(record.failing_checks) == ["image-alt", "label"]
    check = record.failing_checks["image-alt"]
    assert check.title.startswith("Image elements")
    assert check.nodes[0].selector == "img.logo"
    assert check.nodes[0].snippet == '<img class="logo">'
    assert check.nodes[0].explanation == "Fix this"
    assert record.failing_checks["label"].nodes == []
    assert record.warnings == []


@pytest.mark.parametrize(
    "mutate",
    [
        lambda raw: raw.pop("categories"),
        lambda raw: raw["categories"].pop("accessibility"),
        lambda raw: raw["categories"]["accessibility"].pop("score"),
        lambda raw: raw["categories"]["accessibility"].update(score=None),
    ],
)
def test_missing_score_is_structural_warning(mutate):
    raw = make_raw("https://example.com/about", 0.9)
    mutate(raw)

    record = extract(raw)

    assert record.score == 0
    assert len(record.warnings) == 1
    assert isinstance(record.warnings[0], StructuralWarning)


def test_extract_tolerates_odd_details():
    audit = make_audit()
    audit["details"] = {"items": [{"no-node": True}, "junk", {"node": {"selector": "a"}}]}
    record = extract(make_raw("https://example.com/", 0.5, {"link-name": audit}))
    nodes = record.failing_checks["link-name"].nodes
    assert len(nodes) == 1
    assert nodes[0].selector == "a"
    assert nodes[0].snippet == ""


def test_extract_root_and_missing_url():
    assert extract(make_raw("https://example.com", 1)).path == "/"
    raw = make_raw("https://example.com/x", 1)
    del raw["requestedUrl"]
    assert extract(raw).path == "/x"
    assert extract({"categories": {}}).path == "/"
