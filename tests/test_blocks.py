from pdfreflow.config import ConversionSettings
from pdfreflow.docs.model import ImageItem, ImageRun, Line, TextItem, TextRun
from pdfreflow.layout.blocks import SPACE, TAB, classify_gap, emit, emit_line, round_half_up


def _t(text, x, size=10.0, y=100.0):
    return TextItem(text=text, x=x, y=y, font_size=size)


def _img(x=0.0, width=30.0, height=20.0):
    return ImageItem(data=b"png", x=x, y=100.0, width=width, height=height)


def test_classify_gap_boundaries():
    assert classify_gap(21) == TAB
    assert classify_gap(20.01) == TAB
    assert classify_gap(20) == SPACE
    assert classify_gap(10) == SPACE
    assert classify_gap(5) is None
    assert classify_gap(3) is None
    assert classify_gap(-40) is None


def test_gap_runs_from_zero_cursor():
    # a leading image leaves the cursor at 0
    for x, expected in ((21, [TAB]), (10, [SPACE]), (3, [])):
        block = emit_line(Line(items=[_img(), _t("w", x)]))
        separators = [r.text for r in block.runs[1:-1]]
        assert separators == expected


def test_text_runs_and_cursor_advance():
    # "Hello" at size 10 is estimated 25 wide: ends at 25
    line = Line(items=[_t("Hello", 0), _t("World", 120), _t("!", 153), _t("?", 160)])
    block = emit_line(line)
    assert block.runs == [
        TextRun("Hello", 20),
        TextRun(TAB),
        TextRun("World", 20),
        TextRun(SPACE),  # World ends at 145, gap 8
        TextRun("!", 20),
        TextRun("?", 20),  # ! ends at 158, gap 2
    ]
    assert block.text == "Hello\tWorld !?"


def test_left_indent_and_font_size_rounding():
    block = emit_line(Line(items=[_t("x", 7.25, size=10.25)]))
    assert block.left_indent == 73
    assert block.runs[0].size == 21
    assert emit_line(Line(items=[_t("x", -12.0)])).left_indent == 0


def test_image_does_not_advance_gap_cursor():
    # text ends at 10, image covers 12..112, next text at 115
    line = Line(items=[_t("ab", 0), _img(x=12, width=100), _t("cd", 115)])
    block = emit_line(line)
    assert isinstance(block.runs[1], ImageRun)
    # measured from the text before the image, not from the image edge
    assert block.runs[2] == TextRun(TAB)


def test_image_run_sizes_come_from_item():
    block = emit_line(Line(items=[_img(x=40, width=144, height=72)]))
    assert block.runs == [ImageRun(data=b"png", width=144, height=72)]
    assert block.left_indent == 400


def test_emit_one_block_per_line_with_custom_settings():
    settings = ConversionSettings(tab_gap=50.0, space_gap=1.0, indent_scale=20.0, font_size_scale=1.0)
    lines = [Line(items=[_t("a", 1), _t("b", 40)]), Line(items=[_t("c", 2)])]
    blocks = emit(lines, settings)
    assert len(blocks) == 2
    assert blocks[0].runs == [TextRun("a", 10), TextRun(SPACE), TextRun("b", 10)]
    assert blocks[0].left_indent == 20
    assert blocks[1].left_indent == 40


def test_round_half_up():
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(2.49) == 2
