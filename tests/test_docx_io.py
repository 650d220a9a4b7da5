from docx import Document as DocxDocument
from docx.shared import Pt, Twips

from pdfreflow.docs.docx_io import write_docx
from pdfreflow.docs.model import Block, ImageRun, PageBreak, TextRun
from pdfreflow.docs.txt import blocks_to_text, write_txt


def _blocks(png_bytes):
    return [
        Block(runs=[TextRun("Hello", 20), TextRun("\t"), TextRun("World", 24)], left_indent=73),
        Block(runs=[ImageRun(data=png_bytes, width=100, height=50)], left_indent=0),
        PageBreak(),
        Block(runs=[TextRun("Page2", 20)]),
    ]


def test_write_docx_paragraphs_runs_and_indent(tmp_path, png_bytes):
    out = write_docx(_blocks(png_bytes), str(tmp_path / "out.docx"))
    d = DocxDocument(out)

    texts = [p.text for p in d.paragraphs if p.text.strip()]
    assert texts == ["Hello\tWorld", "Page2"]

    first = d.paragraphs[0]
    assert first.paragraph_format.left_indent == Twips(73)
    assert first.paragraph_format.space_after == Pt(0)
    assert first.runs[0].font.size == Pt(10)
    assert first.runs[1].font.size is None
    assert first.runs[2].font.size == Pt(12)


def test_write_docx_images_and_page_breaks(tmp_path, png_bytes):
    out = write_docx(_blocks(png_bytes), str(tmp_path / "out.docx"))
    d = DocxDocument(out)
    assert len(d.inline_shapes) == 1
    assert d.inline_shapes[0].width == Pt(100)
    assert d.inline_shapes[0].height == Pt(50)
    assert d.element.body.xml.count('w:type="page"') == 1


def test_write_docx_empty_sequence(tmp_path):
    out = write_docx([], str(tmp_path / "empty.docx"))
    assert not any(p.text for p in DocxDocument(out).paragraphs)


def test_blocks_to_text(png_bytes):
    assert blocks_to_text(_blocks(png_bytes)) == "Hello\tWorld\n[image 100x50]\n\f\nPage2"


def test_write_txt(tmp_path, png_bytes):
    out = write_txt(_blocks(png_bytes), str(tmp_path / "out.txt"))
    with open(out, "r", encoding="utf-8") as f:
        assert f.read().endswith("Page2")
