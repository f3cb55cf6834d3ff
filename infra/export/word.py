import re
from io import BytesIO

from docx import Document

# XML 1.0 forbids these; python-docx would refuse them
_XML_INVALID = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")


def render_word(content: str, title: str) -> bytes:
    doc = Document()
    doc.add_heading(_XML_INVALID.sub("", title), level=0)
    # line breaks are doubled on purpose for wider spacing in the exported CV
    body = _XML_INVALID.sub("", content).replace("\n", "\n\n")
    doc.add_paragraph(body)
    buf = BytesIO()
    doc.save(buf)
    return buf.getvalue()
