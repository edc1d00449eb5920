import io
from collections.abc import Iterator

import docx
from docx.document import Document as DocxDocument
from docx.opc.constants import RELATIONSHIP_TYPE as RT
from docx.oxml.ns import qn
from docx.oxml.xmlchemy import BaseOxmlElement

from app.logging.logger import Log
from app.normalization.fields import build_template_fields
from app.processor.exceptions import TemplateError
from app.processor.models import ExtractedRecord, TemplateDocument

OPEN_DELIMITER = "«"
CLOSE_DELIMITER = "»"

_HEADER_FOOTER_RELS = frozenset({RT.HEADER, RT.FOOTER})
_PARAGRAPH = qn("w:p")
_TEXT = qn("w:t")
_XML_SPACE = qn("xml:space")


class DocxTemplateFiller:
    """Fills «Name» placeholders in a .docx template with record fields.

    Only the text nodes of runs are edited, so breaks, drawings, fields and
    run formatting are kept as is. A placeholder split across runs (also runs
    nested in hyperlinks or revision marks) is written into the text node it
    starts in.
    """

    def fill(self, template: TemplateDocument, record: ExtractedRecord) -> bytes:
        """Render the template for a record.

        Raises:
            TemplateError: if the template is not a readable .docx or its
                delimiters are unbalanced.
        """
        values = build_template_fields(record)
        try:
            document = docx.Document(io.BytesIO(template.data))
        except Exception as exc:
            raise TemplateError(f"Cannot open template '{template.filename}': {exc}") from exc

        replaced = 0
        for paragraph in self._paragraphs(document):
            replaced += self._fill_paragraph(paragraph, values)

        out = io.BytesIO()
        try:
            document.save(out)
        except Exception as exc:
            raise TemplateError(f"Cannot write filled template: {exc}") from exc
        Log.info(f"Filled {replaced} placeholders in '{template.filename}'")
        return out.getvalue()

    def _paragraphs(self, document: DocxDocument) -> Iterator[BaseOxmlElement]:
        roots = [document.element.body]
        for rel in document.part.rels.values():
            if rel.reltype in _HEADER_FOOTER_RELS and not rel.is_external:
                roots.append(rel.target_part.element)
        for root in roots:
            # Covers nested tables and text boxes too.
            yield from list(root.iter(_PARAGRAPH))

    def _fill_paragraph(self, paragraph: BaseOxmlElement, values: dict[str, str]) -> int:
        nodes = paragraph_text_nodes(paragraph)
        text = "".join(node.text or "" for node in nodes)
        if OPEN_DELIMITER not in text and CLOSE_DELIMITER not in text:
            return 0
        spans = find_placeholders(text)
        positions = _char_positions(nodes)
        for start, end, name in reversed(spans):
            _replace_span(nodes, positions, start, end, values.get(name, ""))
        return len(spans)


def paragraph_text_nodes(paragraph: BaseOxmlElement) -> list[BaseOxmlElement]:
    """w:t nodes of a paragraph in document order, excluding nested paragraphs."""
    return [
        node
        for node in paragraph.iter(_TEXT)
        if _owning_paragraph(node) is paragraph
    ]


def _owning_paragraph(node: BaseOxmlElement) -> BaseOxmlElement | None:
    parent = node.getparent()
    while parent is not None and parent.tag != _PARAGRAPH:
        parent = parent.getparent()
    return parent


def find_placeholders(text: str) -> list[tuple[int, int, str]]:
    """Locate «Name» markers as (start, end, name) with end inclusive.

    Raises:
        TemplateError: on nested, unopened or unclosed delimiters.
    """
    spans: list[tuple[int, int, str]] = []
    start: int | None = None
    for index, char in enumerate(text):
        if char == OPEN_DELIMITER:
            if start is not None:
                raise TemplateError(f"Unclosed tag before position {index}: {text!r}")
            start = index
        elif char == CLOSE_DELIMITER:
            if start is None:
                raise TemplateError(f"Unopened tag at position {index}: {text!r}")
            spans.append((start, index, text[start + 1 : index].strip()))
            start = None
    if start is not None:
        raise TemplateError(f"Unclosed tag at position {start}: {text!r}")
    return spans


def _char_positions(nodes: list[BaseOxmlElement]) -> list[tuple[int, int]]:
    """(node index, offset in node) for every character of the paragraph text."""
    positions: list[tuple[int, int]] = []
    for node_index, node in enumerate(nodes):
        positions.extend((node_index, offset) for offset in range(len(node.text or "")))
    return positions


def _set_text(node: BaseOxmlElement, text: str) -> None:
    node.text = text
    node.set(_XML_SPACE, "preserve")


def _replace_span(
    nodes: list[BaseOxmlElement],
    positions: list[tuple[int, int]],
    start: int,
    end: int,
    value: str,
) -> None:
    first_node, first_offset = positions[start]
    last_node, last_offset = positions[end]
    first_text = nodes[first_node].text or ""
    if first_node == last_node:
        _set_text(
            nodes[first_node],
            first_text[:first_offset] + value + first_text[last_offset + 1 :],
        )
        return
    _set_text(nodes[first_node], first_text[:first_offset] + value)
    for middle in range(first_node + 1, last_node):
        if nodes[middle].text:
            _set_text(nodes[middle], "")
    _set_text(nodes[last_node], (nodes[last_node].text or "")[last_offset + 1 :])
