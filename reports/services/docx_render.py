# -*- coding: utf-8 -*-
# reports/services/docx_render.py
# Purpose:
# Fill a Word template with {Tag} placeholders.
#
# Rules:
# - Tags may be split across runs inside one paragraph; run formatting of the
#   run holding the opening brace is kept.
# - Table rows between {#name} and {/name} repeat once per item of data[name].
# - Image placeholders are drawings whose alt text (wp:docPr/@descr) is a
#   photo tag. They are patched in the zip after python-docx saves.

from __future__ import annotations

import copy
import io
import logging
import posixpath
import re
import zipfile
from collections import ChainMap
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from django.conf import settings
from docx import Document
from docx.oxml.ns import qn
from docx.text.paragraph import Paragraph

from config.services import get_setting
from reports.services.context import NA, PHOTO_TAGS
from uploads.services import to_png_bytes

logger = logging.getLogger("dashboard.reports")

TAG_RE = re.compile(r"\{([^{}]+)\}")
LOOP_OPEN_RE = re.compile(r"\{#\s*([A-Za-z0-9_]+)\s*\}")

DOCUMENT_XML = "word/document.xml"
DOCUMENT_RELS = "word/_rels/document.xml.rels"


class ReportTemplateError(Exception):
    pass


# --------------------------------------------------
# Template lookup
# --------------------------------------------------

def template_candidates() -> List[Path]:
    raw = [
        get_setting("docx_template_path", ""),
        getattr(settings, "DOCX_TEMPLATE_PATH", ""),
        settings.BASE_DIR / "assets" / "site_inspection_template.docx",
        settings.BASE_DIR / "assets" / "templates" / "site_inspection_template.docx",
    ]
    out: List[Path] = []
    for value in raw:
        if not value:
            continue
        path = Path(str(value)).expanduser()
        if path not in out:
            out.append(path)
    return out


def find_template() -> Path:
    tried = template_candidates()
    for path in tried:
        if path.is_file():
            return path
    listing = ", ".join(str(p) for p in tried) or "(none)"
    raise ReportTemplateError(f"Report template not found. Tried: {listing}")


# --------------------------------------------------
# Text tags
# --------------------------------------------------

def _resolver(data: Mapping[str, Any]) -> Callable[[str], str]:
    def resolve(tag: str) -> str:
        key = tag.strip()
        if key.startswith(("#", "/")):
            return ""
        if key in PHOTO_TAGS:
            return ""
        value = data.get(key)
        if value is None or isinstance(value, (list, dict)):
            return NA
        text = str(value)
        return text if text.strip() else NA

    return resolve


def _run_index(bounds: List[tuple], offset: int) -> int:
    for i, (start, end) in enumerate(bounds):
        if start <= offset < end:
            return i
    return len(bounds) - 1


def replace_in_paragraph(paragraph: Paragraph, resolve: Callable[[str], str]) -> bool:
    runs = paragraph.runs
    if not runs:
        return False
    texts = [r.text for r in runs]
    full = "".join(texts)
    matches = list(TAG_RE.finditer(full))
    if not matches:
        return False

    bounds = []
    pos = 0
    for text in texts:
        bounds.append((pos, pos + len(text)))
        pos += len(text)

    new_texts = list(texts)
    for m in reversed(matches):
        start, end = m.span()
        value = resolve(m.group(1))
        si = _run_index(bounds, start)
        ei = _run_index(bounds, end - 1)
        s_off = start - bounds[si][0]
        e_off = end - bounds[ei][0]
        if si == ei:
            t = new_texts[si]
            new_texts[si] = t[:s_off] + value + t[e_off:]
        else:
            new_texts[si] = new_texts[si][:s_off] + value
            for k in range(si + 1, ei):
                new_texts[k] = ""
            new_texts[ei] = new_texts[ei][e_off:]

    for run, old, new in zip(runs, texts, new_texts):
        if old != new:
            # Run.text turns "\n" into <w:br/>.
            run.text = new
    return True


def _paragraphs_in(element, parent) -> Iterable[Paragraph]:
    for p in list(element.iter(qn("w:p"))):
        yield Paragraph(p, parent)


def _row_text(tr) -> str:
    return "".join(t.text or "" for t in tr.iter(qn("w:t")))


# --------------------------------------------------
# Table row loops
# --------------------------------------------------

def expand_row_loops(document, data: Mapping[str, Any]) -> int:
    """
    Repeat {#name} ... {/name} table rows per item. Returns loops expanded.
    """
    expanded = 0
    for tbl in list(document.element.body.iter(qn("w:tbl"))):
        rows = tbl.findall(qn("w:tr"))
        i = 0
        while i < len(rows):
            m = LOOP_OPEN_RE.search(_row_text(rows[i]))
            if not m:
                i += 1
                continue

            name = m.group(1)
            close = re.compile(r"\{/\s*" + re.escape(name) + r"\s*\}")
            j = i
            while j < len(rows) and not close.search(_row_text(rows[j])):
                j += 1
            if j == len(rows):
                logger.warning("Report loop {#%s} has no closing tag", name)
                i += 1
                continue

            block = rows[i : j + 1]
            items = data.get(name) or []
            anchor = block[0]
            for item in items:
                scope = ChainMap(item if isinstance(item, Mapping) else {}, data)
                resolve = _resolver(scope)
                for tr in block:
                    clone = copy.deepcopy(tr)
                    anchor.addprevious(clone)
                    for paragraph in _paragraphs_in(clone, document._body):
                        replace_in_paragraph(paragraph, resolve)
            for tr in block:
                tbl.remove(tr)

            expanded += 1
            rows = tbl.findall(qn("w:tr"))
            i += len(items) * len(block)
    return expanded


def fill_text_tags(document, data: Mapping[str, Any]) -> None:
    resolve = _resolver(data)
    for paragraph in _paragraphs_in(document.element.body, document._body):
        replace_in_paragraph(paragraph, resolve)
    for section in document.sections:
        for part in (section.header, section.footer):
            if part.is_linked_to_previous:
                continue
            for paragraph in _paragraphs_in(part._element, part):
                replace_in_paragraph(paragraph, resolve)


# --------------------------------------------------
# Alt-text images (zip level)
# --------------------------------------------------

def _find_embed_rid(doc_xml: str, tag: str) -> Optional[str]:
    idx = doc_xml.find(f'descr="{tag}"')
    if idx == -1:
        return None
    forward = re.search(r'r:embed="(rId[0-9]+)"', doc_xml[idx : idx + 5000])
    if forward:
        return forward.group(1)
    backward = re.findall(r'r:embed="(rId[0-9]+)"', doc_xml[max(0, idx - 5000) : idx])
    return backward[-1] if backward else None


def _relationship_target(rels_xml: str, rid: str) -> Optional[str]:
    m = re.search(r'<Relationship[^>]+Id="' + re.escape(rid) + r'"[^>]+Target="([^"]+)"', rels_xml, re.I)
    if m:
        return m.group(1)
    m = re.search(r'<Relationship[^>]+Target="([^"]+)"[^>]+Id="' + re.escape(rid) + r'"', rels_xml, re.I)
    return m.group(1) if m else None


def _drop_drawings(doc_xml: str, tag: str, limit: int = 3) -> tuple[str, int]:
    marker = f'descr="{tag}"'
    replaced = 0
    while replaced < limit:
        idx = doc_xml.find(marker)
        if idx == -1:
            break
        start = doc_xml.rfind("<w:drawing", 0, idx)
        end = doc_xml.find("</w:drawing>", idx)
        if start == -1 or end == -1:
            break
        doc_xml = doc_xml[:start] + f"<w:t>{NA}</w:t>" + doc_xml[end + len("</w:drawing>") :]
        replaced += 1
    return doc_xml, replaced


def replace_alt_text_images(docx_bytes: bytes, images: Mapping[str, Optional[bytes]]) -> bytes:
    """
    Swap each photo placeholder's media part for the photo as PNG; a tag
    without a photo has its drawing replaced by the text "n/a".

    Never raises: on failure the document is returned unchanged.
    """
    try:
        with zipfile.ZipFile(io.BytesIO(docx_bytes)) as zin:
            doc_xml = zin.read(DOCUMENT_XML).decode("utf-8")
            rels_xml = zin.read(DOCUMENT_RELS).decode("utf-8")

            media: Dict[str, bytes] = {}
            xml_changed = False
            for tag in PHOTO_TAGS:
                value = images.get(tag) or images.get(tag.replace(" ", ""))
                if value:
                    rid = _find_embed_rid(doc_xml, tag)
                    if rid is None:
                        continue
                    target = _relationship_target(rels_xml, rid)
                    if target is None:
                        logger.warning("Report image relationship %s not found for %s", rid, tag)
                        continue
                    path = posixpath.normpath(posixpath.join("word", target.lstrip("/")))
                    media[path] = to_png_bytes(value)
                else:
                    doc_xml, count = _drop_drawings(doc_xml, tag)
                    xml_changed = xml_changed or bool(count)

            if not media and not xml_changed:
                return docx_bytes

            out = io.BytesIO()
            with zipfile.ZipFile(out, "w", zipfile.ZIP_DEFLATED) as zout:
                for info in zin.infolist():
                    if info.filename == DOCUMENT_XML and xml_changed:
                        zout.writestr(info, doc_xml.encode("utf-8"))
                    elif info.filename in media:
                        zout.writestr(info, media[info.filename])
                    else:
                        zout.writestr(info, zin.read(info.filename))
        return out.getvalue()
    except Exception:
        logger.warning("Report image replacement failed", exc_info=True)
        return docx_bytes


# --------------------------------------------------
# Entry point
# --------------------------------------------------

def render_docx(template, data: Mapping[str, Any], images: Optional[Mapping[str, Optional[bytes]]] = None) -> bytes:
    """
    template: a path or a binary file-like object.
    """
    try:
        document = Document(str(template) if isinstance(template, Path) else template)
    except Exception as exc:
        raise ReportTemplateError(f"Could not open report template: {exc}") from exc

    expand_row_loops(document, data)
    fill_text_tags(document, data)

    buf = io.BytesIO()
    document.save(buf)
    return replace_alt_text_images(buf.getvalue(), images or {})
