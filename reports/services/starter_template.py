# -*- coding: utf-8 -*-
# reports/services/starter_template.py
# Purpose:
# Build a plain site inspection template that uses every report tag.
# Offices are expected to restyle it in Word; tag text and photo alt text
# must survive the edit.

from __future__ import annotations

import io

from docx import Document
from docx.shared import Inches, Pt
from PIL import Image, ImageDraw

FIELD_ROWS = [
    ("Project Name", "{ProjectName}"),
    ("Implementing Agency", "{ImplementingAgency}"),
    ("Contractor", "{Contractor}"),
    ("Location", "{Location}"),
    ("Contract Amount", "{ContractAmount}"),
    ("Revised Contract Amount", "{RevisedContractAmount}"),
    ("Status", "{Status}"),
    ("Notice to Proceed", "{NTP}"),
    ("Duration", "{Duration}"),
    ("Time Extension", "{TimeExtension}"),
    ("Original Target Completion", "{OriginalTargetCompletion}"),
    ("Revised Target Completion", "{RevisedTargetCompletion}"),
    ("Target Completion", "{TargetCompletion}"),
]

PROGRESS_ROWS = [
    ("As of", "{AsOfDate}"),
    ("Accomplishment to date", "{PercentToDate}"),
    ("Planned", "{PercentPlanned}"),
    ("Previous", "{PercentPrevious}"),
    ("Variance", "{Variance}"),
    ("Activities", "{Activities}"),
    ("Issues", "{Issues}"),
    ("Action taken", "{ActionTaken}"),
    ("Remarks", "{Remarks}"),
    ("Other project details", "{OtherProjectDetails}"),
]

HISTORY_HEADER = ["Date", "Planned", "Previous", "Actual", "Variance", "Activities", "Issue", "Action", "Remarks"]
HISTORY_LOOP = [
    "{#accomplishments}{date}",
    "{plannedPercent}",
    "{prevPercent}",
    "{percent}",
    "{variance}",
    "{activities}",
    "{issue}",
    "{action}",
    "{remarks}{/accomplishments}",
]

PHOTO_TAGS = ("ProjectPhoto1", "ProjectPhoto2", "ProjectPhoto3")


def _placeholder_png(label: str) -> bytes:
    img = Image.new("RGB", (480, 320), (230, 230, 230))
    draw = ImageDraw.Draw(img)
    draw.rectangle([0, 0, 479, 319], outline=(150, 150, 150), width=3)
    draw.text((20, 150), label, fill=(80, 80, 80))
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def _key_value_table(document, rows):
    table = document.add_table(rows=0, cols=2)
    table.style = "Table Grid"
    for label, tag in rows:
        cells = table.add_row().cells
        cells[0].text = label
        cells[1].text = tag
    return table


def build_starter_template():
    document = Document()
    document.styles["Normal"].font.size = Pt(10)

    document.add_heading("Site Inspection Report", level=1)
    _key_value_table(document, FIELD_ROWS)

    document.add_heading("Physical Accomplishment", level=2)
    _key_value_table(document, PROGRESS_ROWS)

    document.add_heading("Accomplishment History", level=2)
    history = document.add_table(rows=2, cols=len(HISTORY_HEADER))
    history.style = "Table Grid"
    for cell, text in zip(history.rows[0].cells, HISTORY_HEADER):
        cell.text = text
    for cell, text in zip(history.rows[1].cells, HISTORY_LOOP):
        cell.text = text

    document.add_heading("Photos", level=2)
    for tag in PHOTO_TAGS:
        shape = document.add_picture(io.BytesIO(_placeholder_png(tag)), width=Inches(3))
        shape._inline.docPr.set("descr", tag)

    return document


def write_starter_template(path) -> None:
    build_starter_template().save(str(path))
