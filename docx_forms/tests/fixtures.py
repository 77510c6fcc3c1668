"""Sample payloads and package readers shared by the test modules."""
from __future__ import annotations

import io
import random
import zipfile
from datetime import date, datetime
from typing import List
from xml.etree import ElementTree as ET

from docx_forms.builder.context import BuildContext
from docx_forms.model.document_data import DocumentData, Issue

W = "{http://schemas.openxmlformats.org/wordprocessingml/2006/main}"

FIXED_NOW = datetime(2025, 4, 20, 9, 30, 15)


def pinned_context(seed: int = 7, now: datetime = FIXED_NOW) -> BuildContext:
    return BuildContext(rng=random.Random(seed), now=now)


def make_issue(description: str, **overrides) -> Issue:
    payload = {
        "id": description,
        "description": description,
        "location": "3号楼",
        "responsibleParty": "中建三局",
        "status": "待处理",
        "recordTimestamp": "2025-04-18T10:15:00",
    }
    payload.update(overrides)
    return Issue.model_validate(payload)


def notice_payload() -> dict:
    return {
        "projectName": "东方明珠二期工程",
        "recipientName": "中建三局",
        "subject": "安全隐患整改",
        "noticeContent": "请立即整改",
        "supervisorName": "张工",
        "noticeDate": date(2025, 4, 18),
        "issues": [{"description": "钢筋间距超标"}],
    }


def patrol_data(**overrides) -> DocumentData:
    payload = {
        "projectName": "东方明珠二期工程",
        "inspectionLocation": "3号楼地下室",
        "inspectionStartDate": date(2025, 4, 1),
        "inspectionEndDate": date(2025, 4, 18),
        "inspectorName": "李工",
        "issues": [],
    }
    payload.update(overrides)
    return DocumentData.model_validate(payload)


def read_part(content: bytes, name: str) -> bytes:
    with zipfile.ZipFile(io.BytesIO(content)) as archive:
        return archive.read(name)


def document_root(content: bytes) -> ET.Element:
    return ET.fromstring(read_part(content, "word/document.xml"))


def paragraph_texts(root: ET.Element) -> List[str]:
    """Text of every w:p in document order, runs concatenated."""
    return ["".join(t.text or "" for t in p.iter(f"{W}t")) for p in root.iter(f"{W}p")]
