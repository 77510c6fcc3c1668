"""Tests for the notice and inspection record built from issue cards."""
import unittest

from docx_forms.builder.issue_reports import (
    UNASSIGNED_PARTY,
    build_inspection_report,
    build_issue_notice,
    group_by_party,
)
from docx_forms.errors import ValidationError
from docx_forms.main import generate_inspection_report, generate_issue_notice
from docx_forms.model.elements import Paragraph, Table

from fixtures import document_root, make_issue, paragraph_texts, pinned_context


class IssueNoticeTest(unittest.TestCase):
    def test_notice_fields(self) -> None:
        issue = make_issue("脚手架未设置剪刀撑", location="5号楼", responsibleParty="华东建工")
        section = build_issue_notice(issue, "TZ-2025-001", "王工", pinned_context())
        texts = [block.text for block in section.blocks if isinstance(block, Paragraph)]
        self.assertEqual(texts[0], "施工问题通知单")
        self.assertIn("问题标题：5号楼 - 施工问题", texts)
        self.assertIn("发现时间：2025/4/18 10:15:00", texts)
        self.assertIn("责任单位：华东建工", texts)
        self.assertIn("脚手架未设置剪刀撑", texts)
        self.assertIn("通知单编号：TZ-2025-001", texts)
        self.assertIn("签发日期：2025/4/20", texts)

    def test_generate_issue_notice(self) -> None:
        result = generate_issue_notice(
            {"id": 42, "description": "临边防护缺失", "location": "2号楼"}, "TZ-1", "王工", pinned_context()
        )
        document = result.unwrap()
        self.assertEqual(document.suggested_filename, "施工问题通知单_20250420_093015.docx")
        self.assertIn("临边防护缺失", paragraph_texts(document_root(document.content)))

    def test_malformed_issue_is_a_validation_error(self) -> None:
        result = generate_issue_notice({"status": "unknown"}, "TZ-1", "王工", pinned_context())
        self.assertIsInstance(result.error, ValidationError)


class InspectionReportTest(unittest.TestCase):
    def setUp(self) -> None:
        self.issues = [
            make_issue("钢筋间距超标", responsibleParty="中建三局"),
            make_issue("模板漏浆", location="4号楼", responsibleParty="华东建工"),
            make_issue("焊缝不饱满", responsibleParty="中建三局"),
            make_issue("材料堆放混乱", responsibleParty=""),
        ]

    def test_group_by_party_keeps_first_seen_order(self) -> None:
        groups = group_by_party(self.issues)
        self.assertEqual(list(groups), ["中建三局", "华东建工", UNASSIGNED_PARTY])
        self.assertEqual([i.description for i in groups["中建三局"]], ["钢筋间距超标", "焊缝不饱满"])

    def test_issue_table_has_header_and_one_row_per_issue(self) -> None:
        section = build_inspection_report(self.issues, "XJ-1", "李工", "", pinned_context())
        tables = [block for block in section.blocks if isinstance(block, Table)]
        self.assertEqual(len(tables), 1)
        rows = tables[0].rows
        self.assertEqual(len(rows), 1 + len(self.issues))
        self.assertEqual([c.content[0].text for c in rows[0].cells], ["序号", "问题描述", "位置", "责任单位", "状态"])
        self.assertEqual([c.content[0].text for c in rows[2].cells], ["2", "模板漏浆", "4号楼", "华东建工", "待处理"])

    def test_summary_and_default_conclusion(self) -> None:
        section = build_inspection_report(self.issues, "XJ-1", "李工", "", pinned_context())
        texts = [block.text for block in section.blocks if isinstance(block, Paragraph)]
        self.assertIn("巡检区域：3号楼, 4号楼", texts)
        self.assertIn("问题总数：4", texts)
        self.assertIn("责任单位：3", texts)
        self.assertIn("本次巡检共发现 4 项问题，请相关责任单位按要求及时整改。", texts)
        self.assertIn("中建三局 - 问题详情（2项）", texts)

    def test_explicit_conclusion(self) -> None:
        section = build_inspection_report(self.issues, "XJ-1", "李工", "整体可控", pinned_context())
        self.assertIn("整体可控", [block.text for block in section.blocks if isinstance(block, Paragraph)])

    def test_generate_inspection_report(self) -> None:
        document = generate_inspection_report(self.issues, "XJ-1", "李工", context=pinned_context()).unwrap()
        self.assertEqual(document.suggested_filename, "工程巡检记录_20250420_093015.docx")
        texts = paragraph_texts(document_root(document.content))
        self.assertIn("模板漏浆", texts)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
