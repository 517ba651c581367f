"""
test_report.py - Tests for assessment summaries and text reports
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from tenant_guardian.report import format_assessment_report, summarize_assessment, tier_label
from tenant_guardian.response_parser import parse_risk_assessment
from tenant_guardian.risk_schemas import SeverityTier
from tenant_guardian.schemas import Language
from tenant_guardian.translations import translate
from tests.synthetic_data import as_reply, make_assessment, make_high_risk_assessment


class TestSummary:
    """Tests for summarize_assessment."""

    def test_high_risk_concerns(self):
        """Test that every failing check is listed."""
        summary = summarize_assessment(parse_risk_assessment(as_reply(make_high_risk_assessment())))
        assert summary['risk_score'] == 85
        assert summary['tier'] == "high"
        assert summary['concerns'] == ["price", "text", "photo", "ownership"]
        assert summary['keywords'] == ["URGENT", "wire transfer", "Owner abroad"]

    def test_safe_has_no_concerns(self):
        """Test a clean assessment."""
        summary = summarize_assessment(parse_risk_assessment(as_reply(make_assessment())))
        assert summary['concerns'] == []
        assert summary['next_step'] == "Visit the flat in person."

    def test_localized_label(self):
        """Test the tier label language."""
        assert tier_label(SeverityTier.CAUTION, Language.HINDI) == translate("tier_caution", Language.HINDI)


class TestReport:
    """Tests for format_assessment_report."""

    def test_report_contents(self):
        """Test that verdict, keywords and steps are printed."""
        report = format_assessment_report(parse_risk_assessment(as_reply(make_high_risk_assessment())))
        assert "VERDICT: HIGH RISK [High risk]" in report
        assert "Risk Score: 85/100" in report
        assert "Keywords: URGENT, wire transfer, Owner abroad" in report
        assert "integrity 2/10" in report
        assert "  1. Visit the flat in person." in report


class TestTranslate:
    """Tests for translate fallbacks."""

    def test_known_key(self):
        """Test a direct lookup."""
        assert translate("tier_safe", Language.ENGLISH) == "Safe"

    def test_unknown_key_returns_key(self):
        """Test that a missing key does not raise."""
        assert translate("no_such_key", Language.HINDI) == "no_such_key"
