"""PII recognizers for identity numbers in free text."""

from idcard_inspector.recognizers.zh_id_card import ChineseIdCardRecognizer

__all__ = ["ChineseIdCardRecognizer"]
