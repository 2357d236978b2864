"""
Chinese ID Card (Resident Identity Card) Recognizer

Finds identity numbers in free text and confirms every match with the same
validation used by IdentityNumber.
Formats:
- RRRRRRYYYYMMDDSSSC (6 region + 8 birthdate + 3 sequence + 1 checksum)
- RRRRRRYYMMDDSSS (legacy, 6 region + 6 birthdate + 3 sequence)
"""

from typing import Optional

from presidio_analyzer import Pattern, PatternRecognizer

from idcard_inspector.core.validator import validate_identity_number
from idcard_inspector.regions import ProvinceCodeRegistry


class ChineseIdCardRecognizer(PatternRecognizer):
    """Recognizer for Chinese Resident Identity Card numbers.

    Supports:
    - 18-digit format with ISO 7064:1983 MOD 11-2 checksum
    - 15-digit legacy format with region code and birth date checks

    Example:
        >>> recognizer = ChineseIdCardRecognizer()
        >>> results = recognizer.analyze("身份证号 11010519491231002X", ["ZH_ID_CARD"])
        >>> results[0].start, results[0].end
        (5, 23)
    """

    PATTERNS = [
        Pattern(
            name="zh_id_card_18",
            regex=r"(?<![0-9A-Za-z])[1-9]\d{5}(?:18|19|20)\d{2}(?:0[1-9]|1[0-2])(?:0[1-9]|[12]\d|3[01])\d{3}[\dXx](?![0-9A-Za-z])",
            score=0.7,
        ),
        Pattern(
            name="zh_id_card_15",
            regex=r"(?<![0-9A-Za-z])[1-9]\d{7}(?:0[1-9]|1[0-2])(?:0[1-9]|[12]\d|3[01])\d{3}(?![0-9A-Za-z])",
            score=0.4,
        ),
    ]

    CONTEXT = [
        "身份证",
        "身份证号",
        "身份证号码",
        "证件号",
        "证件号码",
        "ID",
        "id",
        "identity",
        "身份",
        "证号",
        "居民身份证",
        "公民身份号码",
    ]

    def __init__(
        self,
        supported_language: str = "zh",
        context: Optional[list[str]] = None,
        registry: Optional[ProvinceCodeRegistry] = None,
    ) -> None:
        """Initialize the recognizer.

        Args:
            supported_language: Language code (default: zh).
            context: Additional context words.
            registry: Known administrative codes for 15-digit matches.
                Defaults to the configured region table.
        """
        context_words = list(self.CONTEXT) + (context or [])
        self.registry = registry

        super().__init__(
            supported_entity="ZH_ID_CARD",
            patterns=self.PATTERNS,
            context=context_words,
            supported_language=supported_language,
        )

    def validate_result(self, pattern_text: str) -> Optional[bool]:
        """Validate a matched ID card number.

        Args:
            pattern_text: The matched ID card number.

        Returns:
            True if valid, False if invalid.
        """
        return validate_identity_number(pattern_text, registry=self.registry)
