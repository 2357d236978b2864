"""
Masked display form of identity numbers.

Keeps a fixed number of leading and trailing characters and replaces the
interior span with a placeholder.

Example: "11010519491231002X" -> "1101***********02X"
"""

from idcard_inspector.exceptions import InvalidFormatError


DEFAULT_REPLACEMENT = "*"
DEFAULT_VISIBLE_LEFT = 4
DEFAULT_VISIBLE_RIGHT = 3


def mask_code(
    code: str,
    replacement: str = DEFAULT_REPLACEMENT,
    visible_left: int = DEFAULT_VISIBLE_LEFT,
    visible_right: int = DEFAULT_VISIBLE_RIGHT,
) -> str:
    """Mask the interior of ``code``.

    The middle ``len(code) - visible_left - visible_right`` characters are
    each replaced by ``replacement``. When ``visible_left + visible_right``
    covers the whole code nothing is masked and the code is returned as is.

    Args:
        code: The string to mask.
        replacement: Placeholder written once per masked character.
        visible_left: Number of leading characters kept.
        visible_right: Number of trailing characters kept.

    Returns:
        The masked string.

    Raises:
        InvalidFormatError: If either visible count is negative.

    Examples:
        >>> mask_code("11010519491231002X")
        '1101***********02X'
        >>> mask_code("110105491231002", "#", 6, 0)
        '110105#########'
    """
    if visible_left < 0 or visible_right < 0:
        raise InvalidFormatError(
            f"Visible character counts must be non-negative, got {visible_left} and {visible_right}"
        )

    masked_length = len(code) - visible_left - visible_right
    if masked_length <= 0:
        return code

    return code[:visible_left] + replacement * masked_length + code[len(code) - visible_right:]
