"""Source-language guess for auto-detected translation requests."""

import re

# CJK Unified Ideographs, shared by simplified and traditional Chinese
CHINESE_PATTERN = re.compile(r'[\u4e00-\u9fff]')


def detect_language(text):
    """
    Guess whether ``text`` is Chinese or English.

    Any CJK ideograph makes the text 'zh-CN' (simplified and traditional are
    not told apart). Everything else, including empty input, is 'en'.
    """
    if not text or not isinstance(text, str) or not text.strip():
        return 'en'

    if CHINESE_PATTERN.search(text):
        return 'zh-CN'

    return 'en'
