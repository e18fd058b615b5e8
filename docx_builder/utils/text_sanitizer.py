"""
Text sanitizing for user-supplied captions and paragraphs.

XML 1.0 forbids most C0 control characters, the non-characters U+FFFE and
U+FFFF and unpaired surrogates. Such characters cannot be escaped, only
removed, so they are stripped before the text reaches the document body.
"""

import re
from typing import List


class TextSanitizer:
    """Removes characters that cannot appear in an XML 1.0 document."""

    # Everything outside #x9 | #xA | #xD | [#x20-#xD7FF] | [#xE000-#xFFFD] | [#x10000-#x10FFFF]
    ILLEGAL_XML_CHARS = re.compile(r'[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]')

    def sanitize(self, text: str) -> str:
        """Return ``text`` without characters that are illegal in XML 1.0."""
        if not text:
            return text
        return self.ILLEGAL_XML_CHARS.sub('', text)

    def find_illegal(self, text: str) -> List[str]:
        """List illegal characters in ``text`` as ``U+XXXX`` code points."""
        return [f"U+{ord(match.group()):04X}" for match in self.ILLEGAL_XML_CHARS.finditer(text)]


def sanitize_xml_text(text: str) -> str:
    """Convenience wrapper around :meth:`TextSanitizer.sanitize`."""
    return TextSanitizer().sanitize(text)
