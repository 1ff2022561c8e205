"""
Content type support checks shared by loaders.
"""

from typing import List

SUPPORTED_CONTENT_TYPES = ('html5', 'text/html5', 'html5-fragment', 'text/html5-fragment')
FRAGMENT_CONTENT_TYPES = ('html5-fragment', 'text/html5-fragment')


class Supports:
    """Mixin answering whether a loader handles a content type."""

    def get_supported(self) -> List[str]:
        """
        Get the content types this loader handles.

        Returns:
            List of content type tokens
        """
        return list(SUPPORTED_CONTENT_TYPES)

    def supports(self, content_type) -> bool:
        """
        Check if a content type is handled by this loader.

        Tokens are compared exactly; no case folding or trimming is done.

        Args:
            content_type: The requested content type

        Returns:
            True if the content type is supported
        """
        return isinstance(content_type, str) and content_type in self.get_supported()
