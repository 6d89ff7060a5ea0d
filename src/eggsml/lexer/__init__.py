"""EggsML lexer package.

- core: the run-classifying Lexer
- matcher: open/close resolution for tag characters
- charsets: special-character tables and wrap-point classification
"""

from eggsml.lexer.core import Lexer
from eggsml.lexer.matcher import TagAction, match_tag

__all__ = ["Lexer", "TagAction", "match_tag"]
