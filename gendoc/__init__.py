"""
gendoc: single-file HTML documentation generator.

Converts a small tag-based markup language into one self-contained HTML
document with navigation, search and syntax-highlighted code blocks.

CLI Usage:
    gendoc manual.html manual.xml

Library Usage:
    from gendoc import Session

    session = Session()
    session.include("manual.xml")
    session.finish()
    html_text = session.render()
"""

from .constants import VERSION
from .exceptions import EmptyTocError, GendocError, OutputWriteError, RuleSetError
from .highlight import RuleRegistry, RuleSet, tokenize
from .models import Token, TokenClass
from .session import Session
from .slugify import generate_slug
from .writers import EventWriter, HtmlWriter, Writer

__version__ = VERSION

__all__ = [
    # Core functionality
    "Session",
    "tokenize",
    "generate_slug",
    # Highlighting
    "RuleRegistry",
    "RuleSet",
    # Writers
    "Writer",
    "HtmlWriter",
    "EventWriter",
    # Data models
    "Token",
    "TokenClass",
    # Exceptions
    "GendocError",
    "EmptyTocError",
    "OutputWriteError",
    "RuleSetError",
    # Version
    "__version__",
]
