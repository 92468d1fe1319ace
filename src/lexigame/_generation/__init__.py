# Area: Generation
"""
Session generation, image resolution, hints and document analysis.

This package contains:
- Instruction builders
- Bounded retry policy
- Payload repair and validation
- Concurrent image fan-out
- The session generator
- Hint advisor and document analyzer
"""

from .documents import DocumentAnalyzer, DocumentVerdict
from .hints import HintAdvisor
from .images import resolve_images
from .orchestrator import SessionGenerator
from .prompts import build_session_instructions
from .repair import parse_word_pool, repair_word_pool, validate_session_rounds
from .retry import RetryPolicy

__all__ = [
    "DocumentAnalyzer",
    "DocumentVerdict",
    "HintAdvisor",
    "resolve_images",
    "SessionGenerator",
    "build_session_instructions",
    "parse_word_pool",
    "repair_word_pool",
    "validate_session_rounds",
    "RetryPolicy",
]
