"""
lexigame — Document-driven word game sessions
=============================================

Turns a user's document into a short, scored learning session: a
generative model fills a typed round contract, the output is validated
and repaired, illustrations are resolved, and a state machine runs the
play loop (score, lives, streak, clock).

Quick Start (offline demo backends):
    from lexigame import (
        DemoGenerationBackend, DemoImageBackend,
        SessionGenerator, SessionController,
    )

    generator = SessionGenerator(DemoGenerationBackend(), DemoImageBackend())
    payload = generator.generate_session(text, "Science", "Personalized Practice", "easy")

    session = SessionController()
    session.start(payload)
    session.submit_answer("cell")
    session.poll()        # from the host loop
    session.tick()        # once per second

Hosted backends:
    from lexigame import AnthropicGenerationBackend, OpenAIImageBackend
    generator = SessionGenerator(AnthropicGenerationBackend(), OpenAIImageBackend())

Errors
------
Every library error subclasses ``LexiGameError`` and carries a
``user_message`` that is safe to show to players.
"""

from .backends import DocumentStore, GenerationBackend, ImageBackend, SessionRecordStore
from .catalog import (
    GAMES,
    Difficulty,
    DocumentCategory,
    GameDefinition,
    games_for_category,
    get_game,
)
from .clients import AnthropicGenerationBackend, OpenAIImageBackend
from .config import GameRules, load_config, rules_from_config, validate_config
from .demo_backend import DemoGenerationBackend, DemoImageBackend
from .errors import (
    BackendFailure,
    ContractViolation,
    GenerationFailure,
    HintUnavailable,
    ImageResolutionFailure,
    LexiGameError,
    PersistenceWriteFailure,
    SessionDataUnavailable,
    SessionTerminated,
)
from .letters import is_formable, normalize_words
from .rounds import (
    DISCRIMINANT_FIELD,
    OutputContract,
    RoundKind,
    SessionPayload,
    WordPoolPayload,
    load_payload,
    output_schema,
    parse_round,
    validate_round,
)
from ._generation import (
    DocumentAnalyzer,
    DocumentVerdict,
    HintAdvisor,
    RetryPolicy,
    SessionGenerator,
    repair_word_pool,
    resolve_images,
)
from ._persistence import SqliteDocumentStore, SqliteSessionRecordStore, init_database
from ._session import (
    Judgment,
    SessionController,
    SessionPhase,
    SessionState,
    SubmissionStatus,
    TerminationReason,
)
from ._shared import setup_logging, setup_logging_from_config
from .types import DocumentRecord, SessionCompletedRecord, SessionSnapshot, SessionStartedRecord

__all__ = [
    # Interfaces
    "DocumentStore",
    "GenerationBackend",
    "ImageBackend",
    "SessionRecordStore",
    # Catalog
    "GAMES",
    "Difficulty",
    "DocumentCategory",
    "GameDefinition",
    "games_for_category",
    "get_game",
    # Bindings
    "AnthropicGenerationBackend",
    "OpenAIImageBackend",
    "DemoGenerationBackend",
    "DemoImageBackend",
    "SqliteDocumentStore",
    "SqliteSessionRecordStore",
    "init_database",
    # Config
    "GameRules",
    "load_config",
    "rules_from_config",
    "validate_config",
    "setup_logging",
    "setup_logging_from_config",
    # Errors
    "BackendFailure",
    "ContractViolation",
    "GenerationFailure",
    "HintUnavailable",
    "ImageResolutionFailure",
    "LexiGameError",
    "PersistenceWriteFailure",
    "SessionDataUnavailable",
    "SessionTerminated",
    # Rounds
    "DISCRIMINANT_FIELD",
    "OutputContract",
    "RoundKind",
    "SessionPayload",
    "WordPoolPayload",
    "load_payload",
    "output_schema",
    "parse_round",
    "validate_round",
    "is_formable",
    "normalize_words",
    # Generation
    "DocumentAnalyzer",
    "DocumentVerdict",
    "HintAdvisor",
    "RetryPolicy",
    "SessionGenerator",
    "repair_word_pool",
    "resolve_images",
    # Session
    "Judgment",
    "SessionController",
    "SessionPhase",
    "SessionState",
    "SubmissionStatus",
    "TerminationReason",
    # Types
    "DocumentRecord",
    "SessionCompletedRecord",
    "SessionSnapshot",
    "SessionStartedRecord",
]
__version__ = "1.0.0"
