from .clipboard_snapshot import ClipboardSnapshot
from .credentials_service import CredentialsService
from .extraction_orchestrator import ExtractionOrchestrator, ExtractionState
from .paste_as_text_service import PasteAsTextService, PasteOutcome, PasteResult

__all__ = [
    "ClipboardSnapshot",
    "CredentialsService",
    "ExtractionOrchestrator",
    "ExtractionState",
    "PasteAsTextService",
    "PasteOutcome",
    "PasteResult",
]
