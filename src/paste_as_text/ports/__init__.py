from .backend_port import BackendPort
from .clipboard_port import TEXT_PLAIN, ClipboardPort
from .credential_store_port import CredentialStorePort
from .image_source_port import ImageSourcePort
from .notifier_port import NotifierPort, PasterPort
from .preferences_port import PreferencesPort
from .text_sink_port import TextSinkPort

__all__ = [
    "BackendPort",
    "ClipboardPort",
    "CredentialStorePort",
    "ImageSourcePort",
    "NotifierPort",
    "PasterPort",
    "PreferencesPort",
    "TextSinkPort",
    "TEXT_PLAIN",
]
