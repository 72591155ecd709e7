from folio.lib.colors import decode_hex, decode_rgba
from folio.lib.fallback import DeliveryOutcome, FallbackController, FallbackState
from folio.lib.media_list import MediaEntry, build
from folio.lib.presentation import AmbientPresentation, ambient_presentation
from folio.lib.resolver import MediaKind, UrlTemplates, resolve, resolve_reference

__all__ = [
    "AmbientPresentation",
    "DeliveryOutcome",
    "FallbackController",
    "FallbackState",
    "MediaEntry",
    "MediaKind",
    "UrlTemplates",
    "ambient_presentation",
    "build",
    "decode_hex",
    "decode_rgba",
    "resolve",
    "resolve_reference",
]
