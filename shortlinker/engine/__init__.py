from shortlinker.engine.encoder import encode, decode
from shortlinker.engine.fingerprint import fingerprint
from shortlinker.engine.outcome import Outcome, capture
from shortlinker.engine.shortener import ShortLinkEngine
from shortlinker.engine.bootstrap import initialize_engine


__all__ = [
    'encode',
    'decode',
    'fingerprint',
    'Outcome',
    'capture',
    'ShortLinkEngine',
    'initialize_engine',
]
