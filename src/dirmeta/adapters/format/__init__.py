from .chained import ChainedDetector
from .image_detector import ImageDetector
from .signature_detector import SignatureDetector


def default_detector() -> ChainedDetector:
    """Pillow for images first, then the magic-number table."""
    return ChainedDetector([ImageDetector(), SignatureDetector()])


__all__ = ["ChainedDetector", "ImageDetector", "SignatureDetector", "default_detector"]
