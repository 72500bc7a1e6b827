"""
Logo Fingerprint Service - perceptual hashing of company logos.

A fingerprint is the lowercase hex form of an imagehash hash:
hash_size * hash_size bits, so 16 hex characters for the default 8x8.

WHY perceptual hashing?
- A logo re-saved as JPEG, or resized, must still match the registered one
- Cryptographic hashes change completely on a single flipped pixel
- Downsample-then-threshold hashes (aHash/dHash/pHash) are stable under that noise

Two fingerprints are only comparable when produced with the same
algorithm and hash size.
"""

import io
import logging
import re
from typing import Optional

import imagehash
from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)


HASH_FUNCTIONS = {
    "ahash": imagehash.average_hash,
    "phash": imagehash.phash,
    "dhash": imagehash.dhash,
}

DEFAULT_ALGORITHM = "ahash"
DEFAULT_HASH_SIZE = 8

_HEX_RE = re.compile(r"^[0-9a-f]+$")

# Pillow reports broken files as SyntaxError in some plugins
_DECODE_ERRORS = (
    UnidentifiedImageError, OSError, SyntaxError, ValueError, Image.DecompressionBombError
)


class UnreadableImage(Exception):
    """The uploaded bytes could not be decoded as an image."""


def _flatten(img: Image.Image) -> Image.Image:
    """Composite transparent logos onto white so hidden pixels don't leak into the hash."""
    if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
        rgba = img.convert("RGBA")
        background = Image.new("RGBA", rgba.size, (255, 255, 255, 255))
        return Image.alpha_composite(background, rgba).convert("RGB")
    if img.mode not in ("RGB", "L"):
        return img.convert("RGB")
    return img


def load_image(data: bytes) -> Image.Image:
    """Decode raw bytes into a fully loaded PIL image."""
    if not data:
        raise UnreadableImage("Empty image upload")
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except _DECODE_ERRORS as e:
        raise UnreadableImage(f"Could not decode image: {e}") from e
    return img


def compute_fingerprint(
    data: bytes,
    algorithm: str = DEFAULT_ALGORITHM,
    hash_size: int = DEFAULT_HASH_SIZE,
) -> str:
    """
    Compute the perceptual fingerprint of an image.

    Args:
        data: Raw image bytes (PNG, JPEG, GIF, BMP, WebP)
        algorithm: 'ahash', 'phash' or 'dhash'
        hash_size: Side of the hash grid; the fingerprint has hash_size**2 bits

    Returns:
        Lowercase hex string

    Raises:
        UnreadableImage: bytes are empty or not a decodable image
        ValueError: unknown algorithm
    """
    hash_fn = HASH_FUNCTIONS.get(algorithm)
    if hash_fn is None:
        raise ValueError(
            f"Unknown hash algorithm '{algorithm}'. Allowed: {', '.join(sorted(HASH_FUNCTIONS))}"
        )

    img = _flatten(load_image(data))
    return str(hash_fn(img, hash_size=hash_size)).lower()


def hamming_distance(first: Optional[str], second: Optional[str]) -> Optional[int]:
    """
    Count the differing bits between two hex fingerprints.

    Returns None ("incomparable") when either side is missing or blank,
    when the lengths differ, or when either side is not hex.
    Never raises.
    """
    if not first or not second:
        return None

    a = first.strip().lower()
    b = second.strip().lower()
    if not a or not b or len(a) != len(b):
        return None

    if not _HEX_RE.match(a) or not _HEX_RE.match(b):
        logger.warning("Non-hex fingerprint compared: %r vs %r", first, second)
        return None

    return bin(int(a, 16) ^ int(b, 16)).count("1")
