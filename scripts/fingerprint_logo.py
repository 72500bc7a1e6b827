#!/usr/bin/env python3
"""
Logo Fingerprint Script

Prints the fingerprint of a logo, and when given a second logo,
the distance and verdict under the configured threshold.
Handy for tuning LOGO_MATCH_THRESHOLD against real logos.

Usage:
    python scripts/fingerprint_logo.py logo.png
    python scripts/fingerprint_logo.py registered.png uploaded.jpg
"""
import sys
sys.path.insert(0, '.')

from jobboard.core.config import get_settings
from jobboard.services.fingerprint_service import compute_fingerprint, hamming_distance, UnreadableImage
from jobboard.services.verification_service import apply_policy


def fingerprint_file(path: str) -> str:
    settings = get_settings()
    with open(path, "rb") as f:
        return compute_fingerprint(
            f.read(), algorithm=settings.logo_hash_algorithm, hash_size=settings.logo_hash_size
        )


def main():
    if len(sys.argv) not in (2, 3):
        print(__doc__)
        sys.exit(2)

    settings = get_settings()
    try:
        fingerprints = [fingerprint_file(p) for p in sys.argv[1:]]
    except (OSError, UnreadableImage) as e:
        print(f"❌ {e}")
        sys.exit(1)

    for path, fp in zip(sys.argv[1:], fingerprints):
        print(f"🔍 {path}: {fp}")

    if len(fingerprints) == 2:
        distance = hamming_distance(*fingerprints)
        verdict = apply_policy(distance, settings.logo_match_threshold)
        print(f"📏 Distance: {distance} (threshold {settings.logo_match_threshold})")
        print(f"{'✅' if verdict.verified else '❌'} {verdict.message}")


if __name__ == "__main__":
    main()
