"""
Job Board Backend
Company registry and logo verification for the job board / education platform.

Architecture:
- MongoDB: Company documents, including the reference logo fingerprint
- Pillow + imagehash: Perceptual logo fingerprints
- WebSocket: company:update notifications
"""

__version__ = "1.0.0"
