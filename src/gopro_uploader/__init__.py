"""
gopro-uploader: merge recording-device chapters into videos and publish them.

The planning core (chapter extraction, batching, titles, idempotency) is
deterministic so the tool can be re-run against a growing library without
producing or uploading anything twice.
"""

__version__ = "0.1.0"
