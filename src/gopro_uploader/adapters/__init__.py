"""
Adapters to external tools and services.

- probers: technical metadata per clip (FFprobe)
- importers: directory walking and chapter extraction
- renderers: lossless merge of chapters (FFmpeg)
- catalogs: remote video hosting (YouTube)
"""
