"""Utility functions for HTTP client operations.

This package contains the building blocks of the request pipeline:
- Query string encoding of parameter dataclasses
- Multipart form encoding
- Payload serialisation, response decoding and error parsing
- Timestamp formatting and parsing
"""
