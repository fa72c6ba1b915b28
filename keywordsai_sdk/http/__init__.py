"""KeywordsAI SDK HTTP module.

This module provides the request pipeline shared by all resource services, the
entities exchanged with the API and the errors raised by the client.

The module includes utilities for:
- Encoding parameter dataclasses into query strings
- Building multipart form bodies for audio uploads
- Serialising request payloads and decoding responses
- Turning unsuccessful responses into structured errors
- Masking API keys in logs and error messages
"""
