"""
Schema definitions for API payloads.

JSON schemas describe what request bodies must look like; Pydantic
models are the typed shapes payloads are narrowed into after validation.
"""
