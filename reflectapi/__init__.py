"""OpenAPI 3.1 document model, Rust client templates and naming rules, and formatting helpers for generated code."""

__version__ = "0.1.0"