"""Core engine: inference primitives, disease models and symptom matching."""
